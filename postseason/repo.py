from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional, Protocol

from .models import PlayoffSeries

_SERIES_COLUMNS = (
    "id",
    "player_id",
    "season_id",
    "round_name",
    "round_number",
    "team1_id",
    "team1_name",
    "team1_seed",
    "team2_id",
    "team2_name",
    "team2_seed",
    "team1_wins",
    "team2_wins",
    "winner_team_id",
    "winner_team_name",
    "is_complete",
    "created_at",
    "updated_at",
)
_SELECT = f"SELECT {', '.join(_SERIES_COLUMNS)} FROM playoff_series"

# Columns a save may overwrite; ids and owner fields are fixed at insert.
_MUTABLE_COLUMNS = (
    "round_name",
    "round_number",
    "team1_id",
    "team1_name",
    "team1_seed",
    "team2_id",
    "team2_name",
    "team2_seed",
    "team1_wins",
    "team2_wins",
    "winner_team_id",
    "winner_team_name",
    "is_complete",
)


def _series_from_row(r: sqlite3.Row) -> PlayoffSeries:
    return PlayoffSeries.from_row({k: r[k] for k in _SERIES_COLUMNS})


def _db_value(series: PlayoffSeries, col: str) -> Any:
    v = getattr(series, col)
    if col == "is_complete":
        return 1 if v else 0
    if col in ("team1_wins", "team2_wins"):
        return int(v or 0)
    return v


def list_series(cur: sqlite3.Cursor, *, season_id: str, player_id: str) -> List[PlayoffSeries]:
    rows = cur.execute(
        f"""
        {_SELECT}
        WHERE season_id=? AND player_id=?
        ORDER BY round_number ASC, created_at ASC, rowid ASC
        """,
        (str(season_id), str(player_id)),
    ).fetchall()
    return [_series_from_row(r) for r in rows]


def get_series(cur: sqlite3.Cursor, series_id: str) -> Optional[PlayoffSeries]:
    row = cur.execute(f"{_SELECT} WHERE id=?", (str(series_id),)).fetchone()
    return _series_from_row(row) if row is not None else None


def insert_series(cur: sqlite3.Cursor, series: PlayoffSeries, *, now_iso: str) -> PlayoffSeries:
    """Insert a new row. A duplicate id raises sqlite3.IntegrityError (never overwrites)."""
    row = series.copy(created_at=series.created_at or str(now_iso), updated_at=str(now_iso))
    cur.execute(
        f"""
        INSERT INTO playoff_series({', '.join(_SERIES_COLUMNS)})
        VALUES ({', '.join('?' for _ in _SERIES_COLUMNS)})
        """,
        tuple(_db_value(row, c) for c in _SERIES_COLUMNS),
    )
    return row


def update_series(cur: sqlite3.Cursor, series: PlayoffSeries, *, now_iso: str) -> int:
    """Overwrite mutable columns of an existing row owned by series.player_id."""
    assignments = ", ".join(f"{c}=?" for c in _MUTABLE_COLUMNS)
    cur.execute(
        f"""
        UPDATE playoff_series
        SET {assignments}, updated_at=?
        WHERE id=? AND player_id=?
        """,
        tuple(_db_value(series, c) for c in _MUTABLE_COLUMNS) + (str(now_iso), series.id, series.player_id),
    )
    return int(cur.rowcount or 0)


def delete_series(cur: sqlite3.Cursor, *, series_id: str, player_id: str) -> int:
    cur.execute(
        "DELETE FROM playoff_series WHERE id=? AND player_id=?",
        (str(series_id), str(player_id)),
    )
    return int(cur.rowcount or 0)


# ---------------------------------------------------------------------------
# Adapter object (list / create / update / delete)
# ---------------------------------------------------------------------------


class SeriesRepository(Protocol):
    def list(self, season_id: str, player_id: str) -> List[PlayoffSeries]:
        ...

    def get(self, series_id: str) -> Optional[PlayoffSeries]:
        ...

    def create(self, series: PlayoffSeries) -> PlayoffSeries:
        ...

    def update(self, series_id: str, series: PlayoffSeries) -> PlayoffSeries:
        ...

    def delete(self, series_id: str, player_id: str) -> bool:
        ...


class SqliteSeriesRepository:
    """SeriesRepository bound to one cursor (i.e. one transaction)."""

    def __init__(self, cur: sqlite3.Cursor, *, now_iso: str):
        self._cur = cur
        self._now_iso = str(now_iso)

    def list(self, season_id: str, player_id: str) -> List[PlayoffSeries]:
        return list_series(self._cur, season_id=season_id, player_id=player_id)

    def get(self, series_id: str) -> Optional[PlayoffSeries]:
        return get_series(self._cur, series_id)

    def create(self, series: PlayoffSeries) -> PlayoffSeries:
        return insert_series(self._cur, series, now_iso=self._now_iso)

    def update(self, series_id: str, series: PlayoffSeries) -> PlayoffSeries:
        target = series.copy(id=str(series_id))
        n = update_series(self._cur, target, now_iso=self._now_iso)
        if n == 0:
            raise KeyError(series_id)
        return get_series(self._cur, series_id) or target

    def delete(self, series_id: str, player_id: str) -> bool:
        return delete_series(self._cur, series_id=series_id, player_id=player_id) > 0


def rows_for_api(series: List[PlayoffSeries]) -> List[Dict[str, Any]]:
    return [s.to_row() for s in series]
