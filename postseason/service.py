from __future__ import annotations

"""Postseason service (public API).

This file is the *only* place that writes playoff series / seasons. Server
endpoints call these functions directly.

Series creation is read-existing -> derive id -> insert. The id suffix depends on
that read, so every mutation for one (season_id, player_id) runs under the same
lock and inside one SQLite transaction.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Dict, List, Mapping, Optional, Tuple
from weakref import WeakValueDictionary

from league_repo import LeagueRepo
from team_utils import StaticTeamDirectory, TeamDirectory

from . import errors
from .bracket import bracket_is_empty, organize_bracket
from .config import DEFAULT_POSTSEASON_CONFIG, PostseasonConfig
from .errors import PostseasonError
from .ids import base_series_id, is_temp_series_id
from .models import PlayoffSeries, Season, SeriesPatch
from .repo import SeriesRepository, SqliteSeriesRepository, rows_for_api
from .series import prepare_series_for_save

logger = logging.getLogger(__name__)

_LOCKS_GUARD = RLock()
# Entries drop out once no caller holds the lock.
_OWNER_LOCKS: "WeakValueDictionary[Tuple[str, str], RLock]" = WeakValueDictionary()


def _owner_lock(season_id: str, player_id: str) -> RLock:
    key = (str(season_id), str(player_id))
    with _LOCKS_GUARD:
        lock = _OWNER_LOCKS.get(key)
        if lock is None:
            lock = RLock()
            _OWNER_LOCKS[key] = lock
        return lock


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _require_season(repo: LeagueRepo, season_id: str) -> Season:
    row = repo.get_season(str(season_id))
    if row is None:
        raise PostseasonError(errors.SEASON_NOT_FOUND, f"season not found: {season_id}", {"season_id": season_id})
    return Season.from_row(row)


def _require_player(repo: LeagueRepo, player_id: str) -> None:
    if repo.get_player(str(player_id)) is None:
        raise PostseasonError(errors.PLAYER_NOT_FOUND, f"player not found: {player_id}", {"player_id": player_id})


# ---------------------------------------------------------------------------
# Seasons
# ---------------------------------------------------------------------------


def create_season(*, db_path: str, year_start: int) -> Dict[str, Any]:
    season = Season.create(int(year_start))
    with LeagueRepo(db_path) as repo:
        try:
            out = repo.insert_season(season.to_row())
        except sqlite3.IntegrityError:
            raise PostseasonError(
                errors.SEASON_EXISTS, "This season already exists", {"season_id": season.id}
            ) from None
    logger.info("season created id=%s", season.id)
    return out


def list_seasons(*, db_path: str) -> List[Dict[str, Any]]:
    with LeagueRepo(db_path) as repo:
        return repo.list_seasons()


# ---------------------------------------------------------------------------
# Playoff series
# ---------------------------------------------------------------------------


def list_playoff_series(*, db_path: str, season_id: str, player_id: str) -> List[Dict[str, Any]]:
    """Series rows ordered by round_number, created_at."""
    with LeagueRepo(db_path) as repo:
        _require_season(repo, season_id)
        with repo.transaction() as cur:
            rows = SqliteSeriesRepository(cur, now_iso=_utc_now_iso()).list(season_id, player_id)
    return rows_for_api(rows)


def _validate_for_save(series: PlayoffSeries, *, is_new: bool) -> None:
    if not series.round_name:
        raise PostseasonError(errors.SERIES_ROUND_REQUIRED, "round_name is required", {"series_id": series.id})
    if is_new and not series.team1_id and not series.team2_id:
        raise PostseasonError(
            errors.SERIES_TEAMS_REQUIRED,
            "a new series needs at least one team",
            {"round_name": series.round_name},
        )


def _free_series_id(
    adapter: SeriesRepository,
    series: PlayoffSeries,
    *,
    season: Season,
    config: PostseasonConfig,
) -> str:
    """Derived id, bumped past any suffix already stored.

    The derived suffix is a count of existing rows, so a deleted middle row makes it
    land on a taken id. Suffixes only move upward: game rows may still point at a
    deleted id.
    """
    if adapter.get(series.id) is None:
        return series.id
    base = base_series_id(
        season, series.round_name, series.team1_id, series.team2_id, series.player_id, config=config
    )
    tail = series.id[len(base) + 1 :] if series.id.startswith(base + "-") else ""
    n = int(tail) if tail.isdigit() else 1
    candidate = f"{base}-{n + 1}"
    while adapter.get(candidate) is not None:
        n += 1
        candidate = f"{base}-{n + 1}"
    logger.info("series id %s taken, using %s", series.id, candidate)
    return candidate


def save_playoff_series(
    *,
    db_path: str,
    season_id: str,
    player_id: str,
    payload: Mapping[str, Any],
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Dict[str, Any]:
    """Create or update one series.

    ``payload`` carries an optional ``id`` (missing / ``temp-...`` means create)
    plus any SeriesPatch fields. Winner, completion and round_number are always
    re-derived; client-supplied values for them are not accepted.
    """
    data = dict(payload or {})
    series_id = str(data.pop("id", "") or "")
    patch = SeriesPatch.from_mapping(data)
    is_new = is_temp_series_id(series_id, config=config)

    with _owner_lock(season_id, player_id):
        with LeagueRepo(db_path) as repo:
            season = _require_season(repo, season_id)
            _require_player(repo, player_id)
            now_iso = _utc_now_iso()
            try:
                with repo.transaction() as cur:
                    adapter = SqliteSeriesRepository(cur, now_iso=now_iso)
                    existing = adapter.list(season.id, player_id)

                    if is_new:
                        base = PlayoffSeries(id=series_id, player_id=str(player_id), season_id=season.id, round_name="")
                    else:
                        base = next((s for s in existing if s.id == series_id), None)
                        if base is None:
                            raise PostseasonError(
                                errors.SERIES_NOT_FOUND,
                                f"series not found: {series_id}",
                                {"series_id": series_id, "season_id": season_id, "player_id": player_id},
                            )

                    draft = patch.apply(base)
                    _validate_for_save(draft, is_new=is_new)
                    prepared = prepare_series_for_save(
                        draft, season=season, player_id=str(player_id), existing=existing, config=config
                    )

                    if is_new:
                        prepared.id = _free_series_id(adapter, prepared, season=season, config=config)
                        try:
                            saved = adapter.create(prepared)
                        except sqlite3.IntegrityError:
                            raise PostseasonError(
                                errors.SERIES_ID_CONFLICT,
                                f"series id already taken: {prepared.id}",
                                {"series_id": prepared.id},
                            ) from None
                    else:
                        saved = adapter.update(prepared.id, prepared)
            except sqlite3.Error:
                logger.exception("playoff series save failed season=%s player=%s", season_id, player_id)
                raise

    logger.info(
        "series saved id=%s season=%s player=%s new=%s complete=%s",
        saved.id,
        season_id,
        player_id,
        is_new,
        saved.is_complete,
    )
    return saved.to_row()


def delete_playoff_series(*, db_path: str, season_id: str, player_id: str, series_id: str) -> Dict[str, Any]:
    with _owner_lock(season_id, player_id):
        with LeagueRepo(db_path) as repo:
            try:
                with repo.transaction() as cur:
                    adapter = SqliteSeriesRepository(cur, now_iso=_utc_now_iso())
                    current = adapter.get(series_id)
                    if current is None or current.player_id != str(player_id) or current.season_id != str(season_id):
                        raise PostseasonError(
                            errors.SERIES_NOT_FOUND,
                            f"series not found: {series_id}",
                            {"series_id": series_id, "season_id": season_id, "player_id": player_id},
                        )
                    adapter.delete(series_id, str(player_id))
            except sqlite3.Error:
                logger.exception("playoff series delete failed id=%s", series_id)
                raise

    logger.info("series deleted id=%s season=%s player=%s", series_id, season_id, player_id)
    return {"ok": True, "deleted": str(series_id)}


# ---------------------------------------------------------------------------
# Bracket
# ---------------------------------------------------------------------------


def get_playoff_bracket(
    *,
    db_path: str,
    season_id: str,
    player_id: str,
    team_directory: Optional[TeamDirectory] = None,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Dict[str, Any]:
    """Recompute the bracket view for one player/season (never persisted)."""
    with LeagueRepo(db_path) as repo:
        season = _require_season(repo, season_id)
        with repo.transaction() as cur:
            rows = SqliteSeriesRepository(cur, now_iso=_utc_now_iso()).list(season.id, player_id)
        games = repo.list_games(season_id=season.id, player_id=str(player_id), playoff_only=True)

    bracket = organize_bracket(
        rows,
        games,
        team_directory if team_directory is not None else StaticTeamDirectory(),
        config=config,
    )
    return {
        "season": season.to_row(),
        "player_id": str(player_id),
        "is_empty": bracket_is_empty(bracket),
        "bracket": bracket,
    }
