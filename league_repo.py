# league_repo.py
# Developer note:
# - SQLite DB is the single source of truth (SSOT) for persisted data (tables managed in db_schema/).
# - season_id / player_id / team_id are canonical strings ("season-2023-2024", "player-1", "team-bos").
# - Playoff series rows are owned by postseason/repo.py; this module owns seasons, players and games.
"""
LeagueRepo: persisted-data SSOT (SQLite)

Usage (CLI):
  python league_repo.py init --db <db_path>
  python league_repo.py validate --db <db_path>
  python league_repo.py summary --db <db_path>

Python:
  from league_repo import LeagueRepo
  with LeagueRepo("<db_path>") as repo:
      repo.init_db()
      repo.insert_season({"id": "season-2023-2024", "year_start": 2023, "year_end": 2024})
"""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

SCHEMA_VERSION = "h2h.postseason.v1"

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}


def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _bool01(v: Any) -> int:
    return 1 if bool(v) else 0


def _game_from_row(r: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": str(r["id"]),
        "player_id": str(r["player_id"]),
        "season_id": str(r["season_id"]),
        "game_date": str(r["game_date"]),
        "opponent_team_id": r["opponent_team_id"],
        "is_home": bool(r["is_home"]),
        "is_win": bool(r["is_win"]),
        "is_playoff_game": bool(r["is_playoff_game"]),
        "playoff_series_id": r["playoff_series_id"],
        "playoff_game_number": r["playoff_game_number"],
        "points": int(r["points"] or 0),
        "rebounds": int(r["rebounds"] or 0),
        "assists": int(r["assists"] or 0),
    }


class LeagueRepo:
    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON;")
        if self.db_path != ":memory:":
            self._conn.execute("PRAGMA journal_mode = WAL;")  # good safety for frequent writes
        # Nested transaction support (SAVEPOINT) for callers that compose repo methods.
        # (SQLite raises if BEGIN is issued while a transaction is already active.)
        self._savepoint_seq = 0

    def close(self) -> None:
        try:
            self._conn.close()
        except sqlite3.Error:
            _warn_limited("REPO_CLOSE_FAILED", f"db_path={self.db_path}")

    @contextlib.contextmanager
    def transaction(self):
        """
        Atomic transaction helper.

        Supports nesting via SAVEPOINT:
        - outermost: BEGIN ... COMMIT/ROLLBACK
        - nested: SAVEPOINT ... RELEASE (or ROLLBACK TO + RELEASE on error)
        """
        cur = self._conn.cursor()
        nested = bool(getattr(self._conn, "in_transaction", False))
        sp_name = None
        try:
            if nested:
                self._savepoint_seq += 1
                sp_name = f"sp_{self._savepoint_seq}"
                cur.execute(f"SAVEPOINT {sp_name};")
            else:
                self._conn.execute("BEGIN;")

            yield cur

            if nested and sp_name:
                cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.commit()
        except Exception:
            if nested and sp_name:
                # Roll back to the savepoint only; do NOT rollback the outer transaction here.
                try:
                    cur.execute(f"ROLLBACK TO SAVEPOINT {sp_name};")
                finally:
                    cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.rollback()
            raise
        finally:
            cur.close()

    # ------------------------
    # Schema
    # ------------------------

    def _ensure_table_columns(self, cur: sqlite3.Cursor, table: str, columns: Mapping[str, str]) -> None:
        """SQLite has no ADD COLUMN IF NOT EXISTS, so check PRAGMA table_info first."""
        rows = cur.execute(f"PRAGMA table_info({table});").fetchall()
        existing = {r["name"] for r in rows}
        for col, ddl in columns.items():
            if col in existing:
                continue
            cur.execute(f"ALTER TABLE {table} ADD COLUMN {col} {ddl};")

    def init_db(self) -> None:
        """Apply SQLite schema (DDL + migrations) via db_schema."""
        from db_schema import apply_schema

        now = _utc_now_iso()
        with self.transaction() as cur:
            apply_schema(
                cur,
                now=now,
                schema_version=SCHEMA_VERSION,
                ensure_columns=self._ensure_table_columns,
            )

    # ------------------------
    # Seasons
    # ------------------------

    def insert_season(self, season: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a season row. Raises sqlite3.IntegrityError if it already exists."""
        now = _utc_now_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO seasons(id, year_start, year_end, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?);
                """,
                (str(season["id"]), int(season["year_start"]), int(season["year_end"]), now, now),
            )
        return self.get_season(str(season["id"])) or {}

    def get_season(self, season_id: str) -> Optional[Dict[str, Any]]:
        row = self._conn.execute(
            "SELECT id, year_start, year_end FROM seasons WHERE id=?;",
            (str(season_id),),
        ).fetchone()
        if row is None:
            return None
        return {"id": str(row["id"]), "year_start": int(row["year_start"]), "year_end": int(row["year_end"])}

    def list_seasons(self) -> List[Dict[str, Any]]:
        rows = self._conn.execute(
            "SELECT id, year_start, year_end FROM seasons ORDER BY year_start DESC;"
        ).fetchall()
        return [{"id": str(r["id"]), "year_start": int(r["year_start"]), "year_end": int(r["year_end"])} for r in rows]

    # ------------------------
    # Players
    # ------------------------

    def upsert_player(self, player: Mapping[str, Any]) -> None:
        now = _utc_now_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO players(player_id, player_name, team_id, position, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(player_id) DO UPDATE SET
                    player_name=excluded.player_name,
                    team_id=excluded.team_id,
                    position=excluded.position,
                    updated_at=excluded.updated_at;
                """,
                (
                    str(player["player_id"]),
                    str(player.get("player_name") or ""),
                    player.get("team_id"),
                    player.get("position"),
                    now,
                    now,
                ),
            )

    def get_player(self, player_id: str) -> Optional[Dict[str, Any]]:
        row = self._conn.execute(
            "SELECT player_id, player_name, team_id, position FROM players WHERE player_id=?;",
            (str(player_id),),
        ).fetchone()
        return dict(row) if row is not None else None

    def list_players(self) -> List[Dict[str, Any]]:
        rows = self._conn.execute(
            "SELECT player_id, player_name, team_id, position FROM players ORDER BY player_id;"
        ).fetchall()
        return [dict(r) for r in rows]

    # ------------------------
    # Games (read-only for the postseason engine)
    # ------------------------

    def insert_game(self, game: Mapping[str, Any]) -> None:
        now = _utc_now_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO games(
                    id, player_id, season_id, game_date, opponent_team_id,
                    is_home, is_win, is_playoff_game, playoff_series_id, playoff_game_number,
                    points, rebounds, assists, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    str(game["id"]),
                    str(game["player_id"]),
                    str(game["season_id"]),
                    str(game["game_date"]),
                    game.get("opponent_team_id"),
                    _bool01(game.get("is_home")),
                    _bool01(game.get("is_win")),
                    _bool01(game.get("is_playoff_game")),
                    game.get("playoff_series_id") or None,
                    game.get("playoff_game_number"),
                    int(game.get("points") or 0),
                    int(game.get("rebounds") or 0),
                    int(game.get("assists") or 0),
                    now,
                ),
            )

    def list_games(self, *, season_id: str, player_id: str, playoff_only: bool = False) -> List[Dict[str, Any]]:
        sql = """
            SELECT id, player_id, season_id, game_date, opponent_team_id,
                   is_home, is_win, is_playoff_game, playoff_series_id, playoff_game_number,
                   points, rebounds, assists
            FROM games
            WHERE season_id=? AND player_id=?
        """
        if playoff_only:
            sql += " AND is_playoff_game=1"
        sql += " ORDER BY game_date ASC, created_at ASC;"
        rows = self._conn.execute(sql, (str(season_id), str(player_id))).fetchall()
        return [_game_from_row(r) for r in rows]

    # ------------------------
    # Integrity / summary
    # ------------------------

    def validate_integrity(self) -> None:
        """Fail fast on schema mismatch or series rows pointing at the wrong round."""
        row = self._conn.execute("SELECT value FROM meta WHERE key='schema_version';").fetchone()
        if not row:
            raise ValueError("DB meta.schema_version missing (run init_db)")
        if row["value"] != SCHEMA_VERSION:
            raise ValueError(f"DB schema_version {row['value']} != expected {SCHEMA_VERSION}")

        from postseason.config import ROUND_NUMBERS

        bad: List[str] = []
        for r in self._conn.execute("SELECT id, round_name, round_number FROM playoff_series;").fetchall():
            expected = ROUND_NUMBERS.get(str(r["round_name"]))
            if expected is not None and int(r["round_number"]) != expected:
                bad.append(str(r["id"]))
        if bad:
            raise ValueError(f"playoff_series round_number mismatch: {bad[:10]}")

    def summary(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"db_path": self.db_path}
        for table in ("seasons", "players", "games", "playoff_series"):
            row = self._conn.execute(f"SELECT COUNT(1) AS n FROM {table};").fetchone()
            out[table] = int(row["n"] if row is not None else 0)
        return out

    def __enter__(self) -> "LeagueRepo":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# ----------------------------
# CLI
# ----------------------------

def _cmd_init(args) -> None:
    with LeagueRepo(args.db) as repo:
        repo.init_db()
    print(f"OK: schema {SCHEMA_VERSION} ready at {args.db}")

def _cmd_validate(args) -> None:
    with LeagueRepo(args.db) as repo:
        repo.validate_integrity()
    print(f"OK: validation passed for {args.db}")

def _cmd_summary(args) -> None:
    with LeagueRepo(args.db) as repo:
        print(json.dumps(repo.summary(), indent=2))

def main(argv: Optional[Sequence[str]] = None) -> None:
    p = argparse.ArgumentParser(description="League store for head-to-head playoff tracking (SQLite)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="create tables and apply migrations")
    p_init.add_argument("--db", required=True, help="path to sqlite db file")
    p_init.set_defaults(func=_cmd_init)

    p_val = sub.add_parser("validate", help="check schema version and series round numbers")
    p_val.add_argument("--db", required=True, help="path to sqlite db file")
    p_val.set_defaults(func=_cmd_validate)

    p_sum = sub.add_parser("summary", help="print row counts")
    p_sum.add_argument("--db", required=True, help="path to sqlite db file")
    p_sum.set_defaults(func=_cmd_summary)

    args = p.parse_args(argv)
    args.func(args)

if __name__ == "__main__":
    main()
