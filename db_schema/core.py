# db_schema/core.py
"""SQLite schema: core tables (meta, seasons, players, games).

This module contains *only* DDL and schema migrations.
It must not import LeagueRepo (to avoid circular imports).
"""

from __future__ import annotations

import sqlite3

from .registry import EnsureColumnsFn


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for core tables (as a single executescript string)."""
    return f"""
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );

                INSERT INTO meta(key, value) VALUES ('schema_version', '{schema_version}')
                ON CONFLICT(key) DO UPDATE SET value=excluded.value;
                INSERT OR IGNORE INTO meta(key, value) VALUES ('created_at', '{now}');

                CREATE TABLE IF NOT EXISTS seasons (
                    id TEXT PRIMARY KEY,
                    year_start INTEGER NOT NULL,
                    year_end INTEGER NOT NULL
                        CHECK(year_end = year_start + 1),
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    UNIQUE(year_start)
                );

                CREATE TABLE IF NOT EXISTS players (
                    player_id TEXT PRIMARY KEY,
                    player_name TEXT NOT NULL,
                    team_id TEXT,
                    position TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS games (
                    id TEXT PRIMARY KEY,
                    player_id TEXT NOT NULL,
                    season_id TEXT NOT NULL,
                    game_date TEXT NOT NULL,
                    opponent_team_id TEXT,
                    is_home INTEGER NOT NULL DEFAULT 0,
                    is_win INTEGER NOT NULL DEFAULT 0,
                    is_playoff_game INTEGER NOT NULL DEFAULT 0
                        CHECK(is_playoff_game IN (0,1)),
                    playoff_series_id TEXT,
                    playoff_game_number INTEGER,
                    points INTEGER NOT NULL DEFAULT 0,
                    rebounds INTEGER NOT NULL DEFAULT 0,
                    assists INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    FOREIGN KEY(player_id) REFERENCES players(player_id) ON DELETE CASCADE,
                    FOREIGN KEY(season_id) REFERENCES seasons(id) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_games_player_season
                    ON games(player_id, season_id, game_date);
"""


def migrate(cur: sqlite3.Cursor, *, ensure_columns: EnsureColumnsFn) -> None:
    """Apply post-DDL schema migrations (additive only)."""
    ensure_columns(
        cur,
        "games",
        {
            "playoff_series_id": "TEXT",
            "playoff_game_number": "INTEGER",
        },
    )
    cur.execute(
        "CREATE INDEX IF NOT EXISTS idx_games_playoff_series ON games(playoff_series_id);"
    )
