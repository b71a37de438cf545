# db_schema/postseason.py
"""SQLite schema: per-player playoff series."""

from __future__ import annotations


def ddl(*, now: str, schema_version: str) -> str:  # noqa: ARG001
    """Return DDL SQL for playoff series tables (as a single executescript string)."""

    return """

                CREATE TABLE IF NOT EXISTS playoff_series (
                    id TEXT PRIMARY KEY,
                    player_id TEXT NOT NULL,
                    season_id TEXT NOT NULL,

                    round_name TEXT NOT NULL,
                    round_number INTEGER NOT NULL
                        CHECK(round_number BETWEEN 0 AND 4),

                    team1_id TEXT,
                    team1_name TEXT,
                    team1_seed INTEGER,
                    team2_id TEXT,
                    team2_name TEXT,
                    team2_seed INTEGER,

                    team1_wins INTEGER NOT NULL DEFAULT 0
                        CHECK(team1_wins >= 0),
                    team2_wins INTEGER NOT NULL DEFAULT 0
                        CHECK(team2_wins >= 0),

                    winner_team_id TEXT,
                    winner_team_name TEXT,
                    is_complete INTEGER NOT NULL DEFAULT 0
                        CHECK(is_complete IN (0,1)),

                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,

                    FOREIGN KEY(player_id) REFERENCES players(player_id) ON DELETE CASCADE,
                    FOREIGN KEY(season_id) REFERENCES seasons(id) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_playoff_series_owner_round
                    ON playoff_series(season_id, player_id, round_number, created_at);

"""


def migrate(cur, *, ensure_columns) -> None:  # noqa: ARG001
    """No additive migrations yet."""
    return None
