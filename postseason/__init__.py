"""Postseason (Play-In + Playoffs) series tracking and bracket views.

Every tracked player keeps their own playoff bracket per season: a flat list of
best-of-7 series rows, entered by hand as the simulated playoffs progress.

Design goals
------------
- Deterministic, human-readable series ids (game rows reference them by hand)
- Winner / completion / round_number always re-derived on save, never trusted from input
- Bracket is a computed view: recomputed on every read, never persisted
- Partial rows (TBD teams, unknown rounds) degrade to placeholders instead of failing

Public entry points
-------------------
Pure engine:
- conference_of (re-exported from team_utils)
- generate_series_id
- determine_winner
- organize_bracket

Service (SQLite-backed):
- list_playoff_series / save_playoff_series / delete_playoff_series
- get_playoff_bracket
- create_season / list_seasons
"""

from team_utils import conference_of

from .bracket import bracket_is_empty, organize_bracket
from .config import DEFAULT_POSTSEASON_CONFIG, ROUND_NUMBERS, ROUNDS, PostseasonConfig
from .errors import PostseasonError
from .ids import generate_series_id
from .models import PlayoffSeries, Season, SeriesPatch
from .series import determine_winner, prepare_series_for_save
from .service import (
    create_season,
    delete_playoff_series,
    get_playoff_bracket,
    list_playoff_series,
    list_seasons,
    save_playoff_series,
)

__all__ = [
    "conference_of",
    "generate_series_id",
    "determine_winner",
    "organize_bracket",
    "bracket_is_empty",
    "prepare_series_for_save",
    "ROUNDS",
    "ROUND_NUMBERS",
    "PostseasonConfig",
    "DEFAULT_POSTSEASON_CONFIG",
    "PostseasonError",
    "PlayoffSeries",
    "Season",
    "SeriesPatch",
    "create_season",
    "list_seasons",
    "list_playoff_series",
    "save_playoff_series",
    "delete_playoff_series",
    "get_playoff_bracket",
]
