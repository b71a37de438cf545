from __future__ import annotations

"""Series completion and save preparation.

Pure functions only: the service does the reads/writes around them.
"""

import logging
from typing import Dict, Iterable, Optional

from .config import DEFAULT_POSTSEASON_CONFIG, ROUND_NUMBERS, PostseasonConfig
from .ids import SeriesLike, generate_series_id, is_temp_series_id
from .models import PlayoffSeries, Season, WinnerResult

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}


def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


def determine_winner(
    team1_id: Optional[str],
    team1_name: Optional[str],
    team1_wins: int,
    team2_id: Optional[str],
    team2_name: Optional[str],
    team2_wins: int,
    *,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> WinnerResult:
    """Return completion/winner for a best-of-N series.

    A side needs both the clinching win count and a resolved team id. Team1 is
    checked first, so if both sides (invalidly) reach the threshold team1 wins.
    """
    needed = int(config.wins_to_clinch)
    if int(team1_wins or 0) >= needed and team1_id:
        return WinnerResult(is_complete=True, winner_team_id=team1_id, winner_team_name=team1_name)
    if int(team2_wins or 0) >= needed and team2_id:
        return WinnerResult(is_complete=True, winner_team_id=team2_id, winner_team_name=team2_name)
    return WinnerResult(is_complete=False)


def canonical_round_number(round_name: Optional[str], *, config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG) -> int:
    name = str(round_name or "")
    if name in ROUND_NUMBERS:
        return ROUND_NUMBERS[name]
    _warn_limited("UNKNOWN_ROUND_NAME", f"round_name={name!r} -> round_number={config.default_round_number}")
    return int(config.default_round_number)


def apply_winner(series: PlayoffSeries, *, config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG) -> PlayoffSeries:
    result = determine_winner(
        series.team1_id,
        series.team1_name,
        series.team1_wins,
        series.team2_id,
        series.team2_name,
        series.team2_wins,
        config=config,
    )
    return series.copy(
        winner_team_id=result.winner_team_id,
        winner_team_name=result.winner_team_name,
        is_complete=result.is_complete,
    )


def prepare_series_for_save(
    series: PlayoffSeries,
    *,
    season: Season,
    player_id: str,
    existing: Iterable[SeriesLike] = (),
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> PlayoffSeries:
    """Return the record to persist.

    1) temp/empty id -> derived series id
    2) round_number re-derived from round_name
    3) winner/is_complete re-derived from win counts
    4) owner fields stamped from the caller's context
    """
    out = series.copy(player_id=str(player_id), season_id=season.id)

    if is_temp_series_id(out.id, config=config):
        out.id = generate_series_id(
            season,
            out.round_name,
            out.team1_id,
            out.team2_id,
            str(player_id),
            list(existing),
            config=config,
        )

    out.round_number = canonical_round_number(out.round_name, config=config)
    out.team1_wins = max(0, int(out.team1_wins or 0))
    out.team2_wins = max(0, int(out.team2_wins or 0))
    return apply_winner(out, config=config)
