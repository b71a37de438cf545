from __future__ import annotations

"""Deterministic IDs for playoff series.

Game rows reference a series by id, so ids stay short and readable when entered by hand.
The same inputs always derive the same base id.

ID conventions
--------------
- Conference rounds:
    {player}-{season}-{round}-{conf}
    ex) 1-2324-rnd1-e, 7-2425-cnf-w
- Finals (no conference letter):
    {player}-{season}-fnl
    ex) 1-2324-fnl
- Repeats for the same player/season/round/conference get a count suffix:
    1-2324-rnd1-e-2, 1-2324-rnd1-e-3, ...

The suffix is a point-in-time count of existing matches, so callers must serialize
creates per (season_id, player_id). See service.save_playoff_series.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from team_utils import conference_of

from .config import DEFAULT_POSTSEASON_CONFIG, FINALS_ROUND_NAME, ROUND_TOKENS, PostseasonConfig
from .models import PlayoffSeries, Season

SeriesLike = Union[PlayoffSeries, Mapping[str, Any]]
SeasonLike = Union[Season, Mapping[str, Any]]

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}


def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def player_token(player_id: Optional[str]) -> str:
    """'player-1' -> '1'. Missing id or segment -> '0'."""
    if not player_id:
        return "0"
    parts = str(player_id).split("-")
    if len(parts) < 2 or not parts[1]:
        return "0"
    return parts[1]


def season_token(year_start: int, year_end: int) -> str:
    """(2023, 2024) -> '2324'."""
    return f"{str(int(year_start))[-2:]}{str(int(year_end))[-2:]}"


def round_token(round_name: Optional[str], *, config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG) -> str:
    name = str(round_name or "")
    token = ROUND_TOKENS.get(name)
    if token is None:
        _warn_limited("UNKNOWN_ROUND_TOKEN", f"round_name={name!r} -> {config.default_round_token}")
        return config.default_round_token
    return token


def conference_letter(team1_id: Optional[str], team2_id: Optional[str]) -> str:
    conf = conference_of(team1_id) or conference_of(team2_id)
    return "e" if conf == "East" else "w"


def base_series_id(
    season: SeasonLike,
    round_name: str,
    team1_id: Optional[str],
    team2_id: Optional[str],
    player_id: Optional[str],
    *,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> str:
    head = "-".join(
        (
            player_token(player_id),
            season_token(_get(season, "year_start"), _get(season, "year_end")),
            round_token(round_name, config=config),
        )
    )
    if round_name == FINALS_ROUND_NAME:
        return head
    return f"{head}-{conference_letter(team1_id, team2_id)}"


def generate_series_id(
    season: SeasonLike,
    round_name: str,
    team1_id: Optional[str],
    team2_id: Optional[str],
    player_id: Optional[str],
    existing_series: Optional[Iterable[SeriesLike]] = None,
    *,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> str:
    """Create a deterministic series id, suffixed when the base id is already taken.

    Only existing rows for the same season and player count toward the suffix.
    """
    base = base_series_id(season, round_name, team1_id, team2_id, player_id, config=config)
    if not existing_series:
        return base

    season_id = _get(season, "id")
    count = 0
    for s in existing_series:
        sid = str(_get(s, "id") or "")
        if sid.startswith(base) and _get(s, "season_id") == season_id and _get(s, "player_id") == player_id:
            count += 1
    return f"{base}-{count + 1}" if count > 0 else base


def is_temp_series_id(series_id: Optional[str], *, config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG) -> bool:
    sid = str(series_id or "")
    return not sid or sid.startswith(config.temp_id_prefix)
