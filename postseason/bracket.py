from __future__ import annotations

"""Playoff bracket organization.

Turns the flat series rows for one player/season into the structure the bracket
view renders:

    {
      'east': {1: [...], 2: [...], 3: [...]},
      'west': {1: [...], 2: [...], 3: [...]},
      'east_play_in': [...],
      'west_play_in': [...],
      'finals': [...],
    }

Rows are never mutated; every entry is a fresh dict with derived display fields
added on top of the stored ones. Order inside a round follows the input order
(the repo lists by round_number, created_at).
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from team_utils import TeamDirectory, conference_of, team_abbreviation, team_display_name

from .config import DEFAULT_POSTSEASON_CONFIG, FINALS_ROUND_NAME, PLAY_IN_MARKERS, PostseasonConfig
from .models import Bracket, EnrichedSeries, GameRecord, PlayoffSeries, empty_bracket
from .series import canonical_round_number

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}

SeriesInput = Union[PlayoffSeries, Mapping[str, Any]]


def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


def _as_row(series: SeriesInput) -> Dict[str, Any]:
    if isinstance(series, PlayoffSeries):
        return series.to_row()
    return dict(series)


def effective_round_number(
    round_number: Any,
    round_name: Optional[str],
    *,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> int:
    """Stored round_number, or the one implied by round_name when missing or not an int."""
    if round_number is not None and not isinstance(round_number, bool):
        try:
            return int(round_number)
        except (TypeError, ValueError):
            _warn_limited("BAD_ROUND_NUMBER", f"round_number={round_number!r} round_name={round_name!r}")
    return canonical_round_number(round_name, config=config)


def is_play_in(
    round_number: Any,
    round_name: Optional[str],
    *,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> bool:
    if effective_round_number(round_number, round_name, config=config) == 0:
        return True
    name = str(round_name or "").lower()
    return any(marker in name for marker in PLAY_IN_MARKERS)


def is_finals(round_name: Optional[str]) -> bool:
    return round_name == FINALS_ROUND_NAME


def series_conference(
    team1_id: Optional[str],
    team2_id: Optional[str],
    *,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> str:
    conf = conference_of(team1_id) or conference_of(team2_id)
    if conf:
        return conf
    _warn_limited("UNRESOLVED_CONFERENCE", f"team1_id={team1_id!r} team2_id={team2_id!r} -> {config.default_conference}")
    return config.default_conference


def index_games_by_series(games: Iterable[Mapping[str, Any]]) -> Dict[str, List[GameRecord]]:
    """Group playoff games by playoff_series_id (input order kept)."""
    out: Dict[str, List[GameRecord]] = defaultdict(list)
    for g in games or []:
        if not g.get("is_playoff_game"):
            continue
        sid = g.get("playoff_series_id")
        if not sid:
            continue
        out[str(sid)].append(g)  # type: ignore[arg-type]
    return out


def enrich_series(
    series: SeriesInput,
    *,
    games_by_series: Mapping[str, List[GameRecord]],
    team_directory: Optional[TeamDirectory] = None,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> EnrichedSeries:
    row = _as_row(series)

    team1_display = team_display_name(
        team_directory, row.get("team1_id"), row.get("team1_name"), placeholder=config.placeholder_team
    )
    team2_display = team_display_name(
        team_directory, row.get("team2_id"), row.get("team2_name"), placeholder=config.placeholder_team
    )

    play_in = is_play_in(row.get("round_number"), row.get("round_name"), config=config)
    t1_wins = int(row.get("team1_wins") or 0)
    t2_wins = int(row.get("team2_wins") or 0)
    winner_id = row.get("winner_team_id")

    # Play-in games are single elimination: 1-0 decides it even without a stored winner.
    team1_won = bool(winner_id and winner_id == row.get("team1_id")) or (play_in and t1_wins == 1 and t2_wins == 0)
    team2_won = bool(winner_id and winner_id == row.get("team2_id")) or (play_in and t2_wins == 1 and t1_wins == 0)

    enriched: Dict[str, Any] = dict(row)
    enriched.update(
        {
            "games": list(games_by_series.get(str(row.get("id") or ""), [])),
            "team1_display": team1_display,
            "team2_display": team2_display,
            "team1_abbrev": team_abbreviation(team1_display),
            "team2_abbrev": team_abbreviation(team2_display),
            "conference": series_conference(row.get("team1_id"), row.get("team2_id"), config=config),
            "is_play_in": play_in,
            "team1_won": team1_won,
            "team2_won": team2_won,
            "display_complete": bool(row.get("is_complete")) or (play_in and (team1_won or team2_won)),
        }
    )
    return enriched  # type: ignore[return-value]


def organize_bracket(
    series_list: Iterable[SeriesInput],
    games: Iterable[Mapping[str, Any]] = (),
    team_directory: Optional[TeamDirectory] = None,
    *,
    config: PostseasonConfig = DEFAULT_POSTSEASON_CONFIG,
) -> Bracket:
    """Build the bracket view (no state writes here).

    Finals are split out first, so they never land in a conference map. Partial
    rows degrade to placeholder names and the default conference.
    """
    games_by_series = index_games_by_series(games)
    bracket = empty_bracket()

    for s in series_list or []:
        item = enrich_series(s, games_by_series=games_by_series, team_directory=team_directory, config=config)

        if is_finals(item.get("round_name")):
            bracket["finals"].append(item)
            continue

        east = item["conference"] == "East"
        if item["is_play_in"]:
            bracket["east_play_in" if east else "west_play_in"].append(item)
            continue

        rounds = bracket["east"] if east else bracket["west"]
        number = effective_round_number(item.get("round_number"), item.get("round_name"), config=config)
        rounds.setdefault(number, []).append(item)

    logger.debug(
        "bracket organized: east=%d west=%d play_in=%d/%d finals=%d",
        sum(len(v) for v in bracket["east"].values()),
        sum(len(v) for v in bracket["west"].values()),
        len(bracket["east_play_in"]),
        len(bracket["west_play_in"]),
        len(bracket["finals"]),
    )
    return bracket


def bracket_is_empty(bracket: Bracket) -> bool:
    return not bracket.get("east") and not bracket.get("west") and not bracket.get("finals")


def round_series(bracket: Bracket, conference: str, round_number: int) -> List[EnrichedSeries]:
    conf_key = "east" if str(conference or "").strip().lower().startswith("e") else "west"
    return list(bracket.get(conf_key, {}).get(int(round_number)) or [])
