from __future__ import annotations

"""Typed structures for the postseason subsystem.

Note:
- Stored records (Season, PlayoffSeries) are dataclasses; the adapter boundary
  converts them to/from plain row dicts.
- Derived views (EnrichedSeries, Bracket) stay plain dicts to keep JSON friendliness;
  the TypedDicts below are typing helpers only.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Literal, Mapping, Optional, TypedDict

from .errors import SEASON_INVALID_YEARS, SERIES_BAD_PAYLOAD, PostseasonError


Conference = Literal["East", "West"]


# ---------------------------------------------------------------------------
# Season
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Season:
    id: str
    year_start: int
    year_end: int

    def __post_init__(self) -> None:
        if int(self.year_end) != int(self.year_start) + 1:
            raise PostseasonError(
                SEASON_INVALID_YEARS,
                "year_end must equal year_start + 1",
                {"year_start": self.year_start, "year_end": self.year_end},
            )

    @classmethod
    def create(cls, year_start: int) -> "Season":
        ys = int(year_start)
        return cls(id=f"season-{ys}-{ys + 1}", year_start=ys, year_end=ys + 1)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Season":
        return cls(id=str(row["id"]), year_start=int(row["year_start"]), year_end=int(row["year_end"]))

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# PlayoffSeries
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PlayoffSeries:
    id: str
    player_id: str
    season_id: str
    round_name: str
    round_number: int = 1
    team1_id: Optional[str] = None
    team1_name: Optional[str] = None
    team1_seed: Optional[int] = None
    team2_id: Optional[str] = None
    team2_name: Optional[str] = None
    team2_seed: Optional[int] = None
    team1_wins: int = 0
    team2_wins: int = 0
    winner_team_id: Optional[str] = None
    winner_team_name: Optional[str] = None
    is_complete: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PlayoffSeries":
        known = {f.name for f in fields(cls)}
        data = {k: row[k] for k in row.keys() if k in known}
        data["id"] = str(data.get("id") or "")
        data["player_id"] = str(data.get("player_id") or "")
        data["season_id"] = str(data.get("season_id") or "")
        data["round_name"] = str(data.get("round_name") or "")
        if data.get("round_number") is None:
            data.pop("round_number", None)
        else:
            data["round_number"] = int(data["round_number"])
        data["team1_wins"] = int(data.get("team1_wins") or 0)
        data["team2_wins"] = int(data.get("team2_wins") or 0)
        data["is_complete"] = bool(data.get("is_complete") or False)
        return cls(**data)

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)

    def copy(self, **changes: Any) -> "PlayoffSeries":
        return replace(self, **changes)


# ---------------------------------------------------------------------------
# SeriesPatch
# ---------------------------------------------------------------------------

_UNSET: Any = object()

_TEXT_FIELDS = ("round_name", "team1_id", "team1_name", "team2_id", "team2_name")
_SEED_FIELDS = ("team1_seed", "team2_seed")
_WIN_FIELDS = ("team1_wins", "team2_wins")


def _bad(field_name: str, value: Any, reason: str) -> PostseasonError:
    return PostseasonError(SERIES_BAD_PAYLOAD, f"{field_name}: {reason}", {"field": field_name, "value": value})


def _coerce_text(name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _bad(name, value, "must be a string")
    s = value.strip()
    return s or None


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise _bad(name, value, "must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise _bad(name, value, "must be an integer") from None


@dataclass(slots=True)
class SeriesPatch:
    """Field-by-field edit of a series.

    Fields left as the sentinel are untouched by ``apply``; ``None`` clears an
    optional field (e.g. a team slot going back to TBD).
    """

    round_name: Any = _UNSET
    team1_id: Any = _UNSET
    team1_name: Any = _UNSET
    team1_seed: Any = _UNSET
    team2_id: Any = _UNSET
    team2_name: Any = _UNSET
    team2_seed: Any = _UNSET
    team1_wins: Any = _UNSET
    team2_wins: Any = _UNSET

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SeriesPatch":
        allowed = {f.name for f in fields(cls)}
        unknown = sorted(set(data.keys()) - allowed)
        if unknown:
            raise PostseasonError(SERIES_BAD_PAYLOAD, f"unknown fields: {', '.join(unknown)}", {"fields": unknown})

        out: Dict[str, Any] = {}
        for name in _TEXT_FIELDS:
            if name in data:
                out[name] = _coerce_text(name, data[name])
        for name in _SEED_FIELDS:
            if name in data:
                v = data[name]
                if v is None or v == "":
                    out[name] = None
                    continue
                seed = _coerce_int(name, v)
                if seed <= 0:
                    raise _bad(name, v, "must be a positive integer")
                out[name] = seed
        for name in _WIN_FIELDS:
            if name in data:
                v = data[name]
                wins = 0 if v is None else _coerce_int(name, v)
                if wins < 0:
                    raise _bad(name, v, "must be >= 0")
                out[name] = wins
        return cls(**out)

    def changed_fields(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not _UNSET}

    def apply(self, series: PlayoffSeries) -> PlayoffSeries:
        return series.copy(**self.changed_fields())


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


class GameRecord(TypedDict, total=False):
    id: str
    player_id: str
    season_id: str
    game_date: str
    is_playoff_game: bool
    playoff_series_id: Optional[str]
    playoff_game_number: Optional[int]
    opponent_team_id: Optional[str]
    points: int
    rebounds: int
    assists: int


class EnrichedSeries(TypedDict, total=False):
    # Stored fields (see PlayoffSeries)
    id: str
    player_id: str
    season_id: str
    round_name: str
    round_number: int
    team1_id: Optional[str]
    team1_name: Optional[str]
    team1_seed: Optional[int]
    team2_id: Optional[str]
    team2_name: Optional[str]
    team2_seed: Optional[int]
    team1_wins: int
    team2_wins: int
    winner_team_id: Optional[str]
    winner_team_name: Optional[str]
    is_complete: bool
    created_at: Optional[str]
    updated_at: Optional[str]

    # Derived display fields
    games: List[GameRecord]
    team1_display: str
    team2_display: str
    team1_abbrev: str
    team2_abbrev: str
    conference: Conference
    is_play_in: bool
    team1_won: bool
    team2_won: bool
    display_complete: bool


class Bracket(TypedDict):
    east: Dict[int, List[EnrichedSeries]]
    west: Dict[int, List[EnrichedSeries]]
    east_play_in: List[EnrichedSeries]
    west_play_in: List[EnrichedSeries]
    finals: List[EnrichedSeries]


def empty_bracket() -> Bracket:
    return {"east": {}, "west": {}, "east_play_in": [], "west_play_in": [], "finals": []}


@dataclass(frozen=True, slots=True)
class WinnerResult:
    is_complete: bool
    winner_team_id: Optional[str] = None
    winner_team_name: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"is_complete": self.is_complete}
        if self.is_complete:
            out["winner_team_id"] = self.winner_team_id
            out["winner_team_name"] = self.winner_team_name
        return out


__all__ = [
    "Conference",
    "Season",
    "PlayoffSeries",
    "SeriesPatch",
    "GameRecord",
    "EnrichedSeries",
    "Bracket",
    "WinnerResult",
    "empty_bracket",
]

