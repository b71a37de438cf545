from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


ROUNDS: Tuple[str, ...] = (
    "Play-In Tournament",
    "Round 1",
    "Conference Semifinals",
    "Conference Finals",
    "NBA Finals",
)

ROUND_NUMBERS: Dict[str, int] = {
    "Play-In Tournament": 0,
    "Round 1": 1,
    "Conference Semifinals": 2,
    "Conference Finals": 3,
    "NBA Finals": 4,
}

# Short tokens used inside series ids
ROUND_TOKENS: Dict[str, str] = {
    "Play-In Tournament": "plyn",
    "Round 1": "rnd1",
    "Conference Semifinals": "rnd2",
    "Conference Finals": "cnf",
    "NBA Finals": "fnl",
}

FINALS_ROUND_NAME = "NBA Finals"
PLAY_IN_MARKERS: Tuple[str, ...] = ("play-in", "play in")


@dataclass(frozen=True, slots=True)
class PostseasonConfig:
    # Best-of-7
    wins_to_clinch: int = 4

    # Fallbacks for partial rows
    default_conference: str = "East"
    placeholder_team: str = "TBD"
    default_round_token: str = "rnd1"
    default_round_number: int = 1

    # Unsaved rows carry ids like "temp-Round 1-0"
    temp_id_prefix: str = "temp-"


DEFAULT_POSTSEASON_CONFIG = PostseasonConfig()
