from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class PostseasonError(Exception):
    """Structured error for season / playoff series flows.

    The server layer maps these to HTTP 4xx while keeping a stable
    machine-readable code for the client.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


# Error codes (stable API surface)
SEASON_NOT_FOUND = "SEASON_NOT_FOUND"
SEASON_INVALID_YEARS = "SEASON_INVALID_YEARS"
SEASON_EXISTS = "SEASON_EXISTS"
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
SERIES_NOT_FOUND = "SERIES_NOT_FOUND"
SERIES_ROUND_REQUIRED = "SERIES_ROUND_REQUIRED"
SERIES_TEAMS_REQUIRED = "SERIES_TEAMS_REQUIRED"
SERIES_BAD_PAYLOAD = "SERIES_BAD_PAYLOAD"
SERIES_ID_CONFLICT = "SERIES_ID_CONFLICT"
