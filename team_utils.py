from __future__ import annotations

"""Team reference helpers (conference membership, display names, abbreviations).

Everything here is a pure lookup over static data in config.py. Callers that need
a different directory (tests, a roster DB) pass their own object exposing
``lookup(team_id)``; nothing is cached at module level.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol

from config import EAST_TEAM_IDS, TEAM_NAME_TO_ABBREV, TEAMS


class TeamDirectory(Protocol):
    def lookup(self, team_id: Optional[str]) -> Optional[Mapping[str, Any]]:
        ...


class StaticTeamDirectory:
    """TeamDirectory backed by a plain ``{team_id: {"name": ...}}`` mapping."""

    def __init__(self, teams: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._teams: Dict[str, Mapping[str, Any]] = dict(TEAMS if teams is None else teams)

    def lookup(self, team_id: Optional[str]) -> Optional[Mapping[str, Any]]:
        if not team_id:
            return None
        return self._teams.get(str(team_id))

    def list_teams(self) -> List[Dict[str, Any]]:
        return [{"team_id": tid, **dict(info)} for tid, info in self._teams.items()]


def conference_of(team_id: Optional[str]) -> Optional[str]:
    """Return 'East' / 'West' for a team id, None when the id is empty.

    Any non-empty id outside the Eastern set is treated as West.
    """
    if not team_id:
        return None
    return "East" if str(team_id) in EAST_TEAM_IDS else "West"


def team_abbreviation(team_name: Optional[str]) -> str:
    if not team_name:
        return "N/A"
    return TEAM_NAME_TO_ABBREV.get(str(team_name), str(team_name))


def team_display_name(
    directory: Optional[TeamDirectory],
    team_id: Optional[str],
    stored_name: Optional[str],
    *,
    placeholder: str = "TBD",
) -> str:
    """Directory name -> stored name -> placeholder."""
    if directory is not None and team_id:
        info = directory.lookup(team_id)
        if info and info.get("name"):
            return str(info["name"])
    if stored_name:
        return str(stored_name)
    return placeholder
