from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class SeasonCreateRequest(BaseModel):
    year_start: int  # year_end is always year_start + 1


class PlayerUpsertRequest(BaseModel):
    player_id: str  # "player-1"
    player_name: str
    team_id: Optional[str] = None  # "team-bos"
    position: Optional[str] = None


class GameCreateRequest(BaseModel):
    id: str
    game_date: str  # YYYY-MM-DD
    opponent_team_id: Optional[str] = None
    is_home: bool = False
    is_win: bool = False
    is_playoff_game: bool = False
    playoff_series_id: Optional[str] = None
    playoff_game_number: Optional[int] = None
    points: int = 0
    rebounds: int = 0
    assists: int = 0

