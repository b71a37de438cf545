from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class PlayoffSeriesSaveRequest(BaseModel):
    # Winner, completion and round_number are derived on save; sending them is a 422.
    model_config = ConfigDict(extra="forbid")

    # Missing or "temp-..." id creates a new series; otherwise updates that series.
    id: Optional[str] = None
    round_name: Optional[str] = None  # one of postseason.config.ROUNDS
    team1_id: Optional[str] = None
    team1_name: Optional[str] = None
    team1_seed: Optional[int] = None
    team2_id: Optional[str] = None
    team2_name: Optional[str] = None
    team2_seed: Optional[int] = None
    team1_wins: Optional[int] = None
    team2_wins: Optional[int] = None
