from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, HTTPException

import state
from league_repo import LeagueRepo
from postseason.errors import PostseasonError
from postseason.service import create_season, list_seasons
from team_utils import StaticTeamDirectory
from app.schemas.common import GameCreateRequest, PlayerUpsertRequest, SeasonCreateRequest
from app.services.postseason_facade import _raise_internal, _raise_postseason_http

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/teams")
async def api_teams():
    return StaticTeamDirectory().list_teams()


@router.get("/api/seasons")
async def api_seasons():
    try:
        return list_seasons(db_path=state.get_db_path())
    except Exception as exc:
        _raise_internal("list seasons", exc)


@router.post("/api/seasons")
async def api_season_create(req: SeasonCreateRequest):
    try:
        return create_season(db_path=state.get_db_path(), year_start=req.year_start)
    except PostseasonError as e:
        _raise_postseason_http(e)
    except Exception as exc:
        _raise_internal("create season", exc)


@router.get("/api/players")
async def api_players():
    with LeagueRepo(state.get_db_path()) as repo:
        return repo.list_players()


@router.post("/api/players")
async def api_player_upsert(req: PlayerUpsertRequest):
    pid = str(req.player_id or "").strip()
    if not pid:
        raise HTTPException(status_code=400, detail="player_id is required")
    with LeagueRepo(state.get_db_path()) as repo:
        repo.upsert_player(req.model_dump())
        return repo.get_player(pid)


@router.get("/api/games/{season_id}/{player_id}")
async def api_games(season_id: str, player_id: str, playoff_only: bool = False):
    with LeagueRepo(state.get_db_path()) as repo:
        return repo.list_games(season_id=season_id, player_id=player_id, playoff_only=bool(playoff_only))


@router.post("/api/games/{season_id}/{player_id}")
async def api_game_create(season_id: str, player_id: str, req: GameCreateRequest):
    game = req.model_dump()
    game.update({"season_id": season_id, "player_id": player_id})
    try:
        with LeagueRepo(state.get_db_path()) as repo:
            repo.insert_game(game)
    except sqlite3.IntegrityError as exc:
        # Duplicate id or unknown season/player (FK).
        raise HTTPException(status_code=409, detail=f"Failed to record game: {exc}")
    logger.info("game recorded id=%s season=%s player=%s", req.id, season_id, player_id)
    return game
