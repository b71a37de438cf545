from __future__ import annotations

from fastapi import APIRouter

import state
from postseason.config import ROUND_NUMBERS, ROUND_TOKENS, ROUNDS
from postseason.errors import PostseasonError
from postseason.service import (
    delete_playoff_series,
    get_playoff_bracket,
    list_playoff_series,
    save_playoff_series,
)
from app.schemas.postseason import PlayoffSeriesSaveRequest
from app.services.postseason_facade import _raise_internal, _raise_postseason_http

router = APIRouter()


@router.get("/api/postseason/rounds")
async def api_postseason_rounds():
    return [
        {"round_name": name, "round_number": ROUND_NUMBERS[name], "token": ROUND_TOKENS[name]}
        for name in ROUNDS
    ]


@router.get("/api/postseason/{season_id}/{player_id}/series")
async def api_postseason_series_list(season_id: str, player_id: str):
    try:
        return list_playoff_series(db_path=state.get_db_path(), season_id=season_id, player_id=player_id)
    except PostseasonError as e:
        _raise_postseason_http(e)
    except Exception as exc:
        _raise_internal("load playoff series", exc)


@router.post("/api/postseason/{season_id}/{player_id}/series")
async def api_postseason_series_save(season_id: str, player_id: str, req: PlayoffSeriesSaveRequest):
    try:
        return save_playoff_series(
            db_path=state.get_db_path(),
            season_id=season_id,
            player_id=player_id,
            payload=req.model_dump(exclude_unset=True),
        )
    except PostseasonError as e:
        _raise_postseason_http(e)
    except Exception as exc:
        _raise_internal("save playoff series", exc)


@router.delete("/api/postseason/{season_id}/{player_id}/series/{series_id}")
async def api_postseason_series_delete(season_id: str, player_id: str, series_id: str):
    try:
        return delete_playoff_series(
            db_path=state.get_db_path(),
            season_id=season_id,
            player_id=player_id,
            series_id=series_id,
        )
    except PostseasonError as e:
        _raise_postseason_http(e)
    except Exception as exc:
        _raise_internal("delete playoff series", exc)


@router.get("/api/postseason/{season_id}/{player_id}/bracket")
async def api_postseason_bracket(season_id: str, player_id: str):
    try:
        return get_playoff_bracket(db_path=state.get_db_path(), season_id=season_id, player_id=player_id)
    except PostseasonError as e:
        _raise_postseason_http(e)
    except Exception as exc:
        _raise_internal("build playoff bracket", exc)
