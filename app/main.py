from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import ADMIN_TOKEN_ENV, DB_PATH_ENV
from league_repo import LeagueRepo
import state
from app.api.router import api_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Head-to-head playoff tracker")


@app.on_event("startup")
def _startup_init_state() -> None:
    # 1) DB path from env (no default)
    # 2) schema init + integrity check once per process
    db_path = os.environ.get(DB_PATH_ENV)
    if not db_path:
        raise RuntimeError(f"{DB_PATH_ENV} is required (no default db_path).")
    state.set_db_path(db_path)

    try:
        with LeagueRepo(db_path) as repo:
            repo.init_db()
            repo.validate_integrity()
    except Exception as e:
        raise RuntimeError(f"DB init failed during startup: {e}") from e
    logger.info("startup complete db_path=%s", db_path)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _auth_guard_middleware(request: Request, call_next):
    """Optional admin guard.

    If H2H_ADMIN_TOKEN is configured, require it on state-changing API calls.
    """
    required_token = (os.environ.get(ADMIN_TOKEN_ENV) or "").strip()
    if not required_token:
        return await call_next(request)

    path = request.url.path or ""
    method = (request.method or "GET").upper()
    if method not in {"POST", "PUT", "PATCH", "DELETE"} or not path.startswith("/api/"):
        return await call_next(request)

    provided = (request.headers.get("X-Admin-Token") or "").strip()
    if provided != required_token:
        return JSONResponse(status_code=401, content={"detail": "Unauthorized: invalid X-Admin-Token"})

    return await call_next(request)


app.include_router(api_router)
