from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import HTTPException

from postseason.errors import PostseasonError, SERIES_ID_CONFLICT

logger = logging.getLogger(__name__)


def _raise_postseason_http(e: PostseasonError) -> NoReturn:
    """Map well-known error codes to stable HTTP semantics."""
    code = str(e.code or "")
    detail = {"code": code, "message": e.message, "details": e.details}
    if code.endswith("_NOT_FOUND"):
        raise HTTPException(status_code=404, detail=detail)
    if code.endswith("_EXISTS") or code == SERIES_ID_CONFLICT:
        raise HTTPException(status_code=409, detail=detail)
    raise HTTPException(status_code=400, detail=detail)


def _raise_internal(action: str, exc: Exception) -> NoReturn:
    logger.error("%s failed: %s", action, exc, exc_info=True)
    raise HTTPException(status_code=500, detail=f"Failed to {action}: {exc}")
