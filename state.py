from __future__ import annotations

"""Process-wide runtime settings (DB location).

Set once at server startup; read by route handlers.
"""

from threading import RLock
from typing import Optional

_STATE_LOCK = RLock()
_DB_PATH: Optional[str] = None


def set_db_path(db_path: str) -> None:
    global _DB_PATH
    path = str(db_path or "").strip()
    if not path:
        raise ValueError("db_path is empty")
    with _STATE_LOCK:
        _DB_PATH = path


def get_db_path() -> str:
    with _STATE_LOCK:
        if not _DB_PATH:
            raise ValueError("db_path is not configured (set LEAGUE_DB_PATH)")
        return _DB_PATH


def reset_db_path() -> None:
    global _DB_PATH
    with _STATE_LOCK:
        _DB_PATH = None
