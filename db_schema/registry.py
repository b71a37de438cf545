# db_schema/registry.py
"""Applies schema modules to one cursor.

A schema module provides ``ddl(now=..., schema_version=...) -> str`` with idempotent
CREATE statements, and may provide ``migrate(cur, ensure_columns=...)`` for additive
changes to tables that already exist. All DDL goes in one executescript, in
module order, before any migration runs.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Callable, Iterable, List, Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)

# LeagueRepo._ensure_table_columns(cur, table, {column: ddl})
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]


class SchemaModule(Protocol):
    __name__: str

    def ddl(self, *, now: str, schema_version: str) -> str:
        ...


def schema_script(modules: Sequence[SchemaModule], *, now: str, schema_version: str) -> str:
    return "\n\n".join(m.ddl(now=now, schema_version=schema_version) for m in modules)


def run_migrations(
    cur: sqlite3.Cursor,
    modules: Sequence[SchemaModule],
    *,
    ensure_columns: EnsureColumnsFn,
) -> List[str]:
    """Run ``migrate`` where defined; returns the names of modules that had one."""
    ran: List[str] = []
    for m in modules:
        migrate = getattr(m, "migrate", None)
        if callable(migrate):
            migrate(cur, ensure_columns=ensure_columns)
            ran.append(m.__name__)
    return ran


def apply_all(
    cur: sqlite3.Cursor,
    *,
    modules: Iterable[SchemaModule],
    now: str,
    schema_version: str,
    ensure_columns: EnsureColumnsFn,
) -> None:
    mods = list(modules)
    cur.executescript(schema_script(mods, now=now, schema_version=schema_version))
    migrated = run_migrations(cur, mods, ensure_columns=ensure_columns)
    logger.debug("schema %s applied: modules=%s migrated=%s", schema_version, [m.__name__ for m in mods], migrated)
