"""db_schema package.

SQLite DDL + additive migrations for the league store (seasons, players, games,
playoff series).

Public API:
- apply_schema(...)
"""

from .init import apply_schema  # noqa: F401

__all__ = ["apply_schema"]
