"""
Shared plumbing for the table repositories.

Repositories own their SQL text and nothing else: each public operation maps to
exactly one statement sent through the `QueryExecutor`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from killboard.infrastructure.executor import QueryExecutor

_LIKE_SPECIALS = ("\\", "%", "_")


def like_fragment(fragment: Optional[str]) -> str:
    """
    Build a substring pattern for ``ILIKE``.

    LIKE metacharacters in ``fragment`` are escaped so they match literally.
    ``None`` and ``""`` yield ``"%%"``, which matches every non-null value.
    """
    escaped = fragment or ""
    for char in _LIKE_SPECIALS:
        escaped = escaped.replace(char, "\\" + char)
    return f"%{escaped}%"


class BaseRepository:
    """Base class wiring a repository to a query executor."""

    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    async def _fetch(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        result = await self._executor.execute(sql, params)
        return result.rows

    async def _write(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write and return the affected-row count (0 when nothing matched)."""
        result = await self._executor.execute(sql, params)
        return result.rowcount

    async def _insert(self, sql: str, params: Sequence[Any]) -> int:
        """Run an ``INSERT ... RETURNING id`` and return the new id."""
        result = await self._executor.execute(sql, params)
        return int(result.rows[0]["id"])


__all__ = ["BaseRepository", "like_fragment"]
