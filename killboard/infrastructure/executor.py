"""
Single-statement query execution over the shared connection pool.

Every call checks out one connection, runs exactly one parameterized statement
with driver-side binding, and returns the connection on every exit path. Store
errors are re-raised as `StoreFailure` with the driver's message untouched.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from killboard.utils.logging import get_logger

log = get_logger(__name__)


class StoreFailure(Exception):
    """
    A statement failed in the store (connectivity, constraint, malformed SQL,
    placeholder/argument mismatch). ``message`` is the driver's message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class QueryResult:
    """
    Outcome of one statement.

    ``rows`` holds the result set (empty for statements without one);
    ``rowcount`` is the driver's affected/returned row count.
    """

    rows: List[Dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0


class QueryExecutor:
    """
    Run parameterized statements against an explicit pool.

    The executor holds no connection between calls; concurrency is bounded only
    by the pool's capacity, beyond which callers wait for a free connection.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        """
        Execute ``sql`` with ``params`` bound to its ``%s`` placeholders.

        Parameters
        ----------
        sql : str
            Statement template with positional placeholders.
        params : sequence
            Arguments, one per placeholder.

        Returns
        -------
        QueryResult
            Rows as dicts for result-producing statements, plus the rowcount.

        Raises
        ------
        StoreFailure
            On any error raised by the driver or the pool.
        """
        start = time.perf_counter()
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(sql, tuple(params))
                    rows = await cur.fetchall() if cur.description is not None else []
                    rowcount = cur.rowcount
        except psycopg.Error as exc:
            log.warning(
                "Statement failed",
                extra={"sql": _first_line(sql), "error": str(exc)},
            )
            raise StoreFailure(str(exc)) from exc

        log.debug(
            "Statement executed",
            extra={
                "sql": _first_line(sql),
                "rowcount": rowcount,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return QueryResult(rows=list(rows), rowcount=rowcount)


def _first_line(sql: str) -> str:
    return " ".join(sql.split())[:120]


__all__ = ["QueryExecutor", "QueryResult", "StoreFailure"]
