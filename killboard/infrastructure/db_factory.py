"""
Connection pool factory for the killboard service.

The pool is an explicit object: it is built once at startup from a `PoolConfig`
and handed by reference to the query executor. Nothing here keeps process-wide
state.

Opening the pool waits for the database with bounded exponential backoff
(tenacity). This covers startup readiness only; statements executed through the
pool are never retried.
"""

from __future__ import annotations

from dataclasses import dataclass

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import AsyncConnectionPool
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from killboard.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_CONNECTION_LIMIT = 10


@dataclass(frozen=True)
class PoolConfig:
    """
    Fixed connection parameters handed to the pool at startup.

    Attributes
    ----------
    host, port, user, password, database
        PostgreSQL connection target and credentials.
    connection_limit : int
        Maximum number of concurrent connections held by the pool.
    """

    host: str
    user: str
    password: str
    database: str
    port: int = 5432
    connection_limit: int = DEFAULT_CONNECTION_LIMIT

    def conninfo(self) -> str:
        """Compose a libpq connection string."""
        return make_conninfo(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            dbname=self.database,
        )

    def __repr__(self) -> str:
        return (
            f"PoolConfig(host={self.host!r}, port={self.port}, user={self.user!r}, "
            f"database={self.database!r}, connection_limit={self.connection_limit})"
        )


def create_pool(config: PoolConfig) -> AsyncConnectionPool:
    """
    Build a closed async pool bounded by ``config.connection_limit``.

    Callers that check out more connections than the limit are queued by the
    pool until one is returned.
    """
    return AsyncConnectionPool(
        conninfo=config.conninfo(),
        min_size=1,
        max_size=config.connection_limit,
        open=False,
        name="killboard",
    )


async def wait_for_database(conninfo: str, attempts: int = 3) -> None:
    """
    Block until a single connection to the database succeeds.

    Retries up to ``attempts`` times with exponential backoff on
    ``psycopg.OperationalError``; the last error is re-raised.
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(psycopg.OperationalError),
        reraise=True,
    ):
        with attempt:
            if attempt.retry_state.attempt_number > 1:
                log.warning(
                    "Database not reachable, retrying",
                    extra={"attempt": attempt.retry_state.attempt_number},
                )
            conn = await psycopg.AsyncConnection.connect(conninfo)
            await conn.close()


async def open_pool(config: PoolConfig, attempts: int = 3) -> AsyncConnectionPool:
    """
    Wait for the database, then create and open the pool.

    Parameters
    ----------
    config : PoolConfig
        Connection target and capacity.
    attempts : int
        Connection attempts before giving up on startup.

    Returns
    -------
    AsyncConnectionPool
        An open pool ready to hand out connections.
    """
    await wait_for_database(config.conninfo(), attempts=attempts)
    pool = create_pool(config)
    await pool.open(wait=True)
    log.info("Connection pool opened", extra={"pool": repr(config)})
    return pool


async def close_pool(pool: AsyncConnectionPool) -> None:
    """Close the pool and every connection it holds."""
    await pool.close()
    log.info("Connection pool closed")


__all__ = [
    "DEFAULT_CONNECTION_LIMIT",
    "PoolConfig",
    "close_pool",
    "create_pool",
    "open_pool",
    "wait_for_database",
]
