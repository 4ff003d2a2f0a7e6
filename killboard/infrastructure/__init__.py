"""
Infrastructure package for the killboard service.

Centralizes database connectivity concerns (pool construction, single-statement
execution, schema bootstrap). Keep this layer focused on I/O and resource
management, decoupled from repository and HTTP logic.
"""

from killboard.infrastructure.db_factory import (
    PoolConfig,
    close_pool,
    create_pool,
    open_pool,
    wait_for_database,
)
from killboard.infrastructure.executor import QueryExecutor, QueryResult, StoreFailure

__all__ = [
    "PoolConfig",
    "QueryExecutor",
    "QueryResult",
    "StoreFailure",
    "close_pool",
    "create_pool",
    "open_pool",
    "wait_for_database",
]
