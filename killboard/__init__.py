"""
killboard - users and kill statistics over PostgreSQL.

This package provides a small data service with two related record types:

- Users (username, password, first and last name)
- Per-user kill statistics (kills per date)

The core is a validated query execution layer: repositories build
parameterized statements (substring search, date ranges, pagination, and an
aggregate kill-threshold delete) and run each one on a pooled async connection.
An HTTP API (FastAPI) and a CLI (typer) sit on top.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from killboard.config import Settings, get_settings
from killboard.domain.models import Statistic, User
from killboard.infrastructure.db_factory import PoolConfig, close_pool, create_pool, open_pool
from killboard.infrastructure.executor import QueryExecutor, QueryResult, StoreFailure
from killboard.repositories.statistics import StatisticRepository
from killboard.repositories.users import UserRepository
from killboard.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Statistic",
    "User",
    # Pool and execution
    "PoolConfig",
    "QueryExecutor",
    "QueryResult",
    "StoreFailure",
    "close_pool",
    "create_pool",
    "open_pool",
    # Repositories
    "StatisticRepository",
    "UserRepository",
    # Logging
    "configure_logging",
    "get_logger",
]
