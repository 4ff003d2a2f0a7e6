"""
Pytest configuration for the killboard service.

Provides fixtures for:
- Settings override for integration tests
- Database availability checks and schema bootstrap
- Per-test table cleanup and an executor bound to a live pool
"""

from __future__ import annotations

import os
from typing import AsyncGenerator, Generator

import psycopg
import pytest
import pytest_asyncio

from killboard.config import Settings
from killboard.infrastructure.db_factory import create_pool
from killboard.infrastructure.executor import QueryExecutor
from killboard.infrastructure.schema import create_tables, truncate_tables


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "killboard_test"),
        db_connection_limit=int(os.getenv("DB_CONNECTION_LIMIT", "10")),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_conninfo(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return test_settings.pool_config().conninfo()


@pytest.fixture(scope="session")
def db_connection_available(test_conninfo: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_conninfo, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_schema_initialized(test_conninfo: str, db_connection_available: bool) -> bool:
    """
    Ensure the users and statistics tables exist.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")
    create_tables(test_conninfo)
    return True


@pytest.fixture(scope="function")
def clean_tables(test_conninfo: str, db_schema_initialized: bool) -> Generator[None, None, None]:
    """
    Empty both tables before and after each test function.
    """
    truncate_tables(test_conninfo)
    yield
    truncate_tables(test_conninfo)


@pytest_asyncio.fixture
async def executor(
    test_settings: Settings, clean_tables: None
) -> AsyncGenerator[QueryExecutor, None]:
    """
    Executor over a freshly opened pool sized from the test settings.
    """
    pool = create_pool(test_settings.pool_config())
    await pool.open(wait=True)
    try:
        yield QueryExecutor(pool)
    finally:
        await pool.close()
