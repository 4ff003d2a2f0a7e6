"""
Integration tests for the repositories against a real PostgreSQL instance.

These tests verify that:
1. Created records are visible through the list and search operations
2. Searches, range queries and pagination return the expected subsets
3. The kill-threshold delete only removes users with low summed kills
4. The pool queues callers beyond its connection limit
5. Store errors surface as StoreFailure with the database's message

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import asyncio
import dataclasses
import os
from datetime import date

import pytest

from killboard.config import Settings
from killboard.infrastructure.db_factory import create_pool
from killboard.infrastructure.executor import QueryExecutor, StoreFailure
from killboard.repositories.statistics import StatisticRepository
from killboard.repositories.users import UserRepository

# Test configuration constants
SMALL_POOL_LIMIT = 2
CONCURRENT_CALLS = 6
SLEEP_SECONDS = 0.05
KILL_THRESHOLD = 10
PASSWORD = "Secret123"

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


async def _add_user(users: UserRepository, username: str, first: str = "Alice", last: str = "Archer") -> int:
    return await users.create(username, PASSWORD, first, last)


class TestUserRepositoryIntegration:
    """Users table behavior through a live executor."""

    @pytest.mark.asyncio
    async def test_create_then_list_returns_new_record(self, executor: QueryExecutor):
        users = UserRepository(executor)

        new_id = await _add_user(users, "alice")
        listed = await users.list_all()

        assert len(listed) == 1
        assert listed[0].id == new_id
        assert listed[0].username == "alice"

    @pytest.mark.asyncio
    async def test_search_by_username_is_substring_and_ordered(self, executor: QueryExecutor):
        users = UserRepository(executor)
        for name in ("carol", "Alicia", "alice", "bob"):
            await _add_user(users, name)

        matches = await users.search_by_username("LIC")
        everyone = await users.search_by_username("")

        assert sorted(u.username for u in matches) == ["Alicia", "alice"]
        assert [u.username for u in everyone] == [u.username for u in await users.list_all()]
        assert len(everyone) == 4

    @pytest.mark.asyncio
    async def test_search_by_details_requires_every_fragment(self, executor: QueryExecutor):
        users = UserRepository(executor)
        await _add_user(users, "alice", "Alice", "Smith")
        await _add_user(users, "alicia", "Alicia", "Jones")

        matches = await users.search_by_details("ali", "", "smi")

        assert [u.username for u in matches] == ["alice"]

    @pytest.mark.asyncio
    async def test_like_metacharacters_match_literally(self, executor: QueryExecutor):
        users = UserRepository(executor)
        await _add_user(users, "top_gun")
        await _add_user(users, "topXgun")

        matches = await users.search_by_username("p_g")

        assert [u.username for u in matches] == ["top_gun"]

    @pytest.mark.asyncio
    async def test_replace_and_remove_report_affected_rows(self, executor: QueryExecutor):
        users = UserRepository(executor)
        user_id = await _add_user(users, "alice")

        assert await users.replace(user_id, "alice2", PASSWORD, "Alice", "Archer") == 1
        assert await users.replace(user_id + 1000, "ghost", PASSWORD, "Gh", "Ost") == 0
        assert await users.remove(user_id) == 1
        assert await users.remove(user_id) == 0
        assert await users.list_all() == []

    @pytest.mark.asyncio
    async def test_duplicate_username_raises_store_failure(self, executor: QueryExecutor):
        users = UserRepository(executor)
        await _add_user(users, "alice")

        with pytest.raises(StoreFailure, match="duplicate key"):
            await _add_user(users, "alice")

        assert len(await users.list_all()) == 1


class TestKillThresholdDelete:
    """Aggregate delete over summed statistics."""

    @pytest.mark.asyncio
    async def test_only_users_below_threshold_are_removed(self, executor: QueryExecutor):
        users = UserRepository(executor)
        stats = StatisticRepository(executor)
        low = await _add_user(users, "low")
        high = await _add_user(users, "high")
        await _add_user(users, "idle")
        await stats.create(low, 2, date(2024, 1, 1))
        await stats.create(low, 3, date(2024, 1, 2))
        await stats.create(high, 7, date(2024, 1, 1))
        await stats.create(high, 8, date(2024, 1, 2))

        deleted = await users.remove_below_kill_threshold(KILL_THRESHOLD)

        assert deleted == 1
        assert sorted(u.username for u in await users.list_all()) == ["high", "idle"]
        assert all(s.user_id == high for s in await stats.list_all())

    @pytest.mark.asyncio
    async def test_zero_threshold_removes_nobody(self, executor: QueryExecutor):
        users = UserRepository(executor)
        stats = StatisticRepository(executor)
        user_id = await _add_user(users, "zero")
        await stats.create(user_id, 0, date(2024, 1, 1))

        assert await users.remove_below_kill_threshold(0) == 0
        assert len(await users.list_all()) == 1


class TestStatisticRepositoryIntegration:
    """Statistics table behavior through a live executor."""

    @pytest.mark.asyncio
    async def test_date_searches(self, executor: QueryExecutor):
        user_id = await _add_user(UserRepository(executor), "alice")
        stats = StatisticRepository(executor)
        for day in (1, 2, 3, 4):
            await stats.create(user_id, day, date(2024, 1, day))

        in_range = await stats.search_by_date_range(date(2024, 1, 1), date(2024, 1, 3))
        single_day = await stats.search_by_date_range(date(2024, 1, 2), date(2024, 1, 2))
        exact = await stats.search_by_date(date(2024, 1, 4))

        assert sorted(s.date.day for s in in_range) == [1, 2, 3]
        assert [s.kills for s in single_day] == [2]
        assert [s.kills for s in exact] == [4]

    @pytest.mark.asyncio
    async def test_paginate_is_a_window_over_list_all(self, executor: QueryExecutor):
        user_id = await _add_user(UserRepository(executor), "alice")
        stats = StatisticRepository(executor)
        for day in range(1, 6):
            await stats.create(user_id, day, date(2024, 1, day))

        everything = await stats.list_all()
        page = await stats.paginate(2, 2)

        assert page == everything[2:4]
        assert await stats.paginate(0, 0) == []
        assert await stats.paginate(10, 10) == []

    @pytest.mark.asyncio
    async def test_unknown_user_id_raises_store_failure(self, executor: QueryExecutor):
        stats = StatisticRepository(executor)

        with pytest.raises(StoreFailure, match="foreign key"):
            await stats.create(999_999, 1, date(2024, 1, 1))

    @pytest.mark.asyncio
    async def test_removing_user_cascades_to_statistics(self, executor: QueryExecutor):
        users = UserRepository(executor)
        stats = StatisticRepository(executor)
        user_id = await _add_user(users, "alice")
        await stats.create(user_id, 3, date(2024, 1, 1))

        await users.remove(user_id)

        assert await stats.list_all() == []


@pytest.mark.asyncio
async def test_pool_queues_calls_beyond_connection_limit(
    test_settings: Settings, clean_tables: None
):
    config = dataclasses.replace(test_settings.pool_config(), connection_limit=SMALL_POOL_LIMIT)
    pool = create_pool(config)
    await pool.open(wait=True)
    try:
        executor = QueryExecutor(pool)
        results = await asyncio.wait_for(
            asyncio.gather(
                *(
                    executor.execute("SELECT pg_sleep(%s), %s AS n", (SLEEP_SECONDS, i))
                    for i in range(CONCURRENT_CALLS)
                )
            ),
            timeout=30,
        )
    finally:
        await pool.close()

    assert sorted(r.rows[0]["n"] for r in results) == list(range(CONCURRENT_CALLS))
