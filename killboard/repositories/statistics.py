"""
Data access for the `statistics` table.
"""

from __future__ import annotations

from datetime import date
from typing import List

from killboard.domain.models import Statistic
from killboard.repositories.base import BaseRepository

_COLUMNS = "id, user_id, kills, date"


class StatisticRepository(BaseRepository):
    """CRUD, pagination and date searches on the statistics table."""

    async def create(self, user_id: int, kills: int, day: date) -> int:
        """Insert a statistic and return its assigned id."""
        sql = "INSERT INTO statistics (user_id, kills, date) VALUES (%s, %s, %s) RETURNING id"
        return await self._insert(sql, (user_id, kills, day))

    async def replace(self, stat_id: int, user_id: int, kills: int, day: date) -> int:
        """Overwrite one statistic; returns rows updated (0 when the id is unknown)."""
        sql = "UPDATE statistics SET user_id = %s, kills = %s, date = %s WHERE id = %s"
        return await self._write(sql, (user_id, kills, day, stat_id))

    async def remove(self, stat_id: int) -> int:
        return await self._write("DELETE FROM statistics WHERE id = %s", (stat_id,))

    async def list_all(self) -> List[Statistic]:
        rows = await self._fetch(f"SELECT {_COLUMNS} FROM statistics")
        return [Statistic(**row) for row in rows]

    async def paginate(self, limit: int, offset: int) -> List[Statistic]:
        """
        At most ``limit`` statistics after skipping ``offset``, in store order.

        Both values are expected to be non-negative integers already.
        """
        sql = f"SELECT {_COLUMNS} FROM statistics LIMIT %s OFFSET %s"
        rows = await self._fetch(sql, (limit, offset))
        return [Statistic(**row) for row in rows]

    async def search_by_date(self, day: date) -> List[Statistic]:
        rows = await self._fetch(f"SELECT {_COLUMNS} FROM statistics WHERE date = %s", (day,))
        return [Statistic(**row) for row in rows]

    async def search_by_date_range(self, start: date, end: date) -> List[Statistic]:
        """
        Statistics dated from ``start`` to ``end``, both inclusive.

        The pair is executed as given; ordering of the bounds is checked by the
        caller.
        """
        sql = f"SELECT {_COLUMNS} FROM statistics WHERE date BETWEEN %s AND %s"
        rows = await self._fetch(sql, (start, end))
        return [Statistic(**row) for row in rows]


__all__ = ["StatisticRepository"]
