"""
Data access for the `users` table.

Searches are case-insensitive substring matches ordered by username; an empty
fragment matches every row. The kill-threshold delete removes users whose
summed kills are below the threshold. Users without any statistics form no
group in that aggregate and are therefore never removed by it.
"""

from __future__ import annotations

from typing import List, Optional

from killboard.domain.models import User
from killboard.repositories.base import BaseRepository, like_fragment
from killboard.utils.logging import get_logger

log = get_logger(__name__)

_COLUMNS = "id, username, password, first_name, last_name"


class UserRepository(BaseRepository):
    """CRUD and search operations on the users table."""

    async def create(
        self, username: str, password: str, first_name: str, last_name: str
    ) -> int:
        """Insert a user and return its assigned id."""
        sql = (
            "INSERT INTO users (username, password, first_name, last_name) "
            "VALUES (%s, %s, %s, %s) RETURNING id"
        )
        user_id = await self._insert(sql, (username, password, first_name, last_name))
        log.info("User created", extra={"user_id": user_id})
        return user_id

    async def replace(
        self,
        user_id: int,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> int:
        """
        Overwrite every column of one user.

        Returns the number of rows updated; ``0`` means no user has ``user_id``.
        """
        sql = (
            "UPDATE users SET username = %s, password = %s, first_name = %s, last_name = %s "
            "WHERE id = %s"
        )
        return await self._write(sql, (username, password, first_name, last_name, user_id))

    async def remove(self, user_id: int) -> int:
        """Delete one user by id and return the number of rows deleted."""
        return await self._write("DELETE FROM users WHERE id = %s", (user_id,))

    async def list_all(self) -> List[User]:
        rows = await self._fetch(f"SELECT {_COLUMNS} FROM users ORDER BY username ASC")
        return [User(**row) for row in rows]

    async def search_by_username(self, fragment: Optional[str]) -> List[User]:
        """Users whose username contains ``fragment``, ignoring case."""
        sql = f"SELECT {_COLUMNS} FROM users WHERE username ILIKE %s ORDER BY username ASC"
        rows = await self._fetch(sql, (like_fragment(fragment),))
        return [User(**row) for row in rows]

    async def search_by_details(
        self,
        username: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
    ) -> List[User]:
        """
        Users matching all three fragments at once.

        Each fragment is an independent case-insensitive substring predicate and
        the predicates are ANDed; an empty fragment leaves its column
        unconstrained.
        """
        sql = f"""
            SELECT {_COLUMNS} FROM users
            WHERE username ILIKE %s
              AND first_name ILIKE %s
              AND last_name ILIKE %s
            ORDER BY username ASC
        """
        params = (like_fragment(username), like_fragment(first_name), like_fragment(last_name))
        rows = await self._fetch(sql, params)
        return [User(**row) for row in rows]

    async def remove_below_kill_threshold(self, threshold: int) -> int:
        """
        Delete users whose total kills across all statistics is below ``threshold``.

        Returns the number of users deleted.
        """
        sql = """
            DELETE FROM users
            WHERE id IN (
                SELECT user_id
                FROM statistics
                GROUP BY user_id
                HAVING SUM(kills) < %s
            )
        """
        deleted = await self._write(sql, (threshold,))
        log.info(
            "Users below kill threshold deleted",
            extra={"threshold": threshold, "deleted": deleted},
        )
        return deleted


__all__ = ["UserRepository"]
