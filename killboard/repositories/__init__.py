"""
Repositories package for the killboard service.

Re-exports the table repositories so callers can import from
`killboard.repositories` directly.
"""

from killboard.repositories.base import BaseRepository, like_fragment
from killboard.repositories.statistics import StatisticRepository
from killboard.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "StatisticRepository",
    "UserRepository",
    "like_fragment",
]
