"""
Domain package for the killboard service.

Exports the row models shared by repositories and the HTTP layer.
Keep this package focused on data definitions.
"""

from killboard.domain.models import Statistic, User

__all__ = [
    "Statistic",
    "User",
]
