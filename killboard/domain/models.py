"""
Domain models for the killboard service.

Row shapes of the `users` and `statistics` tables as returned by the
repositories. Both are immutable; a replace operation writes a new row image
rather than mutating a model.
"""
from __future__ import annotations

from datetime import date as Date

from pydantic import BaseModel, Field


class User(BaseModel):
    """
    Representation of a single row in the `users` table.
    """

    id: int = Field(..., description="Primary key (SERIAL).")
    username: str = Field(..., description="Handle; searched case-insensitively.")
    password: str = Field(..., description="Secret, stored as supplied.")
    first_name: str = Field(..., description="Given name.")
    last_name: str = Field(..., description="Family name.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class Statistic(BaseModel):
    """
    Representation of a single row in the `statistics` table.
    """

    id: int = Field(..., description="Primary key (SERIAL).")
    user_id: int = Field(..., description="Owning user id.")
    kills: int = Field(..., ge=0, description="Kill count for the day.")
    date: Date = Field(..., description="Calendar day the kills were recorded.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


__all__ = ["Statistic", "User"]
