"""
Request body and query-string validation for the HTTP layer.

Field rules are plain pydantic validators applied before a request reaches a
repository. Missing fields default to empty/None and are validated like any
other value, so a missing field and an empty field report the same message.
"""

from __future__ import annotations

import re
from datetime import date as Date
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

_CAPITAL_AND_DIGIT = re.compile(r"^(?=.*[A-Z])(?=.*\d)")
MIN_PASSWORD_LENGTH = 8
KILLS_QUERY_MESSAGE = "Kills must be a positive integer"

# Query parameter -> (message when missing or empty, message when malformed).
_QUERY_MESSAGES = {
    "kills": (KILLS_QUERY_MESSAGE, KILLS_QUERY_MESSAGE),
    "start_date": ("Start date is required", "Start date must be a valid date"),
    "end_date": ("End date must be a valid date", "End date must be a valid date"),
    "date": ("Date is required", "Date must be a valid date"),
}


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and value.strip().lstrip("-").isdigit()


def _require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value


class UserPayload(BaseModel):
    """Body of user create/replace requests."""

    username: str = Field("", validate_default=True)
    password: str = Field("", validate_default=True)
    first_name: str = Field("", validate_default=True)
    last_name: str = Field("", validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def _username_required(cls, value: Any) -> str:
        return _require_text(value, "Username is required")

    @field_validator("password", mode="before")
    @classmethod
    def _password_strength(cls, value: Any) -> str:
        if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError("Password must be at least 8 characters long")
        if not _CAPITAL_AND_DIGIT.match(value):
            raise ValueError("Password must contain at least one capital letter and one number")
        return value

    @field_validator("first_name", mode="before")
    @classmethod
    def _first_name_alpha(cls, value: Any) -> str:
        value = _require_text(value, "First name is required")
        if not value.isalpha():
            raise ValueError("First name cannot contain numbers")
        return value

    @field_validator("last_name", mode="before")
    @classmethod
    def _last_name_alpha(cls, value: Any) -> str:
        value = _require_text(value, "Last name is required")
        if not value.isalpha():
            raise ValueError("Last name cannot contain numbers")
        return value


class StatisticPayload(BaseModel):
    """Body of statistic create/replace requests."""

    user_id: int = Field(None, validate_default=True)  # type: ignore[assignment]
    kills: int = Field(None, validate_default=True)  # type: ignore[assignment]
    date: Date = Field(None, validate_default=True)  # type: ignore[assignment]

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id_integer(cls, value: Any) -> Any:
        if not _is_integer(value):
            raise ValueError("User ID must be an integer")
        return value

    @field_validator("kills", mode="before")
    @classmethod
    def _kills_numeric(cls, value: Any) -> Any:
        if not _is_integer(value):
            raise ValueError("Kills must be numeric")
        if int(value) < 0:
            raise ValueError(KILLS_QUERY_MESSAGE)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _date_required(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("Date is required")
        return value


def error_message(raw: str) -> str:
    """Strip pydantic's ``"Value error, "`` prefix from custom validator messages."""
    prefix = "Value error, "
    return raw[len(prefix):] if raw.startswith(prefix) else raw


def field_name(loc: tuple) -> Optional[str]:
    """Last named element of a pydantic error location."""
    names = [str(part) for part in loc if not isinstance(part, int)]
    return names[-1] if names else None


def query_error_message(error: Dict[str, Any]) -> str:
    """
    Message for one query-string validation error.

    Known parameters get a fixed "required" or "invalid" message; anything else
    falls back to pydantic's text.
    """
    loc = tuple(error.get("loc", ()))
    messages = _QUERY_MESSAGES.get(field_name(loc) or "")
    if not loc or loc[0] != "query" or messages is None:
        return error_message(error.get("msg", ""))
    required, invalid = messages
    if error.get("type") == "missing" or error.get("input") == "":
        return required
    return invalid


__all__ = [
    "MIN_PASSWORD_LENGTH",
    "StatisticPayload",
    "UserPayload",
    "error_message",
    "field_name",
    "query_error_message",
]
