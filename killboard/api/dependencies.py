"""
FastAPI dependency providers.

Repositories and settings live on `app.state`; they are created by the app
factory/lifespan and looked up per request. Tests swap them through
`app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import Request

from killboard.config import Settings
from killboard.repositories.statistics import StatisticRepository
from killboard.repositories.users import UserRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.users


def get_statistic_repository(request: Request) -> StatisticRepository:
    return request.app.state.statistics


__all__ = ["get_app_settings", "get_statistic_repository", "get_user_repository"]
