"""
FastAPI application factory for the killboard service.

The lifespan opens one connection pool from the configured `PoolConfig`,
builds a single `QueryExecutor` around it and hands that executor to both
repositories. The pool is closed on shutdown.

Run with:
    killboard serve
or:
    uvicorn --factory killboard.api.app:create_app
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request

from killboard import __version__
from killboard.api.error_handlers import register_error_handlers
from killboard.api.routes import health, statistics, users
from killboard.config import Settings, get_settings
from killboard.infrastructure.db_factory import close_pool, open_pool
from killboard.infrastructure.executor import QueryExecutor
from killboard.repositories.statistics import StatisticRepository
from killboard.repositories.users import UserRepository
from killboard.utils.logging import get_logger

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup/shutdown lifecycle: own the pool for the life of the process."""
    settings: Settings = app.state.settings
    pool = await open_pool(settings.pool_config(), attempts=settings.db_connect_attempts)
    executor = QueryExecutor(pool)
    app.state.users = UserRepository(executor)
    app.state.statistics = StatisticRepository(executor)
    log.info("killboard API started", extra={"env": settings.app_env})
    try:
        yield
    finally:
        await close_pool(pool)
        log.info("killboard API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API application.

    Parameters
    ----------
    settings : Settings, optional
        Effective configuration. Defaults to the cached environment settings.
    """
    app = FastAPI(title="killboard-api", version=__version__, lifespan=lifespan)
    app.state.settings = settings or get_settings()

    register_error_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        log.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(statistics.router)
    return app


__all__ = ["create_app", "lifespan"]
