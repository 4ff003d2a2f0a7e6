"""
Global exception handlers for the killboard API.

- StoreFailure → 500 with the store's raw message
- RequestValidationError → 400 with field-level messages
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from killboard.api.validation import field_name, query_error_message
from killboard.infrastructure.executor import StoreFailure
from killboard.utils.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
        log.error(
            f"StoreFailure: {exc.message}",
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        log.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "errors": [
            {
                "field": field_name(tuple(err.get("loc", ()))),
                "msg": query_error_message(err),
            }
            for err in exc.errors()
        ]
    }


__all__ = ["build_validation_error_response", "register_error_handlers"]
