"""
Trusted-origin restriction for maintenance endpoints.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from killboard.api.dependencies import get_app_settings
from killboard.config import Settings
from killboard.utils.logging import get_logger

log = get_logger(__name__)

FORBIDDEN_MESSAGE = "Forbidden: This endpoint can only be accessed from localhost"


def require_trusted_origin(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> None:
    """Reject the request with 403 unless the client address is a trusted host."""
    client_host = request.client.host if request.client else None
    if client_host not in settings.trusted_hosts:
        log.warning(
            "Rejected request from untrusted origin",
            extra={"client_host": client_host, "path": request.url.path},
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE)


__all__ = ["FORBIDDEN_MESSAGE", "require_trusted_origin"]
