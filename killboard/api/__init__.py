"""
HTTP transport for the killboard service.

Routes validate and coerce request data, call one repository operation and
serialize its result; store failures map to HTTP 500.
"""

from killboard.api.app import create_app

__all__ = ["create_app"]
