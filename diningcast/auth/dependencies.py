from __future__ import annotations

import hmac
import os

from fastapi import Header

API_KEY_HEADER = "x-api-key"
UNAUTHORIZED_ERROR = "unauthorized"


class UnauthorizedError(Exception):
    """Missing or wrong shared secret; rendered as a 401 ``{"error": "unauthorized"}``."""


def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
    """Raise UnauthorizedError unless the request carries the shared secret."""
    secret = os.environ.get("API_SECRET", "")
    if not secret or not x_api_key or not hmac.compare_digest(x_api_key, secret):
        raise UnauthorizedError()
