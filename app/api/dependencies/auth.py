"""Caller identity dependency.

Authentication itself (registration, login, token issuance and revocation)
is handled upstream; by the time a request reaches this service the gateway
has resolved the caller and forwards the id in the X-User-Id header.
"""

from __future__ import annotations

from fastapi import Header, HTTPException, status
from loguru import logger

from app.config.settings import settings


def get_current_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    """FastAPI dependency returning the caller's user id.

    Falls back to DEV_USER_ID when the header is absent (local development).

    Raises:
        HTTPException: 401 if no caller identity is available
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()

    if settings.dev_user_id:
        logger.debug(f"No X-User-Id header, using DEV_USER_ID={settings.dev_user_id}")
        return settings.dev_user_id

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )
