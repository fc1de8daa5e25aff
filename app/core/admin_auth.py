"""Operator API key check for maintenance endpoints."""

import logging
import secrets

from fastapi import Header, HTTPException

from app.core.config import get_settings

logger = logging.getLogger(__name__)


async def verify_admin_api_key(x_admin_key: str = Header(default="")) -> None:
    """
    Verify the X-Admin-Key header against ADMIN_API_KEY.

    Missing, unconfigured and wrong keys all get the same 401.
    """
    settings = get_settings()

    if not settings.admin_api_key:
        logger.warning("Admin API key not configured - rejecting request")
        raise HTTPException(status_code=401, detail="Authentication failed")

    if not x_admin_key or not secrets.compare_digest(x_admin_key, settings.admin_api_key):
        logger.warning("Rejected request with invalid admin API key")
        raise HTTPException(status_code=401, detail="Authentication failed")
