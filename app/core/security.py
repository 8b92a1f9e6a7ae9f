"""
Security
App identity and client identity header checks

SECURITY NOTE:
- X-PEZO-APP is a static shared secret compiled into the app. It filters
  casual traffic; it is NOT authentication.
- X-CLIENT-ID is opaque and unverified. It only keys the daily quota.
"""
import logging
import hmac
from typing import Optional

from fastapi import Depends, Header

from app.core.config import Settings
from app.core.dependencies import get_settings
from app.core.errors import InvalidAppHeaderError, MissingClientIdError

logger = logging.getLogger(__name__)


async def verify_app_header(
    x_pezo_app: Optional[str] = Header(default=None, alias="X-PEZO-APP"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Require X-PEZO-APP to equal the configured shared secret.

    SECURITY: Uses timing-safe comparison.

    Raises:
        InvalidAppHeaderError: Header missing or wrong
    """
    if not x_pezo_app or not hmac.compare_digest(
        x_pezo_app.encode(), settings.app_identity_secret.encode()
    ):
        logger.warning("Rejected request with invalid app header")
        raise InvalidAppHeaderError()

    return x_pezo_app


async def require_client_id(
    x_client_id: Optional[str] = Header(default=None, alias="X-CLIENT-ID"),
) -> str:
    """
    Require a non-empty X-CLIENT-ID header.

    Raises:
        MissingClientIdError: Header missing or empty
    """
    if not x_client_id:
        raise MissingClientIdError()

    return x_client_id
