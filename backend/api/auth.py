"""
Bearer-token check for the cron trigger.

The scheduler calls the trigger with `Authorization: Bearer <CRON_SECRET>`.
When no secret is configured the check is skipped (local development).
"""

import hmac
from typing import Optional


def is_authorized(authorization: Optional[str], cron_secret: Optional[str]) -> bool:
    """
    Check an Authorization header against the configured cron secret.

    Args:
        authorization: Raw Authorization header value (may be None)
        cron_secret: CRON_SECRET setting; None or empty disables the check

    Returns:
        True if the request may trigger a dispatch run
    """
    if not cron_secret:
        return True

    if not authorization:
        return False

    # Starlette decodes headers as latin-1; compare_digest only accepts ASCII str
    return hmac.compare_digest(
        authorization.encode("utf-8"), f"Bearer {cron_secret}".encode("utf-8")
    )
