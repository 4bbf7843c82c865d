"""
Token generation and validation for one-click unsubscribe links.

Uses cryptographically signed tokens with expiry, so unsubscribe links work
without storing anything and cannot be forged for another subscriber.
Tokens expire after 90 days.
"""

import hashlib
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

UNSUBSCRIBE_SALT = "unsubscribe"
DEFAULT_MAX_AGE_DAYS = 90


def _get_serializer(secret_key: str | None) -> URLSafeTimedSerializer:
    """
    Get configured serializer for token generation and validation.

    Raises:
        ValueError: If no secret key is configured
    """
    if not secret_key:
        raise ValueError("UNSUBSCRIBE_SECRET_KEY must be set.")

    return URLSafeTimedSerializer(
        secret_key,
        salt=UNSUBSCRIBE_SALT,
        signer_kwargs={"digest_method": hashlib.sha256},
    )


def generate_unsubscribe_token(subscriber_id: str, secret_key: str | None) -> str:
    """
    Generate a signed unsubscribe token for a subscriber.

    Args:
        subscriber_id: Subscriber's unique identifier (UUID)
        secret_key: Signing secret (UNSUBSCRIBE_SECRET_KEY)

    Returns:
        URL-safe token string (format: payload.timestamp.signature)

    Raises:
        ValueError: If secret_key is empty
    """
    serializer = _get_serializer(secret_key)
    return serializer.dumps(subscriber_id)


def validate_unsubscribe_token(
    token: str, secret_key: str | None, max_age_days: int = DEFAULT_MAX_AGE_DAYS
) -> Optional[str]:
    """
    Validate an unsubscribe token and extract the subscriber_id.

    Never raises - returns None for any invalid, expired or malformed token,
    or when no secret is configured.

    Examples:
        >>> token = generate_unsubscribe_token("sub-123", "secret")
        >>> validate_unsubscribe_token(token, "secret")
        'sub-123'
        >>> validate_unsubscribe_token("invalid-token", "secret") is None
        True
    """
    try:
        serializer = _get_serializer(secret_key)
        max_age_seconds = max_age_days * 24 * 60 * 60
        return serializer.loads(token, max_age=max_age_seconds, salt=UNSUBSCRIBE_SALT)
    except (BadSignature, SignatureExpired, ValueError, TypeError):
        return None


def build_unsubscribe_url(
    app_base_url: str, subscriber_id: str, secret_key: str | None
) -> Optional[str]:
    """Unsubscribe link for a subscriber, or None when tokens are not configured."""
    if not secret_key:
        return None
    token = generate_unsubscribe_token(subscriber_id, secret_key)
    return f"{app_base_url}/api/unsubscribe?token={token}"
