"""
Unit tests for unsubscribe token generation and validation.
"""

import hashlib
import time
import unittest
from unittest.mock import patch

from itsdangerous import URLSafeTimedSerializer

from notifications.unsubscribe_tokens import (
    UNSUBSCRIBE_SALT,
    build_unsubscribe_url,
    generate_unsubscribe_token,
    validate_unsubscribe_token,
)

SECRET = "test-secret-key-for-testing-must-be-at-least-32-chars-long"


def make_token_issued_days_ago(subscriber_id: str, days: int) -> str:
    serializer = URLSafeTimedSerializer(
        SECRET,
        salt=UNSUBSCRIBE_SALT,
        signer_kwargs={"digest_method": hashlib.sha256},
    )
    old_timestamp = time.time() - (days * 24 * 60 * 60)
    with patch("time.time", return_value=old_timestamp):
        return serializer.dumps(subscriber_id)


class TestUnsubscribeTokens(unittest.TestCase):
    """Test token generation and validation logic."""

    def test_generate_token_creates_valid_format(self):
        """Generated token is URL-safe with payload.timestamp.signature format."""
        token = generate_unsubscribe_token("sub-123", SECRET)

        allowed_chars = set(
            "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_."
        )
        self.assertTrue(all(c in allowed_chars for c in token))
        self.assertEqual(token.count("."), 2)

    def test_validate_token_returns_subscriber_id(self):
        subscriber_id = "550e8400-e29b-41d4-a716-446655440000"
        token = generate_unsubscribe_token(subscriber_id, SECRET)

        self.assertEqual(validate_unsubscribe_token(token, SECRET), subscriber_id)

    def test_validate_token_returns_none_for_invalid_token(self):
        self.assertIsNone(validate_unsubscribe_token("not-a-valid-token", SECRET))

    def test_validate_token_returns_none_for_empty_token(self):
        self.assertIsNone(validate_unsubscribe_token("", SECRET))

    def test_validate_token_returns_none_for_wrong_secret(self):
        token = generate_unsubscribe_token("sub-123", SECRET)
        self.assertIsNone(validate_unsubscribe_token(token, "some-other-secret"))

    def test_validate_token_returns_none_without_secret(self):
        token = generate_unsubscribe_token("sub-123", SECRET)
        self.assertIsNone(validate_unsubscribe_token(token, None))

    def test_validate_token_returns_none_for_tampered_signature(self):
        token = generate_unsubscribe_token("sub-tampered", SECRET)

        parts = token.split(".")
        parts[2] = "X" * len(parts[2])

        self.assertIsNone(validate_unsubscribe_token(".".join(parts), SECRET))

    def test_validate_token_returns_none_for_expired_token(self):
        """Tokens older than 90 days are rejected."""
        token = make_token_issued_days_ago("sub-789", 91)

        self.assertIsNone(validate_unsubscribe_token(token, SECRET))

    def test_token_expiry_respects_max_age_parameter(self):
        token = make_token_issued_days_ago("sub-expiry", 45)

        self.assertEqual(validate_unsubscribe_token(token, SECRET), "sub-expiry")
        self.assertIsNone(validate_unsubscribe_token(token, SECRET, max_age_days=30))

    def test_token_requires_secret_key(self):
        with self.assertRaises(ValueError) as context:
            generate_unsubscribe_token("sub-123", "")

        self.assertIn("UNSUBSCRIBE_SECRET_KEY", str(context.exception))


class TestBuildUnsubscribeUrl(unittest.TestCase):
    def test_url_carries_valid_token(self):
        url = build_unsubscribe_url("https://verses.example.com", "sub-42", SECRET)

        prefix = "https://verses.example.com/api/unsubscribe?token="
        self.assertTrue(url.startswith(prefix))
        token = url[len(prefix):]
        self.assertEqual(validate_unsubscribe_token(token, SECRET), "sub-42")

    def test_no_url_without_secret(self):
        self.assertIsNone(build_unsubscribe_url("https://verses.example.com", "sub-42", None))


if __name__ == "__main__":
    unittest.main()
