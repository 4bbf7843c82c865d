"""
Integration tests for the subscribe, verify and unsubscribe endpoints.
"""

import unittest
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

from fastapi.testclient import TestClient

from api.app import app, get_notifier, get_settings, get_subscriber_store
from notifications.subscriber_store import SubscriberStoreError, SupabaseSubscriberStore
from notifications.unsubscribe_tokens import generate_unsubscribe_token
from shared.settings import Settings
from tests.fixtures.mock_helpers import RecordingNotifier
from tests.fixtures.subscriber_factory import (
    create_test_subscriber,
    create_test_subscription_request,
)

SECRET = "test-secret-key-for-testing-must-be-at-least-32-chars-long"


class SubscriptionFlowTestCase(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(
            app_base_url="https://verses.example.com", unsubscribe_secret_key=SECRET
        )
        self.store = Mock(spec=SupabaseSubscriberStore)
        self.store.find_by_email.return_value = None
        self.notifier = RecordingNotifier()
        app.dependency_overrides[get_settings] = lambda: self.settings
        app.dependency_overrides[get_subscriber_store] = lambda: self.store
        app.dependency_overrides[get_notifier] = lambda: self.notifier
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()


class TestSubscribe(SubscriptionFlowTestCase):
    def test_new_subscriber_created_and_verification_sent(self):
        response = self.client.post("/api/subscribe", json=create_test_subscription_request())

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

        record = self.store.create.call_args[0][0]
        self.assertEqual(record["email"], "new.reader@example.com")
        self.assertFalse(record["is_verified"])
        code = record["verification_code"]
        self.assertEqual(len(code), 6)
        self.assertEqual(code, code.upper())

        message = self.notifier.sent[0]
        self.assertEqual(message["destination"], "new.reader@example.com")
        self.assertIn(f"code={code}", message["body_text"])
        self.assertIn("https://verses.example.com/api/verify?", message["body_text"])

    def test_already_verified_returns_409(self):
        self.store.find_by_email.return_value = create_test_subscriber(is_verified=True)

        response = self.client.post("/api/subscribe", json=create_test_subscription_request())

        self.assertEqual(response.status_code, 409)
        self.store.create.assert_not_called()
        self.assertEqual(self.notifier.sent, [])

    def test_unverified_subscriber_refreshed(self):
        existing = create_test_subscriber(subscriber_id="sub-9", is_verified=False)
        self.store.find_by_email.return_value = existing

        response = self.client.post(
            "/api/subscribe",
            json=create_test_subscription_request(frequency="weekly", delivery_day=5),
        )

        self.assertEqual(response.status_code, 200)
        self.store.create.assert_not_called()
        subscriber_id, changes = self.store.update.call_args[0]
        self.assertEqual(subscriber_id, "sub-9")
        self.assertEqual(changes["frequency"], "weekly")
        self.assertEqual(changes["delivery_day"], 5)
        self.assertEqual(len(changes["verification_code"]), 6)
        self.assertEqual(len(self.notifier.sent), 1)

    def test_invalid_body_rejected(self):
        response = self.client.post(
            "/api/subscribe",
            json=create_test_subscription_request(language="en", version="RVR"),
        )

        self.assertEqual(response.status_code, 422)
        self.store.find_by_email.assert_not_called()

    def test_store_error_returns_500(self):
        self.store.create.side_effect = SubscriberStoreError("insert failed")

        response = self.client.post("/api/subscribe", json=create_test_subscription_request())

        self.assertEqual(response.status_code, 500)
        self.assertEqual(self.notifier.sent, [])

    def test_verification_email_failure_returns_500(self):
        self.notifier.result = False

        response = self.client.post("/api/subscribe", json=create_test_subscription_request())

        self.assertEqual(response.status_code, 500)
        self.assertIn("verification email failed", response.json()["error"])


class TestVerify(SubscriptionFlowTestCase):
    def test_verifies_matching_code(self):
        self.store.find_by_verification.return_value = create_test_subscriber(
            subscriber_id="sub-1", is_verified=False, verification_code="ABC123"
        )

        response = self.client.get("/api/verify?email=A%40B.com&code=abc123")

        self.assertEqual(response.status_code, 200)
        self.store.find_by_verification.assert_called_once_with("A@B.com", "abc123")
        self.store.mark_verified.assert_called_once_with("sub-1")

    def test_no_match_returns_400(self):
        self.store.find_by_verification.return_value = None

        response = self.client.get("/api/verify?email=a%40b.com&code=WRONG1")

        self.assertEqual(response.status_code, 400)
        self.store.mark_verified.assert_not_called()

    def test_missing_params_return_400(self):
        response = self.client.get("/api/verify?email=a%40b.com")

        self.assertEqual(response.status_code, 400)

    def test_already_verified(self):
        self.store.find_by_verification.return_value = create_test_subscriber(is_verified=True)

        response = self.client.get("/api/verify?email=a%40b.com&code=ABC123")

        self.assertEqual(response.json()["message"], "Email already verified")
        self.store.mark_verified.assert_not_called()


class TestUnsubscribeFlow(SubscriptionFlowTestCase):
    """Signed unsubscribe links deactivate the subscriber they were issued for."""

    def test_valid_token_deactivates(self):
        self.store.find_by_id.return_value = create_test_subscriber(subscriber_id="sub-7")
        token = generate_unsubscribe_token("sub-7", SECRET)

        response = self.client.get(f"/api/unsubscribe?token={token}")

        self.assertEqual(response.status_code, 200)
        self.store.find_by_id.assert_called_once_with("sub-7")
        self.store.deactivate.assert_called_once_with("sub-7")

    def test_one_click_post(self):
        self.store.find_by_id.return_value = create_test_subscriber(subscriber_id="sub-7")
        token = generate_unsubscribe_token("sub-7", SECRET)

        response = self.client.post(f"/api/unsubscribe?token={token}")

        self.assertEqual(response.status_code, 200)
        self.store.deactivate.assert_called_once_with("sub-7")

    def test_invalid_token_returns_400(self):
        response = self.client.get("/api/unsubscribe?token=forged")

        self.assertEqual(response.status_code, 400)
        self.store.deactivate.assert_not_called()

    def test_unknown_subscriber_returns_404(self):
        self.store.find_by_id.return_value = None
        token = generate_unsubscribe_token("sub-gone", SECRET)

        response = self.client.get(f"/api/unsubscribe?token={token}")

        self.assertEqual(response.status_code, 404)

    def test_verify_link_round_trip(self):
        """The link emailed at signup carries the code the store saved."""
        self.client.post("/api/subscribe", json=create_test_subscription_request())
        saved_code = self.store.create.call_args[0][0]["verification_code"]

        body = self.notifier.sent[0]["body_text"]
        link = body[body.index("https://"):]
        query = parse_qs(urlparse(link).query)

        self.assertEqual(query["email"], ["new.reader@example.com"])
        self.assertEqual(query["code"], [saved_code])


class TestOptions(SubscriptionFlowTestCase):
    def test_lists_choices(self):
        body = self.client.get("/api/options").json()

        english = next(lang for lang in body["languages"] if lang["code"] == "en")
        self.assertIn("KJV", [v["code"] for v in english["versions"]])
        self.assertEqual(body["frequencies"], ["hourly", "daily", "weekly"])
        self.assertIn("verizon", [c["code"] for c in body["carriers"]])
        self.assertIn("Asia/Tokyo", [t["zone"] for t in body["timezones"]])


if __name__ == "__main__":
    unittest.main()
