"""
HTTP surface for the verse dispatcher.

Endpoints:
- GET|POST /api/cron - Run one dispatch (called hourly by the scheduler)
- POST /api/subscribe - Create or refresh an unverified subscription
- GET /api/verify - Confirm a subscription from the emailed link
- GET|POST /api/unsubscribe - One-click unsubscribe with a signed token
- GET /api/options - Languages, versions, frequencies, carriers and timezones
"""

import secrets
import string
from functools import lru_cache
from typing import Optional
from urllib.parse import urlencode

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse

from api.auth import is_authorized
from config.bible_versions import BIBLE_VERSIONS, LANGUAGES
from config.sms_gateways import SMS_GATEWAYS
from config.timezones import TIMEZONE_LABELS
from models.subscriber import SubscriptionRequest
from models.types import Frequency, FrequencyFilter
from notifications.dispatch_run import DispatchRun, build_dispatch_run
from notifications.email_sender import (
    Notifier,
    ResendNotifier,
    send_verification_email,
)
from notifications.subscriber_store import (
    SubscriberFetchError,
    SubscriberStoreError,
    SupabaseSubscriberStore,
)
from notifications.unsubscribe_tokens import validate_unsubscribe_token
from shared.db import get_supabase_client
from shared.settings import Settings, load_settings

VERIFICATION_CODE_LENGTH = 6
VERIFICATION_CODE_ALPHABET = string.ascii_uppercase + string.digits


class UnauthorizedError(Exception):
    """Raised when the cron trigger is called without the expected bearer token."""


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def get_subscriber_store(
    settings: Settings = Depends(get_settings),
) -> SupabaseSubscriberStore:
    return SupabaseSubscriberStore(get_supabase_client(settings))


def get_notifier(settings: Settings = Depends(get_settings)) -> Notifier:
    return ResendNotifier(
        settings.resend_api_key,
        settings.from_email,
        timeout=settings.http_timeout_seconds,
    )


def get_dispatch_run(settings: Settings = Depends(get_settings)) -> DispatchRun:
    return build_dispatch_run(settings)


def require_cron_auth(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    if not is_authorized(authorization, settings.cron_secret):
        raise UnauthorizedError()


def generate_verification_code() -> str:
    """Random 6-character uppercase alphanumeric code."""
    return "".join(
        secrets.choice(VERIFICATION_CODE_ALPHABET)
        for _ in range(VERIFICATION_CODE_LENGTH)
    )


def build_verify_url(app_base_url: str, email: str, code: str) -> str:
    return f"{app_base_url}/api/verify?{urlencode({'email': email, 'code': code})}"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


app = FastAPI(title="Bible Verse Dispatcher")


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return error_response(401, "Unauthorized")


@app.api_route("/api/cron", methods=["GET", "POST"], dependencies=[Depends(require_cron_auth)])
def run_cron(
    frequency: FrequencyFilter = FrequencyFilter.ALL,
    dispatch: DispatchRun = Depends(get_dispatch_run),
):
    """
    Run one dispatch pass.

    The scheduler calls this at the top of every hour; each subscriber is
    checked against their own schedule, so 'all' is the normal filter.
    """
    try:
        summary = dispatch.run(frequency)
    except SubscriberFetchError as e:
        print(f"✗ {e}")
        return error_response(500, "Failed to fetch subscribers")

    body = {
        "success": True,
        "processed": summary.processed,
        "sent": summary.sent,
        "failed": summary.failed,
        "skipped": summary.skipped,
        "timestamp": summary.timestamp.isoformat(),
    }
    if summary.processed == 0:
        body["message"] = "No subscribers to process"

    print(
        f"[{body['timestamp']}] Cron complete: processed {summary.processed}, "
        f"sent {summary.sent}, failed {summary.failed}, skipped {summary.skipped}"
    )
    return body


@app.post("/api/subscribe")
def subscribe(
    request: SubscriptionRequest,
    store: SupabaseSubscriberStore = Depends(get_subscriber_store),
    notifier: Notifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
):
    """
    Start a subscription.

    New addresses get an unverified row; an unverified address gets its
    preferences and code refreshed. Both receive a verification email.
    """
    code = generate_verification_code()

    try:
        existing = store.find_by_email(request.email)
        if existing and existing.is_verified:
            return error_response(
                409,
                "This email is already subscribed. Use the link in your emails to unsubscribe.",
            )

        if existing:
            store.update(existing.id, {**request.preferences(), "verification_code": code})
        else:
            store.create(request.to_record(code))
    except SubscriberStoreError as e:
        print(f"✗ Subscribe error for {request.email}: {e}")
        return error_response(500, "Failed to save subscription")

    verify_url = build_verify_url(settings.app_base_url, request.email, code)
    sent = send_verification_email(notifier, request.email, verify_url)

    if not sent and not existing:
        return error_response(
            500, "Subscription created but verification email failed. Please try again."
        )

    return {
        "success": True,
        "message": "Please check your email to verify your subscription.",
    }


@app.get("/api/verify")
def verify(
    email: str = "",
    code: str = "",
    store: SupabaseSubscriberStore = Depends(get_subscriber_store),
):
    """Confirm a subscription from the emailed verification link."""
    if not email or not code:
        return error_response(400, "Email and code are required")

    try:
        subscriber = store.find_by_verification(email, code)
        if subscriber is None:
            return error_response(400, "Invalid verification link")

        if subscriber.is_verified:
            return {"success": True, "message": "Email already verified"}

        store.mark_verified(subscriber.id)
    except SubscriberStoreError as e:
        print(f"✗ Verification error for {email}: {e}")
        return error_response(500, "Failed to verify email")

    print(f"✓ Verified subscriber {subscriber.id}")
    return {
        "success": True,
        "message": "Email verified successfully! You will now receive Bible verses.",
    }


@app.api_route("/api/unsubscribe", methods=["GET", "POST"])
def unsubscribe(
    token: str = "",
    store: SupabaseSubscriberStore = Depends(get_subscriber_store),
    settings: Settings = Depends(get_settings),
):
    """
    Deactivate a subscription from a signed link.

    POST serves one-click List-Unsubscribe requests from mail clients.
    """
    subscriber_id = validate_unsubscribe_token(token, settings.unsubscribe_secret_key)
    if subscriber_id is None:
        return error_response(400, "Invalid or expired unsubscribe link")

    try:
        subscriber = store.find_by_id(subscriber_id)
        if subscriber is None:
            return error_response(404, "Subscriber not found")

        store.deactivate(subscriber.id)
    except SubscriberStoreError as e:
        print(f"✗ Unsubscribe error for {subscriber_id}: {e}")
        return error_response(500, "Failed to unsubscribe")

    print(f"✓ Unsubscribed {subscriber.contact}")
    return {"success": True, "message": "You have been unsubscribed."}


@app.get("/api/options")
def options():
    """Choices for the signup form."""
    return {
        "languages": [
            {
                "code": code,
                "name": language["name"],
                "versions": [
                    {"code": version, "name": BIBLE_VERSIONS[version]["name"]}
                    for version in language["versions"]
                ],
            }
            for code, language in LANGUAGES.items()
        ],
        "frequencies": [f.value for f in Frequency],
        "carriers": [
            {"code": code, "name": gateway["name"]}
            for code, gateway in SMS_GATEWAYS.items()
        ],
        "timezones": [
            {"zone": zone, "label": label} for zone, label in TIMEZONE_LABELS.items()
        ],
    }

