"""
Email sending via Resend API for verse delivery.

Handles verse emails, SMS-gateway text messages (plain email to a carrier
gateway address) and subscription verification emails.
"""

from html import escape
from typing import Any, Dict, Optional, Protocol

import resend

from config.sms_gateways import SMS_MAX_LENGTH
from models.delivery import VersePayload


class Notifier(Protocol):
    """Anything that can deliver a message to an address."""

    def send(
        self,
        destination: str,
        body_text: str,
        subject: Optional[str] = None,
        body_html: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> bool: ...


class ResendNotifier:
    """Sends email through Resend and reports success as a boolean."""

    def __init__(self, api_key: str | None, from_email: str, timeout: float = 10.0):
        if not api_key:
            raise ValueError("RESEND_API_KEY is not configured")

        # The Resend SDK reads its key and HTTP client from module state
        resend.api_key = api_key
        resend.default_http_client = resend.RequestsClient(timeout=timeout)
        self.from_email = from_email
        self.last_error: Optional[str] = None

    def send(
        self,
        destination: str,
        body_text: str,
        subject: Optional[str] = None,
        body_html: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> bool:
        """
        Send one message.

        Args:
            destination: Recipient address (mailbox or SMS gateway address)
            body_text: Plain text body
            subject: Subject line (SMS gateways ignore it)
            body_html: Optional HTML body
            headers: Optional extra headers (e.g. List-Unsubscribe)

        Returns:
            True if Resend accepted the message, False otherwise. The error
            text of the last failure is kept in `last_error`.
        """
        params: Dict[str, Any] = {
            "from": self.from_email,
            "to": destination,
            "subject": subject or "",
            "text": body_text,
        }
        if body_html:
            params["html"] = body_html
        if headers:
            params["headers"] = headers

        try:
            resend.Emails.send(params)
            self.last_error = None
            return True
        except Exception as e:
            self.last_error = str(e)
            print(f"  ✗ Resend error for {destination}: {e}")
            return False


def format_sms_message(verse: VersePayload, max_length: int = SMS_MAX_LENGTH) -> str:
    """
    Format a verse as a single-segment text message.

    The reference and version suffix is always kept; only the verse text is
    truncated (with an ellipsis) when the message is over max_length.
    """
    suffix = f" - {verse.reference} ({verse.version})"
    message = f'"{verse.text}"{suffix}'

    if len(message) > max_length:
        keep = max(0, max_length - len(verse.reference) - len(verse.version) - 15)
        truncated_text = verse.text[:keep] + "..."
        message = f'"{truncated_text}"{suffix}'

    return message


def _build_verse_subject(verse: VersePayload) -> str:
    return f"📖 Your Daily Bible Verse - {verse.reference}"


def _build_verse_html(verse: VersePayload, unsubscribe_url: Optional[str]) -> str:
    """
    Build HTML email body for a verse.

    Args:
        verse: Verse to render
        unsubscribe_url: Signed unsubscribe link, omitted from the footer when None

    Returns:
        HTML string
    """
    footer_links = ""
    if unsubscribe_url:
        footer_links = f"""
                <p><a href="{unsubscribe_url}" style="color: #666;">Unsubscribe</a></p>"""

    return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Georgia, serif; max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f9f7f4;">
    <div style="background: white; border-radius: 12px; padding: 32px; box-shadow: 0 2px 8px rgba(0,0,0,0.1);">
        <div style="text-align: center; margin-bottom: 24px;">
            <span style="font-size: 48px;">📖</span>
        </div>

        <div style="font-size: 20px; line-height: 1.8; color: #2c2c2c; margin-bottom: 24px;">
            "{escape(verse.text)}"
        </div>

        <div style="text-align: right; color: #666; font-style: italic; margin-bottom: 32px;">
            — {escape(verse.reference)} ({escape(verse.version)})
        </div>

        <hr style="border: none; border-top: 1px solid #e5e5e5; margin: 24px 0;">

        <div style="text-align: center; color: #999; font-size: 12px;">
            <p>You're receiving this because you subscribed to Bible Verse emails.</p>{footer_links}
        </div>
    </div>
</body>
</html>
"""


def _build_verse_text(verse: VersePayload, unsubscribe_url: Optional[str]) -> str:
    text = f"{verse.text}\n\n— {verse.reference} ({verse.version})\n"
    if unsubscribe_url:
        text += f"\nUnsubscribe: {unsubscribe_url}\n"
    return text


def send_verse_email(
    notifier: Notifier,
    to: str,
    verse: VersePayload,
    unsubscribe_url: Optional[str] = None,
) -> bool:
    """
    Send a verse as a formatted email.

    Args:
        notifier: Configured notifier
        to: Subscriber email address
        verse: Verse to deliver
        unsubscribe_url: Signed one-click unsubscribe link (optional)

    Returns:
        True if sent
    """
    headers = None
    if unsubscribe_url:
        headers = {
            "List-Unsubscribe": f"<{unsubscribe_url}>",
            "List-Unsubscribe-Post": "List-Unsubscribe=One-Click",
        }

    return notifier.send(
        to,
        _build_verse_text(verse, unsubscribe_url),
        subject=_build_verse_subject(verse),
        body_html=_build_verse_html(verse, unsubscribe_url),
        headers=headers,
    )


def send_verse_sms(notifier: Notifier, to: str, verse: VersePayload) -> bool:
    """Send a verse as plain text to an SMS gateway address."""
    return notifier.send(to, format_sms_message(verse))


def send_verification_email(notifier: Notifier, to: str, verify_url: str) -> bool:
    """
    Send the link that confirms a new subscription.

    Args:
        notifier: Configured notifier
        to: Address being verified
        verify_url: Link to the verify endpoint with email and code

    Returns:
        True if sent
    """
    html = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f9f7f4;">
    <div style="background: white; border-radius: 12px; padding: 32px; box-shadow: 0 2px 8px rgba(0,0,0,0.1);">
        <div style="text-align: center; margin-bottom: 24px;">
            <span style="font-size: 48px;">📖</span>
            <h1 style="color: #2c2c2c; margin: 16px 0 8px;">Verify Your Email</h1>
            <p style="color: #666;">Click the button below to start receiving Bible verses.</p>
        </div>

        <div style="text-align: center; margin: 32px 0;">
            <a href="{verify_url}" style="display: inline-block; background: #4f46e5; color: white; padding: 14px 28px; border-radius: 8px; text-decoration: none; font-weight: 600;">
                Verify Email Address
            </a>
        </div>

        <div style="text-align: center; color: #999; font-size: 14px;">
            <p>Or copy this link: {verify_url}</p>
            <p style="margin-top: 24px;">If you didn't sign up for this, you can ignore this email.</p>
        </div>
    </div>
</body>
</html>
"""
    text = f"Verify your Bible Verse subscription by clicking this link: {verify_url}"

    return notifier.send(
        to,
        text,
        subject="📖 Verify your Bible Verse subscription",
        body_html=html,
    )
