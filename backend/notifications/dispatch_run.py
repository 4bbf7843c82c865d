"""
Scheduled verse dispatch.

Loads active, verified subscribers, checks which of them are due at the
current instant, and delivers a random verse to each one by email or SMS
gateway. Every subscriber is processed in isolation: a failure is counted,
reported and logged, and the run moves on to the next subscriber.

Usage:
    # Dispatch to every due subscriber (run at the top of each hour)
    uv run python -m notifications.dispatch_run --frequency all

    # Only daily subscribers
    uv run python -m notifications.dispatch_run --frequency daily

    # Dry run (no verses sent, nothing logged)
    uv run python -m notifications.dispatch_run --dry-run
"""

import argparse
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from functools import partial
from typing import Any, Callable, Optional, Protocol

from content.bible_client import BibleClient
from models.delivery import DeliveryLogEntry, RunSummary, VersePayload
from models.subscriber import InvalidSubscriberRow, Subscriber
from models.types import DeliveryMethod, DeliveryStatus, FrequencyFilter
from notifications.due_check import is_due
from notifications.email_sender import (
    Notifier,
    ResendNotifier,
    send_verse_email,
    send_verse_sms,
)
from notifications.error_logger import log_dispatch_error
from notifications.sms_gateway import get_sms_gateway_email
from notifications.subscriber_store import (
    SubscriberFetchError,
    SubscriberStoreError,
    SupabaseSubscriberStore,
)
from notifications.unsubscribe_tokens import build_unsubscribe_url
from shared.db import get_supabase_client
from shared.settings import Settings, load_settings
from shared.utils import print_run_summary


class ContentProvider(Protocol):
    def fetch_random_verse(self, version: str) -> Optional[VersePayload]: ...


class SubscriberStore(Protocol):
    def list_candidates(
        self, frequency_filter: FrequencyFilter
    ) -> list[Subscriber | InvalidSubscriberRow]: ...

    def append_log(self, entry: DeliveryLogEntry) -> None: ...


ErrorLogger = Callable[..., str]


class Outcome(Enum):
    SKIPPED = "skipped"
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class Destination:
    """Where and how a verse is delivered."""

    method: DeliveryMethod
    address: str


def resolve_destination(subscriber: Subscriber) -> Optional[Destination]:
    """
    Pick the delivery address for a subscriber.

    SMS subscribers need a known carrier and a 10-digit phone; without them
    there is no destination and the delivery fails rather than falling back
    to email. Every other subscriber gets email.
    """
    if subscriber.delivery_method == DeliveryMethod.SMS.value:
        address = get_sms_gateway_email(subscriber.phone, subscriber.carrier)
        if address is None:
            return None
        return Destination(DeliveryMethod.SMS, address)

    return Destination(DeliveryMethod.EMAIL, subscriber.email)


class DispatchRun:
    """Runs one pass of scheduled verse delivery."""

    def __init__(
        self,
        store: SubscriberStore,
        content_provider: ContentProvider,
        notifier: Optional[Notifier],
        app_base_url: str = "",
        unsubscribe_secret_key: Optional[str] = None,
        error_logger: ErrorLogger = log_dispatch_error,
        send_interval_seconds: float = 0.0,
        dry_run: bool = False,
    ):
        if notifier is None and not dry_run:
            raise ValueError("A notifier is required unless dry_run is set")

        self.store = store
        self.content_provider = content_provider
        self.notifier = notifier
        self.app_base_url = app_base_url
        self.unsubscribe_secret_key = unsubscribe_secret_key
        self.error_logger = error_logger
        self.send_interval_seconds = send_interval_seconds
        self.dry_run = dry_run

    def run(
        self,
        frequency_filter: FrequencyFilter | str = FrequencyFilter.ALL,
        now: Optional[datetime] = None,
    ) -> RunSummary:
        """
        Deliver verses to every due subscriber.

        Args:
            frequency_filter: 'all' or a single frequency to load
            now: Instant of the run (defaults to the current UTC time)

        Returns:
            RunSummary; processed is the number of candidates loaded,
            whether or not they were due

        Raises:
            SubscriberFetchError: If the subscriber list cannot be loaded
        """
        now = now or datetime.now(timezone.utc)
        frequency = FrequencyFilter(frequency_filter)

        print(f"Processing {frequency.value} dispatch for {now.isoformat()}")

        subscribers = self.store.list_candidates(frequency)
        summary = RunSummary(processed=len(subscribers), timestamp=now)

        if not subscribers:
            print("No subscribers to process.")
            return summary

        print(f"Found {len(subscribers)} candidate subscribers")

        for subscriber in subscribers:
            if isinstance(subscriber, InvalidSubscriberRow):
                self._report("validation", subscriber.error, subscriber)
                summary.failed += 1
                continue

            try:
                outcome = self._process_subscriber(subscriber, now)
            except Exception as e:
                self._report("unexpected", f"Error processing subscriber: {e}", subscriber)
                outcome = Outcome.FAILED

            if outcome == Outcome.SENT:
                summary.sent += 1
            elif outcome == Outcome.FAILED:
                summary.failed += 1
            else:
                summary.skipped += 1

        return summary

    def _process_subscriber(self, subscriber: Subscriber, now: datetime) -> Outcome:
        if not is_due(subscriber.schedule, now):
            return Outcome.SKIPPED

        verse = self.content_provider.fetch_random_verse(subscriber.version)
        if verse is None:
            self._report("content", f"Failed to get verse ({subscriber.version})", subscriber)
            return Outcome.FAILED

        destination = resolve_destination(subscriber)
        if destination is None:
            self._report(
                "destination",
                f"Invalid SMS gateway (carrier: {subscriber.carrier})",
                subscriber,
            )
            return Outcome.FAILED

        if self.dry_run:
            print(
                f"  [DRY RUN] Would send {verse.reference} ({verse.version}) "
                f"via {destination.method.value} to {destination.address}"
            )
            return Outcome.SENT

        success = self._send(subscriber, destination, verse)
        self._append_log(subscriber, destination.method, verse, success)

        if success:
            print(f"  ✓ Sent {verse.reference} to {subscriber.contact} via {destination.method.value}")
        else:
            self._report("sending", f"{destination.method.value} send failed", subscriber)

        # Rate limiting for the mail provider
        if self.send_interval_seconds:
            time.sleep(self.send_interval_seconds)

        return Outcome.SENT if success else Outcome.FAILED

    def _send(
        self, subscriber: Subscriber, destination: Destination, verse: VersePayload
    ) -> bool:
        if self.notifier is None:
            raise RuntimeError("No notifier configured for a live dispatch run")

        if destination.method == DeliveryMethod.SMS:
            return send_verse_sms(self.notifier, destination.address, verse)

        unsubscribe_url = build_unsubscribe_url(
            self.app_base_url, subscriber.id, self.unsubscribe_secret_key
        )
        return send_verse_email(
            self.notifier, destination.address, verse, unsubscribe_url=unsubscribe_url
        )

    def _append_log(
        self,
        subscriber: Subscriber,
        method: DeliveryMethod,
        verse: VersePayload,
        success: bool,
    ) -> None:
        """Record the attempt; a failed write is reported but never changes the counts."""
        entry = DeliveryLogEntry(
            subscriber_id=subscriber.id,
            verse_reference=verse.reference,
            verse_text=verse.text,
            delivery_method=method,
            status=DeliveryStatus.SENT if success else DeliveryStatus.FAILED,
            error_message=None if success else f"{method.value} send failed",
            sent_at=datetime.now(timezone.utc),
        )
        try:
            self.store.append_log(entry)
        except SubscriberStoreError as e:
            self._report("logging", str(e), subscriber)
        except Exception as e:
            self._report("logging", f"Failed to write delivery log: {e}", subscriber)

    def _report(
        self,
        error_type: str,
        message: str,
        subscriber: Subscriber | InvalidSubscriberRow,
    ) -> None:
        print(f"  ✗ {message} for {subscriber.contact}")
        context: dict[str, Any] = {
            "subscriber_id": subscriber.id,
            "contact": subscriber.contact,
        }
        if isinstance(subscriber, Subscriber):
            context["delivery_method"] = subscriber.delivery_method
            context["version"] = subscriber.version
        try:
            error_file = self.error_logger(
                error_type=error_type, error_message=message, context=context
            )
            print(f"    Error details logged to: {error_file}")
        except OSError as e:
            print(f"    ⚠️  Could not write error report: {e}")


def build_dispatch_run(settings: Settings, dry_run: bool = False) -> DispatchRun:
    """Wire a DispatchRun to Supabase, bible-api.com and Resend."""
    store = SupabaseSubscriberStore(get_supabase_client(settings))
    content_provider = BibleClient(
        base_url=settings.bible_api_base_url,
        timeout=settings.http_timeout_seconds,
        max_retries=settings.content_max_retries,
    )
    notifier = None
    if not dry_run:
        notifier = ResendNotifier(
            settings.resend_api_key,
            settings.from_email,
            timeout=settings.http_timeout_seconds,
        )

    return DispatchRun(
        store,
        content_provider,
        notifier,
        app_base_url=settings.app_base_url,
        unsubscribe_secret_key=settings.unsubscribe_secret_key,
        error_logger=partial(log_dispatch_error, log_dir=settings.error_log_dir),
        send_interval_seconds=settings.send_interval_seconds,
        dry_run=dry_run,
    )


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Send scheduled Bible verses")

    parser.add_argument(
        "--frequency",
        choices=[f.value for f in FrequencyFilter],
        default=FrequencyFilter.ALL.value,
        help="Subscribers to load (default: all; each one is still checked for due-ness)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't actually send verses or write delivery logs)",
    )

    args = parser.parse_args()

    settings = load_settings()
    dispatch = build_dispatch_run(settings, dry_run=args.dry_run)

    try:
        summary = dispatch.run(args.frequency)
    except SubscriberFetchError as e:
        print(f"✗ {e}")
        sys.exit(1)

    print_run_summary(summary, args.frequency)


if __name__ == "__main__":
    main()
