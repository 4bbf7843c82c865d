"""
Supabase-backed subscriber store.

Reads candidate subscribers for dispatch runs, appends delivery log entries,
and backs the subscribe / verify / unsubscribe flows.
"""

from typing import Any, Optional, cast

from pydantic import ValidationError

from models.delivery import DeliveryLogEntry
from models.subscriber import InvalidSubscriberRow, Subscriber
from models.types import FrequencyFilter

SUBSCRIBERS_TABLE = "subscribers"
DELIVERY_LOGS_TABLE = "delivery_logs"


class SubscriberStoreError(Exception):
    """Raised when the subscriber store cannot complete an operation."""


class SubscriberFetchError(SubscriberStoreError):
    """Raised when the candidate subscriber list cannot be loaded."""


class SupabaseSubscriberStore:
    """Subscriber persistence on top of a Supabase client."""

    def __init__(self, supabase: Any):
        self.supabase = supabase

    def list_candidates(
        self, frequency_filter: FrequencyFilter | str = FrequencyFilter.ALL
    ) -> list[Subscriber | InvalidSubscriberRow]:
        """
        Load active, verified subscribers.

        Each row is validated on its own: a row that does not fit the
        Subscriber model comes back as an InvalidSubscriberRow so the caller
        can fail that one delivery and carry on with the rest.

        Args:
            frequency_filter: 'all' or a single frequency to narrow the query

        Returns:
            List of subscribers and invalid rows (may be empty)

        Raises:
            SubscriberFetchError: If the query fails
        """
        frequency = FrequencyFilter(frequency_filter)

        try:
            query = (
                self.supabase.table(SUBSCRIBERS_TABLE)
                .select("*")
                .eq("is_active", True)
                .eq("is_verified", True)
            )
            if frequency != FrequencyFilter.ALL:
                query = query.eq("frequency", frequency.value)

            response = query.execute()
        except Exception as e:
            raise SubscriberFetchError(f"Failed to fetch subscribers: {e}") from e

        rows = cast(list[dict[str, Any]], response.data or [])
        return [_load_row(row) for row in rows]

    def append_log(self, entry: DeliveryLogEntry) -> None:
        """
        Append a delivery log entry.

        Raises:
            SubscriberStoreError: If the insert fails
        """
        try:
            self.supabase.table(DELIVERY_LOGS_TABLE).insert(entry.to_record()).execute()
        except Exception as e:
            raise SubscriberStoreError(f"Failed to write delivery log: {e}") from e

    def find_by_email(self, email: str) -> Optional[Subscriber]:
        """Look up a subscriber by (lower-cased) email."""
        return self._find_one(email=email.lower())

    def find_by_verification(self, email: str, code: str) -> Optional[Subscriber]:
        """Look up a subscriber by email and pending verification code."""
        return self._find_one(email=email.lower(), verification_code=code.upper())

    def find_by_id(self, subscriber_id: str) -> Optional[Subscriber]:
        return self._find_one(id=subscriber_id)

    def create(self, record: dict[str, Any]) -> Subscriber:
        """
        Insert a new subscriber row.

        Raises:
            SubscriberStoreError: If the insert fails
        """
        try:
            response = self.supabase.table(SUBSCRIBERS_TABLE).insert(record).execute()
        except Exception as e:
            raise SubscriberStoreError(f"Failed to create subscription: {e}") from e

        if not response.data:
            raise SubscriberStoreError("Failed to create subscription: no row returned")
        return Subscriber.model_validate(response.data[0])

    def update(self, subscriber_id: str, changes: dict[str, Any]) -> None:
        """
        Update fields on a subscriber row.

        Raises:
            SubscriberStoreError: If the update fails
        """
        try:
            self.supabase.table(SUBSCRIBERS_TABLE).update(changes).eq(
                "id", subscriber_id
            ).execute()
        except Exception as e:
            raise SubscriberStoreError(f"Failed to update subscriber: {e}") from e

    def mark_verified(self, subscriber_id: str) -> None:
        self.update(subscriber_id, {"is_verified": True, "verification_code": None})

    def deactivate(self, subscriber_id: str) -> None:
        self.update(subscriber_id, {"is_active": False})

    def _find_one(self, **filters: Any) -> Optional[Subscriber]:
        try:
            query = self.supabase.table(SUBSCRIBERS_TABLE).select("*")
            for column, value in filters.items():
                query = query.eq(column, value)
            response = query.limit(1).execute()
        except Exception as e:
            raise SubscriberStoreError(f"Failed to look up subscriber: {e}") from e

        if not response.data:
            return None
        return Subscriber.model_validate(response.data[0])


def _load_row(row: dict[str, Any]) -> Subscriber | InvalidSubscriberRow:
    try:
        return Subscriber.model_validate(row)
    except ValidationError as e:
        row_id = row.get("id")
        email = row.get("email")
        return InvalidSubscriberRow(
            id=str(row_id) if row_id is not None else None,
            email=str(email) if email is not None else None,
            error=f"Invalid subscriber row: {e.error_count()} validation error(s)",
        )
