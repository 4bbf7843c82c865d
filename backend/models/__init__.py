"""Pydantic models for data validation and type checking."""

from models.delivery import DeliveryLogEntry, RunSummary, VersePayload
from models.subscriber import (
    DeliverySchedule,
    InvalidSubscriberRow,
    Subscriber,
    SubscriptionRequest,
)
from models.types import (
    DeliveryMethod,
    DeliveryStatus,
    Frequency,
    FrequencyFilter,
)

__all__ = [
    "DeliveryLogEntry",
    "DeliveryMethod",
    "DeliverySchedule",
    "DeliveryStatus",
    "Frequency",
    "FrequencyFilter",
    "InvalidSubscriberRow",
    "RunSummary",
    "Subscriber",
    "SubscriptionRequest",
    "VersePayload",
]
