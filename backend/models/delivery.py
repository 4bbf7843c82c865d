"""Pydantic models for verse delivery."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from models.types import (
    DeliveryMethod,
    DeliveryStatus,
    SubscriberID,
    VerseReference,
    VersionCode,
)


class VersePayload(BaseModel):
    """A verse fetched from the content provider, ready to deliver."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    reference: VerseReference
    text: str
    version: VersionCode


class DeliveryLogEntry(BaseModel):
    """One delivery attempt, appended to the delivery_logs table."""

    subscriber_id: SubscriberID
    verse_reference: VerseReference
    verse_text: str
    delivery_method: DeliveryMethod
    status: DeliveryStatus
    error_message: str | None = None
    sent_at: datetime

    def to_record(self) -> dict:
        return self.model_dump(mode="json")


class RunSummary(BaseModel):
    """Counters for a single dispatch run."""

    processed: int = Field(0, ge=0)
    sent: int = Field(0, ge=0)
    failed: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    timestamp: datetime
