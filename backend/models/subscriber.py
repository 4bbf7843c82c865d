"""Pydantic models for subscriber data."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from config.bible_versions import LANGUAGES
from config.sms_gateways import PHONE_DIGITS, SMS_GATEWAYS
from config.timezones import DEFAULT_TIMEZONE, TIMEZONE_OFFSETS
from models.types import (
    DeliveryMethod,
    Frequency,
    SubscriberID,
    TimeOfDay,
    VersionCode,
    WeekDay,
)

TIME_OF_DAY_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


class DeliverySchedule(BaseModel):
    """Normalized schedule preferences consumed by the due check.

    delivery_day is only set for weekly schedules.
    """

    model_config = ConfigDict(frozen=True)

    frequency: str
    delivery_time: TimeOfDay
    delivery_day: WeekDay | None = None
    timezone: str | None = DEFAULT_TIMEZONE


class Subscriber(BaseModel):
    """Subscriber record as stored in the subscribers table.

    Frequency and delivery method are kept as plain strings so that a row
    holding an unexpected value still loads; the due check treats unknown
    frequencies as never due and a missing or unknown timezone as UTC.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: SubscriberID
    email: str
    phone: str | None = None
    carrier: str | None = None
    delivery_method: str = DeliveryMethod.EMAIL.value
    language: str = "en"
    version: VersionCode = "ESV"
    frequency: str = Frequency.DAILY.value
    delivery_time: TimeOfDay = "08:00"
    delivery_day: WeekDay | None = Field(None, ge=0, le=6)
    timezone: str | None = DEFAULT_TIMEZONE
    is_active: bool = True
    is_verified: bool = False
    verification_code: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def schedule(self) -> DeliverySchedule:
        """Schedule with defaults applied: weekly without a day means Sunday."""
        delivery_day = None
        if self.frequency == Frequency.WEEKLY.value:
            delivery_day = self.delivery_day if self.delivery_day is not None else 0

        return DeliverySchedule(
            frequency=self.frequency,
            delivery_time=self.delivery_time,
            delivery_day=delivery_day,
            timezone=self.timezone,
        )

    @property
    def contact(self) -> str:
        """Human-readable contact identity for operator messages."""
        if self.delivery_method == DeliveryMethod.SMS.value and self.phone:
            return f"{self.phone} ({self.carrier or 'no carrier'})"
        return self.email


class InvalidSubscriberRow(BaseModel):
    """A subscribers row that could not be loaded as a Subscriber.

    Returned alongside valid candidates so a dispatch run can count it as a
    failed delivery instead of aborting.
    """

    id: str | None = None
    email: str | None = None
    error: str

    @property
    def contact(self) -> str:
        return self.email or self.id or "unknown subscriber"


class SubscriptionRequest(BaseModel):
    """Signup payload submitted by the subscription form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    delivery_method: DeliveryMethod = DeliveryMethod.EMAIL
    phone: str | None = None
    carrier: str | None = None
    language: str
    version: VersionCode
    frequency: Frequency
    delivery_time: TimeOfDay = "08:00"
    delivery_day: WeekDay | None = Field(None, ge=0, le=6)
    timezone: str = DEFAULT_TIMEZONE

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("delivery_time")
    @classmethod
    def check_time_format(cls, value: str) -> str:
        if not TIME_OF_DAY_PATTERN.match(value):
            raise ValueError("delivery_time must be in HH:MM format")
        return value

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        if value not in TIMEZONE_OFFSETS:
            raise ValueError(f"Unsupported timezone: {value}")
        return value

    @model_validator(mode="after")
    def check_preferences(self) -> "SubscriptionRequest":
        language = LANGUAGES.get(self.language)
        if language is None:
            raise ValueError("Invalid language")
        if self.version not in language["versions"]:
            raise ValueError("Invalid version for selected language")

        if self.delivery_method == DeliveryMethod.SMS:
            if not self.phone or not self.carrier:
                raise ValueError("Phone and carrier are required for SMS delivery")
            if self.carrier not in SMS_GATEWAYS:
                raise ValueError(f"Unsupported carrier: {self.carrier}")
            if len(re.sub(r"\D", "", self.phone)) != PHONE_DIGITS:
                raise ValueError("Phone must be a 10-digit US number")
        else:
            self.phone = None
            self.carrier = None

        if self.frequency == Frequency.WEEKLY:
            if self.delivery_day is None:
                self.delivery_day = 0
        else:
            self.delivery_day = None

        return self

    def to_record(self, verification_code: str) -> dict:
        """Build the subscribers row for a new, unverified subscription."""
        return {
            **self.preferences(),
            "email": self.email,
            "verification_code": verification_code,
            "is_active": True,
            "is_verified": False,
        }

    def preferences(self) -> dict:
        """Delivery and content preferences, as stored on the subscriber row."""
        return {
            "delivery_method": self.delivery_method.value,
            "phone": self.phone,
            "carrier": self.carrier,
            "language": self.language,
            "version": self.version,
            "frequency": self.frequency.value,
            "delivery_time": self.delivery_time,
            "delivery_day": self.delivery_day,
            "timezone": self.timezone,
        }
