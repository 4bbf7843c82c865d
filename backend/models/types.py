"""Shared type definitions for type checking.

Uses NewType for IDs so a subscriber ID cannot be passed where another kind of
identifier is expected.

Uses TypeAlias for plain structural types that document their format.
"""

from enum import Enum
from typing import NewType, TypeAlias

SubscriberID = NewType("SubscriberID", str)

VerseReference: TypeAlias = str  # BOOK.CHAPTER.VERSES, e.g. PSA.119.105
TimeOfDay: TypeAlias = str  # HH:MM, 24-hour clock
WeekDay: TypeAlias = int  # 0-6, Sunday = 0
VersionCode: TypeAlias = str  # key of config.bible_versions.BIBLE_VERSIONS


class Frequency(str, Enum):
    """How often a subscriber receives a verse."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


class FrequencyFilter(str, Enum):
    """Subset of subscribers a dispatch run loads."""

    ALL = "all"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


class DeliveryMethod(str, Enum):
    """Channel a verse is delivered through."""

    EMAIL = "email"
    SMS = "sms"


class DeliveryStatus(str, Enum):
    """Outcome recorded in the delivery log."""

    SENT = "sent"
    FAILED = "failed"
