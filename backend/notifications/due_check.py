"""
Due check for scheduled verse delivery.

Decides whether a subscriber should receive a verse at a given instant. The
dispatcher runs at the top of every hour, so schedules are compared at hour
granularity: the minute part of delivery_time is ignored.

All functions here are pure.
"""

from datetime import datetime, timezone

from config.timezones import offset_hours
from models.subscriber import DeliverySchedule
from models.types import Frequency


def parse_delivery_hour(delivery_time: str) -> int:
    """
    Extract the hour from an HH:MM delivery time.

    Raises:
        ValueError: If the hour part is not an integer
    """
    return int(delivery_time.split(":")[0])


def utc_hour_and_day(now: datetime) -> tuple[int, int]:
    """
    Decompose an instant into (hour, weekday) in UTC.

    Naive datetimes are taken to already be in UTC. Weekday uses Sunday = 0.
    """
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.hour, now.isoweekday() % 7


def local_hour(current_hour_utc: int, offset: int) -> int:
    return (current_hour_utc + offset) % 24


def local_day(current_day_utc: int, current_hour_utc: int, offset: int) -> int:
    """Weekday in the subscriber's zone, rolling over when the offset crosses midnight."""
    return (current_day_utc + (current_hour_utc + offset) // 24 + 7) % 7


def is_due_at(
    current_hour_utc: int,
    current_day_utc: int,
    frequency: str,
    delivery_time: str,
    delivery_day: int | None,
    timezone_name: str | None,
) -> bool:
    """
    Check whether a schedule is due at the given UTC hour and weekday.

    Args:
        current_hour_utc: Hour of the run in UTC (0-23)
        current_day_utc: Weekday of the run in UTC (0-6, Sunday = 0)
        frequency: hourly, daily or weekly; anything else is never due
        delivery_time: Preferred local time in HH:MM format
        delivery_day: Preferred local weekday for weekly schedules (defaults to Sunday)
        timezone_name: Subscriber timezone, resolved through the offset table

    Returns:
        True if a verse should be delivered now
    """
    if frequency == Frequency.HOURLY.value:
        return True

    delivery_hour = parse_delivery_hour(delivery_time)
    offset = offset_hours(timezone_name)
    subscriber_hour = local_hour(current_hour_utc, offset)

    if frequency == Frequency.DAILY.value:
        return subscriber_hour == delivery_hour

    if frequency == Frequency.WEEKLY.value:
        subscriber_day = local_day(current_day_utc, current_hour_utc, offset)
        target_day = delivery_day if delivery_day is not None else 0
        return subscriber_hour == delivery_hour and subscriber_day == target_day

    return False


def is_due(schedule: DeliverySchedule, now: datetime) -> bool:
    """Check whether a normalized schedule is due at the instant `now`."""
    current_hour_utc, current_day_utc = utc_hour_and_day(now)
    return is_due_at(
        current_hour_utc,
        current_day_utc,
        schedule.frequency,
        schedule.delivery_time,
        schedule.delivery_day,
        schedule.timezone,
    )
