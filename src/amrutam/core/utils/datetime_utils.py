"""
Date and time utility functions for the doctor portal.

All persisted timestamps are naive datetimes in UTC.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple


def utc_now() -> datetime:
    """Get current UTC timestamp (naive)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    """Midnight of the given date."""
    return datetime.combine(day, time.min)


def day_range(day: date) -> Tuple[datetime, datetime]:
    """Half-open [start, end) range covering one calendar day."""
    start = start_of_day(day)
    return start, start + timedelta(days=1)


def parse_hhmm(value: str) -> time:
    """Parse an 'HH:MM' 24-hour clock string."""
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def combine_date_time(day: date, hhmm: str) -> datetime:
    """Combine a calendar date with an 'HH:MM' clock string."""
    return datetime.combine(day, parse_hhmm(hhmm))


def day_name(day: date) -> str:
    """English weekday name, e.g. 'Monday'."""
    return calendar.day_name[day.weekday()]


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def shift_months(value: datetime, months: int) -> datetime:
    """Move a datetime by whole months, clamping the day to the month length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def period_start(period: str, end: datetime) -> datetime:
    """Start of a reporting period ('week', 'month' or 'year') ending at ``end``.

    Unknown periods yield ``end`` itself.
    """
    if period == "week":
        return end - timedelta(days=7)
    if period == "month":
        return shift_months(end, -1)
    if period == "year":
        return shift_months(end, -12)
    return end
