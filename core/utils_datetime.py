"""
DateTime utilities for booking dates and times.
Booking dates and times arrive as local wall-clock strings for the venue and
are localized with pytz before any arithmetic.
"""
from datetime import date, datetime, time
import re
from typing import Optional, Union

import pytz


DEFAULT_TIMEZONE = pytz.timezone('Europe/London')

TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})(?::(\d{2}))?$')

TzInfo = Union[pytz.BaseTzInfo, str]


def get_timezone(tz: Optional[TzInfo] = None) -> pytz.BaseTzInfo:
    """Resolve a timezone name (or pass through a tz object)."""
    if tz is None:
        return DEFAULT_TIMEZONE
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def get_current_datetime(tz: Optional[TzInfo] = None) -> datetime:
    """Get the current aware datetime in the given timezone."""
    return datetime.now(get_timezone(tz))


def parse_booking_date(text: str) -> Optional[date]:
    """
    Parse a booking date.

    Accepts ISO dates (``2026-10-20``) as sent by date inputs, and full ISO
    datetimes, of which only the date part is kept.

    Returns:
        date object or None if parsing fails
    """
    if not text or not isinstance(text, str):
        return None

    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        return None


def parse_booking_time(text: str) -> Optional[time]:
    """
    Parse a booking time in 24-hour ``HH:MM`` or ``HH:MM:SS`` format.

    Returns:
        time object or None if parsing fails
    """
    if not text or not isinstance(text, str):
        return None

    match = TIME_PATTERN.match(text.strip())
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    second = int(match.group(3)) if match.group(3) else 0
    try:
        return time(hour, minute, second)
    except ValueError:
        return None


def combine_booking_datetime(
    booking_date: date,
    booking_time: time,
    tz: Optional[TzInfo] = None
) -> datetime:
    """Combine a local date and time into an aware datetime for the venue."""
    naive_dt = datetime.combine(booking_date, booking_time)
    return get_timezone(tz).localize(naive_dt)


def hours_between(start: datetime, end: datetime) -> float:
    """Real-valued number of hours from start to end (negative if end is earlier)."""
    return (end - start).total_seconds() / 3600
