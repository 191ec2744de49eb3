"""Quota week arithmetic.

A quota week runs from Friday 00:00 (server local time) to the following
Friday 00:00, exclusive. Track submissions are limited per quota week.
"""

from datetime import date, datetime, time, timedelta

FRIDAY = 4  # datetime.weekday(): Monday=0 .. Sunday=6
WEEK = timedelta(days=7)


def days_since_friday(moment: datetime) -> int:
    """Days elapsed since the most recent Friday.

    Friday gives 0, Saturday 1, Sunday 2 and so on up to Thursday 6.
    """
    return (moment.weekday() - FRIDAY) % 7


def get_week_start(now: datetime | None = None) -> datetime:
    """Get the Friday 00:00 on or before ``now``.

    Args:
        now: Reference moment (defaults to the current local time)

    Returns:
        Start of the quota week, with the same tzinfo as ``now``
    """
    now = now or local_now()
    start = now - timedelta(days=days_since_friday(now))
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def get_week_end(now: datetime | None = None) -> datetime:
    """Get the Friday 00:00 that closes the quota week containing ``now``."""
    return get_week_start(now) + WEEK


def local_now() -> datetime:
    """Current server-local time as an aware datetime."""
    return datetime.now().astimezone()


def as_local(moment: datetime) -> datetime:
    """Attach server-local tzinfo to naive datetimes; aware ones convert to local."""
    return moment.astimezone()


def slot_start(day: date, hhmm: str) -> datetime:
    """Server-local start of a broadcast slot given as a date and "HH:MM".

    The UTC offset is the one in force on ``day``, not today's.
    """
    hour, minute = (int(part) for part in hhmm.split(":"))
    return datetime.combine(day, time(hour, minute)).astimezone()


__all__ = [
    "WEEK",
    "as_local",
    "days_since_friday",
    "get_week_end",
    "get_week_start",
    "local_now",
    "slot_start",
]
