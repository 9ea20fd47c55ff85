"""Date manipulation utilities"""

import calendar
from datetime import datetime, timedelta, timezone


def add_days(from_dt: datetime, days: int) -> datetime:
    """Shift a timestamp by whole days."""
    return from_dt + timedelta(days=days)


def add_months(from_dt: datetime, months: int) -> datetime:
    """Shift a timestamp by calendar months, clamping to the last day of the month"""
    month_index = from_dt.month - 1 + months
    year = from_dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_dt.day, calendar.monthrange(year, month)[1])
    return from_dt.replace(year=year, month=month, day=day)


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC timestamp"""
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps; aware ones are converted to UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
