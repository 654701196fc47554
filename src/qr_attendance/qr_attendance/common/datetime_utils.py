from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ConfigurationError, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    try:
        return datetime.strptime(value, "%H:%M").time()
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid time of day: {value!r} (expected HH:MM)") from None


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown timezone: {name!r}") from None


def utc_now() -> datetime:
    """Current aware UTC time.

    Note: Wrapped so tests can inject a fixed clock instead.
    """
    return datetime.now(timezone.utc)


def to_org_time(instant: datetime, tz: ZoneInfo) -> datetime:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz)


def end_of_day(day: date, tz: ZoneInfo) -> datetime:
    """23:59:59 of `day` in the given timezone."""
    return datetime.combine(day, time(23, 59, 59), tzinfo=tz)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not date.min.year <= year <= date.max.year:
        raise ValidationError(f"Invalid year: {year}")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    start = date(year, month, 1)
    if month == 12:
        return start, date(year, 12, 31)
    next_start = date(year, month + 1, 1)
    return start, date.fromordinal(next_start.toordinal() - 1)
