"""Calendar-day helpers shared by the screens and the repository."""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from vocab_review.utils.exceptions import ConfigurationError

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def resolve_timezone(name: str) -> ZoneInfo:
    """Return the zone for ``name`` or raise a configuration error."""

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone {name!r}") from exc


def parse_day(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` value, returning ``None`` when absent or malformed."""

    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def start_of_day(day: date, tz: ZoneInfo) -> datetime:
    """First instant of ``day`` in ``tz``, expressed in UTC."""

    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def end_of_day(day: date, tz: ZoneInfo) -> datetime:
    """Last representable instant of ``day`` in ``tz``, expressed in UTC."""

    return datetime.combine(day, time.max, tzinfo=tz).astimezone(timezone.utc)


def day_bounds(day: date | None, tz: ZoneInfo) -> tuple[datetime | None, datetime | None]:
    """Expand an optional calendar day into an inclusive UTC range."""

    if day is None:
        return None, None
    return start_of_day(day, tz), end_of_day(day, tz)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive timestamps coming back from the store as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def creation_day(value: datetime) -> date:
    """UTC calendar day of a creation timestamp, used for list grouping."""

    return ensure_aware(value).astimezone(timezone.utc).date()


def format_display_date(value: datetime | date) -> str:
    """Render a date as ``Jan 05, 2024``; timestamps use their UTC day."""

    if isinstance(value, datetime):
        value = ensure_aware(value).astimezone(timezone.utc).date()
    return f"{_MONTHS[value.month - 1]} {value.day:02d}, {value.year}"
