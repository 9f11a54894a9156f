"""Time utilities for timezone-aware UTC datetimes and display formatting."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from backend.app.core.settings import get_settings

DISPLAY_DATETIME_FORMAT = "%m/%d/%Y %I:%M"


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(value, str):
        # fromisoformat accepts a trailing "Z" only from 3.11 onwards
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def format_display_datetime(value: datetime | str | None, tz_name: str | None = None) -> str | None:
    """Render a stored timestamp as ``MM/DD/YYYY hh:mm AM``.

    The meridiem is computed rather than taken from ``%p`` so the output does
    not depend on the process locale.
    """
    if value is None:
        return None
    zone = ZoneInfo(tz_name or get_settings().display_timezone)
    local = parse_timestamp(value).astimezone(zone)
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.strftime(DISPLAY_DATETIME_FORMAT)} {meridiem}"


def hours_between(start: datetime | None, end: datetime | None) -> float:
    if start is None or end is None:
        return 0.0
    seconds = (parse_timestamp(end) - parse_timestamp(start)).total_seconds()
    return round(max(seconds, 0) / 3600.0, 2)
