"""Date <-> string conversion for persisted timestamps."""

from datetime import datetime, timezone

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def format_date(dt: datetime) -> str:
    """Render a datetime as a UTC string in DATE_FORMAT.

    Naive datetimes are treated as UTC.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(DATE_FORMAT)


def parse_date(value: str) -> datetime:
    """Parse a DATE_FORMAT string back into an aware UTC datetime."""
    return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Current UTC time truncated to what DATE_FORMAT can store."""
    return datetime.now(timezone.utc).replace(microsecond=0)
