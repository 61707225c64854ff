"""Template filters for the dashboard"""

from datetime import datetime, timezone


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as e.g. "Oct 19, 2026, 3:04 PM" (UTC).

    Naive datetimes (SQLite drops the offset) are taken to be UTC.

    Example:
        >>> format_timestamp(datetime(2026, 10, 9, 15, 4, tzinfo=timezone.utc))
        'Oct 9, 2026, 3:04 PM'
        >>> format_timestamp(datetime(2026, 1, 1, 0, 30))
        'Jan 1, 2026, 12:30 AM'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)

    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value:%b} {value.day}, {value.year}, {hour}:{value:%M} {meridiem}"
