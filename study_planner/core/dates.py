"""Calendar-day normalization shared by request schemas and services."""

from datetime import datetime


def to_calendar_day(value):
    """Truncate a datetime (or ISO datetime string) to its local calendar day.

    Accepts both ``2024-03-15T21:00:00`` and ``2024-03-15 21:00:00``. Dates,
    date-only strings and unparseable strings pass through unchanged so the
    caller's own validation reports them. Aware datetimes are converted to
    local time first.
    """
    if isinstance(value, str) and len(value) > 10:
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value
