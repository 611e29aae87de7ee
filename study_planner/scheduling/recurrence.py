"""Decide whether a recurring study event fires on a given day."""

from datetime import date

from study_planner.models.recurrence import RecurrenceType


def sunday_weekday(day: date) -> int:
    """Weekday of ``day`` with 0 = Sunday through 6 = Saturday."""
    return (day.weekday() + 1) % 7


def fires(event, day: date) -> bool:
    """Return True if the recurring ``event`` has an occurrence on ``day``.

    One-off events never fire here; the materializer places them on their
    fixed date directly. Weekly and custom rules share the same matching.
    Unknown rule types never fire.
    """
    if not event.is_recurring:
        return False

    recurrence_type = event.recurrence_type
    if recurrence_type == RecurrenceType.DAILY.value:
        return True
    if recurrence_type in (RecurrenceType.WEEKLY.value, RecurrenceType.CUSTOM.value):
        return sunday_weekday(day) in (event.days_of_week or ())
    return False
