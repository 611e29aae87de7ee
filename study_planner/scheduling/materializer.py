"""Expand study event definitions into dated occurrences.

Occurrences are never stored. Each query loads the owner's definitions,
places one-off events on their fixed date, walks every day of the range for
recurring events, and then annotates the result with completion records
fetched in a single batch.
"""
import logging
from dataclasses import dataclass
from datetime import date

from sqlmodel import Session, col, select

from study_planner.core.clock import Clock
from study_planner.models import CompletionRecord, StudyEvent
from study_planner.scheduling.ranges import DateRange, day_range, month_range
from study_planner.scheduling.recurrence import fires

logger = logging.getLogger(__name__)


@dataclass
class Occurrence:
    """A study event on one concrete day."""
    event: StudyEvent
    occurrence_date: date
    completed: bool = False

    @property
    def key(self) -> tuple:
        return (self.event.id, self.occurrence_date)


def _sort_key(occurrence: Occurrence) -> tuple:
    # Same-day ties: by title, then by id.
    return (
        occurrence.occurrence_date,
        occurrence.event.title.casefold(),
        str(occurrence.event.id),
    )


def _load_one_off_events(
    session: Session, owner_id: int, date_range: DateRange
) -> list[StudyEvent]:
    statement = (
        select(StudyEvent)
        .where(StudyEvent.owner_id == owner_id)
        .where(StudyEvent.is_recurring == False)  # noqa: E712
        .where(StudyEvent.fixed_date >= date_range.start)
        .where(StudyEvent.fixed_date <= date_range.end)
    )
    return list(session.exec(statement).all())


def _load_recurring_events(session: Session, owner_id: int) -> list[StudyEvent]:
    statement = (
        select(StudyEvent)
        .where(StudyEvent.owner_id == owner_id)
        .where(StudyEvent.is_recurring == True)  # noqa: E712
    )
    return list(session.exec(statement).all())


def _load_completions(
    session: Session, event_ids: set, date_range: DateRange
) -> dict[tuple, bool]:
    """Map (event_id, day) to completed for every record in the range."""
    if not event_ids:
        return {}

    statement = (
        select(CompletionRecord)
        .where(col(CompletionRecord.event_id).in_(event_ids))
        .where(CompletionRecord.date >= date_range.start)
        .where(CompletionRecord.date <= date_range.end)
    )
    return {
        (record.event_id, record.date): record.completed
        for record in session.exec(statement).all()
    }


def expand(events, date_range: DateRange) -> list[Occurrence]:
    """Build unannotated occurrences for ``events`` inside ``date_range``."""
    occurrences = []
    for event in events:
        if not event.is_recurring:
            if event.fixed_date is not None and event.fixed_date in date_range:
                occurrences.append(Occurrence(event, event.fixed_date))
            continue
        for day in date_range.days():
            if fires(event, day):
                occurrences.append(Occurrence(event, day))
    return occurrences


def materialize(
    session: Session, owner_id: int, date_range: DateRange
) -> list[Occurrence]:
    """
    Return every occurrence of the owner's study events inside the range.

    Each occurrence carries its completion state; a day with no completion
    record is not completed. The result is sorted by occurrence date, with
    same-day occurrences ordered by title and then definition id.
    This function only reads.
    """
    one_off = _load_one_off_events(session, owner_id, date_range)
    recurring = _load_recurring_events(session, owner_id)

    occurrences = expand(one_off + recurring, date_range)

    event_ids = {occurrence.event.id for occurrence in occurrences}
    completed = _load_completions(session, event_ids, date_range)
    for occurrence in occurrences:
        occurrence.completed = completed.get(occurrence.key, False)

    occurrences.sort(key=_sort_key)

    logger.debug(
        f"Materialized {len(occurrences)} occurrences for owner {owner_id} "
        f"between {date_range.start} and {date_range.end}"
    )
    return occurrences


def list_for_month(session: Session, owner_id: int, month: str) -> list[Occurrence]:
    """Occurrences for the whole calendar month given as ``YYYY-MM``."""
    return materialize(session, owner_id, month_range(month))


def list_for_today(session: Session, owner_id: int, clock: Clock) -> list[Occurrence]:
    """Occurrences falling on the clock's current day."""
    return materialize(session, owner_id, day_range(clock.today()))
