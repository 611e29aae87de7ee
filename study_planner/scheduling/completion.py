"""Record that a study event was done on a given day.

There is at most one CompletionRecord per (event, day). Marking a day
complete again updates the existing row instead of adding another. The
unique constraint on the table catches concurrent first writes; the loser
re-reads the winner's row and updates it.
"""
import logging
from datetime import UTC, date, datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from study_planner.core.clock import Clock, system_clock
from study_planner.core.dates import to_calendar_day
from study_planner.models import CompletionRecord
from study_planner.scheduling.definitions import get_event
from study_planner.scheduling.ranges import DateRange

logger = logging.getLogger(__name__)


def _find_record(session: Session, event_id: UUID, day: date) -> CompletionRecord | None:
    statement = (
        select(CompletionRecord)
        .where(CompletionRecord.event_id == event_id)
        .where(CompletionRecord.date == day)
    )
    return session.exec(statement).first()


def _set_completed(session: Session, record: CompletionRecord) -> CompletionRecord:
    if not record.completed:
        record.completed = True
        record.updated_at = datetime.now(UTC)
        session.add(record)
        session.commit()
        session.refresh(record)
    return record


def mark_complete(
    session: Session,
    event_id: UUID,
    owner_id: int,
    day: date | datetime | None = None,
    clock: Clock = system_clock,
) -> CompletionRecord:
    """
    Mark one of the owner's study events complete on ``day``.

    ``day`` is truncated to its calendar day and defaults to today. Raises
    NotFoundError, before writing anything, if the event is not the owner's.
    Returns the single record for (event, day), new or existing. Storage
    errors other than the duplicate-key race are not caught.
    """
    event = get_event(session, event_id, owner_id)
    target = to_calendar_day(day) if day is not None else clock.today()

    record = _find_record(session, event.id, target)
    if record is not None:
        logger.debug(f"Study event {event.id} already has a record for {target}")
        return _set_completed(session, record)

    record = CompletionRecord(event_id=event.id, date=target, completed=True)
    session.add(record)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        existing = _find_record(session, event.id, target)
        if existing is None:
            raise
        logger.info(
            f"Completion for study event {event.id} on {target} was written "
            f"concurrently, reusing existing record"
        )
        return _set_completed(session, existing)

    session.refresh(record)
    logger.info(f"Marked study event {event.id} complete for {target}")
    return record


def get_completions(
    session: Session,
    event_id: UUID,
    owner_id: int,
    date_range: DateRange | None = None,
) -> list[CompletionRecord]:
    """Completion records of one of the owner's events, oldest day first."""
    event = get_event(session, event_id, owner_id)
    statement = select(CompletionRecord).where(CompletionRecord.event_id == event.id)
    if date_range is not None:
        statement = statement.where(CompletionRecord.date >= date_range.start).where(
            CompletionRecord.date <= date_range.end
        )
    return list(session.exec(statement.order_by(CompletionRecord.date)).all())
