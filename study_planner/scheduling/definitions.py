"""Create, fetch and edit study event definitions.

All lookups are scoped to the owner; an event that belongs to somebody
else is reported exactly like one that does not exist.
"""
import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from study_planner.core.errors import EventValidationError, NotFoundError
from study_planner.models import CompletionRecord, DailyRule, StudyEvent
from study_planner.models.schemas import StudyEventCreate, StudyEventUpdate

logger = logging.getLogger(__name__)


def _clean_title(title: str | None) -> str:
    if not title or not title.strip():
        raise EventValidationError("title", "Title is required")
    return title.strip()


def _rule_columns(rule) -> tuple[str, list[int]]:
    """Split a recurrence rule into its (type, days) storage columns."""
    if rule.type != "daily" and not rule.days_of_week:
        raise EventValidationError(
            "recurrence.days_of_week",
            "Days of week are required for weekly/custom recurrence",
        )
    return rule.type, list(rule.days_of_week)


def get_event(session: Session, event_id: UUID, owner_id: int) -> StudyEvent:
    """Fetch one of the owner's study events or raise NotFoundError."""
    statement = (
        select(StudyEvent)
        .where(StudyEvent.id == event_id)
        .where(StudyEvent.owner_id == owner_id)
    )
    event = session.exec(statement).first()
    if event is None:
        raise NotFoundError(event_id)
    return event


def list_events(session: Session, owner_id: int) -> list[StudyEvent]:
    """All of the owner's study event definitions, oldest first."""
    statement = (
        select(StudyEvent)
        .where(StudyEvent.owner_id == owner_id)
        .order_by(StudyEvent.created_at)
    )
    return list(session.exec(statement).all())


def create_event(session: Session, owner_id: int, data: StudyEventCreate) -> StudyEvent:
    """
    Create a study event for the owner.

    One-off events require a date. Recurring events without a rule default
    to daily, and any date sent with them is dropped. Validation happens
    before anything is written.
    """
    title = _clean_title(data.title)

    if data.is_recurring:
        recurrence_type, days_of_week = _rule_columns(data.recurrence or DailyRule())
        fixed_date = None
    else:
        if data.fixed_date is None:
            raise EventValidationError("date", "Date is required for one-off events")
        recurrence_type, days_of_week = None, []
        fixed_date = data.fixed_date

    event = StudyEvent(
        owner_id=owner_id,
        title=title,
        fixed_date=fixed_date,
        is_recurring=data.is_recurring,
        recurrence_type=recurrence_type,
        days_of_week=days_of_week,
        exam_id=data.exam_id,
        subject_id=data.subject_id,
        topic_id=data.topic_id,
    )
    session.add(event)
    session.commit()
    session.refresh(event)

    logger.info(
        f"Created {'recurring' if event.is_recurring else 'one-off'} study event "
        f"'{event.title}' ({event.id}) for owner {owner_id}"
    )
    return event


def update_event(
    session: Session, event_id: UUID, owner_id: int, changes: StudyEventUpdate
) -> StudyEvent:
    """
    Apply an edit to one of the owner's study events.

    Only fields present in ``changes`` are touched, and the merged result is
    validated like a new event. Existing completion records are kept when
    the recurrence changes, even if they no longer line up with the new
    rule; a warning is logged so the mismatch is visible.
    """
    event = get_event(session, event_id, owner_id)
    provided = changes.model_fields_set

    title = _clean_title(changes.title) if "title" in provided else event.title

    is_recurring = event.is_recurring
    if "is_recurring" in provided and changes.is_recurring is not None:
        is_recurring = changes.is_recurring

    if is_recurring:
        if "recurrence" in provided and changes.recurrence is not None:
            recurrence_type, days_of_week = _rule_columns(changes.recurrence)
        elif event.is_recurring:
            # Stored rule is kept verbatim, even one that never fires.
            recurrence_type = event.recurrence_type
            days_of_week = list(event.days_of_week or [])
        else:
            recurrence_type, days_of_week = _rule_columns(DailyRule())
        fixed_date = None
    else:
        fixed_date = changes.fixed_date if "fixed_date" in provided else event.fixed_date
        if fixed_date is None:
            raise EventValidationError("date", "Date is required for one-off events")
        recurrence_type, days_of_week = None, []

    schedule_changed = (
        is_recurring != event.is_recurring
        or recurrence_type != event.recurrence_type
        or sorted(days_of_week) != sorted(event.days_of_week or [])
        or fixed_date != event.fixed_date
    )
    if schedule_changed:
        completion_count = session.exec(
            select(func.count())
            .select_from(CompletionRecord)
            .where(CompletionRecord.event_id == event.id)
        ).one()
        if completion_count:
            logger.warning(
                f"Schedule of study event {event.id} changed with "
                f"{completion_count} existing completion records; keeping them as-is"
            )

    event.title = title
    event.is_recurring = is_recurring
    event.recurrence_type = recurrence_type
    event.days_of_week = days_of_week
    event.fixed_date = fixed_date
    event.updated_at = datetime.now(UTC)
    session.add(event)
    session.commit()
    session.refresh(event)

    logger.info(f"Updated study event {event.id} for owner {owner_id}")
    return event
