"""Study event routes for defining events and tracking completion."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from study_planner.core.auth import get_current_owner
from study_planner.core.clock import Clock, get_clock
from study_planner.core.database import get_session
from study_planner.core.errors import EventValidationError, NotFoundError
from study_planner.models.schemas import (
    CompletionRead,
    CompletionRequest,
    OccurrenceRead,
    StudyEventCreate,
    StudyEventRead,
    StudyEventUpdate,
)
from study_planner.scheduling import completion, definitions, materializer
from study_planner.scheduling.ranges import month_range

router = APIRouter(prefix="/study-events", tags=["study-events"])


def not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Study event not found")


def invalid(error: EventValidationError) -> HTTPException:
    return HTTPException(
        status_code=400, detail={"field": error.field, "message": error.message}
    )


@router.post("", status_code=201, response_model=StudyEventRead)
async def create_study_event(
    data: StudyEventCreate,
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
):
    """
    Create a study event.

    One-off events need a ``date``. Recurring events take a ``recurrence``
    rule and default to daily; weekly and custom rules need at least one
    day of week (0 = Sunday).
    """
    try:
        event = definitions.create_event(session, owner_id, data)
    except EventValidationError as e:
        raise invalid(e) from e
    return StudyEventRead.from_event(event)


@router.get("", response_model=list[OccurrenceRead])
async def list_month_occurrences(
    month: str | None = None,
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
):
    """
    List every occurrence in a calendar month.

    ``month`` is required and must be ``YYYY-MM``. Each entry is the event
    definition plus the concrete ``occurrence_date`` and whether that day
    was completed, sorted by date.
    """
    try:
        occurrences = materializer.list_for_month(session, owner_id, month)
    except EventValidationError as e:
        raise invalid(e) from e
    return [OccurrenceRead.from_occurrence(o) for o in occurrences]


@router.get("/today", response_model=list[OccurrenceRead])
async def list_today_occurrences(
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """List today's occurrences with their completion state."""
    occurrences = materializer.list_for_today(session, owner_id, clock)
    return [OccurrenceRead.from_occurrence(o) for o in occurrences]


@router.get("/definitions", response_model=list[StudyEventRead])
async def list_definitions(
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
):
    """List the caller's study event definitions, oldest first."""
    return [StudyEventRead.from_event(e) for e in definitions.list_events(session, owner_id)]


@router.get("/{event_id}", response_model=StudyEventRead)
async def get_study_event(
    event_id: UUID,
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
):
    """Fetch a single study event definition."""
    try:
        event = definitions.get_event(session, event_id, owner_id)
    except NotFoundError as e:
        raise not_found() from e
    return StudyEventRead.from_event(event)


@router.patch("/{event_id}", response_model=StudyEventRead)
async def update_study_event(
    event_id: UUID,
    changes: StudyEventUpdate,
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
):
    """
    Edit a study event.

    Title, date, recurring flag and recurrence may change. Completion
    records already stored for the event are left untouched.
    """
    try:
        event = definitions.update_event(session, event_id, owner_id, changes)
    except NotFoundError as e:
        raise not_found() from e
    except EventValidationError as e:
        raise invalid(e) from e
    return StudyEventRead.from_event(event)


@router.post("/{event_id}/complete", response_model=CompletionRead)
async def complete_study_event(
    event_id: UUID,
    data: CompletionRequest | None = None,
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Mark a study event complete for a day.

    ``date`` defaults to today. Completing the same day again returns the
    existing record rather than creating a second one.
    """
    day = data.day if data is not None else None
    try:
        record = completion.mark_complete(session, event_id, owner_id, day, clock=clock)
    except NotFoundError as e:
        raise not_found() from e
    return CompletionRead.from_record(record)


@router.get("/{event_id}/completions", response_model=list[CompletionRead])
async def list_completions(
    event_id: UUID,
    month: str | None = None,
    owner_id: int = Depends(get_current_owner),
    session: Session = Depends(get_session),
):
    """List the days a study event was completed, optionally within a month."""
    try:
        date_range = month_range(month) if month is not None else None
        records = completion.get_completions(session, event_id, owner_id, date_range)
    except NotFoundError as e:
        raise not_found() from e
    except EventValidationError as e:
        raise invalid(e) from e
    return [CompletionRead.from_record(r) for r in records]
