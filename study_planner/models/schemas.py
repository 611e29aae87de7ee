"""Request and response schemas for the study event API.

Table models live in their own modules; these are the non-table SQLModel
shapes that cross the HTTP boundary.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from study_planner.core.dates import to_calendar_day
from study_planner.models.recurrence import RecurrenceRule


class StudyEventCreate(SQLModel):
    """Body of a create request."""
    title: str
    fixed_date: date | None = Field(default=None, alias="date")
    is_recurring: bool = False
    recurrence: RecurrenceRule | None = None
    exam_id: str | None = None
    subject_id: str | None = None
    topic_id: str | None = None

    model_config = {"populate_by_name": True}

    @field_validator("fixed_date", mode="before")
    @classmethod
    def truncate_fixed_date(cls, value):
        return to_calendar_day(value)


class StudyEventUpdate(SQLModel):
    """Body of an edit request. Omitted fields are left unchanged."""
    title: str | None = None
    fixed_date: date | None = Field(default=None, alias="date")
    is_recurring: bool | None = None
    recurrence: RecurrenceRule | None = None

    model_config = {"populate_by_name": True}

    @field_validator("fixed_date", mode="before")
    @classmethod
    def truncate_fixed_date(cls, value):
        return to_calendar_day(value)


class CompletionRequest(SQLModel):
    """Body of a complete request; ``date`` defaults to today."""
    day: date | None = Field(default=None, alias="date")

    model_config = {"populate_by_name": True}

    @field_validator("day", mode="before")
    @classmethod
    def truncate_day(cls, value):
        return to_calendar_day(value)


class StudyEventRead(SQLModel):
    """A study event definition as returned to clients."""
    id: UUID
    owner_id: int
    title: str
    fixed_date: date | None
    is_recurring: bool
    recurrence: RecurrenceRule | None
    exam_id: str | None
    subject_id: str | None
    topic_id: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_event(cls, event) -> "StudyEventRead":
        return cls(
            id=event.id,
            owner_id=event.owner_id,
            title=event.title,
            fixed_date=event.fixed_date,
            is_recurring=event.is_recurring,
            recurrence=event.recurrence,
            exam_id=event.exam_id,
            subject_id=event.subject_id,
            topic_id=event.topic_id,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )


class OccurrenceRead(StudyEventRead):
    """One materialized occurrence: the definition plus its concrete day."""
    occurrence_date: date
    completed: bool

    @classmethod
    def from_occurrence(cls, occurrence) -> "OccurrenceRead":
        base = StudyEventRead.from_event(occurrence.event)
        return cls(
            **base.model_dump(),
            occurrence_date=occurrence.occurrence_date,
            completed=occurrence.completed,
        )


class CompletionRead(SQLModel):
    """A stored completion record."""
    id: UUID
    event_id: UUID
    day: date = Field(alias="date")
    completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record) -> "CompletionRead":
        return cls(
            id=record.id,
            event_id=record.event_id,
            date=record.date,
            completed=record.completed,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
