"""Study event model for one-off and recurring study commitments.

This module defines the StudyEvent model, the definition from which
occurrences are materialized on demand. A study event either happens once
on ``fixed_date`` or recurs according to its rule columns. Occurrences
themselves are never stored; only their completions are.
"""

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, Relationship, SQLModel

from study_planner.models.recurrence import rule_from_columns

if TYPE_CHECKING:
    from study_planner.models.completion import CompletionRecord


class StudyEvent(SQLModel, table=True):
    """A study commitment owned by a single user.

    Attributes:
        id: Unique identifier (UUID).
        owner_id: User who owns this event. Every query is scoped to it.
        title: Display title, never empty.
        fixed_date: Calendar day of a one-off event. None for recurring
            events.
        is_recurring: Selects between the one-off and recurring lifecycle.
        recurrence_type: "daily", "weekly" or "custom" for recurring
            events, None otherwise. Kept as plain text so an unrecognised
            stored value simply never fires.
        days_of_week: Weekdays (0 = Sunday) for weekly/custom rules.
        exam_id: Optional reference to an exam, carried through untouched.
        subject_id: Optional reference to a subject, carried through untouched.
        topic_id: Optional reference to a topic, carried through untouched.
        created_at: When the event was created.
        updated_at: When the event was last edited.
        completions: Days on which this event was marked complete.
    """
    __tablename__ = "study_event"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: int = Field(index=True)
    title: str
    fixed_date: date | None = Field(default=None, index=True)
    is_recurring: bool = Field(default=False, index=True)
    recurrence_type: str | None = Field(default=None, max_length=16)
    days_of_week: list[int] = Field(default_factory=list, sa_column=Column(JSON))
    exam_id: str | None = None
    subject_id: str | None = None
    topic_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    completions: list["CompletionRecord"] = Relationship(back_populates="event")

    @property
    def recurrence(self):
        """The event's rule as a typed object, or None if not recurring."""
        if not self.is_recurring:
            return None
        return rule_from_columns(self.recurrence_type, self.days_of_week)
