"""Completion record model for per-day study event tracking.

This module defines the CompletionRecord model. A record states that a
study event was done on one calendar day. There is at most one record per
(event, day); the unique constraint backs up the upsert in
``study_planner.scheduling.completion``.
"""

import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from study_planner.models.study_event import StudyEvent


class CompletionRecord(SQLModel, table=True):
    """A study event marked done on a specific day.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the completed StudyEvent.
        date: Calendar day the completion applies to.
        completed: Always True once written; absence of a record means
            not completed.
        created_at: When the day was first marked complete.
        updated_at: When the record was last written.
        event: Reference to the parent StudyEvent object.
    """
    __tablename__ = "completion_record"
    __table_args__ = (
        UniqueConstraint("event_id", "date", name="uq_completion_event_date"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="study_event.id", index=True)
    date: datetime.date = Field(index=True)
    completed: bool = Field(default=True)
    created_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.UTC)
    )
    updated_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.UTC)
    )

    # Relationship
    event: Optional["StudyEvent"] = Relationship(back_populates="completions")
