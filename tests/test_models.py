"""Tests for database models."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from study_planner.models import CompletionRecord, CustomRule, DailyRule, StudyEvent, WeeklyRule
from tests.conftest import OWNER_ID, TODAY


class TestStudyEventModel:
    """Tests for the StudyEvent model."""

    def test_create_one_off(self, session: Session):
        """Test creating a one-off event."""
        event = StudyEvent(owner_id=OWNER_ID, title="Essay", fixed_date=TODAY)
        session.add(event)
        session.commit()

        retrieved = session.exec(select(StudyEvent).where(StudyEvent.title == "Essay")).first()
        assert retrieved is not None
        assert retrieved.fixed_date == TODAY
        assert retrieved.is_recurring is False
        assert retrieved.days_of_week == []
        assert retrieved.created_at is not None

    def test_days_of_week_round_trip(self, session: Session, weekly_event: StudyEvent):
        """Test that the weekday list is stored and loaded intact."""
        session.expire_all()
        retrieved = session.get(StudyEvent, weekly_event.id)
        assert retrieved.days_of_week == [1, 3, 5]

    def test_recurrence_property(self, daily_event, weekly_event, one_off_event):
        """Test the typed recurrence view of the stored columns."""
        assert daily_event.recurrence == DailyRule()
        assert weekly_event.recurrence == WeeklyRule(days_of_week=[1, 3, 5])
        assert one_off_event.recurrence is None

    def test_custom_recurrence_property(self, session: Session):
        """Test the typed view of a custom rule."""
        event = StudyEvent(
            owner_id=OWNER_ID,
            title="Weekend",
            is_recurring=True,
            recurrence_type="custom",
            days_of_week=[0, 6],
        )
        assert event.recurrence == CustomRule(days_of_week=[0, 6])

    def test_unknown_recurrence_property(self):
        """Test that an unknown stored type has no typed rule."""
        event = StudyEvent(
            owner_id=OWNER_ID, title="Odd", is_recurring=True, recurrence_type="hourly"
        )
        assert event.recurrence is None


class TestCompletionRecordModel:
    """Tests for the CompletionRecord model."""

    def test_create_completion(self, session: Session, daily_event: StudyEvent):
        """Test creating a completion record."""
        record = CompletionRecord(event_id=daily_event.id, date=TODAY)
        session.add(record)
        session.commit()

        retrieved = session.get(CompletionRecord, record.id)
        assert retrieved is not None
        assert retrieved.completed is True
        assert retrieved.date == TODAY

    def test_one_record_per_event_and_day(self, session: Session, daily_event: StudyEvent):
        """Test that (event_id, date) must be unique."""
        session.add(CompletionRecord(event_id=daily_event.id, date=TODAY))
        session.commit()

        session.add(CompletionRecord(event_id=daily_event.id, date=TODAY))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_same_day_for_different_events(
        self, session: Session, daily_event: StudyEvent, weekly_event: StudyEvent
    ):
        """Test that different events may share a day."""
        session.add(CompletionRecord(event_id=daily_event.id, date=TODAY))
        session.add(CompletionRecord(event_id=weekly_event.id, date=TODAY))
        session.commit()

    def test_completion_event_relationship(self, session: Session, daily_event: StudyEvent):
        """Test completion-event relationship."""
        session.add(CompletionRecord(event_id=daily_event.id, date=date(2024, 3, 1)))
        session.add(CompletionRecord(event_id=daily_event.id, date=date(2024, 3, 2)))
        session.commit()
        session.refresh(daily_event)

        assert len(daily_event.completions) == 2
        assert daily_event.completions[0].event.id == daily_event.id
