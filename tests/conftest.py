"""Shared test fixtures."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from study_planner.core.clock import FixedClock, get_clock
from study_planner.core.database import get_session
from study_planner.main import app
from study_planner.models import CompletionRecord, StudyEvent

OWNER_ID = 1
OTHER_OWNER_ID = 2
TODAY = date(2024, 3, 15)  # A Friday


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="clock")
def clock_fixture() -> FixedClock:
    """A clock pinned to TODAY."""
    return FixedClock(TODAY)


@pytest.fixture(name="client")
def client_fixture(session: Session, clock: FixedClock):
    """Create a test client with the test database session and clock."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_clock] = lambda: clock
    client = TestClient(app, headers={"X-User-Id": str(OWNER_ID)})
    yield client
    app.dependency_overrides.clear()


def add_event(session: Session, **fields) -> StudyEvent:
    """Persist a StudyEvent built from ``fields``."""
    fields.setdefault("owner_id", OWNER_ID)
    fields.setdefault("title", "Study")
    event = StudyEvent(**fields)
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="one_off_event")
def one_off_event_fixture(session: Session) -> StudyEvent:
    """A one-off event on 2024-03-20."""
    return add_event(session, title="Mock exam", fixed_date=date(2024, 3, 20))


@pytest.fixture(name="daily_event")
def daily_event_fixture(session: Session) -> StudyEvent:
    """A recurring event that fires every day."""
    return add_event(
        session, title="Flashcards", is_recurring=True, recurrence_type="daily"
    )


@pytest.fixture(name="weekly_event")
def weekly_event_fixture(session: Session) -> StudyEvent:
    """A recurring event on Monday, Wednesday and Friday."""
    return add_event(
        session,
        title="Algebra",
        is_recurring=True,
        recurrence_type="weekly",
        days_of_week=[1, 3, 5],
    )


@pytest.fixture(name="other_owner_event")
def other_owner_event_fixture(session: Session) -> StudyEvent:
    """A daily event belonging to someone else."""
    return add_event(
        session,
        owner_id=OTHER_OWNER_ID,
        title="Not yours",
        is_recurring=True,
        recurrence_type="daily",
    )


@pytest.fixture(name="completed_daily_event")
def completed_daily_event_fixture(
    session: Session, daily_event: StudyEvent
) -> StudyEvent:
    """The daily event with 2024-03-15 already completed."""
    session.add(CompletionRecord(event_id=daily_event.id, date=TODAY))
    session.commit()
    session.refresh(daily_event)
    return daily_event
