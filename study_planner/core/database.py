"""Database configuration and session management for SQLite.

This module configures the SQLite database engine with settings suited to
a request-per-session web application: WAL mode for concurrent access and
foreign key enforcement for data integrity.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows concurrent readers while a
      completion is being written. Without WAL, SQLite uses rollback
      journals which block all readers during writes.

    - **Foreign Keys**: Disabled by default in SQLite. We enable it so that a
      CompletionRecord can never point at a StudyEvent that does not exist.

    - **check_same_thread=False**: Required for FastAPI, whose dependency
      injection may hand a session to a different worker thread than the
      one that opened the connection.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from study_planner.core.config import settings

connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if engine.dialect.name == "sqlite":
    sa_event.listen(engine, "connect", set_sqlite_pragma)


def create_db_and_tables():
    """Create all database tables."""
    # Import models so their tables are registered on the metadata.
    import study_planner.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
