"""Domain errors raised by the scheduling services.

Routes translate these into HTTP responses. Storage errors raised by
SQLAlchemy are deliberately not wrapped here and reach the caller as-is.
"""


class StudyEventError(Exception):
    """Base class for study event errors."""


class NotFoundError(StudyEventError):
    """The study event does not exist or belongs to another owner."""

    def __init__(self, event_id):
        self.event_id = event_id
        super().__init__(f"Study event {event_id} not found")


class EventValidationError(StudyEventError):
    """Input was rejected before any read or write took place.

    Attributes:
        field: Name of the offending input field.
        message: Human-readable explanation.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidRangeError(StudyEventError, ValueError):
    """A date range whose end falls before its start."""
