from study_planner.models.completion import CompletionRecord
from study_planner.models.recurrence import (
    CustomRule,
    DailyRule,
    RecurrenceType,
    WeeklyRule,
)
from study_planner.models.study_event import StudyEvent

__all__ = [
    "StudyEvent",
    "CompletionRecord",
    "RecurrenceType",
    "DailyRule",
    "WeeklyRule",
    "CustomRule",
]
