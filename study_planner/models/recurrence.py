"""Recurrence rules for study events.

A rule is one of three shapes, told apart by ``type``:

    {"type": "daily"}
    {"type": "weekly", "days_of_week": [1, 3, 5]}
    {"type": "custom", "days_of_week": [0, 6]}

Days use 0 = Sunday through 6 = Saturday. Weekly and custom rules fire on
exactly the same days; the distinction only matters to the user.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


class RecurrenceType(str, Enum):
    """Supported recurrence rule types."""
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


Weekday = Annotated[int, Field(ge=0, le=6)]


class DailyRule(BaseModel):
    """Fires on every calendar day."""
    type: Literal["daily"] = "daily"

    @property
    def days_of_week(self) -> list[int]:
        return []


class _WeekdayRule(BaseModel):
    days_of_week: list[Weekday] = Field(min_length=1)

    @field_validator("days_of_week")
    @classmethod
    def dedupe_days(cls, days: list[int]) -> list[int]:
        return sorted(set(days))


class WeeklyRule(_WeekdayRule):
    """Fires on a fixed set of weekdays every week."""
    type: Literal["weekly"] = "weekly"


class CustomRule(_WeekdayRule):
    """User-picked weekdays; evaluated exactly like ``WeeklyRule``."""
    type: Literal["custom"] = "custom"


RecurrenceRule = Annotated[
    Union[DailyRule, WeeklyRule, CustomRule], Field(discriminator="type")
]


def rule_from_columns(recurrence_type: str | None, days_of_week: list[int] | None):
    """Rebuild a rule from its stored columns.

    Returns None for a missing or unrecognised type.
    """
    if recurrence_type == RecurrenceType.DAILY.value:
        return DailyRule()
    if recurrence_type == RecurrenceType.WEEKLY.value and days_of_week:
        return WeeklyRule(days_of_week=days_of_week)
    if recurrence_type == RecurrenceType.CUSTOM.value and days_of_week:
        return CustomRule(days_of_week=days_of_week)
    return None
