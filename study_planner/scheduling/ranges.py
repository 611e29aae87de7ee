"""Inclusive calendar-day ranges used as query windows."""

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta

from study_planner.core.errors import EventValidationError, InvalidRangeError

MONTH_PATTERN = re.compile(r"(\d{4})-(\d{2})")


@dataclass(frozen=True)
class DateRange:
    """Days from ``start`` through ``end``, both inclusive."""
    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRangeError(
                f"Range end {self.end} is before range start {self.start}"
            )

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self):
        """Yield every day in the range in ascending order."""
        day = self.start
        while day <= self.end:
            yield day
            day += timedelta(days=1)


def day_range(day: date) -> DateRange:
    """A range covering a single day."""
    return DateRange(day, day)


def month_range(token: str) -> DateRange:
    """Parse a ``YYYY-MM`` token into the range covering that whole month."""
    match = MONTH_PATTERN.fullmatch(token or "")
    if not match:
        raise EventValidationError("month", "Month must be in YYYY-MM format")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise EventValidationError("month", f"Invalid month: {token}")
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(date(year, month, 1), date(year, month, last_day))
