"""Tests for the recurrence evaluator."""

from datetime import date, timedelta

import pytest

from study_planner.models import StudyEvent
from study_planner.scheduling.recurrence import fires, sunday_weekday

# 2024-03-03 is a Sunday.
WEEK = [date(2024, 3, 3) + timedelta(days=i) for i in range(7)]


def recurring(recurrence_type, days=None) -> StudyEvent:
    return StudyEvent(
        owner_id=1,
        title="Study",
        is_recurring=True,
        recurrence_type=recurrence_type,
        days_of_week=days or [],
    )


class TestSundayWeekday:
    """Tests for the Sunday-based weekday conversion."""

    def test_week_starts_on_sunday(self):
        """Test that Sunday is 0 and Saturday is 6."""
        assert [sunday_weekday(d) for d in WEEK] == [0, 1, 2, 3, 4, 5, 6]

    def test_leap_day(self):
        """Test the weekday of 2024-02-29, a Thursday."""
        assert sunday_weekday(date(2024, 2, 29)) == 4


class TestFires:
    """Tests for deciding whether an event fires on a day."""

    def test_daily_fires_every_day(self):
        """Test that a daily rule fires on every day, across a year boundary."""
        event = recurring("daily")
        start = date(2023, 12, 1)
        assert all(fires(event, start + timedelta(days=i)) for i in range(120))

    def test_daily_ignores_days_of_week(self):
        """Test that stray weekdays do not restrict a daily rule."""
        event = recurring("daily", [2])
        assert all(fires(event, d) for d in WEEK)

    @pytest.mark.parametrize("recurrence_type", ["weekly", "custom"])
    def test_weekday_rules_match_only_configured_days(self, recurrence_type):
        """Test that weekday rules fire only on their configured days."""
        event = recurring(recurrence_type, [1, 3, 5])
        assert [fires(event, d) for d in WEEK] == [
            False, True, False, True, False, True, False,
        ]

    def test_weekly_and_custom_agree(self):
        """Test that weekly and custom rules fire on the same days."""
        days = [0, 6]
        weekly = recurring("weekly", days)
        custom = recurring("custom", days)
        start = date(2024, 1, 1)
        for i in range(60):
            day = start + timedelta(days=i)
            assert fires(weekly, day) == fires(custom, day)

    def test_one_off_never_fires(self):
        """Test that one-off events are never evaluated as recurring."""
        event = StudyEvent(owner_id=1, title="Once", fixed_date=WEEK[2])
        assert not any(fires(event, d) for d in WEEK)

    def test_recurring_flag_off_wins_over_rule(self):
        """Test that the recurring flag is checked before the rule."""
        event = recurring("daily")
        event.is_recurring = False
        assert fires(event, WEEK[0]) is False

    def test_unknown_type_fails_closed(self):
        """Test that an unrecognised rule type never fires."""
        event = recurring("monthly", [0, 1, 2, 3, 4, 5, 6])
        assert not any(fires(event, d) for d in WEEK)

    def test_missing_type_fails_closed(self):
        """Test that a recurring event without a type never fires."""
        event = recurring(None)
        assert not any(fires(event, d) for d in WEEK)

    def test_weekly_with_no_days_never_fires(self):
        """Test that a weekly rule with no days never fires."""
        event = recurring("weekly", [])
        assert not any(fires(event, d) for d in WEEK)
