"""Clock capability used wherever the engine needs "today".

Routes receive a clock through the ``get_clock`` dependency so tests can
override it with a ``FixedClock`` and get deterministic results.
"""

from datetime import date, datetime


class Clock:
    """Source of the current local calendar day."""

    def today(self) -> date:
        raise NotImplementedError


class SystemClock(Clock):
    """Reads the wall clock in the server's local time zone."""

    def today(self) -> date:
        return datetime.now().date()


class FixedClock(Clock):
    """Always reports the same day."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day


system_clock = SystemClock()


def get_clock() -> Clock:
    """Dependency for getting the clock."""
    return system_clock
