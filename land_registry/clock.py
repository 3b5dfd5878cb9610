"""Timestamp sources."""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Deterministic clock for tests and scenarios.

    Each call returns the current instant and then advances by ``step``,
    so successive timestamps are strictly increasing.
    """

    def __init__(
        self,
        start: datetime | None = None,
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self._current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._step = step

    def now(self) -> datetime:
        value = self._current
        self._current = self._current + self._step
        return value

    def peek(self) -> datetime:
        """Next value ``now()`` will return, without advancing."""
        return self._current
