"""Injectable calendar clock.

Expiry validation and ``date_added`` stamping compare ISO ``YYYY-MM-DD``
strings, so the clock hands out dates in that form.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class Clock(ABC):

    @abstractmethod
    def today(self) -> date:
        """Return the current calendar date."""

    def today_iso(self) -> str:
        return self.today().isoformat()


class SystemClock(Clock):

    def today(self) -> date:
        return date.today()


class FixedClock(Clock):
    """Clock pinned to one date, for tests and replays."""

    def __init__(self, fixed: date | str) -> None:
        if isinstance(fixed, str):
            fixed = date.fromisoformat(fixed)
        self._fixed = fixed

    def today(self) -> date:
        return self._fixed
