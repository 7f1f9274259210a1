from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from ._types import Weekday
from ._window import TimeWindow, add_days

logger = logging.getLogger(__name__)

# A valid restriction admits at least one day in any 7; twice that is a hard
# stop for the forward scan.
MAX_SEARCH_DAYS = 14


@dataclass(frozen=True, slots=True)
class WeekdayFilter:
    """Allow-list of weekdays. `allowed=None` admits every day."""

    allowed: frozenset[Weekday] | None = None

    @classmethod
    def of(cls, days: Iterable[Weekday] | None) -> WeekdayFilter:
        return cls(None if days is None else frozenset(days))

    def allows(self, dt: datetime) -> bool:
        if self.allowed is None:
            return True
        return Weekday.from_date(dt.date()) in self.allowed

    def advance(
        self,
        start: datetime,
        window: TimeWindow | None = None,
        preserve_time: bool = False,
    ) -> datetime:
        """Scan forward from `start` one day at a time for an allowed weekday.

        With `preserve_time` and a window, the match is placed at the window
        start; otherwise it keeps whatever time the day increments produce.
        Returns `start` unchanged when nothing is restricted or the scan
        comes up empty.
        """
        if self.allowed is None:
            return start

        anchored = window if preserve_time else None
        current = start
        for _ in range(MAX_SEARCH_DAYS):
            if self.allows(current):
                if anchored is not None:
                    return anchored.start_on(current.date(), current.tzinfo)
                return current
            current = add_days(current, 1)

        logger.debug("no allowed weekday within %d days of %s", MAX_SEARCH_DAYS, start)
        return start

    def __str__(self) -> str:
        if self.allowed is None:
            return "every day"
        return ", ".join(wd.short for wd in Weekday if wd in self.allowed)
