from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from ._types import IntervalUnit
from ._window import add_days, add_elapsed, at_time_on_date, elapsed_between, is_before

# Used when the unit is not one of IntervalUnit's members, and as the
# re-check tick of a disabled schedule.
FALLBACK_STEP = timedelta(minutes=5)

_UNIT_DURATIONS: dict[IntervalUnit, timedelta] = {
    IntervalUnit.SECOND: timedelta(seconds=1),
    IntervalUnit.MINUTE: timedelta(minutes=1),
    IntervalUnit.HOUR: timedelta(hours=1),
}


@dataclass(frozen=True, slots=True)
class IntervalStepper:
    interval: int
    unit: IntervalUnit

    @property
    def duration(self) -> timedelta | None:
        """Fixed length of one step, or None for calendar units."""
        size = _UNIT_DURATIONS.get(self.unit)
        if size is not None:
            return size * self.interval
        if self.unit in (IntervalUnit.DAY, IntervalUnit.WEEK, IntervalUnit.MONTH, IntervalUnit.YEAR):
            return None
        return FALLBACK_STEP

    def step(self, dt: datetime) -> datetime:
        match self.unit:
            case IntervalUnit.DAY:
                return add_days(dt, self.interval)
            case IntervalUnit.WEEK:
                return add_days(dt, self.interval * 7)
            case IntervalUnit.MONTH:
                return _add_calendar(dt, relativedelta(months=self.interval))
            case IntervalUnit.YEAR:
                return _add_calendar(dt, relativedelta(years=self.interval))
        return add_elapsed(dt, self.duration or FALLBACK_STEP)

    def align(self, anchor: datetime, now: datetime) -> datetime:
        """First instant of the grid `anchor + k * step` (k >= 0) after `now`."""
        if is_before(now, anchor):
            return anchor
        duration = self.duration
        if duration is not None:
            # Fixed steps jump straight to the slot instead of walking the grid.
            elapsed = elapsed_between(anchor, now)
            return add_elapsed(anchor, (elapsed // duration + 1) * duration)
        nxt = anchor
        while not is_before(now, nxt):
            nxt = self.step(nxt)
        return nxt


def _add_calendar(dt: datetime, delta: relativedelta) -> datetime:
    # relativedelta clamps the day to the end of a short month.
    shifted = dt.replace(tzinfo=None) + delta
    return at_time_on_date(shifted.date(), shifted.time(), dt.tzinfo)
