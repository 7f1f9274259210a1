from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo

END_OF_DAY = time(23, 59, 59, 999999)


# --- Timezone projection ---


def project(dt: datetime, now: datetime) -> datetime:
    """Express a configured instant in the zone of `now`.

    Aware instants are converted; naive ones are read as wall-clock fields of
    `now`'s zone. With a naive `now` only the instant's own wall fields count.
    """
    if now.tzinfo is None:
        return dt.replace(tzinfo=None)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=now.tzinfo)
    return dt.astimezone(now.tzinfo)


def wall_time(t: time, d: date, tz: tzinfo | None) -> time:
    """Wall-clock fields of time-of-day `t` as seen on date `d` in `tz`."""
    if t.tzinfo is None:
        return t
    if tz is None:
        return t.replace(tzinfo=None)
    return datetime.combine(d, t).astimezone(tz).time()


def at_time_on_date(d: date, t: time, tz: tzinfo | None) -> datetime:
    naive = datetime.combine(d, wall_time(t, d, tz).replace(tzinfo=None))
    if tz is None:
        return naive
    # fold=0 takes the first occurrence of an ambiguous wall time; the UTC
    # round-trip pushes a wall time inside a DST gap forward past the gap.
    aware = naive.replace(tzinfo=tz, fold=0)
    return aware.astimezone(timezone.utc).astimezone(tz)


def add_elapsed(dt: datetime, delta: timedelta) -> datetime:
    """Add real elapsed time, independent of wall-clock shifts."""
    if dt.tzinfo is None:
        return dt + delta
    return (dt.astimezone(timezone.utc) + delta).astimezone(dt.tzinfo)


def add_days(dt: datetime, days: int) -> datetime:
    """Same wall-clock time `days` calendar days later."""
    return at_time_on_date(dt.date() + timedelta(days=days), dt.time(), dt.tzinfo)


def elapsed_between(start: datetime, end: datetime) -> timedelta:
    if start.tzinfo is None or end.tzinfo is None:
        return end - start
    return end.astimezone(timezone.utc) - start.astimezone(timezone.utc)


def is_before(a: datetime, b: datetime) -> bool:
    """Instant ordering. Aware values sharing a tzinfo would otherwise be
    compared by wall fields alone, ignoring `fold` in a repeated hour."""
    return elapsed_between(a, b) > timedelta(0)


def seconds_of_day(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


def to_time_of_day(value: time | datetime) -> time:
    """Drop the date component of a datetime, keeping its zone."""
    if isinstance(value, datetime):
        return value.timetz()
    return value


# --- Daily window ---


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """A daily [start, end] wall-clock range. `end` defaults to the last
    representable instant of the day."""

    start: time
    end: time | None = None

    @property
    def effective_end(self) -> time:
        return self.end if self.end is not None else END_OF_DAY

    def is_ordered(self) -> bool:
        if self.end is None:
            return True
        return seconds_of_day(self.start) < seconds_of_day(self.end)

    def start_on(self, d: date, tz: tzinfo | None) -> datetime:
        return at_time_on_date(d, self.start, tz)

    def end_on(self, d: date, tz: tzinfo | None) -> datetime:
        return at_time_on_date(d, self.effective_end, tz)

    def bounds(self, now: datetime) -> tuple[datetime, datetime]:
        """Today's window start and end, with today taken from `now`."""
        today = now.date()
        return self.start_on(today, now.tzinfo), self.end_on(today, now.tzinfo)

    def contains(self, now: datetime) -> bool:
        start, end = self.bounds(now)
        return not is_before(now, start) and not is_before(end, now)

    def __str__(self) -> str:
        return f"from {_fmt(self.start)} to {_fmt(self.effective_end)}"


def _fmt(t: time) -> str:
    return f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
