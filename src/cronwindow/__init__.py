from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import datetime, time

from ._display import display
from ._error import ScheduleError, ScheduleErrorKind
from ._eval import cached as _cached
from ._eval import disabled_tick as _disabled_tick
from ._eval import next_from as _next_from
from ._options import (
    ScheduleOption,
    apply_options,
    disable,
    disable_precision,
    enable,
    enable_precision,
    set_after_next,
    set_allowed_weekdays,
    set_before_next,
    set_end_time,
    set_interval,
    set_interval_unit,
    set_next_run,
    set_start_date,
    set_start_time,
)
from ._step import IntervalStepper
from ._types import (
    WEEKEND,
    WORKDAYS,
    AfterNextHook,
    BeforeNextHook,
    IntervalUnit,
    ScheduleConfig,
    Weekday,
)
from ._validate import validate
from ._weekday import WeekdayFilter
from ._window import TimeWindow

logger = logging.getLogger(__name__)


class Schedule:
    """Next-run calculator for a recurring job.

    A driver calls `next_from(now)` once per tick and sleeps until the
    returned instant. The configuration can be changed at any time with
    `set`, including from inside the before-next hook.
    """

    _config: ScheduleConfig

    def __init__(self, interval: int, unit: IntervalUnit, *options: ScheduleOption) -> None:
        config = ScheduleConfig(interval=interval, interval_unit=unit)
        apply_options(config, options)
        err = validate(config)
        if err is not None:
            raise err
        self._config = config
        # Re-entrant: a before-next hook runs under the lock and may call set().
        self._lock = threading.RLock()

    @classmethod
    def validate(cls, interval: int, unit: IntervalUnit, *options: ScheduleOption) -> bool:
        try:
            cls(interval, unit, *options)
            return True
        except ScheduleError:
            return False

    def next_from(self, now: datetime) -> datetime:
        with self._lock:
            self._run_before_next()

            config = self._config
            if not config.enabled:
                return _disabled_tick(now)

            pinned = _cached(config, now)
            if pinned is not None:
                return pinned

            nxt = _next_from(config, now)
            self._run_after_next(config, nxt)
            self._config.next_run = nxt
            return nxt

    def set(self, *options: ScheduleOption) -> None:
        """Apply options atomically. On a validation error nothing changes."""
        with self._lock:
            candidate = dataclasses.replace(self._config)
            apply_options(candidate, options)
            err = validate(candidate)
            if err is not None:
                logger.debug("rejected schedule update: %s", err.kind)
                raise err
            self._config = candidate

    def config(self) -> ScheduleConfig:
        with self._lock:
            return dataclasses.replace(self._config)

    def _run_before_next(self) -> None:
        hook = self._config.before_next
        if hook is None:
            return
        try:
            hook(self)
        except Exception as e:
            logger.warning("before_next hook failed: %s", e, exc_info=True)

    def _run_after_next(self, config: ScheduleConfig, nxt: datetime) -> None:
        if config.after_next is None:
            return
        try:
            config.after_next(nxt)
        except Exception as e:
            logger.warning("after_next hook failed: %s", e, exc_info=True)

    def __str__(self) -> str:
        return display(self._config)

    def __repr__(self) -> str:
        return f"Schedule({display(self._config)!r})"

    @property
    def interval(self) -> int:
        return self._config.interval

    @property
    def interval_unit(self) -> IntervalUnit:
        return self._config.interval_unit

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def precision(self) -> bool:
        return self._config.precision

    @property
    def start_date(self) -> datetime | None:
        return self._config.start_date

    @property
    def start_time(self) -> time | None:
        return self._config.start_time

    @property
    def end_time(self) -> time | None:
        return self._config.end_time

    @property
    def allowed_weekdays(self) -> frozenset[Weekday] | None:
        return self._config.allowed_weekdays

    @property
    def next_run(self) -> datetime | None:
        return self._config.next_run


__all__ = [
    "Schedule",
    "ScheduleConfig",
    "ScheduleError",
    "ScheduleErrorKind",
    "ScheduleOption",
    "IntervalUnit",
    "Weekday",
    "WORKDAYS",
    "WEEKEND",
    "TimeWindow",
    "WeekdayFilter",
    "IntervalStepper",
    "BeforeNextHook",
    "AfterNextHook",
    "validate",
    "set_start_time",
    "set_end_time",
    "set_start_date",
    "set_allowed_weekdays",
    "set_interval",
    "set_interval_unit",
    "set_before_next",
    "set_after_next",
    "set_next_run",
    "enable",
    "disable",
    "enable_precision",
    "disable_precision",
]
