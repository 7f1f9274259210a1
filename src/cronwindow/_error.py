from __future__ import annotations

from typing import Literal

ScheduleErrorKind = Literal[
    "invalid_interval",
    "invalid_time_window",
    "empty_weekday_set",
    "incompatible_weekday_filter",
]


class ScheduleError(Exception):
    kind: ScheduleErrorKind

    def __init__(self, kind: ScheduleErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    @classmethod
    def invalid_interval(cls) -> ScheduleError:
        return cls("invalid_interval", "invalid interval. interval cannot be less than 1")

    @classmethod
    def invalid_time_window(cls) -> ScheduleError:
        return cls(
            "invalid_time_window",
            "invalid time window. start time must be before end time",
        )

    @classmethod
    def empty_weekday_set(cls) -> ScheduleError:
        return cls("empty_weekday_set", "weekday restriction admits no days")

    @classmethod
    def incompatible_weekday_filter(cls) -> ScheduleError:
        return cls(
            "incompatible_weekday_filter",
            "multi weeks/months/years intervals with weekday restrictions "
            "may produce unexpected results",
        )

