"""Daily registration window, evaluated in the organization's timezone.

Bounds are inclusive on both ends. Windows crossing midnight are not
supported and are rejected when the window is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Callable
from zoneinfo import ZoneInfo

from ..common.datetime_utils import parse_hhmm, to_org_time, utc_now
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import WindowReason
from ..core.exceptions import ConfigurationError


def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def _format_12h(t: time) -> str:
    period = "PM" if t.hour >= 12 else "AM"
    hour = t.hour % 12 or 12
    return f"{hour}:{t.minute:02d} {period}"


@dataclass(frozen=True)
class AttendanceWindow:
    start: time
    end: time

    def __post_init__(self):
        if _minutes(self.start) > _minutes(self.end):
            raise ConfigurationError(
                f"Attendance window {self.start:%H:%M}-{self.end:%H:%M} crosses midnight, which is not supported"
            )

    @classmethod
    def from_config(cls, value: dict) -> "AttendanceWindow":
        try:
            return cls(start=parse_hhmm(value["start"]), end=parse_hhmm(value["end"]))
        except (KeyError, TypeError):
            raise ConfigurationError("ATTENDANCE_WINDOW needs 'start' and 'end' as HH:MM") from None

    @property
    def start_minutes(self) -> int:
        return _minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return _minutes(self.end)

    def display(self) -> str:
        return f"{_format_12h(self.start)} - {_format_12h(self.end)}"


@dataclass(frozen=True)
class WindowStatus:
    is_open: bool
    reason: WindowReason


@dataclass(frozen=True)
class BoundaryInfo:
    minutes: int
    is_before_window: bool
    is_after_window: bool
    is_window_open: bool


def current_org_time(tz: ZoneInfo, clock: Callable[[], datetime] = utc_now) -> datetime:
    """Wall-clock time in the organization's timezone, whatever the host's locale."""
    return to_org_time(clock(), tz)


def evaluate_window(now: datetime, window: AttendanceWindow) -> WindowStatus:
    current = now.hour * 60 + now.minute
    if current < window.start_minutes:
        return WindowStatus(is_open=False, reason=WindowReason.BEFORE)
    if current > window.end_minutes:
        return WindowStatus(is_open=False, reason=WindowReason.AFTER)
    return WindowStatus(is_open=True, reason=WindowReason.ACTIVE)


def time_until_boundary(now: datetime, window: AttendanceWindow) -> BoundaryInfo:
    current = now.hour * 60 + now.minute
    status = evaluate_window(now, window)

    if status.reason == WindowReason.ACTIVE:
        return BoundaryInfo(
            minutes=window.end_minutes - current,
            is_before_window=False,
            is_after_window=False,
            is_window_open=True,
        )
    if status.reason == WindowReason.BEFORE:
        return BoundaryInfo(
            minutes=window.start_minutes - current,
            is_before_window=True,
            is_after_window=False,
            is_window_open=False,
        )
    # after today's window: count to tomorrow's start
    return BoundaryInfo(
        minutes=(MINUTES_PER_DAY - current) + window.start_minutes,
        is_before_window=False,
        is_after_window=True,
        is_window_open=False,
    )
