"""Domain models for captured activity and the views derived from it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Union


class SegmentKind(str, Enum):
    DEEP_WORK = "deep_work"
    FRAGMENTED = "fragmented"
    BREAK = "break"


@dataclass(frozen=True, slots=True)
class WindowFocusEvent:
    """One observed interval where an application window held focus.

    ``timestamp`` is the start instant in milliseconds since the epoch.
    """

    timestamp: int
    app_name: str
    title: str = ""
    duration_seconds: float = 0.0

    @property
    def end_timestamp(self) -> int:
        return self.timestamp + int(round(self.duration_seconds * 1000))


@dataclass(frozen=True, slots=True)
class WorkSegment:
    """A run of focus events folded together and classified by switching."""

    kind: SegmentKind
    start_time: int
    end_time: int
    events: tuple[WindowFocusEvent, ...]
    primary_app: str
    switch_count: int
    total_duration_seconds: float


@dataclass(frozen=True, slots=True)
class BreakSegment:
    """An inferred gap with no focus events."""

    start_time: int
    end_time: int
    total_duration_seconds: float

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.BREAK

    @property
    def events(self) -> tuple[WindowFocusEvent, ...]:
        return ()

    @property
    def primary_app(self) -> str:
        return ""

    @property
    def switch_count(self) -> int:
        return 0


ActivitySegment = Union[WorkSegment, BreakSegment]


@dataclass(frozen=True, slots=True)
class SessionSpan:
    """Start and end of one session, in milliseconds since the epoch."""

    start_time: int
    end_time: int


@dataclass(frozen=True, slots=True)
class DailyActivityStat:
    """Per-day activity summary supplied by the capture backend."""

    date: date
    change_count: int = 0
    sessions: tuple[SessionSpan, ...] = ()


@dataclass(slots=True)
class AppUsage:
    app_name: str
    seconds: float
    share: float = 0.0


@dataclass(frozen=True, slots=True)
class WindowTitleUsage:
    app_name: str
    title: str
    seconds: float
    sample_count: int
