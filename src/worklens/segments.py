"""Fold a session's window-focus events into classified activity segments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable

from .models import (
    ActivitySegment,
    BreakSegment,
    SegmentKind,
    WindowFocusEvent,
    WorkSegment,
)

logger = logging.getLogger(__name__)

FOLD_GAP = timedelta(minutes=5)
BREAK_GAP = timedelta(minutes=10)
FRAGMENTED_SWITCH_THRESHOLD = 8

_FOLD_GAP_MS = int(FOLD_GAP.total_seconds() * 1000)
_BREAK_GAP_MS = int(BREAK_GAP.total_seconds() * 1000)


@dataclass(slots=True)
class _OpenSegment:
    """Running state for the segment currently being folded."""

    start_time: int
    end_time: int
    events: list[WindowFocusEvent] = field(default_factory=list)
    total_duration_seconds: float = 0.0
    switch_count: int = 0
    app_totals: dict[str, float] = field(default_factory=dict)
    app_order: dict[str, int] = field(default_factory=dict)
    primary_app: str = ""

    @classmethod
    def seed(cls, event: WindowFocusEvent) -> "_OpenSegment":
        segment = cls(start_time=event.timestamp, end_time=event.end_timestamp)
        segment._track(event)
        return segment

    def fold(self, event: WindowFocusEvent) -> None:
        if event.app_name != self.events[-1].app_name:
            self.switch_count += 1
        self.end_time = max(self.end_time, event.end_timestamp)
        self._track(event)

    def _track(self, event: WindowFocusEvent) -> None:
        app = event.app_name
        self.events.append(event)
        self.total_duration_seconds += event.duration_seconds
        self.app_order.setdefault(app, len(self.app_order))
        total = self.app_totals.get(app, 0.0) + event.duration_seconds
        self.app_totals[app] = total

        if not self.primary_app or app == self.primary_app:
            self.primary_app = app
            return
        best = self.app_totals[self.primary_app]
        if total > best or (
            total == best and self.app_order[app] < self.app_order[self.primary_app]
        ):
            self.primary_app = app

    def close(self) -> WorkSegment:
        kind = (
            SegmentKind.FRAGMENTED
            if self.switch_count > FRAGMENTED_SWITCH_THRESHOLD
            else SegmentKind.DEEP_WORK
        )
        return WorkSegment(
            kind=kind,
            start_time=self.start_time,
            end_time=self.end_time,
            events=tuple(self.events),
            primary_app=self.primary_app,
            switch_count=self.switch_count,
            total_duration_seconds=self.total_duration_seconds,
        )


def build_segments(events: Iterable[WindowFocusEvent]) -> list[ActivitySegment]:
    """Return the session's segments ordered by start time.

    Events closer than five minutes to the open segment are folded into it.
    Longer gaps close the segment, and gaps over ten minutes also emit a
    break spanning the idle time.
    """
    ordered = sorted(events, key=lambda event: event.timestamp)
    segments: list[ActivitySegment] = []
    current: _OpenSegment | None = None

    for event in ordered:
        if current is None:
            current = _OpenSegment.seed(event)
            continue

        gap = max(0, event.timestamp - current.end_time)
        if gap > _FOLD_GAP_MS:
            segments.append(current.close())
            if gap > _BREAK_GAP_MS:
                segments.append(
                    BreakSegment(
                        start_time=current.end_time,
                        end_time=event.timestamp,
                        total_duration_seconds=gap / 1000,
                    )
                )
            current = _OpenSegment.seed(event)
        else:
            current.fold(event)

    if current is not None:
        segments.append(current.close())

    logger.debug(
        "Built %d segments from %d focus events.", len(segments), len(ordered)
    )
    return segments


def work_segments(segments: Iterable[ActivitySegment]) -> list[WorkSegment]:
    return [segment for segment in segments if isinstance(segment, WorkSegment)]
