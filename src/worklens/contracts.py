"""Pydantic models for the capture backend's JSON and the segment output."""

from __future__ import annotations

import json
import datetime as dt
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .models import (
    ActivitySegment,
    DailyActivityStat,
    SessionSpan,
    WindowFocusEvent,
)


class WindowEventPayload(BaseModel):
    timestamp: int
    app_name: str = Field(min_length=1)
    title: str = ""
    duration: float = 0.0

    model_config = ConfigDict(extra="ignore")

    def to_event(self) -> WindowFocusEvent:
        return WindowFocusEvent(
            timestamp=self.timestamp,
            app_name=self.app_name,
            title=self.title,
            duration_seconds=self.duration,
        )


class SessionSpanPayload(BaseModel):
    start_time: int
    end_time: int

    model_config = ConfigDict(extra="ignore")

    def to_span(self) -> SessionSpan:
        return SessionSpan(start_time=self.start_time, end_time=self.end_time)


class DailyStatPayload(BaseModel):
    date: dt.date
    total_diffs: int = 0
    sessions: list[SessionSpanPayload] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    def to_stat(self) -> DailyActivityStat:
        return DailyActivityStat(
            date=self.date,
            change_count=self.total_diffs,
            sessions=tuple(span.to_span() for span in self.sessions),
        )


class EventOut(BaseModel):
    timestamp: int
    app_name: str
    title: str
    duration: float


class SegmentPayload(BaseModel):
    kind: str
    start_time: int
    end_time: int
    events: list[EventOut]
    primary_app: str
    switch_count: int
    total_duration_seconds: float

    @classmethod
    def from_segment(cls, segment: ActivitySegment) -> "SegmentPayload":
        return cls(
            kind=segment.kind.value,
            start_time=segment.start_time,
            end_time=segment.end_time,
            events=[
                EventOut(
                    timestamp=event.timestamp,
                    app_name=event.app_name,
                    title=event.title,
                    duration=event.duration_seconds,
                )
                for event in segment.events
            ],
            primary_app=segment.primary_app,
            switch_count=segment.switch_count,
            total_duration_seconds=segment.total_duration_seconds,
        )


_EVENTS_ADAPTER = TypeAdapter(list[WindowEventPayload])
_STATS_ADAPTER = TypeAdapter(list[DailyStatPayload])
_SPANS_ADAPTER = TypeAdapter(list[SessionSpanPayload])


def load_window_events(path: Path) -> list[WindowFocusEvent]:
    """Read a backend window-event dump (a list, or ``{"events": [...]}``)."""
    payloads = _EVENTS_ADAPTER.validate_python(_read_batch(path, "events"))
    return [payload.to_event() for payload in payloads]


def load_daily_stats(path: Path) -> list[DailyActivityStat]:
    payloads = _STATS_ADAPTER.validate_python(_read_batch(path, "rows"))
    return [payload.to_stat() for payload in payloads]


def load_session_spans(path: Path) -> list[SessionSpan]:
    payloads = _SPANS_ADAPTER.validate_python(_read_batch(path, "sessions"))
    return [payload.to_span() for payload in payloads]


def _read_batch(path: Path, key: str) -> Any:
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if isinstance(document, dict):
        batch: Optional[Any] = document.get(key)
        if batch is None:
            raise ValueError(f"{path} has no {key!r} list")
        return batch
    return document
