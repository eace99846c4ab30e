"""Usage summaries and console rendering for segments and heatmaps."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, Optional, Sequence

from .heatmap import intensity_level, window_days
from .models import (
    ActivitySegment,
    AppUsage,
    SegmentKind,
    WindowFocusEvent,
    WindowTitleUsage,
)
from .normalization import is_code_editor, normalize_window_title

_KIND_LABELS = {
    SegmentKind.DEEP_WORK: "Deep work",
    SegmentKind.FRAGMENTED: "Fragmented",
    SegmentKind.BREAK: "Break",
}
_LEVEL_GLYPHS = (".", "░", "▒", "█")


def aggregate_by_app(events: Iterable[WindowFocusEvent]) -> list[AppUsage]:
    totals: defaultdict[str, float] = defaultdict(float)
    for event in events:
        app = event.app_name.strip() or "Unknown"
        totals[app] += max(event.duration_seconds, 0.0)
    overall = sum(totals.values())
    usage = [
        AppUsage(app_name=app, seconds=seconds, share=seconds / overall if overall else 0.0)
        for app, seconds in totals.items()
    ]
    usage.sort(key=lambda item: (-item.seconds, item.app_name))
    return usage


def top_apps(usage: Sequence[AppUsage], limit: int) -> list[AppUsage]:
    if limit <= 0 or limit >= len(usage):
        return list(usage)
    return list(usage[:limit])


def top_window_titles(
    events: Iterable[WindowFocusEvent], limit: int = -1
) -> list[WindowTitleUsage]:
    """Group focus time by app and canonical title, longest first.

    Events without an app or a title are skipped. A negative ``limit`` keeps
    every title and a zero ``limit`` keeps none.
    """
    if limit == 0:
        return []
    seconds: defaultdict[tuple[str, str], float] = defaultdict(float)
    samples: defaultdict[tuple[str, str], int] = defaultdict(int)
    for event in events:
        app = event.app_name.strip()
        title = normalize_window_title(app, event.title)
        if not app or not title:
            continue
        key = (app, title)
        seconds[key] += max(event.duration_seconds, 0.0)
        samples[key] += 1

    items = sorted(seconds.items(), key=lambda item: (-item[1], item[0][0], item[0][1]))
    if limit > 0:
        items = items[:limit]
    return [
        WindowTitleUsage(app_name=app, title=title, seconds=total, sample_count=samples[(app, title)])
        for (app, title), total in items
    ]


def coding_minutes(events: Iterable[WindowFocusEvent]) -> int:
    """Whole minutes spent in code editors, floored per app as the backend does."""
    total = 0
    for usage in aggregate_by_app(events):
        if is_code_editor(usage.app_name) and usage.seconds > 0:
            total += int(usage.seconds) // 60
    return total


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_clock(timestamp_ms: int, tz: tzinfo = timezone.utc) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=tz).strftime("%H:%M")


def format_time_range(start_ms: int, end_ms: int, tz: tzinfo = timezone.utc) -> str:
    """``HH:MM-HH:MM``, or an empty string for unset or empty ranges."""
    if start_ms <= 0 or end_ms <= 0 or end_ms <= start_ms:
        return ""
    return f"{format_clock(start_ms, tz)}-{format_clock(end_ms, tz)}"


class TimelinePrinter:
    """Render segments and heatmaps as plain console text."""

    def __init__(self, tz: tzinfo = timezone.utc, top_apps_limit: int = 8) -> None:
        self.tz = tz
        self.top_apps_limit = top_apps_limit

    def print_segments(
        self,
        segments: Sequence[ActivitySegment],
        events: Optional[Sequence[WindowFocusEvent]] = None,
    ) -> None:
        if not segments:
            print("No focus events in this session.")
            return

        print("Session timeline")
        print("-" * 60)
        for segment in segments:
            span = format_time_range(segment.start_time, segment.end_time, self.tz)
            span = f"{span or format_clock(segment.start_time, self.tz):<11}"
            label = _KIND_LABELS[segment.kind]
            if segment.kind is SegmentKind.BREAK:
                print(f"  {span}  {label:<11} {format_duration(segment.total_duration_seconds)}")
                continue
            print(
                f"  {span}  {label:<11} {format_duration(segment.total_duration_seconds)}"
                f"  {segment.primary_app:<20} switches={segment.switch_count}"
            )

        if events:
            usage = top_apps(aggregate_by_app(events), self.top_apps_limit)
            print()
            print("Top apps:")
            for item in usage:
                print(f"  {item.app_name:<30} {format_duration(item.seconds)} {item.share:>6.1%}")

    def print_daily_heatmap(self, values: Sequence[float], end: date) -> None:
        days = window_days(end, len(values))
        print(f"Activity {days[0].isoformat() if days else end.isoformat()} .. {end.isoformat()}")
        print("".join(_LEVEL_GLYPHS[intensity_level(value)] for value in values))

    def print_hourly_heatmap(self, values: Sequence[float]) -> None:
        for hour, value in enumerate(values):
            bar = "#" * int(round(value * 40))
            print(f"  {hour:02d}:00 {bar}")
