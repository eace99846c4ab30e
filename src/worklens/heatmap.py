"""Normalized intensity vectors for the hour-of-day and calendar heatmaps."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Iterable, Iterator, Sequence, TypeVar

from .models import DailyActivityStat, SessionSpan

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24

# Lower bounds of the heatmap colour steps, highest first.
_LEVEL_THRESHOLDS: tuple[tuple[float, int], ...] = ((0.8, 3), (0.6, 2), (0.3, 1))

Row = TypeVar("Row")
IntensityVector = list[float]
BucketKey = Callable[[Row], Iterable[tuple[int, float]]]


def normalize(raw: Sequence[float]) -> IntensityVector:
    """Scale raw bucket measures against the largest one (floored at 1)."""
    max_raw = max(max(raw, default=0.0), 1.0)
    return [min(max(value / max_raw, 0.0), 1.0) for value in raw]


def aggregate_intensity(
    rows: Iterable[Row],
    bucket_count: int,
    bucket_key: BucketKey,
) -> IntensityVector:
    """Accumulate weighted rows into ``bucket_count`` buckets and normalize.

    ``bucket_key`` maps a row to ``(bucket_index, weight)`` pairs; indices
    outside the vector are dropped.
    """
    raw = [0.0] * bucket_count
    for row in rows:
        for index, weight in bucket_key(row):
            if 0 <= index < bucket_count:
                raw[index] += weight
    return normalize(raw)


def window_days(end: date, days: int) -> list[date]:
    """Return the ``days`` calendar days ending at ``end``, oldest first."""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def daily_intensity(
    rows: Iterable[DailyActivityStat], *, end: date, days: int = 30
) -> IntensityVector:
    if days <= 0:
        return []
    first_day = end - timedelta(days=days - 1)

    # The first row reported for a date wins.
    by_day: dict[date, DailyActivityStat] = {}
    for row in rows:
        by_day.setdefault(row.date, row)

    def bucket_key(row: DailyActivityStat) -> Iterator[tuple[int, float]]:
        yield (row.date - first_day).days, float(row.change_count)

    vector = aggregate_intensity(by_day.values(), days, bucket_key)
    logger.debug("Daily intensity for %s..%s from %d rows.", first_day, end, len(by_day))
    return vector


def hourly_minutes(
    spans: Iterable[SessionSpan], tz: tzinfo = timezone.utc
) -> list[float]:
    """Minutes of session time falling into each local hour of the day."""
    raw = [0.0] * HOURS_PER_DAY
    for span in spans:
        for hour, minutes in _split_by_hour(span, tz):
            raw[hour] += minutes
    return raw


def hourly_intensity(
    spans: Iterable[SessionSpan], tz: tzinfo = timezone.utc
) -> IntensityVector:
    return aggregate_intensity(
        list(spans), HOURS_PER_DAY, lambda span: _split_by_hour(span, tz)
    )


def hourly_intensity_from_rows(
    rows: Iterable[DailyActivityStat], tz: tzinfo = timezone.utc
) -> IntensityVector:
    """Hour-of-day intensity over the session spans carried by daily rows."""

    def bucket_key(row: DailyActivityStat) -> Iterator[tuple[int, float]]:
        for span in row.sessions:
            yield from _split_by_hour(span, tz)

    return aggregate_intensity(rows, HOURS_PER_DAY, bucket_key)


def intensity_level(value: float) -> int:
    """Map an intensity in [0, 1] to a colour step from 0 to 3."""
    for threshold, level in _LEVEL_THRESHOLDS:
        if value > threshold:
            return level
    return 0


def _split_by_hour(span: SessionSpan, tz: tzinfo) -> Iterator[tuple[int, float]]:
    start = _floor_minute(span.start_time)
    end = _floor_minute(span.end_time)
    cursor = start
    while cursor < end:
        local = cursor.astimezone(tz)
        boundary = cursor + timedelta(minutes=60 - local.minute)
        piece_end = min(boundary, end)
        yield local.hour, (piece_end - cursor).total_seconds() / 60
        cursor = piece_end


def _floor_minute(timestamp_ms: int) -> datetime:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.replace(second=0, microsecond=0)
