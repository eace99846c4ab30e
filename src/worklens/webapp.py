"""FastAPI application that serves segments and heatmaps to the dashboard UI."""

from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from .config import DashboardSettings, resolve_timezone
from .contracts import (
    DailyStatPayload,
    SegmentPayload,
    SessionSpanPayload,
    WindowEventPayload,
)
from .heatmap import (
    daily_intensity,
    hourly_intensity,
    hourly_intensity_from_rows,
    intensity_level,
    window_days,
)
from .reporting import aggregate_by_app, coding_minutes, top_apps, top_window_titles
from .segments import (
    BREAK_GAP,
    FOLD_GAP,
    FRAGMENTED_SWITCH_THRESHOLD,
    build_segments,
)

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


class SegmentsRequest(BaseModel):
    events: list[WindowEventPayload] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class DailyHeatmapRequest(BaseModel):
    rows: list[DailyStatPayload] = Field(default_factory=list)
    end: date
    days: Optional[int] = Field(default=None, ge=1, le=366)

    model_config = ConfigDict(extra="forbid")


class HourlyHeatmapRequest(BaseModel):
    sessions: list[SessionSpanPayload] = Field(default_factory=list)
    timezone: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


def create_app(*, settings: Optional[DashboardSettings] = None) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_settings = settings or DashboardSettings()

    app = FastAPI(title="WorkLens", version=API_VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = resolved_settings

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        current: DashboardSettings = request.app.state.settings
        return {
            "version": API_VERSION,
            "fold_gap_seconds": FOLD_GAP.total_seconds(),
            "break_gap_seconds": BREAK_GAP.total_seconds(),
            "fragmented_switch_threshold": FRAGMENTED_SWITCH_THRESHOLD,
            "heatmap_days": current.heatmap_days,
            "timezone": current.timezone,
        }

    @app.post("/api/segments")
    def segments(payload: SegmentsRequest, request: Request) -> Dict[str, Any]:
        current: DashboardSettings = request.app.state.settings
        events = [item.to_event() for item in payload.events]
        built = build_segments(events)
        usage = top_apps(aggregate_by_app(events), current.top_apps_limit)
        titles = top_window_titles(events, current.window_title_limit)
        return {
            "segments": [SegmentPayload.from_segment(segment).model_dump() for segment in built],
            "app_usage": [
                {"app_name": item.app_name, "total_duration": item.seconds, "share": item.share}
                for item in usage
            ],
            "window_titles": [
                {
                    "app_name": item.app_name,
                    "title": item.title,
                    "duration": item.seconds,
                    "sample_count": item.sample_count,
                }
                for item in titles
            ],
            "coding_minutes": coding_minutes(events),
        }

    @app.post("/api/heatmap/daily")
    def daily_heatmap(payload: DailyHeatmapRequest, request: Request) -> Dict[str, Any]:
        current: DashboardSettings = request.app.state.settings
        days = payload.days or current.heatmap_days
        stats = [row.to_stat() for row in payload.rows]
        dates = window_days(payload.end, days)
        values = daily_intensity(stats, end=payload.end, days=days)
        in_window = [stat for stat in stats if dates[0] <= stat.date <= payload.end]
        hourly = hourly_intensity_from_rows(in_window, current.tzinfo)
        return {
            "start": dates[0].isoformat(),
            "end": payload.end.isoformat(),
            "days": [day.isoformat() for day in dates],
            "values": values,
            "levels": [intensity_level(value) for value in values],
            "timezone": current.timezone,
            "hourly": hourly,
        }

    @app.post("/api/heatmap/hourly")
    def hourly_heatmap(payload: HourlyHeatmapRequest, request: Request) -> Dict[str, Any]:
        current: DashboardSettings = request.app.state.settings
        zone_name = payload.timezone or current.timezone
        tz = _parse_timezone(zone_name)
        values = hourly_intensity([span.to_span() for span in payload.sessions], tz)
        return {
            "timezone": zone_name,
            "values": values,
            "levels": [intensity_level(value) for value in values],
        }

    logger.debug("Created API app with settings %s", resolved_settings)
    return app


def _parse_timezone(name: str) -> tzinfo:
    try:
        return resolve_timezone(name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
