"""Command-line interface for the dashboard core."""

from __future__ import annotations

import json
import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Callable, Optional, TypeVar

import typer
from pydantic import ValidationError

from .config import DashboardSettings, load_settings, resolve_timezone
from .contracts import (
    SegmentPayload,
    load_daily_stats,
    load_session_spans,
    load_window_events,
)
from .heatmap import daily_intensity, hourly_intensity, hourly_intensity_from_rows
from .reporting import TimelinePrinter
from .segments import build_segments

app = typer.Typer(help="Activity segmentation and heatmaps for captured work sessions.")

T = TypeVar("T")


@app.callback(no_args_is_help=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        path_type=Path,
        help="Settings file (TOML). Defaults to the user config directory.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    try:
        ctx.obj = load_settings(config_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


@app.command()
def segments(
    ctx: typer.Context,
    events_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Window events JSON."),
    as_json: bool = typer.Option(False, "--json", help="Emit segments as JSON."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="Time zone for printed clock times."),
) -> None:
    """Split one session's window events into deep work, fragmented and break segments."""
    settings: DashboardSettings = ctx.obj
    events = _load(load_window_events, events_file)
    built = build_segments(events)
    if as_json:
        typer.echo(
            json.dumps([SegmentPayload.from_segment(segment).model_dump() for segment in built], indent=2)
        )
        return
    printer = TimelinePrinter(tz=_timezone(tz_name, settings), top_apps_limit=settings.top_apps_limit)
    printer.print_segments(built, events)


@app.command()
def heatmap(
    ctx: typer.Context,
    stats_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Daily stats JSON."),
    end: str = typer.Option(..., "--end", help="Last day of the window (YYYY-MM-DD)."),
    days: Optional[int] = typer.Option(None, "--days", min=1, max=366, help="Window length in days."),
    as_json: bool = typer.Option(False, "--json", help="Emit the intensity vector as JSON."),
) -> None:
    """Print the per-day change intensity for the days ending at --end."""
    settings: DashboardSettings = ctx.obj
    try:
        end_day = datetime.strptime(end, "%Y-%m-%d").date()
    except ValueError as exc:
        raise typer.BadParameter("expected YYYY-MM-DD", param_hint="--end") from exc
    rows = _load(load_daily_stats, stats_file)
    values = daily_intensity(rows, end=end_day, days=days or settings.heatmap_days)
    if as_json:
        typer.echo(json.dumps(values))
        return
    TimelinePrinter().print_daily_heatmap(values, end_day)


@app.command()
def hourly(
    ctx: typer.Context,
    sessions_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Session spans JSON."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="Time zone for hour buckets."),
    daily: bool = typer.Option(
        False, "--daily", help="Read daily stats rows and use their session spans."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the intensity vector as JSON."),
) -> None:
    """Print how session time distributes over the hours of the day."""
    settings: DashboardSettings = ctx.obj
    tz = _timezone(tz_name, settings)
    if daily:
        values = hourly_intensity_from_rows(_load(load_daily_stats, sessions_file), tz)
    else:
        values = hourly_intensity(_load(load_session_spans, sessions_file), tz)
    if as_json:
        typer.echo(json.dumps(values))
        return
    TimelinePrinter().print_hourly_heatmap(values)


@app.command()
def web(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind the API."),
    port: Optional[int] = typer.Option(
        None, "--port", min=1, max=65535, help="TCP port for the API."
    ),
    open_browser: bool = typer.Option(
        False,
        "--open-browser/--no-open-browser",
        help="Open the interactive API docs in your default browser.",
    ),
) -> None:
    """Serve segments and heatmaps over a local HTTP API."""
    from .server_runner import run_dashboard

    run_dashboard(host=host, port=port, settings=ctx.obj, open_browser=open_browser)


def _load(loader: Callable[[Path], T], path: Path) -> T:
    try:
        return loader(path)
    except (ValueError, ValidationError) as exc:
        typer.echo(f"Could not read {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _timezone(name: Optional[str], settings: DashboardSettings) -> tzinfo:
    if not name:
        return settings.tzinfo
    try:
        return resolve_timezone(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--tz") from exc
