"""Configuration models and helpers for the dashboard core."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from datetime import tzinfo
from pathlib import Path
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .paths import get_config_path

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DashboardSettings:
    """Runtime configuration for reports, heatmaps and the local API."""

    heatmap_days: int = 30
    timezone: str = "UTC"
    top_apps_limit: int = 8
    window_title_limit: int = 10
    host: str = "127.0.0.1"
    port: int = 8765

    def __post_init__(self) -> None:
        if self.heatmap_days < 1:
            raise ValueError("heatmap_days must be at least 1")
        if self.top_apps_limit < 0 or self.window_title_limit < 0:
            raise ValueError("limits must not be negative")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port out of range: {self.port}")
        resolve_timezone(self.timezone)

    @property
    def tzinfo(self) -> tzinfo:
        return resolve_timezone(self.timezone)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DashboardSettings":
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")
        return cls(**dict(values))


def resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {name!r}") from exc


def load_settings(path: Optional[Path] = None) -> DashboardSettings:
    """Read the ``[dashboard]`` table of a TOML settings file.

    A missing file yields the defaults.
    """
    settings_path = Path(path) if path else get_config_path()
    if not settings_path.exists():
        logger.debug("No settings file at %s; using defaults.", settings_path)
        return DashboardSettings()
    with settings_path.open("rb") as handle:
        try:
            document = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid settings file {settings_path}: {exc}") from exc
    logger.info("Loaded settings from %s", settings_path)
    return DashboardSettings.from_mapping(document.get("dashboard", {}))
