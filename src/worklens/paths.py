"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "WorkLens"
APP_AUTHOR = "WorkLens"


def _dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)


def get_config_path() -> Path:
    """Return the default location of the settings file (not created)."""
    return Path(_dirs().user_config_path) / "settings.toml"


def get_data_dir() -> Path:
    """Return the base directory for logs and other local output."""
    path = Path(_dirs().user_data_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_path() -> Path:
    return get_data_dir() / "dashboard.log"
