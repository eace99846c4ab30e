"""Utilities to normalize application names and window titles."""

from __future__ import annotations

import re
from typing import Optional

_BROWSER_SUFFIXES: dict[str, tuple[str, ...]] = {
    "msedge.exe": (" - Microsoft Edge", " - Personal - Microsoft Edge"),
    "chrome.exe": (" - Google Chrome",),
    "firefox.exe": (" - Mozilla Firefox",),
    "brave.exe": (" - Brave",),
    "opera.exe": (" - Opera",),
}

CODE_EDITORS: frozenset[str] = frozenset(
    {
        # VS Code and forks
        "code", "code-insiders", "cursor", "vscodium", "codium",
        # JetBrains
        "idea", "idea64", "goland", "goland64", "pycharm", "pycharm64",
        "webstorm", "webstorm64", "phpstorm", "phpstorm64", "clion", "clion64",
        "rider", "rider64", "datagrip", "datagrip64", "rubymine", "rubymine64",
        "rustrover", "rustrover64", "fleet",
        "devenv", "zed", "studio", "studio64",
        "sublime_text", "notepad++", "atom",
        "vim", "gvim", "nvim", "emacs",
    }
)


def normalize_app_name(app_name: Optional[str]) -> str:
    """Lower-case an app identifier and drop any directory and ``.exe``."""
    if not app_name:
        return ""
    value = app_name.strip().replace("\\", "/").rsplit("/", 1)[-1].lower()
    if value.endswith(".exe"):
        value = value[: -len(".exe")]
    return value


def is_code_editor(app_name: Optional[str]) -> bool:
    return normalize_app_name(app_name) in CODE_EDITORS


def normalize_window_title(app_name: Optional[str], window_title: Optional[str]) -> Optional[str]:
    """Remove common browser suffixes to surface tab names."""
    if not window_title:
        return None
    normalized = window_title.strip()
    if not app_name:
        return normalized or None

    suffixes = _BROWSER_SUFFIXES.get(normalize_app_name(app_name) + ".exe")
    if suffixes:
        for suffix in suffixes:
            if normalized.endswith(suffix):
                normalized = normalized[: -len(suffix)].rstrip(" -")
                break

    normalized = _strip_tab_count(normalized)
    normalized = re.sub(r"\s{2,}", " ", normalized).strip()
    return normalized or None


_EXTRA_TAB_COUNT_PATTERN = re.compile(r"\s+and\s+\d+\s+more\s+pages?", re.IGNORECASE)


def _strip_tab_count(value: str) -> str:
    cleaned = _EXTRA_TAB_COUNT_PATTERN.sub("", value)
    return cleaned.strip(" -|")
