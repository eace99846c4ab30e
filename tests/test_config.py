from __future__ import annotations

from pathlib import Path

import pytest

from worklens.config import DashboardSettings, load_settings, resolve_timezone


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.toml")
    assert settings == DashboardSettings()
    assert settings.heatmap_days == 30


def test_reads_dashboard_table(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text(
        '[dashboard]\nheatmap_days = 14\ntimezone = "Europe/Berlin"\nport = 9000\n',
        encoding="utf-8",
    )
    settings = load_settings(path)

    assert settings.heatmap_days == 14
    assert settings.port == 9000
    assert settings.tzinfo == resolve_timezone("Europe/Berlin")


def test_unknown_key_rejected(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text("[dashboard]\nfold_minutes = 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="fold_minutes"):
        load_settings(path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text("[dashboard\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid settings file"):
        load_settings(path)


@pytest.mark.parametrize(
    "values",
    [{"heatmap_days": 0}, {"port": 70000}, {"timezone": "Mars/Olympus"}, {"top_apps_limit": -1}],
)
def test_invalid_values(values: dict) -> None:
    with pytest.raises(ValueError):
        DashboardSettings.from_mapping(values)
