from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from worklens.cli import app

BASE_MS = 1_704_099_600_000  # 2024-01-01 09:00 UTC

runner = CliRunner()


@pytest.fixture
def config_args(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "settings.toml")]


def _write(tmp_path: Path, name: str, payload: object) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_segments_json(tmp_path: Path, config_args: list[str]) -> None:
    events = _write(
        tmp_path,
        "events.json",
        [
            {"timestamp": BASE_MS, "app_name": "Code.exe", "duration": 60},
            {"timestamp": BASE_MS + 12 * 60_000, "app_name": "Code.exe", "duration": 0},
        ],
    )
    result = runner.invoke(app, [*config_args, "segments", str(events), "--json"])

    assert result.exit_code == 0, result.output
    kinds = [segment["kind"] for segment in json.loads(result.stdout)]
    assert kinds == ["deep_work", "break", "deep_work"]


def test_segments_table(tmp_path: Path, config_args: list[str]) -> None:
    events = _write(tmp_path, "events.json", [{"timestamp": BASE_MS, "app_name": "Code.exe", "duration": 60}])
    result = runner.invoke(app, [*config_args, "segments", str(events), "--tz", "UTC"])

    assert result.exit_code == 0, result.output
    assert "09:00-09:01" in result.stdout


def test_segments_invalid_payload(tmp_path: Path, config_args: list[str]) -> None:
    events = _write(tmp_path, "events.json", [{"app_name": "Code.exe"}])
    result = runner.invoke(app, [*config_args, "segments", str(events)])
    assert result.exit_code == 1


def test_heatmap_json(tmp_path: Path, config_args: list[str]) -> None:
    stats = _write(
        tmp_path,
        "stats.json",
        [{"date": "2024-01-01", "total_diffs": 10}, {"date": "2024-01-02", "total_diffs": 5}],
    )
    result = runner.invoke(
        app, [*config_args, "heatmap", str(stats), "--end", "2024-01-02", "--days", "2", "--json"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [1.0, 0.5]


def test_heatmap_rejects_bad_date(tmp_path: Path, config_args: list[str]) -> None:
    stats = _write(tmp_path, "stats.json", [])
    result = runner.invoke(app, [*config_args, "heatmap", str(stats), "--end", "yesterday"])
    assert result.exit_code != 0


def test_hourly_json(tmp_path: Path, config_args: list[str]) -> None:
    spans = _write(
        tmp_path,
        "sessions.json",
        {"sessions": [{"start_time": BASE_MS, "end_time": BASE_MS + 30 * 60_000}]},
    )
    result = runner.invoke(app, [*config_args, "hourly", str(spans), "--json"])

    assert result.exit_code == 0, result.output
    values = json.loads(result.stdout)
    assert len(values) == 24
    assert values[9] == 1.0


def test_hourly_from_daily_rows(tmp_path: Path, config_args: list[str]) -> None:
    stats = _write(
        tmp_path,
        "stats.json",
        {
            "rows": [
                {
                    "date": "2024-01-01",
                    "total_diffs": 2,
                    "sessions": [{"start_time": BASE_MS, "end_time": BASE_MS + 120 * 60_000}],
                }
            ]
        },
    )
    result = runner.invoke(app, [*config_args, "hourly", str(stats), "--daily", "--json"])

    assert result.exit_code == 0, result.output
    values = json.loads(result.stdout)
    assert values[9] == 1.0
    assert values[10] == 1.0
    assert values[11] == 0.0
