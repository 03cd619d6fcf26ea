"""End-to-end tests invoking the command line entry point."""
from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from frame_monitor.main import main
from frame_monitor.monitor.samplers import MB

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("FRAME_MONITOR_CONFIG", "FRAME_MONITOR_LOG_LEVEL", "FRAME_MONITOR_FAIL_ON"):
        monkeypatch.delenv(name, raising=False)


def _snapshot(tmp_path: Path, **counters) -> Path:
    path = tmp_path / "stats.json"
    path.write_text(json.dumps(counters), encoding="utf-8")
    return path


def test_snapshot_report(tmp_path, capsys):
    path = _snapshot(tmp_path, fps=40.0, wasm_memory_usage=int(60 * MB), draw_calls=["opaque", "ui"])
    assert main(["--snapshot", str(path), "--details"]) == 0
    out = capsys.readouterr().out
    assert "Frames per second" in out
    assert "60.00  [WARN]" in out
    assert "    - opaque" in out
    assert out.strip().endswith("Overall: warning")


def test_yaml_snapshot(tmp_path, capsys):
    path = tmp_path / "stats.yaml"
    path.write_text("fps: 60\nframe_time: 16.0\n", encoding="utf-8")
    assert main(["--snapshot", str(path)]) == 0
    assert "Overall: correct" in capsys.readouterr().out


@pytest.mark.parametrize(
    "fail_on, expected",
    [("none", 0), ("warning", 1), ("error", 0)],
)
def test_fail_on_controls_exit_status(tmp_path, fail_on, expected):
    path = _snapshot(tmp_path, fps=40.0)
    assert main(["--snapshot", str(path), "--fail-on", fail_on]) == expected


def test_list_uses_config(tmp_path, capsys):
    config = tmp_path / "frame_monitor.yaml"
    config.write_text("monitor:\n  samplers: [fps, shader_count]\n", encoding="utf-8")
    assert main(["--list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("fps")
    assert "Shader count" in lines[1]


def test_trace_summary(tmp_path, capsys):
    trace = tmp_path / "trace.csv"
    trace.write_text("fps,shader_compile_count\n60,0\n20,150\n", encoding="utf-8")
    assert main(["--trace", str(trace), "--fail-on", "error"]) == 1
    out = capsys.readouterr().out
    assert "2 tick(s)" in out
    assert "shader_compile_count" in out


def test_configuration_errors_exit_with_status_two(tmp_path, capsys):
    config = tmp_path / "frame_monitor.yaml"
    config.write_text("monitor:\n  thresholds:\n    fps: {scale_divisor: 0}\n", encoding="utf-8")
    path = _snapshot(tmp_path, fps=60.0)
    assert main(["--snapshot", str(path)]) == 2
    assert "scale_divisor" in capsys.readouterr().err


def test_missing_snapshot_exits_with_status_two(tmp_path, capsys):
    assert main(["--snapshot", str(tmp_path / "missing.json")]) == 2
    assert "frame-monitor:" in capsys.readouterr().err


def test_null_counter_is_reported_as_error(tmp_path, capsys):
    path = tmp_path / "stats.json"
    path.write_text('{"fps": null}', encoding="utf-8")
    assert main(["--snapshot", str(path), "--fail-on", "error"]) == 1
    assert "nan  [ERROR]" in capsys.readouterr().out


@pytest.mark.parametrize(
    "payload",
    ['{"draw_calls": 5}', '{"fps": 1' + "0" * 400 + "}", '{"fps": "fast"}'],
)
def test_bad_snapshot_values_exit_with_status_two(tmp_path, capsys, payload):
    path = tmp_path / "stats.json"
    path.write_text(payload, encoding="utf-8")
    assert main(["--snapshot", str(path)]) == 2
    assert "frame-monitor:" in capsys.readouterr().err


@pytest.mark.parametrize(
    "text",
    ["monitor:\n  samplers: 5\n", "monitor:\n  thresholds:\n    fps: 50\n"],
)
def test_malformed_config_values_exit_with_status_two(tmp_path, capsys, text):
    (tmp_path / "frame_monitor.yaml").write_text(text, encoding="utf-8")
    assert main(["--list"]) == 2
    assert "frame_monitor.yaml" in capsys.readouterr().err


def test_config_load_is_logged(tmp_path, caplog):
    (tmp_path / "frame_monitor.yaml").write_text("monitor:\n  samplers: [fps]\n", encoding="utf-8")
    assert main(["--list", "--log-level", "INFO"]) == 0
    assert "Loaded monitor configuration from frame_monitor.yaml" in caplog.text


@pytest.mark.slow
def test_module_entry_point(tmp_path):
    path = _snapshot(tmp_path, fps=10.0)
    completed = subprocess.run(
        [sys.executable, "-m", "frame_monitor", "--snapshot", str(path), "--fail-on", "error"],
        cwd=str(REPO_ROOT),
        capture_output=True,
        text=True,
        check=False,
    )
    assert completed.returncode == 1
    assert "[ERROR]" in completed.stdout
