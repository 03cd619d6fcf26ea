"""Tests for replaying recorded snapshot traces."""
from __future__ import annotations

import json
import math

import pytest

pytest.importorskip("numpy")
pytest.importorskip("pandas")

from frame_monitor.monitor.models import StatsData, ValueCheck, classify
from frame_monitor.monitor.registry import build_registry
from frame_monitor.monitor.samplers import MB
from frame_monitor.monitor.trace import classify_array, evaluate_trace, load_trace, summarize_trace


@pytest.mark.parametrize("warn, err", [(55.0, 25.0), (50.0, 100.0), (10.0, 10.0), (0.0, 0.0)])
def test_classify_array_matches_scalar_classification(warn, err):
    values = [-1.0, 0.0, 10.0, 24.999, 25.0, 40.0, 50.0, 55.0, 60.0, 100.0, 100.001, math.nan, math.inf, -math.inf]
    expected = [classify(warn, err, value) for value in values]
    assert list(classify_array(warn, err, values)) == expected


def test_classify_array_handles_empty_input():
    assert classify_array(55.0, 25.0, []).shape == (0,)


def test_evaluate_trace_produces_value_and_check_columns():
    snapshots = [StatsData(fps=60.0), StatsData(fps=40.0), StatsData(fps=10.0)]
    frame = evaluate_trace(build_registry(["fps", "frame_time"]), snapshots)
    assert list(frame.columns) == ["fps", "fps_check", "frame_time", "frame_time_check"]
    assert frame.index.name == "tick"
    assert frame["fps"].tolist() == [60.0, 40.0, 10.0]
    assert frame["fps_check"].tolist() == [ValueCheck.CORRECT, ValueCheck.WARNING, ValueCheck.ERROR]


def test_summarize_trace_counts_checks():
    snapshots = [StatsData(fps=60.0), StatsData(fps=40.0), StatsData(fps=45.0), StatsData(fps=10.0)]
    registry = build_registry(["fps", "buffer_count"])
    summary = summarize_trace(evaluate_trace(registry, snapshots), registry)
    assert summary.loc["fps", "correct"] == 1
    assert summary.loc["fps", "warning"] == 2
    assert summary.loc["fps", "error"] == 1
    assert summary.loc["fps", "worst"] is ValueCheck.ERROR
    assert summary.loc["buffer_count", "worst"] is ValueCheck.CORRECT
    assert summary.loc["buffer_count", "label"] == "Buffer count"


def test_summarize_empty_trace():
    registry = build_registry(["fps"])
    summary = summarize_trace(evaluate_trace(registry, []), registry)
    assert summary.loc["fps", "correct"] == 0
    assert summary.loc["fps", "worst"] is ValueCheck.CORRECT


def test_load_trace_from_csv(tmp_path):
    path = tmp_path / "trace.csv"
    path.write_text(
        "tick,fps,frame_time,wasm_memory_usage,draw_calls\n"
        f"0,60,16.6,{int(20 * MB)},opaque|ui\n"
        f"1,30,33.3,{int(70 * MB)},\n",
        encoding="utf-8",
    )
    snapshots = load_trace(path)
    assert len(snapshots) == 2
    assert snapshots[0].fps == 60
    assert snapshots[0].draw_calls == ("opaque", "ui")
    assert snapshots[1].draw_calls == ()

    frame = evaluate_trace(build_registry(["wasm_memory_usage", "draw_call_count"]), snapshots)
    assert frame["wasm_memory_usage"].tolist() == [20.0, 70.0]
    assert frame["wasm_memory_usage_check"].tolist() == [ValueCheck.CORRECT, ValueCheck.WARNING]
    assert frame["draw_call_count"].tolist() == [2.0, 0.0]


def test_load_trace_from_json_and_jsonl(tmp_path):
    records = [
        {"fps": 58.0, "frame_time": 17.2, "draw_calls": ["a", "b", "c"]},
        {"fps": 20.0, "shader_compile_count": 12},
    ]
    json_path = tmp_path / "trace.json"
    json_path.write_text(json.dumps(records), encoding="utf-8")
    jsonl_path = tmp_path / "trace.jsonl"
    jsonl_path.write_text("\n".join(json.dumps(record) for record in records), encoding="utf-8")

    for path in (json_path, jsonl_path):
        snapshots = load_trace(path)
        assert [stats.fps for stats in snapshots] == [58.0, 20.0]
        assert snapshots[0].draw_calls == ("a", "b", "c")
        assert snapshots[0].frame_time == 17.2


def test_missing_counters_yield_error_checks(tmp_path):
    path = tmp_path / "trace.csv"
    path.write_text("fps,frame_time\n60,16\n,16\n", encoding="utf-8")
    frame = evaluate_trace(build_registry(["fps"]), load_trace(path))
    assert frame["fps_check"].tolist() == [ValueCheck.CORRECT, ValueCheck.ERROR]


def test_load_trace_rejects_unknown_format(tmp_path):
    path = tmp_path / "trace.parquet"
    path.write_bytes(b"")
    with pytest.raises(ValueError):
        load_trace(path)


def test_numeric_draw_call_descriptions_survive_csv_loading(tmp_path):
    path = tmp_path / "trace.csv"
    path.write_text("fps,draw_calls\n60,7\n58,12|3\n", encoding="utf-8")
    snapshots = load_trace(path)
    assert snapshots[0].draw_calls == ("7",)
    assert snapshots[1].draw_calls == ("12", "3")
