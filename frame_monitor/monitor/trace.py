"""Replay recorded snapshot traces through a sampler registry."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Union

import numpy as np
import pandas as pd

from frame_monitor.utils.logging import get_logger

from .models import StatsData, ValueCheck
from .registry import SamplerRegistry

logger = get_logger(__name__)

DRAW_CALL_SEPARATOR = "|"
_CHECKS = np.array([ValueCheck.CORRECT, ValueCheck.WARNING, ValueCheck.ERROR], dtype=object)


def classify_array(warn_threshold: float, err_threshold: float, values: Iterable[float]) -> np.ndarray:
    """Vectorised :func:`~frame_monitor.monitor.models.classify`.

    Returns an object array of :class:`ValueCheck` with the same shape as
    ``values``.
    """

    array = np.asarray(values, dtype=float)
    if warn_threshold > err_threshold:
        conditions = [array >= warn_threshold, array >= err_threshold]
    else:
        conditions = [array <= warn_threshold, array <= err_threshold]
    codes = np.select(conditions, [0, 1], default=2)
    codes = np.where(np.isfinite(array), codes, 2)
    return _CHECKS[codes]


def _split_draw_calls(value: object) -> tuple:
    if isinstance(value, str):
        return tuple(part for part in value.split(DRAW_CALL_SEPARATOR) if part)
    if isinstance(value, (list, tuple)):
        return tuple(str(part) for part in value)
    return ()


def load_trace(path: Union[str, Path]) -> List[StatsData]:
    """Load a recorded trace (``.csv``, ``.json`` or ``.jsonl``) as snapshots."""

    trace_path = Path(path)
    suffix = trace_path.suffix.lower()
    if suffix == ".csv":
        # Descriptions like "7" must not be inferred as integers.
        frame = pd.read_csv(trace_path, dtype={"draw_calls": str})
    elif suffix == ".json":
        frame = pd.read_json(trace_path, orient="records", convert_dates=False)
    elif suffix == ".jsonl":
        frame = pd.read_json(trace_path, orient="records", lines=True, convert_dates=False)
    else:
        raise ValueError(f"Unsupported trace format: {trace_path.suffix or trace_path.name}")

    if "draw_calls" in frame.columns:
        frame["draw_calls"] = frame["draw_calls"].map(_split_draw_calls)

    snapshots = [StatsData.from_mapping(record) for record in frame.to_dict(orient="records")]
    logger.info("Loaded %d snapshot(s) from %s", len(snapshots), trace_path)
    return snapshots


def evaluate_trace(registry: SamplerRegistry, snapshots: Sequence[StatsData]) -> pd.DataFrame:
    """Evaluate every sampler for every tick.

    The frame has one row per tick and, per sampler, a ``<name>`` value column
    followed by a ``<name>_check`` column.
    """

    columns = {}
    for name, sampler in registry.items():
        values = np.array([sampler.value(stats) for stats in snapshots], dtype=float)
        columns[name] = values
        columns[f"{name}_check"] = classify_array(sampler.warn_threshold, sampler.err_threshold, values)
    frame = pd.DataFrame(columns, index=pd.RangeIndex(len(snapshots), name="tick"))
    return frame


def summarize_trace(frame: pd.DataFrame, registry: SamplerRegistry) -> pd.DataFrame:
    """Count checks per sampler and report the worst one seen."""

    rows = []
    for name, sampler in registry.items():
        checks = frame[f"{name}_check"] if f"{name}_check" in frame.columns else pd.Series([], dtype=object)
        counts = checks.value_counts()
        rows.append(
            {
                "sampler": name,
                "label": sampler.label,
                "correct": int(counts.get(ValueCheck.CORRECT, 0)),
                "warning": int(counts.get(ValueCheck.WARNING, 0)),
                "error": int(counts.get(ValueCheck.ERROR, 0)),
                "worst": ValueCheck.worst(checks),
            }
        )
    return pd.DataFrame(rows, columns=["sampler", "label", "correct", "warning", "error", "worst"]).set_index(
        "sampler"
    )


__all__ = ["DRAW_CALL_SEPARATOR", "classify_array", "evaluate_trace", "load_trace", "summarize_trace"]
