"""Data models shared by the sampler layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterable, Mapping, Tuple


class SamplerConfigError(ValueError):
    """Raised when a sampler or sampler table is configured inconsistently."""


class ValueCheck(Enum):
    """Health classification of a sampled value.

    Members are ordered by severity, ``CORRECT < WARNING < ERROR``, so checks
    can be compared and combined with :meth:`worst`.
    """

    CORRECT = "correct"
    WARNING = "warning"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ValueCheck):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ValueCheck):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ValueCheck):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ValueCheck):
            return NotImplemented
        return self.severity >= other.severity

    @classmethod
    def worst(cls, checks: Iterable["ValueCheck"]) -> "ValueCheck":
        """Return the most severe check, ``CORRECT`` for an empty iterable."""

        return max(checks, default=cls.CORRECT)

    @classmethod
    def from_threshold(cls, warn_threshold: float, err_threshold: float, value: float) -> "ValueCheck":
        """Alias of :func:`classify` kept on the enumeration for discoverability."""

        return classify(warn_threshold, err_threshold, value)


_SEVERITY = {ValueCheck.CORRECT: 0, ValueCheck.WARNING: 1, ValueCheck.ERROR: 2}


def classify(warn_threshold: float, err_threshold: float, value: float) -> ValueCheck:
    """Compare ``value`` with the warning and error thresholds.

    The order of the two thresholds selects the direction. When the warning
    threshold is above the error threshold, higher values are healthier (frames
    per second). Otherwise lower values are healthier (memory, latency) and
    equal thresholds leave no warning band. Non-finite values are always
    ``ERROR``.
    """

    if not math.isfinite(value):
        return ValueCheck.ERROR
    if warn_threshold > err_threshold:
        if value >= warn_threshold:
            return ValueCheck.CORRECT
        if value >= err_threshold:
            return ValueCheck.WARNING
        return ValueCheck.ERROR
    if value <= warn_threshold:
        return ValueCheck.CORRECT
    if value <= err_threshold:
        return ValueCheck.WARNING
    return ValueCheck.ERROR


@dataclass(frozen=True)
class StatsData:
    """Engine counters captured for a single frame or sampling tick."""

    fps: float = 0.0
    frame_time: float = 0.0
    wasm_memory_usage: int = 0
    gpu_memory_usage: int = 0
    draw_calls: Tuple[str, ...] = field(default_factory=tuple)
    buffer_count: int = 0
    data_upload_count: int = 0
    data_upload_size: int = 0
    sprite_system_count: int = 0
    sprite_count: int = 0
    symbol_count: int = 0
    shader_count: int = 0
    shader_compile_count: int = 0

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "StatsData":
        """Build a snapshot from a decoded JSON/YAML payload.

        Unknown keys are ignored and missing counters keep their zero default.
        A ``null`` counter becomes NaN so it classifies as an error. Values that
        cannot be read as numbers raise :class:`ValueError` naming the field.
        """

        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in payload.items() if key in known}
        for name, raw_value in values.items():
            if name != "draw_calls":
                values[name] = _to_counter(name, raw_value)
        draw_calls = values.get("draw_calls")
        if draw_calls is None:
            values.pop("draw_calls", None)
        elif isinstance(draw_calls, str):
            values["draw_calls"] = (draw_calls,)
        elif isinstance(draw_calls, (list, tuple)):
            values["draw_calls"] = tuple(str(call) for call in draw_calls)
        else:
            raise ValueError(f"draw_calls must be a list of descriptions, got {draw_calls!r}")
        return cls(**values)


def _to_counter(name: str, value: Any) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


__all__ = ["SamplerConfigError", "StatsData", "ValueCheck", "classify"]
