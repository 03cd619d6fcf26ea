"""Per-tick readings and a plain-text rendering of them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import StatsData, ValueCheck, classify
from .registry import SamplerRegistry

_CHECK_MARKERS = {
    ValueCheck.CORRECT: "OK",
    ValueCheck.WARNING: "WARN",
    ValueCheck.ERROR: "ERROR",
}


@dataclass(frozen=True)
class SampleReading:
    """Everything the overlay needs to draw one sampler for one tick."""

    name: str
    label: str
    value: float
    check: ValueCheck
    text: str
    min_display: Optional[float] = None
    max_display: Optional[float] = None
    precision: int = 0
    details: Optional[Tuple[str, ...]] = None


def sample_all(
    registry: SamplerRegistry,
    stats: StatsData,
    include_details: bool = False,
) -> List[SampleReading]:
    """Evaluate every registered sampler against ``stats`` in registry order."""

    readings: List[SampleReading] = []
    for name, sampler in registry.items():
        value = sampler.value(stats)
        min_display, max_display = sampler.display_bounds()
        readings.append(
            SampleReading(
                name=name,
                label=sampler.label,
                value=value,
                check=classify(sampler.warn_threshold, sampler.err_threshold, value),
                text=sampler.format_value(value),
                min_display=min_display,
                max_display=max_display,
                precision=sampler.precision,
                details=sampler.details(stats) if include_details else None,
            )
        )
    return readings


def overall_check(readings: Iterable[SampleReading]) -> ValueCheck:
    return ValueCheck.worst(reading.check for reading in readings)


def render_report(readings: Sequence[SampleReading]) -> str:
    """Render readings as an aligned text table with optional detail lines."""

    if not readings:
        return "No samplers registered"

    label_width = max(len(reading.label) for reading in readings)
    value_width = max(len(reading.text) for reading in readings)
    lines = []
    for reading in readings:
        marker = _CHECK_MARKERS[reading.check]
        lines.append(f"{reading.label:<{label_width}}  {reading.text:>{value_width}}  [{marker}]")
        for detail in reading.details or ():
            lines.append(f"    - {detail}")
    lines.append(f"Overall: {overall_check(readings).value}")
    return "\n".join(lines)


__all__ = ["SampleReading", "overall_check", "render_report", "sample_all"]
