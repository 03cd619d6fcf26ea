"""Sampler descriptor used by the performance monitor overlay.

A sampler describes how to display one performance metric, like the current
FPS or the number of draw calls per frame: where to read the raw value in a
:class:`~frame_monitor.monitor.models.StatsData` snapshot, how to scale it,
which plot bounds and precision to use, and which thresholds turn it into a
warning or an error.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from frame_monitor.utils.logging import get_logger

from .models import SamplerConfigError, StatsData, ValueCheck, classify

Extractor = Callable[[StatsData], float]
DetailExtractor = Callable[[StatsData], Sequence[str]]

logger = get_logger(__name__)


def _zero(_stats: StatsData) -> float:
    return 0.0


@dataclass(frozen=True)
class Sampler:
    """Immutable description of a single monitored metric."""

    #: Label displayed in the monitor panel.
    label: str = "Unlabeled"
    #: Raw value of the metric for a snapshot.
    extract: Extractor = _zero
    #: Optional breakdown shown in the details view.
    detail_extractor: Optional[DetailExtractor] = None
    #: Crossing this threshold draws the graph in the warning color.
    warn_threshold: float = 0.0
    #: Crossing this threshold draws the graph in the error color.
    err_threshold: float = 0.0
    #: The raw value is divided by this number before display and checks.
    scale_divisor: float = 1.0
    #: Expected plot range; the overlay clamps values outside of it.
    min_display: Optional[float] = None
    max_display: Optional[float] = None
    #: Digits after the decimal point shown in the monitor panel.
    precision: int = 0

    def __post_init__(self) -> None:
        if not self.label:
            raise SamplerConfigError("sampler label must not be empty")
        if not callable(self.extract):
            raise SamplerConfigError(f"{self.label}: extract must be callable")
        if self.detail_extractor is not None and not callable(self.detail_extractor):
            raise SamplerConfigError(f"{self.label}: detail_extractor must be callable")
        if not math.isfinite(self.scale_divisor) or self.scale_divisor == 0:
            raise SamplerConfigError(
                f"{self.label}: scale_divisor must be a finite non-zero number, got {self.scale_divisor!r}"
            )
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 0:
            raise SamplerConfigError(
                f"{self.label}: precision must be a non-negative integer, got {self.precision!r}"
            )

    def __repr__(self) -> str:
        return (
            f"Sampler(label={self.label!r}, warn_threshold={self.warn_threshold!r}, "
            f"err_threshold={self.err_threshold!r}, scale_divisor={self.scale_divisor!r})"
        )

    def replace(self, **overrides: Any) -> "Sampler":
        """Return a copy of this sampler with the given fields overridden."""

        return dataclasses.replace(self, **overrides)

    def value(self, stats: StatsData) -> float:
        """The current sampler value."""

        raw_value = float(self.extract(stats))
        value = raw_value / self.scale_divisor
        if not math.isfinite(value):
            logger.debug("Sampler %r produced non-finite value %r", self.label, value)
        return value

    def check(self, stats: StatsData) -> ValueCheck:
        """Classify the current value against the warning and error thresholds."""

        return classify(self.warn_threshold, self.err_threshold, self.value(stats))

    def details(self, stats: StatsData) -> Optional[Tuple[str, ...]]:
        if self.detail_extractor is None:
            return None
        return tuple(self.detail_extractor(stats))

    def display_bounds(self) -> Tuple[Optional[float], Optional[float]]:
        return self.min_display, self.max_display

    def min_size(self) -> Optional[float]:
        """Minimum extent the sampler should occupy in the monitor plot."""

        return self.warn_threshold

    def format_value(self, value: float) -> str:
        if not math.isfinite(value):
            return str(value)
        return f"{value:.{self.precision}f}"


DEFAULT_SAMPLER = Sampler()


__all__ = ["DEFAULT_SAMPLER", "DetailExtractor", "Extractor", "Sampler"]
