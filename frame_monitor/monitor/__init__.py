"""Performance monitor samplers and their threshold classification."""
from __future__ import annotations

from .models import SamplerConfigError, StatsData, ValueCheck, classify
from .registry import SamplerRegistry, build_registry, default_registry
from .report import SampleReading, overall_check, render_report, sample_all
from .sampler import DEFAULT_SAMPLER, Sampler
from .samplers import PREDEFINED_SAMPLERS

__all__ = [
    "DEFAULT_SAMPLER",
    "PREDEFINED_SAMPLERS",
    "SampleReading",
    "Sampler",
    "SamplerConfigError",
    "SamplerRegistry",
    "StatsData",
    "ValueCheck",
    "build_registry",
    "classify",
    "default_registry",
    "overall_check",
    "render_report",
    "sample_all",
]
