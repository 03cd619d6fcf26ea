"""Sampling and health classification of rendering engine statistics."""
from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SAMPLER",
    "MonitorSettings",
    "Sampler",
    "SamplerRegistry",
    "StatsData",
    "ValueCheck",
    "classify",
    "default_registry",
]

_LOOKUP: Dict[str, Tuple[str, str]] = {
    "DEFAULT_SAMPLER": ("frame_monitor.monitor.sampler", "DEFAULT_SAMPLER"),
    "MonitorSettings": ("frame_monitor.application.configuration", "MonitorSettings"),
    "Sampler": ("frame_monitor.monitor.sampler", "Sampler"),
    "SamplerRegistry": ("frame_monitor.monitor.registry", "SamplerRegistry"),
    "StatsData": ("frame_monitor.monitor.models", "StatsData"),
    "ValueCheck": ("frame_monitor.monitor.models", "ValueCheck"),
    "classify": ("frame_monitor.monitor.models", "classify"),
    "default_registry": ("frame_monitor.monitor.registry", "default_registry"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin wrapper
    try:
        module_name, attr_name = _LOOKUP[name]
    except KeyError as exc:  # pragma: no cover - preserve AttributeError semantics
        raise AttributeError(name) from exc
    module = import_module(module_name)
    return getattr(module, attr_name)


__all__ = sorted(__all__)
