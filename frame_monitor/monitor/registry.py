"""Sampler registry consumed by the monitor overlay."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from frame_monitor.utils.logging import get_logger

from .models import SamplerConfigError
from .sampler import Sampler
from .samplers import PREDEFINED_SAMPLERS

logger = get_logger(__name__)


def _optional_float(value: object) -> Optional[float]:
    return None if value is None else float(value)  # type: ignore[arg-type]


# Fields that may be overridden from configuration and how to coerce them.
OVERRIDABLE_FIELDS: Mapping[str, Callable[[object], Any]] = {
    "label": str,
    "warn_threshold": float,
    "err_threshold": float,
    "scale_divisor": float,
    "min_display": _optional_float,
    "max_display": _optional_float,
    "precision": int,
}


class SamplerRegistry:
    """Ordered name -> sampler table.

    Once :meth:`freeze` is called the registry is read-only and may be shared
    between threads.
    """

    def __init__(self, samplers: Optional[Mapping[str, Sampler]] = None) -> None:
        self._registry: Dict[str, Sampler] = {}
        self._frozen = False
        for name, sampler in (samplers or {}).items():
            self.register(name, sampler)

    def register(self, name: str, sampler: Sampler) -> None:
        if self._frozen:
            raise RuntimeError("Sampler registry is frozen")
        if name in self._registry:
            raise ValueError(f"Sampler {name} already registered")
        if not isinstance(sampler, Sampler):
            raise TypeError(f"Sampler {name} must be a Sampler, got {type(sampler).__name__}")
        self._registry[name] = sampler
        logger.debug("Registered sampler %s (%s)", name, sampler.label)

    def freeze(self) -> "SamplerRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Sampler:
        return self._registry[name]

    def all(self) -> List[Sampler]:
        return list(self._registry.values())

    def names(self) -> Iterable[str]:
        return self._registry.keys()

    def items(self) -> Iterable[Tuple[str, Sampler]]:
        return self._registry.items()

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def __len__(self) -> int:
        return len(self._registry)


def default_registry() -> SamplerRegistry:
    """Frozen registry holding every predefined sampler."""

    return SamplerRegistry(PREDEFINED_SAMPLERS).freeze()


def apply_overrides(name: str, sampler: Sampler, overrides: Mapping[str, object]) -> Sampler:
    """Return ``sampler`` with configuration overrides applied."""

    unknown = sorted(set(overrides) - set(OVERRIDABLE_FIELDS))
    if unknown:
        raise SamplerConfigError(f"Unknown override field(s) for sampler {name}: {', '.join(unknown)}")
    coerced: Dict[str, Any] = {}
    for field_name, raw_value in overrides.items():
        try:
            coerced[field_name] = OVERRIDABLE_FIELDS[field_name](raw_value)
        except (TypeError, ValueError) as exc:
            raise SamplerConfigError(f"Invalid value for {name}.{field_name}: {raw_value!r}") from exc
    return sampler.replace(**coerced)


def build_registry(
    enabled: Optional[Iterable[str]] = None,
    overrides: Optional[Mapping[str, Mapping[str, object]]] = None,
    base: Mapping[str, Sampler] = PREDEFINED_SAMPLERS,
) -> SamplerRegistry:
    """Select samplers from ``base`` and apply per-sampler overrides.

    ``enabled`` keeps its own order; ``None`` keeps every sampler of ``base``.
    """

    names = list(base) if enabled is None else list(enabled)
    overrides = overrides or {}

    unknown = sorted((set(names) | set(overrides)) - set(base))
    if unknown:
        raise SamplerConfigError(f"Unknown sampler(s): {', '.join(unknown)}")
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise SamplerConfigError(f"Sampler(s) enabled more than once: {', '.join(duplicates)}")
    ignored = sorted(set(overrides) - set(names))
    if ignored:
        logger.warning("Ignoring overrides for disabled sampler(s): %s", ", ".join(ignored))

    registry = SamplerRegistry()
    for name in names:
        sampler = base[name]
        if name in overrides:
            sampler = apply_overrides(name, sampler, overrides[name] or {})
            logger.info("Applied overrides to sampler %s: %s", name, dict(overrides[name] or {}))
        registry.register(name, sampler)

    logger.debug("Built sampler registry with %d sampler(s)", len(registry))
    return registry.freeze()


__all__ = [
    "OVERRIDABLE_FIELDS",
    "SamplerRegistry",
    "apply_overrides",
    "build_registry",
    "default_registry",
]
