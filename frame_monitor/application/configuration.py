"""Runtime configuration models and helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from frame_monitor.monitor.models import ValueCheck
from frame_monitor.monitor.registry import SamplerRegistry, build_registry
from frame_monitor.utils.logging import resolve_level

from .config_loader import create_config_loader

FAIL_ON_CHOICES = ("none", "warning", "error")


@dataclass(frozen=True)
class MonitorSettings:
    """Top level configuration for the monitor command line."""

    config_path: Optional[Path] = None
    log_level: str = "INFO"
    enabled_samplers: Optional[Tuple[str, ...]] = None
    threshold_overrides: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    include_details: bool = False
    fail_on: str = "none"

    @staticmethod
    def _to_bool(value: object, default: bool = False) -> bool:
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}

    @staticmethod
    def _to_fail_on(value: object) -> str:
        candidate = str(value or "none").strip().lower()
        if candidate not in FAIL_ON_CHOICES:
            raise ValueError(f"fail_on must be one of {', '.join(FAIL_ON_CHOICES)}, got {value!r}")
        return candidate

    @classmethod
    def from_cli_args(cls, args: object) -> "MonitorSettings":
        # Precedence: command line > environment > config file > defaults.
        config_loader = create_config_loader(getattr(args, "config", None))
        report_config = config_loader.get_report_config()

        log_level = resolve_level(
            getattr(args, "log_level", None)
            or os.environ.get("FRAME_MONITOR_LOG_LEVEL")
            or config_loader.get_log_level()
        )

        details_arg = getattr(args, "details", None)
        include_details = cls._to_bool(details_arg) if details_arg else cls._to_bool(report_config["details"])

        fail_on = cls._to_fail_on(
            getattr(args, "fail_on", None)
            or os.environ.get("FRAME_MONITOR_FAIL_ON")
            or report_config["fail_on"]
        )

        enabled = config_loader.get_enabled_samplers()
        return cls(
            config_path=config_loader.config_path,
            log_level=log_level,
            enabled_samplers=tuple(enabled) if enabled is not None else None,
            threshold_overrides=config_loader.get_threshold_overrides(),
            include_details=include_details,
            fail_on=fail_on,
        )

    def build_registry(self) -> SamplerRegistry:
        overrides: Dict[str, Mapping[str, Any]] = dict(self.threshold_overrides)
        return build_registry(self.enabled_samplers, overrides)

    def fails(self, check: ValueCheck) -> bool:
        """Whether ``check`` reaches the configured failure level."""

        if self.fail_on == "none":
            return False
        return check >= ValueCheck(self.fail_on)


__all__ = ["FAIL_ON_CHOICES", "MonitorSettings"]
