"""YAML configuration loader with environment variable substitution."""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from frame_monitor.utils.logging import get_logger

DEFAULT_CONFIG_PATH = Path("frame_monitor.yaml")
CONFIG_ENV_VAR = "FRAME_MONITOR_CONFIG"

logger = get_logger(__name__)


class ConfigLoader:
    """Load the monitor configuration file, supporting ``${VAR:-default}`` values."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if config_path:
            self.config_path = Path(config_path)
        elif env_path:
            self.config_path = Path(env_path)
        else:
            self.config_path = DEFAULT_CONFIG_PATH
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            logger.debug("Config file %s not found, using defaults", self.config_path)
            self._config_cache = self._get_default_config()
            return self._config_cache

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RuntimeError(f"Failed to load config file {self.config_path}: {e}") from e
        if not isinstance(config, dict):
            raise RuntimeError(f"Config file {self.config_path} must contain a mapping at the top level")

        config = self._process_env_vars(config)
        logger.info("Loaded monitor configuration from %s", self.config_path)
        self._config_cache = config
        return config

    def _get_default_config(self) -> Dict[str, Any]:
        return {
            "logging": {"level": "INFO"},
            "monitor": {"samplers": None, "thresholds": {}},
            "report": {"details": False, "fail_on": "none"},
        }

    def _process_env_vars(self, config: Any) -> Any:
        if isinstance(config, dict):
            return {k: self._process_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._process_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._replace_env_vars(config)
        else:
            return config

    def _replace_env_vars(self, text: str) -> str:
        def replace_match(match):
            var_expr = match.group(1)
            if ":-" in var_expr:
                var_name, default_value = var_expr.split(":-", 1)
                return os.environ.get(var_name, default_value)
            else:
                return os.environ.get(var_expr, "")

        # ${VAR_NAME} or ${VAR_NAME:-default_value}
        pattern = r"\$\{([^}]+)\}"
        return re.sub(pattern, replace_match, text)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.load_config().get(name) or {}
        if not isinstance(section, dict):
            raise RuntimeError(f"Section '{name}' in {self.config_path} must be a mapping")
        return section

    def get_log_level(self) -> str:
        return str(self._section("logging").get("level", "INFO"))

    def get_enabled_samplers(self) -> Optional[List[str]]:
        samplers = self._section("monitor").get("samplers")
        if samplers is None:
            return None
        if isinstance(samplers, str):
            return [name.strip() for name in samplers.split(",") if name.strip()]
        if not isinstance(samplers, list):
            raise RuntimeError(f"'monitor.samplers' in {self.config_path} must be a list of sampler names")
        return [str(name) for name in samplers]

    def get_threshold_overrides(self) -> Dict[str, Mapping[str, Any]]:
        thresholds = self._section("monitor").get("thresholds") or {}
        if not isinstance(thresholds, dict):
            raise RuntimeError(f"'monitor.thresholds' in {self.config_path} must be a mapping")
        overrides: Dict[str, Mapping[str, Any]] = {}
        for name, values in thresholds.items():
            if values is not None and not isinstance(values, dict):
                raise RuntimeError(f"'monitor.thresholds.{name}' in {self.config_path} must be a mapping")
            overrides[str(name)] = dict(values or {})
        return overrides

    def get_report_config(self) -> Dict[str, Any]:
        report = self._section("report")
        return {
            "details": report.get("details", False),
            "fail_on": report.get("fail_on", "none"),
        }


def create_config_loader(config_path: Optional[Union[str, Path]] = None) -> ConfigLoader:
    return ConfigLoader(config_path)
