"""Configuration for the monitor command line."""
from __future__ import annotations

from .config_loader import ConfigLoader, create_config_loader
from .configuration import MonitorSettings

__all__ = ["ConfigLoader", "MonitorSettings", "create_config_loader"]
