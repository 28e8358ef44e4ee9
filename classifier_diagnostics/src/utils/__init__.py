"""Project-wide utilities (logging, YAML configuration)."""

from __future__ import annotations

from .config import (
    DEFAULT_CONFIG_PATH,
    DiagnosticsConfig,
    config_from_dict,
    load_diagnostics_config,
)
from .logging_utils import DEFAULT_LOG_FORMAT, PACKAGE_LOGGER_NAME, configure_logging

__all__ = [
    "configure_logging",
    "DEFAULT_LOG_FORMAT",
    "PACKAGE_LOGGER_NAME",
    "DiagnosticsConfig",
    "DEFAULT_CONFIG_PATH",
    "config_from_dict",
    "load_diagnostics_config",
]
