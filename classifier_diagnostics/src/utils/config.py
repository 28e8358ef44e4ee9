"""Run configuration for the diagnostics aggregator.

Settings live in a YAML file under a ``diagnostics:`` block, e.g.
``classifier_diagnostics/configs/diagnostics.yaml``::

    diagnostics:
      groups: 100
      rev: true
      tie: 1.0e-6
      rank_method: average

Loading is forgiving in the same way as the experiment configs: a missing or
unreadable file falls back to defaults with a warning, and unknown keys are
ignored. Values that parse but violate a precondition are rejected by
:meth:`DiagnosticsConfig.validate`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from classifier_diagnostics.src.exceptions import InvalidArgumentError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "diagnostics.yaml"

_RANK_METHODS = {"average", "tied", "ordinal", "first", "min", "competition", "dense"}


@dataclass
class DiagnosticsConfig:
    """Parameters of :func:`~classifier_diagnostics.src.evaluation.aggregate.aggregate`."""

    groups: int = 100
    rev: bool = True
    tie: float = 1e-6
    rank_method: str = "average"

    def validate(self) -> "DiagnosticsConfig":
        if int(self.groups) < 2:
            raise InvalidArgumentError(f"groups should be >= 2, got {self.groups}.")
        if float(self.tie) < 0:
            raise InvalidArgumentError(f"tie should be >= 0, got {self.tie}.")
        if str(self.rank_method).lower() not in _RANK_METHODS:
            raise InvalidArgumentError(
                f"rank_method should be one of {sorted(_RANK_METHODS)}, got {self.rank_method!r}."
            )
        return self


def _as_bool(x: Any, default: bool = False) -> bool:
    if x is None:
        return default
    if isinstance(x, bool):
        return x
    if isinstance(x, (int, float)):
        return bool(x)
    if isinstance(x, str):
        return x.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return default


def config_from_dict(raw: Dict[str, Any]) -> DiagnosticsConfig:
    """Build a validated config from a mapping, ignoring unknown keys."""
    valid_fields = {f.name for f in fields(DiagnosticsConfig)}
    kwargs: Dict[str, Any] = {k: v for k, v in raw.items() if k in valid_fields}

    if "groups" in kwargs:
        kwargs["groups"] = int(kwargs["groups"])
    if "tie" in kwargs:
        kwargs["tie"] = float(kwargs["tie"])
    if "rev" in kwargs:
        kwargs["rev"] = _as_bool(kwargs["rev"], default=True)
    if "rank_method" in kwargs:
        kwargs["rank_method"] = str(kwargs["rank_method"])

    return DiagnosticsConfig(**kwargs).validate()


def load_diagnostics_config(
    config_path: Union[str, Path, None] = None,
    logger: Optional[logging.Logger] = None,
) -> DiagnosticsConfig:
    """Load :class:`DiagnosticsConfig` from YAML with safe defaults."""
    logger = logger or logging.getLogger(__name__)
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not path.is_file():
        logger.warning("Diagnostics config not found at %s; using defaults.", path)
        return DiagnosticsConfig()

    try:
        cfg_dict = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse diagnostics YAML %s (%s); using defaults.", path, exc)
        return DiagnosticsConfig()

    if not isinstance(cfg_dict, dict):
        logger.warning("Diagnostics YAML %s is not a mapping; using defaults.", path)
        return DiagnosticsConfig()

    block = cfg_dict.get("diagnostics", {}) or {}
    if not isinstance(block, dict):
        logger.warning("'diagnostics' block in %s is not a mapping; using defaults.", path)
        return DiagnosticsConfig()

    config = config_from_dict(block)
    logger.debug("Loaded diagnostics config from %s: %s", path, config)
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DiagnosticsConfig",
    "config_from_dict",
    "load_diagnostics_config",
]
