"""Logging configuration for diagnostics runs.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by whoever drives a run (a notebook, a batch job, the test suite)
through :func:`configure_logging`.

Design goals
------------
- Stable logs in both scripts and notebooks (no duplicate handlers).
- Optional file logging so a run can be audited afterwards.
- No implicit file creation unless ``log_file`` is provided.

Used by
-------
- ``classifier_diagnostics/src/utils/config.py`` (config fallbacks are logged)
- ``classifier_diagnostics/src/evaluation/aggregate.py``
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"

PACKAGE_LOGGER_NAME = "classifier_diagnostics"


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    logger_name: Optional[str] = PACKAGE_LOGGER_NAME,
    *,
    force: bool = True,
    capture_warnings: bool = True,
) -> logging.Logger:
    """Configure and return a logger.

    Parameters
    ----------
    level:
        Log level (default: INFO).
    log_file:
        Optional path to a log file. If a directory is provided, the log file
        name defaults to ``<logger_name or root>.log``.
    logger_name:
        Name of the logger to configure. Defaults to the package logger so
        that every ``classifier_diagnostics.*`` module logger inherits the
        handlers; ``None`` configures the root logger.
    force:
        If True (default), remove existing handlers to prevent duplicate logs.
    capture_warnings:
        If True (default), route Python warnings through logging.

    Returns
    -------
    logging.Logger
        Configured logger.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    console_handler = logging.StreamHandler(stream=sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)

        # A directory (existing, or spelled with a trailing separator) gets a
        # generated file name.
        if (log_path.exists() and log_path.is_dir()) or str(log_file).endswith(("/", "\\")):
            name = (logger_name or "root").replace("/", "_")
            log_path = log_path / f"{name}.log"

        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Avoid propagating to the root logger to prevent duplicates.
    logger.propagate = False

    if capture_warnings:
        logging.captureWarnings(True)

    return logger


__all__ = ["configure_logging", "DEFAULT_LOG_FORMAT", "PACKAGE_LOGGER_NAME"]
