"""Tests for YAML configuration and logging setup."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from classifier_diagnostics.src.exceptions import InvalidArgumentError
from classifier_diagnostics.src.utils.config import (
    DEFAULT_CONFIG_PATH,
    DiagnosticsConfig,
    config_from_dict,
    load_diagnostics_config,
)
from classifier_diagnostics.src.utils.logging_utils import configure_logging


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "diagnostics.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_shipped_defaults(self) -> None:
        assert DEFAULT_CONFIG_PATH.is_file()
        cfg = load_diagnostics_config()
        assert cfg == DiagnosticsConfig(groups=100, rev=True, tie=1e-6, rank_method="average")

    def test_values_and_string_booleans(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "diagnostics:\n  groups: 10\n  rev: 'no'\n  unknown: 3\n")
        cfg = load_diagnostics_config(path)
        assert cfg.groups == 10
        assert cfg.rev is False
        assert cfg.tie == 1e-6

    def test_missing_file_falls_back(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("diagnostics_config_test")
        with caplog.at_level(logging.WARNING, logger="diagnostics_config_test"):
            cfg = load_diagnostics_config(tmp_path / "absent.yaml", logger=logger)
        assert cfg == DiagnosticsConfig()
        assert "not found" in caplog.text

    def test_unparsable_yaml_falls_back(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = _write(tmp_path, "diagnostics: [groups: 10\n")
        logger = logging.getLogger("diagnostics_config_test")
        with caplog.at_level(logging.WARNING, logger="diagnostics_config_test"):
            cfg = load_diagnostics_config(path, logger=logger)
        assert cfg == DiagnosticsConfig()
        assert "Failed to parse" in caplog.text

    def test_empty_block_uses_defaults(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "diagnostics:\n")
        assert load_diagnostics_config(path) == DiagnosticsConfig()


class TestValidation:
    def test_groups(self) -> None:
        with pytest.raises(InvalidArgumentError, match="groups"):
            config_from_dict({"groups": 1})

    def test_tie(self) -> None:
        with pytest.raises(InvalidArgumentError, match="tie"):
            config_from_dict({"tie": -1})

    def test_rank_method(self) -> None:
        with pytest.raises(InvalidArgumentError, match="rank_method"):
            config_from_dict({"rank_method": "median"})


class TestLogging:
    def test_file_handler_in_directory(self, tmp_path: Path) -> None:
        logger = configure_logging(log_file=tmp_path, logger_name="diagnostics_logging_test")
        try:
            logger.info("hello")
            for handler in logger.handlers:
                handler.flush()
            log_file = tmp_path / "diagnostics_logging_test.log"
            assert log_file.is_file()
            assert "hello" in log_file.read_text(encoding="utf-8")
            assert logger.propagate is False
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()

    def test_reconfigure_does_not_duplicate_handlers(self) -> None:
        configure_logging(logger_name="diagnostics_logging_test2", capture_warnings=False)
        logger = configure_logging(logger_name="diagnostics_logging_test2", capture_warnings=False)
        try:
            assert len(logger.handlers) == 1
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
