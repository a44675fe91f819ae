"""Unit tests for rootseek logging configuration."""

from __future__ import annotations

import json
import logging
import math
import os
import sys
from logging.handlers import RotatingFileHandler
from unittest import mock

import pytest

import rootseek
from rootseek import BracketNotFound, Solver
from rootseek.logging_config import LOGGER_NAME, JsonFormatter, _get_level, _get_logger


def _flush() -> None:
    for handler in _get_logger().handlers:
        handler.flush()


class TestSilentByDefault:
    """The library produces no output until logging is enabled."""

    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_failed_solve_is_silent(self, capfd):
        """Even the bracket-search warning stays quiet without a handler."""
        with pytest.raises(BracketNotFound):
            Solver(max_bracket_steps=3).solve(lambda x: x * x + 1.0, 0.0)

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestSolverLogging:
    """What the solver writes once logging is on."""

    def test_debug_reports_iterations(self, capfd):
        rootseek.enable_console_logging(level="DEBUG")
        Solver(1e-10).solve(lambda x: math.exp(x) - 10.0, 0.0)

        err = capfd.readouterr().err
        assert "Bracket [" in err
        assert "Iteration 1:" in err
        assert "Converged to x=" in err

    def test_info_reports_root_only(self, capfd):
        rootseek.enable_console_logging(level="INFO")
        Solver(1e-10).solve(lambda x: x - 3.0, 0.0)

        err = capfd.readouterr().err
        assert "Root x=" in err
        assert "Iteration" not in err

    def test_warning_on_bracket_failure(self, capfd):
        rootseek.enable_console_logging(level="WARNING")
        with pytest.raises(BracketNotFound):
            Solver(max_bracket_steps=3).solve(lambda x: x * x + 1.0, 0.0)

        assert "No sign change found" in capfd.readouterr().err

    def test_module_level_filters_iterations(self, capfd):
        rootseek.enable_console_logging(level="DEBUG")
        rootseek.set_module_level("numerics.root_finding", "INFO")
        Solver(1e-10).solve(lambda x: math.exp(x) - 10.0, 0.0)

        err = capfd.readouterr().err
        assert "Bracket [" in err
        assert "Iteration 1:" not in err


class TestEnableConsoleLogging:
    def test_adds_stream_handler_and_level(self):
        handler = rootseek.enable_console_logging(level="DEBUG")
        logger = _get_logger()
        assert handler in logger.handlers
        assert logger.level == logging.DEBUG

    def test_custom_format(self, capfd):
        rootseek.enable_console_logging(level="INFO", format="[RS] %(message)s")
        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")
        assert "[RS] hello" in capfd.readouterr().err


class TestEnableFileLogging:
    def test_creates_parent_directories_and_writes(self, tmp_path):
        log_file = tmp_path / "nested" / "solver.log"
        handler = rootseek.enable_file_logging(log_file, max_bytes=1024, backup_count=3)

        logging.getLogger(f"{LOGGER_NAME}.test").info("file message")
        _flush()

        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 3
        assert "file message" in log_file.read_text()


class TestJsonLogging:
    def test_console_outputs_valid_json(self, capfd):
        rootseek.enable_json_logging(level="INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").info("json test")

        data = json.loads(capfd.readouterr().err.strip())
        assert data["message"] == "json test"
        assert data["level"] == "INFO"
        assert data["logger"] == f"{LOGGER_NAME}.test"
        assert "timestamp" in data

    def test_file_outputs_valid_json(self, tmp_path):
        log_file = tmp_path / "solver.json"
        rootseek.enable_json_file_logging(log_file, level="INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").info("json file test")
        _flush()

        data = json.loads(log_file.read_text().strip())
        assert data["message"] == "json file test"

    def test_formatter_includes_exception(self):
        formatter = JsonFormatter()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="test.logger",
            level=logging.ERROR,
            pathname="test.py",
            lineno=1,
            msg="failed",
            args=(),
            exc_info=exc_info,
        )

        data = json.loads(formatter.format(record))
        assert data["logger"] == "test.logger"
        assert "RuntimeError" in data["exception"]


class TestConfigureFromEnv:
    def test_level_from_env(self):
        with mock.patch.dict(os.environ, {"ROOTSEEK_LOGGING": "DEBUG"}, clear=False):
            rootseek.configure_from_env()
        assert _get_logger().level == logging.DEBUG

    def test_file_from_env(self, tmp_path):
        log_file = tmp_path / "env.log"
        with mock.patch.dict(
            os.environ,
            {"ROOTSEEK_LOGGING": "INFO", "ROOTSEEK_LOG_FILE": str(log_file)},
            clear=False,
        ):
            rootseek.configure_from_env()

        assert any(isinstance(h, RotatingFileHandler) for h in _get_logger().handlers)

    def test_json_from_env(self, capfd):
        with mock.patch.dict(
            os.environ, {"ROOTSEEK_LOGGING": "INFO", "ROOTSEEK_LOG_JSON": "1"}, clear=False
        ):
            rootseek.configure_from_env()

        logging.getLogger(f"{LOGGER_NAME}.test").info("json env test")
        data = json.loads(capfd.readouterr().err.strip())
        assert data["message"] == "json env test"

    def test_does_nothing_without_env(self):
        initial = len(_get_logger().handlers)
        with mock.patch.dict(os.environ, {}, clear=True):
            rootseek.configure_from_env()
        assert len(_get_logger().handlers) == initial


class TestLevels:
    def test_set_level(self):
        rootseek.set_level("WARNING")
        assert _get_logger().level == logging.WARNING
        rootseek.set_level(logging.ERROR)
        assert _get_logger().level == logging.ERROR

    def test_get_level_defaults_to_info(self):
        assert _get_level("debug") == logging.DEBUG
        assert _get_level("NOPE") == logging.INFO

    def test_disable_logging(self, capfd):
        rootseek.enable_console_logging(level="DEBUG")
        rootseek.disable_logging()
        logging.getLogger(f"{LOGGER_NAME}.test").critical("should not appear")

        assert "should not appear" not in capfd.readouterr().err
        assert all(isinstance(h, logging.NullHandler) for h in _get_logger().handlers)
