# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode logging setup, structlog routing and third-party suppression

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog
from loguru import logger as loguru_logger

from article_forge.utils.logging.config import (
    CRITICAL_LOGGERS,
    WARNING_LOGGERS,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)
from article_forge.utils.logging.utils import get_logger


@pytest.fixture
def in_tmp_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    loguru_logger.remove()
    structlog.reset_defaults()
    for logger_name in ["", *CRITICAL_LOGGERS, *WARNING_LOGGERS, "py.warnings"]:
        std_logger = logging.getLogger(logger_name)
        std_logger.setLevel(logging.NOTSET)
    logging.captureWarnings(False)


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_interactive(self):
        with patch.dict(os.environ, {"ARTICLE_FORGE_LOG_MODE": "interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_production(self):
        with patch.dict(os.environ, {"ARTICLE_FORGE_LOG_MODE": "PRODUCTION"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_invalid(self):
        with (
            patch.dict(os.environ, {"ARTICLE_FORGE_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    def test_interactive_mode_creates_log_directory(self, in_tmp_dir):
        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert (in_tmp_dir / "logs").is_dir()

    def test_third_party_loggers_suppressed(self):
        configure_logging(mode=LoggingMode.PRODUCTION)

        assert logging.getLogger("LiteLLM").level == logging.CRITICAL
        assert logging.getLogger("dspy").level == logging.CRITICAL
        assert logging.getLogger("readability.readability").level == logging.CRITICAL
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_custom_log_level(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_structlog_events_reach_loguru_file(self, in_tmp_dir):
        log_file = in_tmp_dir / "custom.log"
        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(log_file))

        get_logger("article_forge.tests").info("Inserted article", title="Chatbots 101")
        get_logger("article_forge.tests").debug("Below the configured level")
        loguru_logger.complete()

        content = log_file.read_text()
        assert "Inserted article | title='Chatbots 101'" in content
        assert "article_forge.tests" in content
        assert "Below the configured level" not in content

    def test_errors_go_to_the_errors_file(self, in_tmp_dir):
        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        get_logger("article_forge.tests").error("Failed to ingest article", url="https://example.com/blogs/a/")
        loguru_logger.complete()

        assert "Failed to ingest article" in Path("logs/errors.log").read_text()


class TestGetLoggingStatus:
    def test_interactive_status(self, in_tmp_dir):
        (in_tmp_dir / "logs").mkdir()
        with patch("article_forge.utils.logging.config.detect_logging_mode", return_value=LoggingMode.INTERACTIVE):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] is not None
        assert status["log_files"]["main"].endswith("article-forge.log")
        assert status["log_files"]["json"].endswith("article-forge.json")
        assert status["log_files"]["errors"].endswith("errors.log")
        assert "LiteLLM" in status["third_party_suppressed"]

    def test_production_status(self, in_tmp_dir):
        with patch("article_forge.utils.logging.config.detect_logging_mode", return_value=LoggingMode.PRODUCTION):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_directory"] is None
        assert status["log_files"] == {"main": None, "json": None, "errors": None}
