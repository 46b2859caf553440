# ABOUTME: Logging configuration using loguru sinks
# ABOUTME: Dual-mode operation: interactive CLI (log files) vs production JSON on stdout

import logging
import os
import sys
import time
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

LOG_DIR = Path("logs")

# Complete silence: these libraries print request/response dumps at INFO
CRITICAL_LOGGERS = [
    "LiteLLM",
    "litellm",
    "dspy",
    "readability",
    "readability.readability",
]

WARNING_LOGGERS = ["httpx", "httpcore", "asyncio", "sqlalchemy.engine", "aiosqlite", "openai"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("ARTICLE_FORGE_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Configure third-party library logging to avoid CLI interference."""
    for logger_name in CRITICAL_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.CRITICAL)

    for logger_name in WARNING_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _forward_to_loguru(_logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor that hands each event to loguru and stops the chain."""
    event = str(event_dict.pop("event", ""))
    source = str(event_dict.pop("logger_name", "article_forge"))
    level = str(event_dict.pop("level", method_name)).upper()
    if level == "WARN":
        level = "WARNING"
    context = " ".join(f"{key}={value!r}" for key, value in event_dict.items() if value is not None)
    message = f"{event} | {context}" if context else event
    logger.patch(lambda record: record.update(name=source)).bind(**event_dict).log(level, message)
    raise structlog.DropEvent


def setup_structlog(log_level: str = "INFO") -> None:
    """Route structlog key/value events into the loguru sinks."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _forward_to_loguru,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def _ensure_log_dir() -> bool:
    """Create the log directory, retrying briefly on filesystem races."""
    max_retries = 3
    for attempt in range(max_retries):
        try:
            LOG_DIR.mkdir(exist_ok=True)
            return True
        except OSError:
            if attempt == max_retries - 1:
                return False
            time.sleep(0.01 * (attempt + 1))
    return False


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()
    setup_structlog(log_level)

    # Set standard library logging level for compatibility with tests
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    logger.remove()

    if mode == LoggingMode.INTERACTIVE and not _ensure_log_dir():
        # No writable log directory: fall back to JSON on stdout
        mode = LoggingMode.PRODUCTION

    if mode == LoggingMode.PRODUCTION:
        logger.add(sys.stdout, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)
        return

    log_file_path = log_file or str(LOG_DIR / "article-forge.log")

    # Human-readable logs
    logger.add(
        log_file_path,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name} - {message}",
        rotation="10 MB",
        retention="7 days",
    )

    # JSON logs for machine processing
    logger.add(
        LOG_DIR / "article-forge.json",
        level=log_level,
        format="{time} | {level} | {name} | {message}",
        serialize=True,
        rotation="10 MB",
        retention="7 days",
    )

    # Errors only
    logger.add(
        LOG_DIR / "errors.log",
        level="ERROR",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name} - {message}",
        backtrace=True,
        diagnose=True,
    )


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(LOG_DIR.absolute()) if LOG_DIR.exists() else None,
        "log_files": {
            "main": str(LOG_DIR / "article-forge.log") if interactive else None,
            "json": str(LOG_DIR / "article-forge.json") if interactive else None,
            "errors": str(LOG_DIR / "errors.log") if interactive else None,
        },
        "third_party_suppressed": [*CRITICAL_LOGGERS, *WARNING_LOGGERS, "py.warnings"],
    }
