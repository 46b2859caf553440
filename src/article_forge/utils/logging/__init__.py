# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Exports dual-mode configuration plus context binding and timing decorators

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .utils import (
    LogContext,
    get_logger,
    log_api_call,
    log_pipeline_step,
    with_article_context,
    with_pipeline_context,
)

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "LogContext",
    "get_logger",
    "log_api_call",
    "log_pipeline_step",
    "with_article_context",
    "with_pipeline_context",
]
