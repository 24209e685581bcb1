"""Logging configuration for rf_report_builder.

Provides:
- Console handler (stderr) with configurable level
- Optional file handler (JSON lines for machine parsing)
- Environment-based level selection

Library modules only call :func:`get_logger`; handlers are installed by
:func:`configure_logging`, which the command-line host calls once.

Usage:
    from rf_report_builder.util.logging import get_logger, configure_logging

    configure_logging(level="DEBUG", json_file="ingest.log")
    logger = get_logger(__name__)
    logger.info("report built", extra={"file_name": "scan.csv", "record_count": 120})
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional


_root_logger_name = "rf_report_builder"

# extra={} fields copied into JSON output
_EXTRA_FIELDS = ("file_name", "status", "error_kind", "row_count", "record_count", "delimiter")

logging.getLogger(_root_logger_name).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        output: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                output[key] = getattr(record, key)
        if record.exc_info:
            output["traceback"] = "".join(traceback.format_exception(*record.exc_info))
        return json.dumps(output, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console format with optional color."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname
        if self.use_color:
            level_str = f"{self.LEVEL_COLORS.get(level, '')}{level:8}{self.RESET}"
        else:
            level_str = f"{level:8}"
        name = record.name.replace(f"{_root_logger_name}.", "")
        base = f"[{ts}] {level_str} [{name}] {record.getMessage()}"
        if record.exc_info:
            base += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return base


def configure_logging(
    *,
    level: Optional[str] = None,
    json_file: Optional[str] = None,
    use_color: bool = True,
) -> logging.Logger:
    """Configure the rf_report_builder logger tree.

    Args:
        level: Log level name. Defaults to RF_REPORT_LOG_LEVEL (or WARNING),
               or DEBUG if RF_REPORT_DEBUG=1 is set.
        json_file: Optional path to append JSON-formatted logs to.
        use_color: Colorize console output (auto-disabled if not a TTY).

    Calling it again replaces the handlers installed by the previous call.
    """
    if level is None:
        if os.environ.get("RF_REPORT_DEBUG", "").strip().lower() in ("1", "true", "yes"):
            level = "DEBUG"
        else:
            level = os.environ.get("RF_REPORT_LOG_LEVEL", "WARNING")

    numeric_level = getattr(logging, str(level).upper(), logging.WARNING)

    logger = logging.getLogger(_root_logger_name)
    logger.setLevel(numeric_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ConsoleFormatter(use_color=use_color))
    logger.addHandler(console_handler)

    if json_file:
        try:
            file_handler = logging.FileHandler(json_file, mode="a", encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)
        except OSError as exc:
            logger.warning("Failed to open JSON log file %s: %s", json_file, exc)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the rf_report_builder namespace (usually ``get_logger(__name__)``)."""
    if not name.startswith(_root_logger_name):
        name = f"{_root_logger_name}.main" if name == "__main__" else f"{_root_logger_name}.{name}"
    return logging.getLogger(name)
