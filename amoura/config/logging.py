"""
Structured logging configuration for Amoura.

Two output styles, picked by ``AMOURA_LOG_FORMAT``:
- ``console``: short human-readable lines, coloured on a TTY
- ``json``: one JSON object per line for log shipping

Usage:
    from amoura.config.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Search tier matched", extra={"tier": "direct", "hits": 2})
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("AMOURA_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("AMOURA_LOG_FORMAT", "console")  # "console" or "json"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}

_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "multipart")


def _extra_fields(record: logging.LogRecord) -> dict:
    """Return the user-supplied ``extra`` fields of a record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


def preview(text: str, limit: int = 50) -> str:
    """Shorten user text for log lines."""
    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 3] + "..."


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter: ``HH:MM:SS LEVEL message [k=v, ...]``."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:<8}"
        if getattr(sys.stdout, "isatty", lambda: False)():
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        line = f"{self.formatTime(record, '%H:%M:%S')} {level} {record.getMessage()}"

        extras = _extra_fields(record)
        if extras:
            line += " [" + ", ".join(f"{k}={v}" for k, v in extras.items()) + "]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JSONFormatter(logging.Formatter):
    """Machine-parseable JSON formatter for production."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


# ---------------------------------------------------------------------------
# Logger Factory
# ---------------------------------------------------------------------------

_configured = False


def configure_logging() -> None:
    """Install a single stdout handler on the root logger (idempotent)."""
    global _configured
    if _configured:
        return

    level = getattr(logging, LOG_LEVEL, logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if LOG_FORMAT == "json" else ConsoleFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with consistent configuration.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    configure_logging()
    return logging.getLogger(name)


# ---------------------------------------------------------------------------
# Visual helpers for scripts
# ---------------------------------------------------------------------------


def log_banner(
    logger: logging.Logger, title: str, char: str = "=", width: int = 60
) -> None:
    """Log a visual banner for section headers."""
    logger.info(char * width)
    logger.info(title)
    logger.info(char * width)


def log_section(
    logger: logging.Logger, title: str, char: str = "-", width: int = 60
) -> None:
    """Log a section divider."""
    logger.info("")
    logger.info(char * width)
    logger.info(title)


__all__ = [
    "get_logger",
    "configure_logging",
    "log_banner",
    "log_section",
    "preview",
    "LOG_LEVEL",
    "LOG_FORMAT",
]
