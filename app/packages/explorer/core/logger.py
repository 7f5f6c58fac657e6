"""Logging for the explorer API.

``setup_logging`` installs one console handler and one daily-rotated file
handler, shared by the ``app`` logger, uvicorn and the root logger. Each
record is tagged with the id of the request being served, see
:class:`RequestIdFilter` and ``app.middleware.request_id``.
"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s] %(message)s"
ROTATED_FILES_KEPT = 14

_current_request_id: ContextVar[Optional[str]] = ContextVar("explorer_request_id", default=None)


def set_request_id(request_id: Optional[str]) -> None:
    _current_request_id.set(request_id)


def get_request_id() -> Optional[str]:
    return _current_request_id.get()


class LocalTimeFormatter(logging.Formatter):
    """Stamps records in the configured ``TIMEZONE`` instead of server local time."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        stamp = datetime.fromtimestamp(record.created, get_settings().timezone_info)
        if datefmt:
            return stamp.strftime(datefmt)
        return stamp.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(LocalTimeFormatter):
    """Colours the whole line by level when writing to a terminal."""

    RESET = "\033[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: Optional[str] = None, use_colors: Optional[bool] = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{line}{self.RESET}" if color else line


class JsonFormatter(LocalTimeFormatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", None),
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    """Copies the current request id onto the record (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _current_request_id.get()
        return True


def setup_logging() -> None:
    """Apply the logging configuration derived from settings."""
    settings = get_settings()
    settings.log_directory.mkdir(parents=True, exist_ok=True)

    level = settings.log_level.upper()
    console_formatter = "json" if settings.log_json else "color"
    file_formatter = "json" if settings.log_json else "plain"
    handler_names = ("console", "file")

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": RequestIdFilter}},
        "formatters": {
            "color": {"()": ColorFormatter},
            "plain": {"()": LocalTimeFormatter, "fmt": LOG_FORMAT},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": console_formatter,
                "filters": ["request_id"],
            },
            "file": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": level,
                "formatter": file_formatter,
                "filters": ["request_id"],
                "filename": str(settings.log_file_path),
                "when": "midnight",
                "backupCount": ROTATED_FILES_KEPT,
                "encoding": "utf-8",
                "delay": True,
            },
        },
        "loggers": {
            name: {"handlers": list(handler_names), "level": level, "propagate": False}
            for name in ("app", "uvicorn", "uvicorn.access")
        },
        "root": {"handlers": list(handler_names), "level": level},
    }
    logging.config.dictConfig(config)


logger = logging.getLogger("app")
