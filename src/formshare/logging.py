"""
Structured logging configuration for formshare.

Provides:
- JSON-formatted logs for batch export jobs (machine-readable)
- Human-readable logs for development
- Form correlation (the uuid of the form being processed)

Usage:
    from formshare.logging import setup_logging, ContextLogger

    setup_logging()

    log = ContextLogger(__name__, form_name="Adult Intake")
    log.info("Exporting form", scanners=5)
"""

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

# Context variable for the form currently being made shareable
form_uuid_var: ContextVar[str | None] = ContextVar("form_uuid", default=None)

# Standard LogRecord attributes, never emitted as extra fields
_SKIP_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
})


def get_form_uuid() -> str | None:
    """Get the uuid of the form currently being processed."""
    return form_uuid_var.get()


@contextmanager
def form_context(form_uuid: str | None) -> Iterator[None]:
    """Tag every log record emitted inside the block with *form_uuid*."""
    token = form_uuid_var.set(form_uuid)
    try:
        yield
    finally:
        form_uuid_var.reset(token)


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Output format:
    {
        "timestamp": "2024-01-15T10:30:00.123456Z",
        "level": "WARNING",
        "logger": "formshare.core.scanners.uuid_scanner",
        "message": "Unable to resolve uuid-shaped token",
        "form_uuid": "abc123",
        "token": "...",
        ...
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        form_uuid = get_form_uuid()
        if form_uuid:
            log_data["form_uuid"] = form_uuid

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _SKIP_ATTRS and not key.startswith("_"):
                try:
                    json.dumps(value)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable log formatter for development.

    Output format:
    2024-01-15 10:30:00 WARNING  [formshare.core.scanners.uuid_scanner] Unable to resolve ... token=...
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            level = f"{color}{level}{self.RESET}"

        extras = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _SKIP_ATTRS and not key.startswith("_")
        ]
        extra_str = " " + " ".join(extras) if extras else ""

        form_uuid = get_form_uuid()
        form_str = f" [{form_uuid[:8]}]" if form_uuid else ""

        message = f"{timestamp} {level:8}{form_str} [{record.name}] {record.getMessage()}{extra_str}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON formatting (for export jobs)
        log_file: Optional file path to write logs
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = DevelopmentFormatter(use_colors=sys.stdout.isatty())

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        # Always use JSON for file logs
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)


def setup_logging_from_settings(settings: Any = None) -> None:
    """Configure logging from the ``logging`` section of the settings."""
    if settings is None:
        from formshare.config import get_settings
        settings = get_settings()
    log_settings = settings.logging
    setup_logging(
        level=log_settings.level,
        json_format=log_settings.format == "json",
        log_file=log_settings.file,
    )


class ContextLogger:
    """
    Logger wrapper that automatically includes context fields.

    Usage:
        logger = ContextLogger(__name__, form_name="Adult Intake")
        logger.info("Stripped local attributes", removed=3)
    """

    def __init__(self, name: str, **context: Any) -> None:
        self._logger = logging.getLogger(name)
        self._context = context

    def _log(self, level: int, msg: str, **kwargs: Any) -> None:
        extra = {**self._context, **kwargs}
        self._logger.log(level, msg, extra=extra)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, **kwargs)
