"""
Centralized logging configuration for zone grading.

Provides structured logging with JSON formatting support, a context manager
for attaching context to log messages, timing of grading operations, and
lazy configuration.

Usage:
    from zone_grading.core.logging import get_logger, setup_logging

    # Setup logging (typically at application startup)
    setup_logging(level="DEBUG", json_format=True)

    # Get a logger for your module
    logger = get_logger(__name__)
    logger.info("Grading started", extra={"pixels": 1920 * 1080})
"""

import json
import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "zone_grading"

# Context variable for operation tracking
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Extra attributes promoted to top-level JSON fields
_EXTRA_FIELDS = (
    "operation",
    "duration_seconds",
    "pixels",
    "active_zones",
    "steps",
    "path",
    "error",
    "error_type",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs one JSON object per record with consistent fields for easy
    parsing by log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted string.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        ctx = _log_context.get()
        if ctx:
            log_data["context"] = ctx

        for attr in _EXTRA_FIELDS:
            if hasattr(record, attr):
                log_data[attr] = getattr(record, attr)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["exception_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for interactive use."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        # Work on a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(record)


_logging_configured = False


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
    json_format: bool = False,
    colored: bool = True,
) -> None:
    """Configure package logging.

    Should be called once at application startup. Subsequent calls replace
    the previous handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        log_file: Optional file path for log output (always JSON).
        json_format: Use JSON formatting for console output.
        colored: Use colored console output (ignored if json_format=True).
    """
    global _logging_configured

    # Import here to avoid circular imports
    from zone_grading.config import get_settings

    level = level or get_settings().log_level

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    elif colored and sys.stderr.isatty():
        console_handler.setFormatter(
            ColoredFormatter(
                "%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    else:
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    _logging_configured = True
    root_logger.debug(f"Logging configured: level={level}, file={log_file}, json={json_format}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module, configuring logging on first use.

    Names outside the package are nested under ``zone_grading`` so that a
    single ``setup_logging`` call controls them.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if not _logging_configured:
        setup_logging()

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


class LogContext:
    """Context manager adding key-value context to every log record in scope.

    Example:
        with LogContext(image="beach.jpg", preset="vintage_film"):
            logger.info("Grading")  # JSON output includes the context
    """

    def __init__(self, **context: Any):
        self.context = context
        self._token = None

    def __enter__(self) -> "LogContext":
        current = _log_context.get()
        self._token = _log_context.set({**current, **self.context})
        return self

    def __exit__(self, *args: Any) -> None:
        if self._token is not None:
            _log_context.reset(self._token)


@contextmanager
def log_operation(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    **fields: Any,
) -> Iterator[None]:
    """Log the start and end of an operation with its duration.

    Args:
        logger: Logger to use.
        operation: Operation name.
        level: Log level for the start/end messages.
        **fields: Extra fields attached to both records.

    Example:
        with log_operation(logger, "grade", pixels=width * height):
            ...
    """
    start = time.perf_counter()
    logger.log(level, f"Starting: {operation}", extra={"operation": operation, **fields})
    try:
        yield
    except Exception as e:
        elapsed = time.perf_counter() - start
        logger.error(
            f"Failed: {operation}",
            extra={
                "operation": operation,
                "duration_seconds": round(elapsed, 4),
                "error": str(e),
                "error_type": type(e).__name__,
                **fields,
            },
            exc_info=True,
        )
        raise
    elapsed = time.perf_counter() - start
    logger.log(
        level,
        f"Completed: {operation} in {elapsed:.4f}s",
        extra={"operation": operation, "duration_seconds": round(elapsed, 4), **fields},
    )


class LoggingMixin:
    """Mixin providing a ``logger`` property named after the class's module."""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(self.__class__.__module__)

    def log_method_call(self, method_name: str, **params: Any) -> None:
        """Log a method call with its parameters at DEBUG level."""
        params_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
        self.logger.debug(f"{self.__class__.__name__}.{method_name}({params_str})")
