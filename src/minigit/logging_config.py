"""Structured logging configuration for mini-git.

Every line is a JSON object. Staging events carry the repository-relative
``path`` and blob ``digest`` they concern as top-level fields, and a
correlation ID groups all lines emitted by one command invocation.
"""

import contextvars
import json
import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

# Correlation ID for the current command invocation
correlation_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    'correlation_id', default=None
)

LOGGER_NAME = "minigit"

# Record attributes promoted to top-level JSON keys, in output order
_CONTEXT_FIELDS = ("operation", "path", "digest", "duration_ms")


class StructuredFormatter(logging.Formatter):
    """JSON formatter: timestamp, level, logger, message, then context."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).replace(tzinfo=None)
        log_data = {
            "timestamp": timestamp.isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = correlation_id_var.get()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        for field in _CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)
        if hasattr(record, "extra"):
            log_data["extra"] = record.extra

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """Logger for staging events.

    ``path`` and ``digest`` identify the file or blob an event concerns;
    anything else passed as a keyword lands under ``extra``.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_operation(
        self,
        level: int,
        message: str,
        operation: str | None = None,
        path: str | os.PathLike[str] | None = None,
        digest: str | None = None,
        duration_ms: int | None = None,
        **extra: Any
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return

        record = self.logger.makeRecord(
            self.logger.name, level, "(structured)", 0, message, (), None
        )
        if operation:
            record.operation = operation
        if path is not None:
            record.path = os.fspath(path)
        if digest:
            record.digest = digest
        if duration_ms is not None:
            record.duration_ms = duration_ms
        if extra:
            record.extra = extra

        self.logger.handle(record)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    @contextmanager
    def timed(self, operation: str, message: str, **kwargs: Any) -> Iterator[dict[str, Any]]:
        """Log ``message`` at INFO with ``duration_ms`` when the block succeeds.

        The yielded dict is merged into the log call, so the block can add
        fields (counts, totals) that are only known at the end.
        """
        fields: dict[str, Any] = dict(kwargs)
        start = time.perf_counter()
        yield fields
        duration_ms = int((time.perf_counter() - start) * 1000)
        self.info(message.format(**fields), operation=operation, duration_ms=duration_ms, **fields)


def _make_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return StructuredFormatter()
    return logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def configure_logging(
    log_level: str = "WARNING",
    structured: bool = True,
    log_file: str | None = None
) -> None:
    """Attach console (stderr) and optional file handlers to the package logger.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        structured: If True, use JSON formatter; if False, use human-readable
        log_file: Optional file path to write logs to
    """
    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(log_level.upper())

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_make_formatter(structured))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(_make_formatter(structured))
        root_logger.addHandler(file_handler)
