"""
Inline Editable - Structured Logging

JSON log formatting for the package logger, with an optional request ID
carried through a context variable so concurrent lookups can be told apart.
"""

import contextvars
import json
import logging
from collections.abc import Generator
from contextlib import contextmanager
from datetime import UTC, datetime
from uuid import uuid4

PACKAGE_LOGGER = "inline_editable"

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)

_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    )
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = _request_id_ctx.get()
        if request_id:
            log_data["request_id"] = request_id

        # Fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Install the JSON formatter on the package logger.

    Safe to call more than once; existing handlers are replaced.

    Args:
        level: Log level name or number

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_request_id() -> str | None:
    """Return the request ID bound to the current context, if any."""
    return _request_id_ctx.get()


@contextmanager
def bind_request_id(request_id: str | None = None) -> Generator[str, None, None]:
    """
    Bind a request ID to log records emitted inside the block.

    Args:
        request_id: ID to bind (a random one is generated when omitted)

    Yields:
        The bound request ID
    """
    request_id = request_id or uuid4().hex
    token = _request_id_ctx.set(request_id)
    try:
        yield request_id
    finally:
        _request_id_ctx.reset(token)
