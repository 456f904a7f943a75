"""Request ID logging context for tracing one checkout invocation.

Provides a request_id-aware logger that attaches a correlation ID to every
log message, so the lines of one serverless invocation can be picked out
of the platform's shared function log.

Usage:
    from rental_checkout.logging_context import get_request_logger, set_request_id

    set_request_id("c0ffee")
    logger = get_request_logger(__name__)
    logger.info("Creating session")  # record.request_id == "c0ffee"
"""

import logging
import uuid
from contextvars import ContextVar
from typing import IO, Optional

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_request_id: ContextVar[str] = ContextVar("request_id", default="NO_REQUEST_ID")


def new_request_id() -> str:
    """Generate a fresh correlation ID."""
    return uuid.uuid4().hex


def set_request_id(request_id: str) -> None:
    """Set the correlation ID for the current context."""
    _request_id.set(request_id)


def get_request_id() -> str:
    """Retrieve the current correlation ID."""
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Injects request_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def build_log_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """Stream handler whose records all carry ``request_id``.

    The filter sits on the handler, so records from third-party loggers
    (stripe, urllib3) format with the same pattern.
    """
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    return handler


def get_request_logger(name: str) -> logging.Logger:
    """Return a logger with the RequestIdFilter attached.

    The filter adds ``request_id`` to each record so formatters can
    include ``%(request_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
