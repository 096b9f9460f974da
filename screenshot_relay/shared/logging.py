"""
Logging setup with request context.

Request ids are carried in a ContextVar and stamped onto every record.
"""

import logging
import sys
from contextvars import ContextVar

from .types import RequestContext

_request_context: ContextVar[RequestContext | None] = ContextVar(
    "request_context", default=None
)

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"


class RequestContextFilter(logging.Filter):
    """Inject the current request id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _request_context.get()
        record.request_id = ctx.request_id if ctx else "-"
        return True


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_screenshot_relay", False):
            handler.setLevel(level.upper())
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestContextFilter())
    handler._screenshot_relay = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # Quiet noisy libraries
    for name in ("botocore", "boto3", "urllib3", "s3transfer"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_context(ctx: RequestContext) -> None:
    _request_context.set(ctx)


def clear_request_context() -> None:
    _request_context.set(None)
