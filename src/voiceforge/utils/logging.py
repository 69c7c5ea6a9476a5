"""Logging configuration with per-request context.

Every record carries a ``request_id`` attribute: the id bound by the API's
request middleware, or "-" outside a request (CLI, startup, tests).
"""

import logging
import sys
from contextvars import ContextVar, Token
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

NO_REQUEST = "-"

_request_id: ContextVar[str] = ContextVar("voiceforge_request_id", default=NO_REQUEST)
_configured = False

FORMATS = {
    "simple": "%(levelname)s | %(name)s | [%(request_id)s] %(message)s",
    "detailed": (
        "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d "
        "| [%(request_id)s] %(message)s"
    ),
}


def bind_request_id(request_id: str) -> Token:
    """Attach request_id to log records emitted in the current context."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def current_request_id() -> str:
    return _request_id.get()


class RequestIDFilter(logging.Filter):
    """Stamp records with the bound request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()
        return True


def setup_logging(level: LogLevel = "INFO", format_style: Literal["simple", "detailed"] = "simple") -> None:
    """Configure logging for the application.

    Args:
        level: Log level
        format_style: 'simple' for development, 'detailed' for production
    """
    global _configured

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, level),
        format=FORMATS[format_style],
        handlers=[handler],
    )

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically for __name__)."""
    return logging.getLogger(name)
