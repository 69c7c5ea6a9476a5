"""Utilities: logging, decorators."""

from voiceforge.utils.logging import (
    setup_logging,
    get_logger,
    bind_request_id,
    reset_request_id,
    current_request_id,
    RequestIDFilter,
)
from voiceforge.utils.decorators import timed, logged

__all__ = [
    "setup_logging",
    "get_logger",
    "bind_request_id",
    "reset_request_id",
    "current_request_id",
    "RequestIDFilter",
    "timed",
    "logged",
]
