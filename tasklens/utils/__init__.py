"""Utility modules for tasklens"""

from .logger import (
    get_logger,
    log_function_call,
    setup_logging,
    truncate_query,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_function_call",
    "truncate_query",
]
