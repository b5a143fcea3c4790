"""Core QuizBase utilities.

This module exports core utilities for use throughout the application.
"""

from quizbase.core.config import Settings, get_settings
from quizbase.core.exceptions import (
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    QuizBaseError,
    UnauthorizedError,
)
from quizbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "ForbiddenError",
    "InvalidArgumentError",
    "NotFoundError",
    "QuizBaseError",
    "Settings",
    "UnauthorizedError",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
