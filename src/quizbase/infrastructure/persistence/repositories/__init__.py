"""Persistence repositories for database operations."""

from quizbase.infrastructure.persistence.repositories.question_repository import (
    QuestionRepository,
)
from quizbase.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "QuestionRepository",
    "UserRepository",
]
