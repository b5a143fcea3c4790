"""SQLAlchemy models for QuizBase tables.

All models inherit from the Base class defined in database.py and are
created on application startup.
"""

from quizbase.infrastructure.persistence.models.question import AlternativeModel, QuestionModel
from quizbase.infrastructure.persistence.models.user import UserModel

__all__ = [
    "AlternativeModel",
    "QuestionModel",
    "UserModel",
]
