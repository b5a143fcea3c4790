"""Domain services for QuizBase.

Services contain the business rules of authentication, users and questions.
They receive their collaborators at construction.
"""

from quizbase.domain.services.auth_service import AuthService, extract_bearer_token
from quizbase.domain.services.question_service import QuestionService
from quizbase.domain.services.question_validator import (
    ALTERNATIVES_PER_QUESTION,
    validate_alternatives,
)
from quizbase.domain.services.user_service import UserService

__all__ = [
    "ALTERNATIVES_PER_QUESTION",
    "AuthService",
    "QuestionService",
    "UserService",
    "extract_bearer_token",
    "validate_alternatives",
]
