"""API Routes for QuizBase."""

from quizbase.infrastructure.api.routes.auth_router import router as auth_router
from quizbase.infrastructure.api.routes.questions_router import router as questions_router
from quizbase.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "auth_router",
    "questions_router",
    "users_router",
]
