"""API Schemas for request/response validation."""

from quizbase.infrastructure.api.schemas.auth_schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    UserResponse,
)
from quizbase.infrastructure.api.schemas.question_schemas import (
    AlternativeResponse,
    AlternativeSchema,
    QuestionCreateRequest,
    QuestionDeletedResponse,
    QuestionResponse,
    QuestionUpdateRequest,
)
from quizbase.infrastructure.api.schemas.users_schemas import (
    ForgetPasswordRequest,
    PasswordChangeRequest,
    PasswordResetConfirmRequest,
    ResetEmailResponse,
    UserCreateRequest,
    UserDeletedResponse,
)

__all__ = [
    "AlternativeResponse",
    "AlternativeSchema",
    "ErrorResponse",
    "ForgetPasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "PasswordChangeRequest",
    "PasswordResetConfirmRequest",
    "QuestionCreateRequest",
    "QuestionDeletedResponse",
    "QuestionResponse",
    "QuestionUpdateRequest",
    "ResetEmailResponse",
    "UserCreateRequest",
    "UserDeletedResponse",
    "UserResponse",
]
