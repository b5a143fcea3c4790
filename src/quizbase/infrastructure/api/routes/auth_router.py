"""Authentication API routes.

Provides the login endpoint.
"""

from fastapi import APIRouter

from quizbase.infrastructure.api.dependencies import AuthServiceDep
from quizbase.infrastructure.api.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    UserResponse,
)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        404: {"model": ErrorResponse, "description": "No user with this email"},
    },
)
async def login(request: LoginRequest, auth_service: AuthServiceDep) -> LoginResponse:
    """Authenticate with email and password.

    Returns the user's profile and a session token to present as
    ``Authorization: Bearer <token>``.
    """
    result = await auth_service.login(request.email, request.password)
    return LoginResponse(
        user=UserResponse.model_validate(result.user),
        token=result.token,
    )
