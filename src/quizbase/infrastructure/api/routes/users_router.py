"""Users API routes.

Registration and lookup are public. Changing the password or deleting the
account applies to the authenticated caller. The password reset pair
(``/forget`` then ``/reset``) is public and authorized by the emailed token.
"""

from fastapi import APIRouter, status

from quizbase.infrastructure.api.dependencies import (
    AuthenticatedUser,
    AuthServiceDep,
    UserServiceDep,
)
from quizbase.infrastructure.api.schemas import (
    ErrorResponse,
    ForgetPasswordRequest,
    PasswordChangeRequest,
    PasswordResetConfirmRequest,
    ResetEmailResponse,
    UserCreateRequest,
    UserDeletedResponse,
    UserResponse,
)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    summary="Register a new user",
    responses={400: {"model": ErrorResponse, "description": "Email already taken"}},
)
async def create_user(user_data: UserCreateRequest, user_service: UserServiceDep) -> UserResponse:
    profile = await user_service.create(user_data.name, user_data.email, user_data.password)
    return UserResponse.model_validate(profile)


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(user_service: UserServiceDep) -> list[UserResponse]:
    profiles = await user_service.list_all()
    return [UserResponse.model_validate(profile) for profile in profiles]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(user_id: str, user_service: UserServiceDep) -> UserResponse:
    profile = await user_service.get_by_id(user_id)
    return UserResponse.model_validate(profile)


@router.patch(
    "",
    response_model=UserResponse,
    summary="Change the caller's password",
    responses={401: {"model": ErrorResponse, "description": "Invalid token"}},
)
async def change_password(
    password_data: PasswordChangeRequest,
    current_user: AuthenticatedUser,
    user_service: UserServiceDep,
) -> UserResponse:
    profile = await user_service.change_password(current_user.id, password_data.password)
    return UserResponse.model_validate(profile)


@router.delete(
    "",
    response_model=UserDeletedResponse,
    summary="Delete the caller's account",
    responses={401: {"model": ErrorResponse, "description": "Invalid token"}},
)
async def delete_user(
    current_user: AuthenticatedUser,
    user_service: UserServiceDep,
) -> UserDeletedResponse:
    result = await user_service.delete(current_user.id)
    return UserDeletedResponse(**result)


@router.post(
    "/forget",
    response_model=ResetEmailResponse,
    summary="Send a password reset email",
)
async def request_password_reset(
    request: ForgetPasswordRequest,
    auth_service: AuthServiceDep,
) -> ResetEmailResponse:
    """Email a password reset token to the given address.

    The address is not checked against registered users.
    """
    result = await auth_service.request_password_reset(request.email)
    return ResetEmailResponse.model_validate(result)


@router.patch(
    "/reset",
    response_model=UserResponse,
    summary="Set a new password with a reset token",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid token"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def confirm_password_reset(
    request: PasswordResetConfirmRequest,
    auth_service: AuthServiceDep,
) -> UserResponse:
    profile = await auth_service.confirm_password_reset(
        request.email, request.token, request.password
    )
    return UserResponse.model_validate(profile)
