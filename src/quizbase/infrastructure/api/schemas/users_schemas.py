"""Pydantic schemas for user endpoints."""

from pydantic import BaseModel, EmailStr, Field

PASSWORD_MIN_LENGTH = 6


class UserCreateRequest(BaseModel):
    """Request schema for registering a new user."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, description="User's password"
    )


class PasswordChangeRequest(BaseModel):
    """Request schema for changing the caller's password."""

    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, description="New password"
    )


class ForgetPasswordRequest(BaseModel):
    """Request schema for asking a password reset email."""

    email: EmailStr = Field(..., description="Address to send the reset token to")


class PasswordResetConfirmRequest(BaseModel):
    """Request schema for setting a new password with a reset token."""

    email: EmailStr = Field(..., description="Email the token was issued for")
    token: str = Field(..., min_length=1, description="Password reset token")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, description="New password"
    )


class ResetEmailResponse(BaseModel):
    """Response after a reset email has been handed to the mail transport."""

    message_id: str = Field(..., description="Delivery ID assigned to the email")
    preview_url: str | None = Field(None, description="Link to a preview of the email")

    model_config = {"from_attributes": True}


class UserDeletedResponse(BaseModel):
    """Response after deleting the caller's account."""

    deleted_user_id: str = Field(..., description="ID of the deleted user")
