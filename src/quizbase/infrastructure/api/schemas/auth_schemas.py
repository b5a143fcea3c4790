"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class UserResponse(BaseModel):
    """Public user information. Never carries the password hash."""

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="User's display name")
    email: str = Field(..., description="User's email address")
    created_at: datetime | None = Field(None, description="When the user was created")
    updated_at: datetime | None = Field(None, description="When the user was last updated")

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    """Response for a successful login."""

    user: UserResponse = Field(..., description="User information")
    token: str = Field(..., description="JWT session token")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human-readable error message")
