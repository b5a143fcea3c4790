"""Claims carried by QuizBase tokens."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TokenPurpose(str, Enum):
    """Purpose tag distinguishing token kinds."""

    RESET = "reset"


class SessionClaims(BaseModel):
    """Identity asserted by a session token."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique identifier of the user")
    email: str = Field(..., min_length=1, description="User's email address")


class ResetClaims(BaseModel):
    """Claims asserted by a password reset token."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=1, description="Email the reset was requested for")
    purpose: TokenPurpose = Field(TokenPurpose.RESET, description="Always 'reset'")
