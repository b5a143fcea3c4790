"""User entities exposed outside the persistence layer.

A stored user carries a password hash. Nothing built here does: every
profile handed to callers is constructed without it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class UserProfile:
    """Public view of a registered user.

    Attributes:
        id: Unique identifier (UUID string).
        name: Display name.
        email: Email address (unique across users).
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    id: str
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, model: Any) -> "UserProfile":
        """Build a profile from a stored user, dropping the password hash."""
        return cls(
            id=model.id,
            name=model.name,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login.

    Attributes:
        user: Profile of the authenticated user.
        token: Signed session token.
    """

    user: UserProfile
    token: str
