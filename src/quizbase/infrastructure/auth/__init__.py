"""Authentication infrastructure components.

This module provides password hashing, JWT signing, and the token
service built on top of them.
"""

from quizbase.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from quizbase.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)
from quizbase.infrastructure.auth.token_service import (
    TokenService,
    strip_bearer_prefix,
    token_service,
)
from quizbase.infrastructure.auth.token_types import (
    ResetClaims,
    SessionClaims,
    TokenPurpose,
)

__all__ = [
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "ResetClaims",
    "SessionClaims",
    "TokenExpiredError",
    "TokenPurpose",
    "TokenService",
    "hash_password",
    "jwt_service",
    "needs_rehash",
    "strip_bearer_prefix",
    "token_service",
    "verify_password",
]
