"""JWT signing backend.

Signs arbitrary claims into compact HS256 tokens and verifies them. Expiry is
applied here, uniformly, from the configured token lifetime. Verification
failures are reported as distinct exception types; deciding what callers see
is left to the token service.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from quizbase.core.config import get_settings


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for signing and verifying JWT tokens."""

    ALGORITHM = "HS256"
    ISSUER = "quizbase"

    def __init__(
        self,
        secret_key: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
            expires_delta: Token lifetime. If not provided, uses the
                           configured token lifetime from settings.
        """
        self._secret_key = secret_key
        self._expires_delta = expires_delta

    @property
    def secret_key(self) -> str:
        """Get the secret key for signing tokens."""
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    @property
    def expires_delta(self) -> timedelta:
        """Get the lifetime applied to every signed token."""
        if self._expires_delta is not None:
            return self._expires_delta
        return timedelta(minutes=get_settings().token_expire_minutes)

    def sign(self, claims: dict[str, Any]) -> str:
        """Sign claims into a token.

        Args:
            claims: Application claims to embed.

        Returns:
            Encoded JWT.
        """
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iss": self.ISSUER,
            "iat": now,
            "exp": now + self.expires_delta,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e


# Default JWT service instance
jwt_service = JWTService()
