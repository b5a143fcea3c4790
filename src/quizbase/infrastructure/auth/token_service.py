"""Session and password reset token semantics.

Issues and verifies the two kinds of tokens QuizBase hands out. Tokens are
stateless: validity is a function of signature and embedded expiry only, so
nothing is revoked or consumed server-side.

Every verification failure (expired, forged, malformed, wrong purpose, wrong
email) raises the same ``UnauthorizedError``. The concrete reason is only
written to the log.
"""

from typing import Any, NoReturn

from pydantic import ValidationError

from quizbase.core.exceptions import UnauthorizedError
from quizbase.core.logging import get_logger
from quizbase.infrastructure.auth.jwt_service import (
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from quizbase.infrastructure.auth.token_types import (
    ResetClaims,
    SessionClaims,
    TokenPurpose,
)

BEARER_PREFIX = "Bearer "
INVALID_TOKEN_MESSAGE = "Invalid token"


class TokenService:
    """Issues and verifies session and reset tokens."""

    def __init__(self, signer: JWTService | None = None, logger: Any | None = None) -> None:
        """Initialize the token service.

        Args:
            signer: Signing backend. Defaults to the shared JWT service.
            logger: Structured logger. Defaults to a logger named after this component.
        """
        self.signer = signer or jwt_service
        self.logger = logger or get_logger("quizbase.token_service")

    def issue_session_token(self, user_id: str, email: str) -> str:
        """Issue a token asserting the caller's identity."""
        self.logger.debug("Issuing session token", user_id=user_id)
        return self.signer.sign({"id": user_id, "email": email})

    def issue_reset_token(self, email: str) -> str:
        """Issue a token that authorizes a password reset for ``email``."""
        self.logger.debug("Issuing reset token")
        return self.signer.sign({"email": email, "purpose": TokenPurpose.RESET.value})

    def verify_session_token(self, presented: str | None) -> SessionClaims:
        """Verify a session token and return its identity claims.

        Args:
            presented: The token, optionally prefixed with ``"Bearer "``.

        Returns:
            The identity claims embedded in the token.

        Raises:
            UnauthorizedError: If the token cannot be trusted for any reason.
        """
        payload = self._decode(presented, kind="session")
        if payload.get("purpose") == TokenPurpose.RESET.value:
            self._reject("session", "wrong_purpose")
        try:
            return SessionClaims.model_validate(payload)
        except ValidationError:
            self._reject("session", "claims")

    def verify_reset_token(self, presented: str | None, expected_email: str) -> ResetClaims:
        """Verify a password reset token issued for ``expected_email``.

        Args:
            presented: The token, optionally prefixed with ``"Bearer "``.
            expected_email: Email the caller claims the token belongs to.

        Returns:
            The reset claims embedded in the token.

        Raises:
            UnauthorizedError: If the token is invalid, expired, not a reset
                token, or was issued for another email.
        """
        payload = self._decode(presented, kind="reset")
        if payload.get("purpose") != TokenPurpose.RESET.value:
            self._reject("reset", "wrong_purpose")
        if payload.get("email") != expected_email:
            self._reject("reset", "email_mismatch")
        try:
            return ResetClaims.model_validate(payload)
        except ValidationError:
            self._reject("reset", "claims")

    def _decode(self, presented: str | None, kind: str) -> dict[str, Any]:
        token = strip_bearer_prefix(presented)
        if not token:
            self._reject(kind, "empty")
        try:
            return self.signer.verify(token)
        except TokenExpiredError:
            self._reject(kind, "expired")
        except Exception as e:
            self._reject(kind, "malformed", error=str(e))

    def _reject(self, kind: str, reason: str, **details: Any) -> NoReturn:
        self.logger.info("Token verification failed", token_kind=kind, reason=reason, **details)
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE)


def strip_bearer_prefix(token: str | None) -> str:
    """Remove a leading ``"Bearer "`` from ``token`` if present."""
    if not token:
        return ""
    if token.startswith(BEARER_PREFIX):
        return token[len(BEARER_PREFIX):]
    return token


# Default token service instance
token_service = TokenService()
