"""Authentication service.

Login, bearer request validation and the password reset flow. Collaborators
are passed in at construction; nothing here reads or writes request state.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from quizbase.core.exceptions import NotFoundError, UnauthorizedError
from quizbase.core.logging import get_logger
from quizbase.domain.entities import LoginResult, UserProfile
from quizbase.infrastructure.auth import (
    SessionClaims,
    TokenService,
    hash_password,
    needs_rehash,
    verify_password,
)
from quizbase.infrastructure.persistence.repositories import UserRepository
from quizbase.infrastructure.services.email import DeliveryResult
from quizbase.infrastructure.services.notification_service import NotificationService

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService:
    """Service for authentication business logic."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository,
        token_service: TokenService,
        notification_service: NotificationService,
        logger: Any | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            session: SQLAlchemy async session.
            user_repo: Repository for user lookups and password updates.
            token_service: Issues and verifies session and reset tokens.
            notification_service: Sends password reset emails.
            logger: Structured logger. Defaults to a logger named after this component.
        """
        self.session = session
        self.user_repo = user_repo
        self.token_service = token_service
        self.notification_service = notification_service
        self.logger = logger or get_logger("quizbase.auth_service")

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate a user with email and password.

        A digest made with older hashing parameters is replaced on success.

        Args:
            email: User's email address.
            password: Plaintext password.

        Returns:
            The user's profile and a fresh session token.

        Raises:
            NotFoundError: If no user has this email.
            UnauthorizedError: If the password does not match.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            self.logger.info("Login failed: unknown email", email=email)
            raise NotFoundError(f"User with e-mail address {email} not found")

        if not verify_password(password, user.password_hash):
            self.logger.info("Login failed: wrong password", user_id=user.id)
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        if needs_rehash(user.password_hash):
            await self.user_repo.update_password_hash(user.id, hash_password(password))
            await self.session.commit()
            self.logger.info("Password hash upgraded", user_id=user.id)

        token = self.token_service.issue_session_token(user.id, user.email)
        self.logger.info("User logged in", user_id=user.id)
        return LoginResult(user=UserProfile.from_model(user), token=token)

    def validate_bearer_request(self, authorization: str | None) -> SessionClaims:
        """Authenticate a request from its ``Authorization`` header.

        The scheme is matched case-insensitively. A missing or malformed
        header is verified as an empty token and therefore rejected.

        Args:
            authorization: Raw ``Authorization`` header value.

        Returns:
            Identity claims of the caller.

        Raises:
            UnauthorizedError: If the header does not carry a valid session token.
        """
        return self.token_service.verify_session_token(extract_bearer_token(authorization))

    async def request_password_reset(self, email: str) -> DeliveryResult:
        """Send a password reset email.

        No existence check is made on ``email``; the token is only usable
        against an existing user.

        Raises:
            Exception: Mail transport failures, unchanged.
        """
        self.logger.info("Password reset requested", email=email)
        return await self.notification_service.send_reset_email(email)

    async def confirm_password_reset(
        self, email: str, token: str, new_password: str
    ) -> UserProfile:
        """Set a new password using a reset token.

        Reset tokens are not consumed: the same token works until it expires.

        Args:
            email: Email the reset token was issued for.
            token: The reset token.
            new_password: New plaintext password.

        Returns:
            The updated user's profile.

        Raises:
            UnauthorizedError: If the token is invalid, expired or for another email.
            NotFoundError: If no user has this email.
        """
        self.token_service.verify_reset_token(token, email)

        user = await self.user_repo.get_by_email(email)
        if user is None:
            self.logger.info("Password reset failed: unknown email", email=email)
            raise NotFoundError("User not found")

        updated = await self.user_repo.update_password_hash(user.id, hash_password(new_password))
        if updated is None:
            raise NotFoundError("User not found")
        await self.session.commit()

        self.logger.info("Password reset successfully", user_id=updated.id)
        return UserProfile.from_model(updated)


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token of a ``Bearer`` authorization header, or ``""``."""
    if not authorization:
        return ""
    parts = authorization.split(None, 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return ""
    return parts[1].strip()
