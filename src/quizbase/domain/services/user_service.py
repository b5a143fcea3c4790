"""User service for business logic.

Handles registration, lookups, password changes and account removal.
Every user handed back is a ``UserProfile``, never the stored row.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quizbase.core.exceptions import InvalidArgumentError, NotFoundError
from quizbase.core.logging import get_logger
from quizbase.domain.entities import UserProfile
from quizbase.infrastructure.auth import hash_password
from quizbase.infrastructure.persistence.models import UserModel
from quizbase.infrastructure.persistence.repositories import UserRepository

DUPLICATE_EMAIL_MESSAGE = "A user with this email already exists"


class UserService:
    """Service for user business logic."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository | None = None,
        logger: Any | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
            user_repo: Repository for user operations.
            logger: Structured logger.
        """
        self.session = session
        self.user_repo = user_repo or UserRepository(session)
        self.logger = logger or get_logger("quizbase.user_service")

    async def create(self, name: str, email: str, password: str) -> UserProfile:
        """Register a new user.

        The lookup on ``email`` is only an early exit; the UNIQUE constraint
        on the column decides concurrent registrations.

        Raises:
            InvalidArgumentError: If the email is empty or already taken.
        """
        if not email:
            raise InvalidArgumentError("Invalid email")
        if await self.user_repo.email_exists(email):
            raise InvalidArgumentError(DUPLICATE_EMAIL_MESSAGE)

        user = UserModel(name=name, email=email, password_hash=hash_password(password))
        try:
            user = await self.user_repo.create(user)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            self.logger.info("User registration lost race on email", email=email)
            raise InvalidArgumentError(DUPLICATE_EMAIL_MESSAGE)

        self.logger.info("User created", user_id=user.id)
        return UserProfile.from_model(user)

    async def list_all(self) -> list[UserProfile]:
        """List every registered user."""
        users = await self.user_repo.list_all()
        return [UserProfile.from_model(user) for user in users]

    async def get_by_id(self, user_id: str) -> UserProfile:
        """Get a user's profile.

        Raises:
            InvalidArgumentError: If ``user_id`` is empty.
            NotFoundError: If the user does not exist.
        """
        if not user_id:
            raise InvalidArgumentError("Invalid id")
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return UserProfile.from_model(user)

    async def change_password(self, user_id: str, password: str) -> UserProfile:
        """Replace the password of ``user_id``.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = await self.user_repo.update_password_hash(user_id, hash_password(password))
        if user is None:
            raise NotFoundError("User not found")
        await self.session.commit()

        self.logger.info("User password changed", user_id=user_id)
        return UserProfile.from_model(user)

    async def delete(self, user_id: str) -> dict[str, str]:
        """Delete a user together with the questions they created.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        await self.user_repo.delete(user)
        await self.session.commit()

        self.logger.info("User deleted", user_id=user_id)
        return {"deleted_user_id": user_id}
