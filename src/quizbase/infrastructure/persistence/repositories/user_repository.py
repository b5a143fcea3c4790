"""User repository for database operations."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quizbase.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.

        Raises:
            IntegrityError: If the email is already taken.
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email address.

        Args:
            email: User's email address (exact match).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[UserModel]:
        """List all users ordered by creation time."""
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.created_at, UserModel.email)
        )
        return list(result.scalars().all())

    async def update_password_hash(self, user_id: str, password_hash: str) -> UserModel | None:
        """Replace a user's password hash.

        Args:
            user_id: ID of the user to update.
            password_hash: New Argon2 hash.

        Returns:
            The updated user model, or None if the user does not exist.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        await self.session.flush()
        user = await self.get_by_id(user_id)
        if user is not None:
            await self.session.refresh(user)
        return user

    async def delete(self, user: UserModel) -> None:
        """Delete a user and, through the foreign key cascade, their questions."""
        await self.session.delete(user)
        await self.session.flush()
