"""Question repository for database operations."""

from typing import Any, Iterable

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from quizbase.infrastructure.persistence.models import AlternativeModel, QuestionModel


class QuestionRepository:
    """Repository for questions and their alternatives."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(
        self,
        description: str,
        subject: str,
        user_id: str,
        alternatives: Iterable[dict[str, Any]],
    ) -> QuestionModel:
        """Create a question together with its alternatives.

        Args:
            description: Question statement.
            subject: Subject of the question.
            user_id: ID of the creating user.
            alternatives: Dicts with ``description`` and ``is_correct``.

        Returns:
            The created question with alternatives loaded.
        """
        question = QuestionModel(
            description=description,
            subject=subject,
            user_id=user_id,
            alternatives=_build_alternatives(alternatives),
        )
        self.session.add(question)
        await self.session.flush()
        return await self.get_by_id(question.id)

    async def get_by_id(self, question_id: str) -> QuestionModel | None:
        """Get a question by ID with alternatives loaded.

        Args:
            question_id: Question ID (UUID string).

        Returns:
            Question model if found, None otherwise.
        """
        result = await self.session.execute(
            select(QuestionModel)
            .where(QuestionModel.id == question_id)
            .options(selectinload(QuestionModel.alternatives))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[QuestionModel]:
        """List all questions with alternatives loaded."""
        result = await self.session.execute(
            select(QuestionModel)
            .options(selectinload(QuestionModel.alternatives))
            .order_by(QuestionModel.created_at)
        )
        return list(result.scalars().all())

    async def update_fields(
        self,
        question_id: str,
        fields: dict[str, Any],
        owner_id: str | None = None,
    ) -> bool:
        """Update scalar fields of a question.

        Args:
            question_id: Question to update.
            fields: Column values to set (``description``, ``subject``).
            owner_id: When given, the row is only updated if it belongs to
                this user.

        Returns:
            True if a row was updated.
        """
        stmt = (
            update(QuestionModel)
            .where(QuestionModel.id == question_id)
            .values(**fields, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if owner_id is not None:
            stmt = stmt.where(QuestionModel.user_id == owner_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def replace_alternatives(
        self,
        question: QuestionModel,
        alternatives: Iterable[dict[str, Any]],
    ) -> None:
        """Delete every alternative of a question and insert the given ones.

        Args:
            question: Question loaded with its alternatives.
            alternatives: Dicts with ``description`` and ``is_correct``.
        """
        question.alternatives = _build_alternatives(alternatives)
        await self.session.flush()

    async def delete(self, question: QuestionModel) -> None:
        """Delete a question and its alternatives."""
        await self.session.delete(question)
        await self.session.flush()


def _build_alternatives(alternatives: Iterable[dict[str, Any]]) -> list[AlternativeModel]:
    return [
        AlternativeModel(
            position=position,
            description=alternative["description"],
            is_correct=alternative["is_correct"],
        )
        for position, alternative in enumerate(alternatives)
    ]
