"""Question service for business logic.

Handles creation, lookup, update and deletion of multiple-choice questions.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from quizbase.core.exceptions import ForbiddenError, NotFoundError
from quizbase.core.logging import get_logger
from quizbase.domain.entities import Alternative
from quizbase.domain.services.question_validator import validate_alternatives
from quizbase.infrastructure.persistence.models import QuestionModel
from quizbase.infrastructure.persistence.repositories import (
    QuestionRepository,
    UserRepository,
)

NOT_OWNER_MESSAGE = "Only the creator of the question can update"


class QuestionService:
    """Service for question business logic."""

    def __init__(
        self,
        session: AsyncSession,
        question_repo: QuestionRepository | None = None,
        user_repo: UserRepository | None = None,
        logger: Any | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
            question_repo: Repository for questions and alternatives.
            user_repo: Repository used to check the creator exists.
            logger: Structured logger.
        """
        self.session = session
        self.question_repo = question_repo or QuestionRepository(session)
        self.user_repo = user_repo or UserRepository(session)
        self.logger = logger or get_logger("quizbase.question_service")

    async def create(
        self,
        description: str,
        subject: str,
        alternatives: Sequence[Alternative],
        user_id: str,
    ) -> QuestionModel:
        """Create a question with its alternatives.

        Args:
            description: Question statement.
            subject: Subject of the question.
            alternatives: The five answer options.
            user_id: ID of the creating user.

        Returns:
            The created question with alternatives loaded.

        Raises:
            InvalidArgumentError: If the alternatives break the exactly-one-correct rule.
            NotFoundError: If the creating user does not exist.
        """
        validate_alternatives(alternatives)

        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")

        question = await self.question_repo.create(
            description=description,
            subject=subject,
            user_id=user_id,
            alternatives=[alternative.to_dict() for alternative in alternatives],
        )
        await self.session.commit()

        self.logger.info("Question created", question_id=question.id, user_id=user_id)
        return question

    async def list_all(self) -> list[QuestionModel]:
        """List every question with its alternatives."""
        return await self.question_repo.list_all()

    async def get(self, question_id: str) -> QuestionModel:
        """Get a question by ID.

        Raises:
            NotFoundError: If the question does not exist.
        """
        question = await self.question_repo.get_by_id(question_id)
        if question is None:
            raise NotFoundError("Question not found")
        return question

    async def update(
        self,
        question_id: str,
        user_id: str,
        description: str | None = None,
        subject: str | None = None,
        alternatives: Sequence[Alternative] | None = None,
    ) -> QuestionModel:
        """Update a question.

        When ``alternatives`` is given the whole set is replaced, and only the
        creator may do so. The ownership check is repeated in the UPDATE
        statement itself so a concurrent change of owner cannot slip through.

        Raises:
            NotFoundError: If the question does not exist.
            InvalidArgumentError: If the new alternatives break the exactly-one-correct rule.
            ForbiddenError: If alternatives are replaced by someone other than the creator.
        """
        question = await self.get(question_id)
        fields = {
            key: value
            for key, value in (("description", description), ("subject", subject))
            if value is not None
        }

        if alternatives is not None:
            validate_alternatives(alternatives)
            if question.user_id != user_id:
                self.logger.info(
                    "Question update refused: not the creator",
                    question_id=question_id,
                    user_id=user_id,
                )
                raise ForbiddenError(NOT_OWNER_MESSAGE)

            if not await self.question_repo.update_fields(question_id, fields, owner_id=user_id):
                await self.session.rollback()
                raise ForbiddenError(NOT_OWNER_MESSAGE)
            await self.question_repo.replace_alternatives(
                question, [alternative.to_dict() for alternative in alternatives]
            )
        elif not await self.question_repo.update_fields(question_id, fields):
            await self.session.rollback()
            raise NotFoundError("Question not found")

        await self.session.commit()
        self.logger.info(
            "Question updated",
            question_id=question_id,
            alternatives_replaced=alternatives is not None,
        )
        return await self.get(question_id)

    async def delete(self, question_id: str) -> dict[str, str]:
        """Delete a question and its alternatives.

        Raises:
            NotFoundError: If the question does not exist.
        """
        question = await self.get(question_id)
        await self.question_repo.delete(question)
        await self.session.commit()

        self.logger.info("Question deleted", question_id=question_id)
        return {"deleted_question_id": question_id}
