"""SQLAlchemy models for questions and their alternatives.

A question belongs to the user who created it and owns exactly five
alternatives, one of them correct. Alternatives live and die with their
question.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizbase.infrastructure.persistence.database import Base


class QuestionModel(Base):
    """SQLAlchemy model for the questions table.

    Attributes:
        id: Primary key (UUID string).
        description: Question statement.
        subject: Subject the question belongs to.
        user_id: Foreign key to the creating user.
        created_at: Timestamp when the question was created.
        updated_at: Timestamp when the question was last updated.
    """

    __tablename__ = "questions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Question ID (UUID)",
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Question statement",
    )
    subject: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Subject of the question",
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to the creating user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="questions",
    )
    alternatives: Mapped[list["AlternativeModel"]] = relationship(
        "AlternativeModel",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AlternativeModel.position",
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, subject={self.subject}, user_id={self.user_id})>"


class AlternativeModel(Base):
    """SQLAlchemy model for the alternatives table.

    Attributes:
        id: Primary key (UUID string).
        question_id: Foreign key to the owning question.
        position: Order of the alternative within its question.
        description: Alternative text.
        is_correct: Whether this is the correct answer.
    """

    __tablename__ = "alternatives"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Alternative ID (UUID)",
    )
    question_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to questions table",
    )
    position: Mapped[int] = mapped_column(
        nullable=False,
        default=0,
        comment="Order within the question",
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Alternative text",
    )
    is_correct: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether this alternative is the correct answer",
    )

    question: Mapped[QuestionModel] = relationship(
        "QuestionModel",
        back_populates="alternatives",
    )

    def __repr__(self) -> str:
        return f"<Alternative(id={self.id}, question_id={self.question_id}, is_correct={self.is_correct})>"
