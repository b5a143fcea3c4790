"""Pydantic schemas for question endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from quizbase.domain.entities import Alternative
from quizbase.domain.services import ALTERNATIVES_PER_QUESTION


class AlternativeSchema(BaseModel):
    """One answer option in a question request."""

    description: str = Field(..., min_length=1, description="Alternative text")
    is_correct: bool = Field(..., description="Whether this is the correct answer")

    def to_entity(self) -> Alternative:
        return Alternative(description=self.description, is_correct=self.is_correct)


class QuestionCreateRequest(BaseModel):
    """Request schema for creating a question."""

    description: str = Field(..., min_length=1, description="Question statement")
    subject: str = Field(..., min_length=1, max_length=255, description="Question subject")
    alternatives: list[AlternativeSchema] = Field(
        ...,
        min_length=ALTERNATIVES_PER_QUESTION,
        max_length=ALTERNATIVES_PER_QUESTION,
        description="Exactly five alternatives, one of them correct",
    )


class QuestionUpdateRequest(BaseModel):
    """Request schema for updating a question.

    All fields are optional. Supplying ``alternatives`` replaces the whole set.
    """

    description: str | None = Field(None, min_length=1, description="Question statement")
    subject: str | None = Field(
        None, min_length=1, max_length=255, description="Question subject"
    )
    alternatives: list[AlternativeSchema] | None = Field(
        None,
        min_length=ALTERNATIVES_PER_QUESTION,
        max_length=ALTERNATIVES_PER_QUESTION,
        description="Replacement alternatives",
    )


class AlternativeResponse(BaseModel):
    """Alternative information in question responses."""

    id: str = Field(..., description="Alternative ID")
    description: str = Field(..., description="Alternative text")
    is_correct: bool = Field(..., description="Whether this is the correct answer")

    model_config = {"from_attributes": True}


class QuestionResponse(BaseModel):
    """Question information with its alternatives."""

    id: str = Field(..., description="Question ID")
    description: str = Field(..., description="Question statement")
    subject: str = Field(..., description="Question subject")
    user_id: str = Field(..., description="ID of the creating user")
    created_at: datetime = Field(..., description="When the question was created")
    updated_at: datetime = Field(..., description="When the question was last updated")
    alternatives: list[AlternativeResponse] = Field(..., description="Answer options")

    model_config = {"from_attributes": True}


class QuestionDeletedResponse(BaseModel):
    """Response after deleting a question."""

    deleted_question_id: str = Field(..., description="ID of the deleted question")
