"""Questions API routes.

Reading questions is public; writing requires a session token.
"""

from fastapi import APIRouter, status

from quizbase.infrastructure.api.dependencies import AuthenticatedUser, QuestionServiceDep
from quizbase.infrastructure.api.schemas import (
    ErrorResponse,
    QuestionCreateRequest,
    QuestionDeletedResponse,
    QuestionResponse,
    QuestionUpdateRequest,
)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=QuestionResponse,
    summary="Create a question",
    responses={
        400: {"model": ErrorResponse, "description": "Not exactly one correct alternative"},
        401: {"model": ErrorResponse, "description": "Invalid token"},
    },
)
async def create_question(
    question_data: QuestionCreateRequest,
    current_user: AuthenticatedUser,
    question_service: QuestionServiceDep,
) -> QuestionResponse:
    question = await question_service.create(
        description=question_data.description,
        subject=question_data.subject,
        alternatives=[alternative.to_entity() for alternative in question_data.alternatives],
        user_id=current_user.id,
    )
    return QuestionResponse.model_validate(question)


@router.get("", response_model=list[QuestionResponse], summary="List questions")
async def list_questions(question_service: QuestionServiceDep) -> list[QuestionResponse]:
    questions = await question_service.list_all()
    return [QuestionResponse.model_validate(question) for question in questions]


@router.get(
    "/{question_id}",
    response_model=QuestionResponse,
    summary="Get a question",
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
)
async def get_question(question_id: str, question_service: QuestionServiceDep) -> QuestionResponse:
    question = await question_service.get(question_id)
    return QuestionResponse.model_validate(question)


@router.patch(
    "/{question_id}",
    response_model=QuestionResponse,
    summary="Update a question",
    responses={
        400: {"model": ErrorResponse, "description": "Not exactly one correct alternative"},
        403: {"model": ErrorResponse, "description": "Only the creator can replace alternatives"},
        404: {"model": ErrorResponse, "description": "Question not found"},
    },
)
async def update_question(
    question_id: str,
    question_data: QuestionUpdateRequest,
    current_user: AuthenticatedUser,
    question_service: QuestionServiceDep,
) -> QuestionResponse:
    """Update a question.

    Supplying ``alternatives`` replaces all of them and is reserved to the
    question's creator.
    """
    alternatives = None
    if question_data.alternatives is not None:
        alternatives = [alternative.to_entity() for alternative in question_data.alternatives]

    question = await question_service.update(
        question_id,
        current_user.id,
        description=question_data.description,
        subject=question_data.subject,
        alternatives=alternatives,
    )
    return QuestionResponse.model_validate(question)


@router.delete(
    "/{question_id}",
    response_model=QuestionDeletedResponse,
    summary="Delete a question",
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
)
async def delete_question(
    question_id: str,
    current_user: AuthenticatedUser,
    question_service: QuestionServiceDep,
) -> QuestionDeletedResponse:
    result = await question_service.delete(question_id)
    return QuestionDeletedResponse(**result)
