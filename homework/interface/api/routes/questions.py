"""Question routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, status
from pydantic import BaseModel, Field

from homework.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionUseCase,
    GetQuestionRequest,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    QuestionItem,
    TrendingQuestionsRequest,
    TrendingQuestionsResponse,
    TrendingQuestionsUseCase,
)
from homework.domain.error import DomainError, NotFoundError, TransientStorageError
from homework.domain.service import JWTService
from homework.domain.value import QuestionSortOrder, Subject
from homework.util.ratelimit import QUESTIONS, RateLimiter, RateLimitExceededError

router = APIRouter(prefix="/questions", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for submitting a question."""

    subject: Subject
    question_text: str = Field(min_length=10, max_length=2000)
    tags: list[str] = Field(default_factory=list, max_length=10)


def storage_unavailable(e: TransientStorageError) -> HTTPException:
    """Build the retriable 503 response for a storage outage."""
    logfire.warn("Storage temporarily unavailable", error=str(e))
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Storage temporarily unavailable, please retry",
        headers={"Retry-After": "1"},
    )


def too_many_requests(e: RateLimitExceededError) -> HTTPException:
    """Build the 429 response for an exhausted rate limit."""
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=str(e),
        headers={"Retry-After": str(e.retry_after)},
    )


@router.post("", response_model=QuestionItem, status_code=status.HTTP_201_CREATED)
async def create_question(
    request: CreateQuestionAPIRequest,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    rate_limiter: FromDishka[RateLimiter],
    authorization: str | None = Header(default=None),
) -> QuestionItem:
    """Submit a new question.

    Requires authentication. Submissions are rate limited per user.

    Raises:
        HTTPException: If not authenticated, rate limited or validation fails
    """
    user_id = jwt_service.get_user_id_from_header(authorization)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to submit questions",
        )

    try:
        rate_limiter.check(QUESTIONS, str(user_id))
    except RateLimitExceededError as e:
        raise too_many_requests(e)

    try:
        return await create_question_use_case.execute(
            CreateQuestionRequest(
                subject=request.subject,
                question_text=request.question_text,
                tags=request.tags,
                author_id=str(user_id),
            )
        )
    except TransientStorageError as e:
        raise storage_unavailable(e)
    except DomainError as e:
        logfire.warn("Question creation domain error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ValueError as e:
        logfire.warn("Question creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("", response_model=ListQuestionsResponse)
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    subject: Subject | None = None,
    sort: QuestionSortOrder = QuestionSortOrder.TRENDING,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    authorization: str | None = Header(default=None),
) -> ListQuestionsResponse:
    """List questions with subject filter, sort order and pagination.

    Authentication is optional; when present, items carry ``has_voted``.
    """
    user_id = jwt_service.get_user_id_from_header(authorization)

    try:
        return await list_questions_use_case.execute(
            ListQuestionsRequest(
                subject=subject,
                sort=sort,
                page=page,
                limit=limit,
                user_id=str(user_id) if user_id else None,
            )
        )
    except TransientStorageError as e:
        raise storage_unavailable(e)


@router.get("/trending", response_model=TrendingQuestionsResponse)
async def trending_questions(
    trending_questions_use_case: FromDishka[TrendingQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    subject: Subject | None = None,
    limit: int | None = Query(default=None, ge=1),
    authorization: str | None = Header(default=None),
) -> TrendingQuestionsResponse:
    """Top trending questions, optionally within one subject."""
    user_id = jwt_service.get_user_id_from_header(authorization)

    try:
        return await trending_questions_use_case.execute(
            TrendingQuestionsRequest(
                subject=subject,
                limit=limit,
                user_id=str(user_id) if user_id else None,
            )
        )
    except TransientStorageError as e:
        raise storage_unavailable(e)


@router.get("/{question_id}", response_model=QuestionItem)
async def get_question(
    question_id: UUID,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> QuestionItem:
    """Get a single question.

    Raises:
        HTTPException: If the question doesn't exist
    """
    user_id = jwt_service.get_user_id_from_header(authorization)

    try:
        return await get_question_use_case.execute(
            GetQuestionRequest(
                question_id=str(question_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except TransientStorageError as e:
        raise storage_unavailable(e)
