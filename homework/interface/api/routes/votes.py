"""Vote routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from homework.application.usecase.vote import (
    RemoveVoteRequest,
    RemoveVoteUseCase,
    UpvoteRequest,
    UpvoteUseCase,
    VoteTallyResponse,
)
from homework.domain.error import (
    AlreadyVotedError,
    InvariantViolationError,
    NotFoundError,
    TransientStorageError,
)
from homework.domain.service import JWTService
from homework.interface.api.routes.questions import (
    storage_unavailable,
    too_many_requests,
)
from homework.util.ratelimit import VOTES, RateLimiter, RateLimitExceededError

router = APIRouter(prefix="/questions", tags=["votes"], route_class=DishkaRoute)


@router.post("/{question_id}/vote", response_model=VoteTallyResponse)
async def upvote_question(
    question_id: UUID,
    upvote_use_case: FromDishka[UpvoteUseCase],
    jwt_service: FromDishka[JWTService],
    rate_limiter: FromDishka[RateLimiter],
    retry: bool = False,
    authorization: str | None = Header(default=None),
) -> VoteTallyResponse:
    """Upvote a question.

    Requires authentication. Set ``retry=true`` when resending a vote whose
    response was lost; an already-recorded vote then counts as success.

    Args:
        question_id: Question UUID
        upvote_use_case: Upvote use case from DI
        jwt_service: JWT service for token verification (injected)
        rate_limiter: Per-user vote limiter (injected)
        retry: Whether this is a client retry
        authorization: Bearer token header

    Returns:
        Upvote count and trending score after the vote

    Raises:
        HTTPException: If not authenticated, rate limited, already voted, or
            question not found
    """
    user_id = jwt_service.get_user_id_from_header(authorization)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to vote",
        )

    try:
        rate_limiter.check(VOTES, str(user_id))
    except RateLimitExceededError as e:
        raise too_many_requests(e)

    try:
        request = UpvoteRequest(
            question_id=str(question_id),
            user_id=str(user_id),
            retry=retry,
        )
        return await upvote_use_case.execute(request)
    except AlreadyVotedError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except TransientStorageError as e:
        raise storage_unavailable(e)
    except InvariantViolationError as e:
        logfire.error("Vote invariant violated", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error while recording vote",
        )


@router.delete("/{question_id}/vote", response_model=VoteTallyResponse)
async def remove_vote(
    question_id: UUID,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    rate_limiter: FromDishka[RateLimiter],
    authorization: str | None = Header(default=None),
) -> VoteTallyResponse:
    """Remove the caller's upvote from a question.

    Requires authentication.

    Raises:
        HTTPException: If not authenticated, rate limited or no vote exists
    """
    user_id = jwt_service.get_user_id_from_header(authorization)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to remove vote",
        )

    try:
        rate_limiter.check(VOTES, str(user_id))
    except RateLimitExceededError as e:
        raise too_many_requests(e)

    try:
        request = RemoveVoteRequest(
            question_id=str(question_id),
            user_id=str(user_id),
        )
        return await remove_vote_use_case.execute(request)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except TransientStorageError as e:
        raise storage_unavailable(e)
