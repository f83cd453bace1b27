"""Upvote use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from homework.application.usecase.base import BaseUseCase
from homework.domain.error import AlreadyVotedError
from homework.domain.service import VoteService
from homework.domain.value import QuestionId, UserId


class UpvoteRequest(BaseModel):
    """Upvote request."""

    question_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    retry: bool = False  # Client is resending a request whose response was lost


class VoteTallyResponse(BaseModel):
    """Question counters after a vote change."""

    upvotes: int
    trending_score: float


class UpvoteUseCase(BaseUseCase):
    """Use case for upvoting a question."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize upvote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: UpvoteRequest) -> VoteTallyResponse:
        """Execute upvote flow.

        A retried request that finds the vote already recorded is treated as
        success: the counter is realigned with the ledger and the current
        tally returned.

        Args:
            request: Upvote request

        Returns:
            Upvote count and trending score after the vote

        Raises:
            QuestionNotFoundError: If the question doesn't exist
            AlreadyVotedError: If already voted and this is not a retry
        """
        user_id = UserId(UUID(request.user_id))
        question_id = QuestionId(UUID(request.question_id))

        try:
            tally = await self.vote_service.cast_vote(user_id, question_id)
        except AlreadyVotedError:
            if not request.retry:
                raise
            logfire.info(
                "Retried vote already recorded",
                question_id=request.question_id,
                user_id=request.user_id,
            )
            tally = await self.vote_service.reconcile(question_id)

        return VoteTallyResponse(
            upvotes=tally.upvotes, trending_score=tally.trending_score
        )
