"""Remove vote use case."""

from uuid import UUID

from pydantic import BaseModel

from homework.application.usecase.base import BaseUseCase
from homework.domain.service import VoteService
from homework.domain.value import QuestionId, UserId

from .upvote import VoteTallyResponse


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    question_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class RemoveVoteUseCase(BaseUseCase):
    """Use case for removing an upvote from a question."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize remove vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> VoteTallyResponse:
        """Execute remove vote flow.

        Raises:
            VoteNotFoundError: If the user had not voted on the question
        """
        tally = await self.vote_service.retract_vote(
            UserId(UUID(request.user_id)), QuestionId(UUID(request.question_id))
        )
        return VoteTallyResponse(
            upvotes=tally.upvotes, trending_score=tally.trending_score
        )
