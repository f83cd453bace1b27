"""Trending questions use case."""

from pydantic import BaseModel, Field

from homework.application.usecase.base import BaseUseCase
from homework.domain.service import RankingService, VoteService
from homework.domain.value import Subject

from .list_questions import QuestionItem, items_with_vote_status


class TrendingQuestionsRequest(BaseModel):
    """Trending questions request."""

    subject: Subject | None = None
    limit: int | None = Field(default=None, ge=1)
    user_id: str | None = None


class TrendingQuestionsResponse(BaseModel):
    """Trending questions response."""

    items: list[QuestionItem]
    limit: int


class TrendingQuestionsUseCase(BaseUseCase):
    """Use case for the top-N trending questions."""

    def __init__(
        self, ranking_service: RankingService, vote_service: VoteService
    ) -> None:
        self.ranking_service = ranking_service
        self.vote_service = vote_service

    async def execute(
        self, request: TrendingQuestionsRequest
    ) -> TrendingQuestionsResponse:
        """Return the highest-scoring questions."""
        limit = self.ranking_service.clamp_page_size(request.limit)
        questions = await self.ranking_service.trending(
            subject=request.subject, limit=limit
        )
        items = await items_with_vote_status(
            questions, self.vote_service, request.user_id
        )
        return TrendingQuestionsResponse(items=items, limit=limit)
