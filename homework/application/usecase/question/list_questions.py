"""List questions use case."""

import math
from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from homework.application.usecase.base import BaseUseCase
from homework.domain.model import Question
from homework.domain.service import RankingService, VoteService
from homework.domain.value import QuestionSortOrder, Subject, UserId


class QuestionItem(BaseModel):
    """Question as returned by listing and detail endpoints."""

    question_id: str
    author_id: str
    subject: Subject
    question_text: str
    ai_answer: str | None
    upvotes: int
    trending_score: float
    tags: list[str]
    created_at: datetime
    has_voted: bool = False

    @classmethod
    def from_question(cls, question: Question, has_voted: bool = False) -> "QuestionItem":
        """Build a response item from the domain model."""
        return cls(
            question_id=str(question.id),
            author_id=str(question.author_id),
            subject=question.subject,
            question_text=question.question_text,
            ai_answer=question.ai_answer,
            upvotes=question.upvotes,
            trending_score=question.trending_score,
            tags=question.tags,
            created_at=question.created_at,
            has_voted=has_voted,
        )


async def items_with_vote_status(
    questions: list[Question], vote_service: VoteService, user_id: str | None
) -> list[QuestionItem]:
    """Attach the caller's ``has_voted`` flag using one batch query."""
    voted: dict = {}
    if user_id and questions:
        voted = await vote_service.get_user_votes_for_questions(
            UserId(UUID(user_id)), [q.id for q in questions]
        )
    return [QuestionItem.from_question(q, voted.get(q.id, False)) for q in questions]


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    subject: Subject | None = None
    sort: QuestionSortOrder = QuestionSortOrder.TRENDING
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # Clamped to the configured max
    user_id: str | None = None  # Current user ID (if authenticated)


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    items: list[QuestionItem]
    total: int
    page: int
    limit: int
    total_pages: int


class ListQuestionsUseCase(BaseUseCase):
    """Use case for the question feed with filtering, sorting and pagination."""

    def __init__(
        self, ranking_service: RankingService, vote_service: VoteService
    ) -> None:
        """Initialize list questions use case.

        Args:
            ranking_service: Ranking query service
            vote_service: Vote domain service (for has_voted flags)
        """
        self.ranking_service = ranking_service
        self.vote_service = vote_service

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Args:
            request: Filters, sort order and pagination

        Returns:
            One page of questions plus pagination metadata
        """
        with logfire.span(
            "list_questions.execute",
            subject=request.subject.value if request.subject else None,
            sort=request.sort.value,
            page=request.page,
        ):
            page = await self.ranking_service.list_questions(
                subject=request.subject,
                sort=request.sort,
                page=request.page,
                page_size=request.limit,
            )

            items = await items_with_vote_status(
                page.items, self.vote_service, request.user_id
            )

            return ListQuestionsResponse(
                items=items,
                total=page.total,
                page=page.page,
                limit=page.page_size,
                total_pages=math.ceil(page.total / page.page_size),
            )
