"""Reconcile votes use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from homework.application.usecase.base import BaseUseCase
from homework.domain.service import RankingService, VoteService
from homework.domain.value import QuestionId, QuestionSortOrder


class ReconcileVotesRequest(BaseModel):
    """Reconcile votes request.

    Without ``question_id`` one page of questions is reconciled; callers
    walk ``page`` forward while ``has_more`` is set, committing in between.
    """

    question_id: str | None = None
    page: int = Field(default=1, ge=1)
    batch_size: int = Field(default=100, ge=1)


class ReconcileVotesResponse(BaseModel):
    """Reconcile votes response."""

    checked: int
    repaired: int
    has_more: bool = False


class ReconcileVotesUseCase(BaseUseCase):
    """Realign upvote counters with the vote ledger."""

    def __init__(
        self, ranking_service: RankingService, vote_service: VoteService
    ) -> None:
        self.ranking_service = ranking_service
        self.vote_service = vote_service

    async def execute(self, request: ReconcileVotesRequest) -> ReconcileVotesResponse:
        """Execute reconciliation for one question or one page of questions.

        Raises:
            QuestionNotFoundError: If a single question was requested and
                doesn't exist
        """
        if request.question_id:
            question_id = QuestionId(UUID(request.question_id))
            question = await self.vote_service.question_service.get(question_id)
            tally = await self.vote_service.reconcile(question.id)
            return ReconcileVotesResponse(
                checked=1, repaired=int(tally.upvotes != question.upvotes)
            )

        with logfire.span(
            "reconcile_votes.execute", page=request.page, batch_size=request.batch_size
        ):
            # Newest first: questions created mid-run push pages down, so rows
            # may be checked twice but none are skipped
            page = await self.ranking_service.list_questions(
                sort=QuestionSortOrder.RECENT,
                page=request.page,
                page_size=request.batch_size,
            )

            repaired = 0
            for question in page.items:
                tally = await self.vote_service.reconcile(question.id)
                if tally.upvotes != question.upvotes:
                    repaired += 1

            has_more = bool(page.items) and page.page * page.page_size < page.total
            logfire.info(
                "Vote reconciliation batch finished",
                page=page.page,
                checked=len(page.items),
                repaired=repaired,
            )
        return ReconcileVotesResponse(
            checked=len(page.items), repaired=repaired, has_more=has_more
        )
