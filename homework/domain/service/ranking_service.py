"""Ranking query service."""

from typing import NamedTuple, Optional

import logfire

from homework.config import PaginationSettings
from homework.domain.model.question import Question
from homework.domain.repository import QuestionRepository
from homework.domain.value import QuestionSortOrder, Subject

from .base import Service


class RankedPage(NamedTuple):
    """One page of a ranked question listing."""

    items: list[Question]
    total: int
    page: int
    page_size: int


class RankingService(Service):
    """Produces sorted, paginated question listings.

    Trending order uses the score cached at the last vote; questions are not
    rescored at query time.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        pagination: PaginationSettings,
    ) -> None:
        """Initialize ranking service.

        Args:
            question_repository: Question repository
            pagination: Page size defaults and limits
        """
        self.question_repository = question_repository
        self.pagination = pagination

    def clamp_page_size(self, page_size: int | None) -> int:
        """Bound a requested page size to ``[1, max_limit]``."""
        if page_size is None:
            return self.pagination.default_limit
        return max(1, min(page_size, self.pagination.max_limit))

    async def list_questions(
        self,
        subject: Optional[Subject] = None,
        sort: QuestionSortOrder = QuestionSortOrder.TRENDING,
        page: int = 1,
        page_size: int | None = None,
    ) -> RankedPage:
        """List questions in ranked order.

        Args:
            subject: Restrict to one subject (None for all)
            sort: trending, recent or votes
            page: 1-based page number
            page_size: Items per page (clamped to the configured maximum)

        Returns:
            The requested page and the total number of matching questions
        """
        page = max(page, 1)
        limit = self.clamp_page_size(page_size)
        offset = (page - 1) * limit

        with logfire.span(
            "ranking_service.list_questions",
            subject=subject.value if subject else None,
            sort=sort.value,
            page=page,
            limit=limit,
        ):
            total = await self.question_repository.count(subject=subject)
            items = await self.question_repository.find_all(
                sort=sort, subject=subject, limit=limit, offset=offset
            )
            logfire.info("Questions ranked", count=len(items), total=total)
            return RankedPage(items=items, total=total, page=page, page_size=limit)

    async def trending(
        self, subject: Optional[Subject] = None, limit: int | None = None
    ) -> list[Question]:
        """Top trending questions, optionally within one subject."""
        result = await self.list_questions(
            subject=subject, sort=QuestionSortOrder.TRENDING, page=1, page_size=limit
        )
        return result.items
