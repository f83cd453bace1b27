"""In-memory question repository for testing."""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from homework.config import RankingSettings
from homework.domain.model.question import Question
from homework.domain.repository.question import QuestionRepository
from homework.domain.value import QuestionId, QuestionSortOrder, Subject


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing.

    Counter updates read and replace the stored question without awaiting in
    between, so they are atomic with respect to other coroutines. ``lock``
    stands in for the row lock a database transaction would hold.
    """

    def __init__(self, ranking: RankingSettings | None = None) -> None:
        self._questions: dict[QuestionId, Question] = {}
        self._locks: defaultdict[QuestionId, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._ranking = ranking or RankingSettings()

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        return self._questions.get(question_id)

    @asynccontextmanager
    async def lock(self, question_id: QuestionId) -> AsyncIterator[Optional[Question]]:
        """Hold the question's lock until the block exits."""
        async with self._locks[question_id]:
            yield self._questions.get(question_id)

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.TRENDING,
        subject: Optional[Subject] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering, ordering and pagination."""
        questions = list(self._questions.values())

        if subject is not None:
            questions = [q for q in questions if q.subject == subject]

        if sort == QuestionSortOrder.RECENT:
            questions.sort(key=lambda q: q.created_at, reverse=True)
        elif sort == QuestionSortOrder.VOTES:
            questions.sort(key=lambda q: (q.upvotes, q.created_at), reverse=True)
        else:
            questions.sort(
                key=lambda q: (q.trending_score, q.created_at), reverse=True
            )

        return questions[offset : offset + limit]

    async def count(self, subject: Optional[Subject] = None) -> int:
        """Count questions matching the given filter."""
        if subject is None:
            return len(self._questions)
        return sum(1 for q in self._questions.values() if q.subject == subject)

    async def save(self, question: Question) -> Question:
        """Save or update a question."""
        self._questions[question.id] = question
        return question

    def _set(
        self, question_id: QuestionId, delta: int | None, value: int = 0
    ) -> Optional[Question]:
        question = self._questions.get(question_id)
        if question is None:
            return None

        upvotes = question.upvotes + delta if delta is not None else value
        updated = question.with_upvotes(
            upvotes,
            decay_factor=self._ranking.decay_factor,
            time_offset=self._ranking.time_offset,
        )
        self._questions[question_id] = updated
        return updated

    async def increment_upvotes(self, question_id: QuestionId) -> Optional[Question]:
        """Atomically increment upvotes by 1 and recompute the score."""
        return self._set(question_id, delta=1)

    async def decrement_upvotes(self, question_id: QuestionId) -> Optional[Question]:
        """Atomically decrement upvotes by 1 (minimum 0) and recompute the score."""
        return self._set(question_id, delta=-1)

    async def set_upvotes(
        self, question_id: QuestionId, upvotes: int
    ) -> Optional[Question]:
        """Overwrite the upvote count and recompute the score."""
        return self._set(question_id, delta=None, value=upvotes)
