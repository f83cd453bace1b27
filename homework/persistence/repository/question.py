"""PostgreSQL implementation of Question repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import logfire
from sqlalchemy import Float, cast, desc, extract, func, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homework.config import Settings
from homework.domain.model import Question
from homework.domain.repository.question import QuestionRepository
from homework.domain.value import QuestionId, QuestionSortOrder, Subject
from homework.persistence.mappers import question_to_dict, row_to_question
from homework.persistence.repository.base import PostgresRepository
from homework.persistence.tables import questions_table


class PostgresQuestionRepository(PostgresRepository, QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            settings: Application settings
        """
        super().__init__(session)
        self.settings = settings

    def _trending_score(self, upvotes: Any) -> Any:
        """SQL expression for the trending score of ``upvotes`` right now.

        Mirrors ``homework.domain.value.trending_score`` so the counter and
        its score are written by one UPDATE statement.
        """
        decay_factor = self.settings.ranking.decay_factor
        time_offset = self.settings.ranking.time_offset

        age_hours = func.greatest(
            extract("epoch", func.now() - questions_table.c.created_at) / 3600,
            0,
        )
        return cast(upvotes, Float) / func.power(
            cast(age_hours, Float) + literal(time_offset, Float),
            literal(decay_factor, Float),
        )

    async def _update_upvotes(
        self, question_id: QuestionId, upvotes: Any
    ) -> Optional[Question]:
        """Write a new upvote count and its score in a single statement."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(upvotes=upvotes, trending_score=self._trending_score(upvotes))
            .returning(questions_table)
        )
        result = await self._execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_question(row._asdict()) if row else None

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        stmt = select(questions_table).where(questions_table.c.id == question_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_question(row._asdict()) if row else None

    @asynccontextmanager
    async def lock(self, question_id: QuestionId) -> AsyncIterator[Optional[Question]]:
        """Lock the question row with SELECT ... FOR UPDATE.

        The row lock lasts until the request transaction ends, so leaving the
        context releases nothing. Concurrent counter UPDATEs on the row wait
        for that commit, and a ledger count taken after the lock sees every
        vote whose increment has already committed.
        """
        stmt = (
            select(questions_table)
            .where(questions_table.c.id == question_id)
            .with_for_update()
        )
        result = await self._execute(stmt)
        row = result.fetchone()
        yield row_to_question(row._asdict()) if row else None

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.TRENDING,
        subject: Optional[Subject] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering, ordering and pagination."""
        with logfire.span(
            "question_repository.find_all",
            sort=sort.value,
            subject=subject.value if subject else None,
            limit=limit,
            offset=offset,
        ):
            stmt = select(questions_table)

            if subject:
                stmt = stmt.where(questions_table.c.subject == subject.value)

            if sort == QuestionSortOrder.RECENT:
                stmt = stmt.order_by(desc(questions_table.c.created_at))
            elif sort == QuestionSortOrder.VOTES:
                stmt = stmt.order_by(
                    desc(questions_table.c.upvotes),
                    desc(questions_table.c.created_at),
                )
            else:
                stmt = stmt.order_by(
                    desc(questions_table.c.trending_score),
                    desc(questions_table.c.created_at),
                )

            stmt = stmt.limit(limit).offset(offset)

            result = await self._execute(stmt)
            questions = [row_to_question(row._asdict()) for row in result.fetchall()]
            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(self, subject: Optional[Subject] = None) -> int:
        """Count questions matching the given filter."""
        stmt = select(func.count()).select_from(questions_table)
        if subject:
            stmt = stmt.where(questions_table.c.subject == subject.value)

        result = await self._execute(stmt)
        return result.scalar() or 0

    async def save(self, question: Question) -> Question:
        """Save a question (create or update)."""
        with logfire.span("question_repository.save", question_id=str(question.id)):
            question_dict = question_to_dict(question)
            existing = await self.find_by_id(question.id)

            if existing:
                logfire.info("Updating existing question", question_id=str(question.id))
                stmt = (
                    questions_table.update()
                    .where(questions_table.c.id == question.id)
                    .values(**question_dict)
                )
            else:
                logfire.info(
                    "Inserting new question",
                    question_id=str(question.id),
                    subject=question.subject.value,
                )
                stmt = questions_table.insert().values(**question_dict)

            await self._execute(stmt)
            await self.session.flush()
            return question

    async def increment_upvotes(self, question_id: QuestionId) -> Optional[Question]:
        """Atomically increment upvotes by 1 and recompute the score."""
        return await self._update_upvotes(question_id, questions_table.c.upvotes + 1)

    async def decrement_upvotes(self, question_id: QuestionId) -> Optional[Question]:
        """Atomically decrement upvotes by 1 (minimum 0) and recompute the score."""
        return await self._update_upvotes(
            question_id, func.greatest(questions_table.c.upvotes - 1, 0)
        )

    async def set_upvotes(
        self, question_id: QuestionId, upvotes: int
    ) -> Optional[Question]:
        """Overwrite the upvote count and recompute the score.

        Only safe under ``lock``; the literal would otherwise overwrite
        increments committed after the value was computed.
        """
        return await self._update_upvotes(question_id, literal(max(upvotes, 0)))
