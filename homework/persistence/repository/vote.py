"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import and_, delete, exists as sql_exists, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError

from homework.domain.error import DuplicateVoteError, QuestionNotFoundError
from homework.domain.model import Vote
from homework.domain.repository import VoteRepository
from homework.domain.value import QuestionId, UserId
from homework.persistence.mappers import row_to_vote, vote_to_dict
from homework.persistence.repository.base import PostgresRepository
from homework.persistence.tables import VOTE_UNIQUE_CONSTRAINT, votes_table

# PostgreSQL SQLSTATE for foreign_key_violation
FOREIGN_KEY_VIOLATION = "23503"


class PostgresVoteRepository(PostgresRepository, VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def _pair(self, user_id: UserId, question_id: QuestionId):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.question_id == question_id,
        )

    async def exists(self, user_id: UserId, question_id: QuestionId) -> bool:
        """Check whether a user has voted on a question."""
        stmt = select(sql_exists().where(self._pair(user_id, question_id)))
        result = await self._execute(stmt)
        return bool(result.scalar())

    async def find_by_user_and_question(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific question."""
        stmt = select(votes_table).where(self._pair(user_id, question_id))
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def insert(self, vote: Vote) -> Vote:
        """Insert a vote with a single INSERT ... ON CONFLICT DO NOTHING.

        A concurrent insert for the same pair waits on the unique index and
        then inserts nothing, so exactly one of them returns a row.

        Raises:
            DuplicateVoteError: If the pair already has a vote
            QuestionNotFoundError: If the question row is gone (foreign key)
        """
        stmt = (
            insert(votes_table)
            .values(**vote_to_dict(vote))
            .on_conflict_do_nothing(constraint=VOTE_UNIQUE_CONSTRAINT)
            .returning(votes_table.c.id)
        )
        try:
            result = await self._execute(stmt)
        except IntegrityError as e:
            if getattr(e.orig, "sqlstate", None) != FOREIGN_KEY_VIOLATION:
                raise
            logfire.warn(
                "Vote references a missing question",
                question_id=str(vote.question_id),
            )
            raise QuestionNotFoundError(str(vote.question_id)) from e
        inserted = result.fetchone()
        await self.session.flush()

        if inserted is None:
            logfire.info(
                "Vote already exists",
                user_id=str(vote.user_id),
                question_id=str(vote.question_id),
            )
            raise DuplicateVoteError(
                f"User {vote.user_id} already voted on question {vote.question_id}"
            )
        return vote

    async def remove(self, user_id: UserId, question_id: QuestionId) -> Optional[Vote]:
        """Delete a user's vote on a question, returning the removed record."""
        stmt = (
            delete(votes_table)
            .where(self._pair(user_id, question_id))
            .returning(votes_table)
        )
        result = await self._execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict()) if row else None

    async def count_by_question(self, question_id: QuestionId) -> int:
        """Count votes on a question."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(votes_table.c.question_id == question_id)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def find_by_user_and_questions(
        self, user_id: UserId, question_ids: Sequence[QuestionId]
    ) -> List[Vote]:
        """Find a user's votes on multiple questions (batch query)."""
        if not question_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.question_id.in_(question_ids),
            )
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]
