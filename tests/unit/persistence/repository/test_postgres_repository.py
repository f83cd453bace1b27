"""Unit tests for PostgreSQL repository plumbing that need no database."""

from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from homework.config import RankingSettings, Settings
from homework.domain.error import QuestionNotFoundError, TransientStorageError
from homework.domain.model import Vote
from homework.domain.value import QuestionId, UserId, VoteId
from homework.persistence.repository import (
    PostgresQuestionRepository,
    PostgresVoteRepository,
)
from homework.persistence.repository.base import PostgresRepository
from homework.persistence.tables import questions_table


class FailingSession:
    """Session stub whose execute always raises."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def execute(self, stmt):
        raise self.error


class TestErrorTranslation:
    """Tests for connectivity error mapping."""

    @pytest.mark.asyncio
    async def test_operational_error_becomes_transient(self):
        """Lost connections surface as a retriable storage error."""
        repo = PostgresRepository(
            FailingSession(OperationalError("SELECT 1", {}, Exception("refused")))
        )

        with pytest.raises(TransientStorageError):
            await repo._execute(questions_table.select())

    @pytest.mark.asyncio
    async def test_integrity_error_propagates(self):
        """Constraint violations are not retriable and pass through."""
        repo = PostgresRepository(
            FailingSession(IntegrityError("INSERT", {}, Exception("violates check")))
        )

        with pytest.raises(IntegrityError):
            await repo._execute(questions_table.select())


class TestTrendingScoreSQL:
    """Tests for the SQL form of the trending score."""

    def test_score_expression_uses_configured_decay(self):
        """The UPDATE expression carries the age clamp and decay parameters."""
        settings = Settings(ranking=RankingSettings(decay_factor=1.8, time_offset=2.5))
        repo = PostgresQuestionRepository(session=None, settings=settings)

        expr = repo._trending_score(questions_table.c.upvotes + 1)
        compiled = expr.compile(dialect=postgresql.dialect())
        sql = str(compiled)

        assert "power(" in sql
        assert "greatest(" in sql
        assert "EXTRACT(epoch FROM" in sql
        assert "questions.created_at" in sql
        assert 1.8 in compiled.params.values()
        assert 2.5 in compiled.params.values()

    def test_decrement_statement_clamps_at_zero(self):
        """The decrement is a single UPDATE guarded by greatest(..., 0)."""
        from sqlalchemy import func, update

        settings = Settings()
        repo = PostgresQuestionRepository(session=None, settings=settings)
        upvotes = func.greatest(questions_table.c.upvotes - 1, 0)
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == uuid4())
            .values(upvotes=upvotes, trending_score=repo._trending_score(upvotes))
            .returning(questions_table.c.upvotes)
        )
        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert sql.startswith("UPDATE questions SET upvotes=greatest(")
        assert "RETURNING questions.upvotes" in sql


class EmptyResult:
    """Result stub with no rows."""

    def fetchone(self):
        return None


class RecordingSession:
    """Session stub that records statements and returns no rows."""

    def __init__(self) -> None:
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        return EmptyResult()


class ForeignKeyViolation(Exception):
    """Driver error carrying the foreign_key_violation SQLSTATE."""

    sqlstate = "23503"


class TestQuestionLock:
    """Tests for the counter row lock."""

    @pytest.mark.asyncio
    async def test_lock_selects_row_for_update(self):
        """Locking issues SELECT ... FOR UPDATE on the question row."""
        session = RecordingSession()
        repo = PostgresQuestionRepository(session=session, settings=Settings())

        async with repo.lock(QuestionId(uuid4())) as question:
            assert question is None

        sql = str(session.statements[0].compile(dialect=postgresql.dialect()))
        assert sql.startswith("SELECT questions.id")
        assert sql.endswith("FOR UPDATE")


class TestVoteInsertErrors:
    """Tests for ledger insert error mapping."""

    @staticmethod
    def _vote() -> Vote:
        return Vote(
            id=VoteId(uuid4()),
            user_id=UserId(uuid4()),
            question_id=QuestionId(uuid4()),
        )

    @pytest.mark.asyncio
    async def test_missing_question_foreign_key_becomes_not_found(self):
        """A vote for a deleted question reports the question as missing."""
        repo = PostgresVoteRepository(
            FailingSession(
                IntegrityError("INSERT", {}, ForeignKeyViolation("violates foreign key"))
            )
        )

        with pytest.raises(QuestionNotFoundError):
            await repo.insert(self._vote())

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self):
        """Only the foreign key violation is translated."""
        repo = PostgresVoteRepository(
            FailingSession(IntegrityError("INSERT", {}, Exception("violates check")))
        )

        with pytest.raises(IntegrityError):
            await repo.insert(self._vote())
