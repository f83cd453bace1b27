"""Unit tests for VoteService."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from homework.domain.error import (
    AlreadyVotedError,
    InvariantViolationError,
    QuestionNotFoundError,
    VoteNotFoundError,
)
from homework.domain.model import Vote
from homework.domain.repository import QuestionRepository, VoteRepository
from homework.domain.service import QuestionService, VoteService
from homework.domain.value import QuestionId, UserId, VoteId
from homework.persistence.repository.inmemory import (
    InMemoryQuestionRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_question
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _saved_question(unit_env, **kwargs):
    repo = await unit_env.get(QuestionRepository)
    question = make_question(**kwargs)
    await repo.save(question)
    return question


class TestCastVote:
    """Tests for cast_vote."""

    @pytest.mark.asyncio
    async def test_cast_vote_records_vote_and_increments(self, unit_env):
        """Casting records a ledger entry and bumps the counter and score."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question_repo = await unit_env.get(QuestionRepository)
        question = await _saved_question(unit_env)
        user_id = UserId(uuid4())

        tally = await vote_service.cast_vote(user_id, question.id)

        assert tally.upvotes == 1
        assert tally.trending_score == pytest.approx(1 / 2**1.5, rel=1e-3)
        assert await vote_repo.exists(user_id, question.id)

        stored = await question_repo.find_by_id(question.id)
        assert stored.upvotes == 1
        assert stored.trending_score == tally.trending_score

    @pytest.mark.asyncio
    async def test_duplicate_vote_rejected_without_mutation(self, unit_env):
        """A second cast by the same user fails and changes nothing."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question_repo = await unit_env.get(QuestionRepository)
        question = await _saved_question(unit_env)
        user_id = UserId(uuid4())

        await vote_service.cast_vote(user_id, question.id)
        before = await question_repo.find_by_id(question.id)

        with pytest.raises(AlreadyVotedError, match="already voted"):
            await vote_service.cast_vote(user_id, question.id)

        after = await question_repo.find_by_id(question.id)
        assert after == before
        assert await vote_repo.count_by_question(question.id) == 1

    @pytest.mark.asyncio
    async def test_cast_vote_on_missing_question(self, unit_env):
        """Casting on an unknown question fails without writing a vote."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question_id = QuestionId(uuid4())
        user_id = UserId(uuid4())

        with pytest.raises(QuestionNotFoundError):
            await vote_service.cast_vote(user_id, question_id)

        assert not await vote_repo.exists(user_id, question_id)

    @pytest.mark.asyncio
    async def test_question_vanishing_mid_cast_is_invariant_violation(
        self, unit_env, monkeypatch
    ):
        """If the counter row is gone after the ledger write, the cast fails loudly."""
        vote_service = await unit_env.get(VoteService)
        question = await _saved_question(unit_env)
        monkeypatch.setattr(
            vote_service.question_service,
            "increment_votes",
            AsyncMock(return_value=None),
        )

        with pytest.raises(InvariantViolationError):
            await vote_service.cast_vote(UserId(uuid4()), question.id)

    @pytest.mark.asyncio
    async def test_concurrent_casts_by_distinct_users_all_count(self, unit_env):
        """N users voting at once yields exactly N upvotes."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _saved_question(unit_env)

        tallies = await asyncio.gather(
            *(vote_service.cast_vote(UserId(uuid4()), question.id) for _ in range(25))
        )

        assert max(t.upvotes for t in tallies) == 25
        assert sorted(t.upvotes for t in tallies) == list(range(1, 26))
        assert await vote_repo.count_by_question(question.id) == 25

    @pytest.mark.asyncio
    async def test_concurrent_casts_by_same_user_count_once(self, unit_env):
        """Racing casts from one user produce one success and one rejection."""
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await _saved_question(unit_env)
        user_id = UserId(uuid4())

        results = await asyncio.gather(
            vote_service.cast_vote(user_id, question.id),
            vote_service.cast_vote(user_id, question.id),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], AlreadyVotedError)
        assert (await question_repo.find_by_id(question.id)).upvotes == 1


class TestRetractVote:
    """Tests for retract_vote."""

    @pytest.mark.asyncio
    async def test_cast_then_retract_restores_state(self, unit_env):
        """A cast followed by a retract leaves no trace."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _saved_question(unit_env)
        user_id = UserId(uuid4())

        await vote_service.cast_vote(user_id, question.id)
        tally = await vote_service.retract_vote(user_id, question.id)

        assert tally.upvotes == 0
        assert tally.trending_score == 0.0
        assert not await vote_repo.exists(user_id, question.id)

    @pytest.mark.asyncio
    async def test_retract_without_vote_raises(self, unit_env):
        """Retracting a vote that was never cast fails."""
        vote_service = await unit_env.get(VoteService)
        question = await _saved_question(unit_env, upvotes=3)

        with pytest.raises(VoteNotFoundError):
            await vote_service.retract_vote(UserId(uuid4()), question.id)

    @pytest.mark.asyncio
    async def test_second_retract_raises(self, unit_env):
        """Only the first retract succeeds."""
        vote_service = await unit_env.get(VoteService)
        question = await _saved_question(unit_env)
        user_id = UserId(uuid4())

        await vote_service.cast_vote(user_id, question.id)
        await vote_service.retract_vote(user_id, question.id)

        with pytest.raises(VoteNotFoundError):
            await vote_service.retract_vote(user_id, question.id)

    @pytest.mark.asyncio
    async def test_retract_with_drifted_counter_stays_at_zero(self, unit_env):
        """A ledger entry with a zero counter never drives upvotes negative."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _saved_question(unit_env, upvotes=0)
        user_id = UserId(uuid4())
        await vote_repo.insert(
            Vote(id=VoteId(uuid4()), user_id=user_id, question_id=question.id)
        )

        tally = await vote_service.retract_vote(user_id, question.id)

        assert tally.upvotes == 0
        assert tally.trending_score == 0.0

    @pytest.mark.asyncio
    async def test_retract_on_deleted_question_returns_empty_tally(self, unit_env):
        """Retracting from a question that no longer exists reports zeros."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        user_id = UserId(uuid4())
        question_id = QuestionId(uuid4())
        await vote_repo.insert(
            Vote(id=VoteId(uuid4()), user_id=user_id, question_id=question_id)
        )

        tally = await vote_service.retract_vote(user_id, question_id)

        assert tally.upvotes == 0
        assert tally.trending_score == 0.0


class TestVoteScenario:
    """Multi-user voting scenario."""

    @pytest.mark.asyncio
    async def test_three_users_vote_and_one_retracts(self, unit_env):
        """Counts and scores follow casts and retracts."""
        vote_service = await unit_env.get(VoteService)
        question = await _saved_question(unit_env, age=timedelta(hours=1))
        alice, bob, carol = (UserId(uuid4()) for _ in range(3))

        assert (await vote_service.cast_vote(alice, question.id)).upvotes == 1
        assert (await vote_service.cast_vote(bob, question.id)).upvotes == 2
        three = await vote_service.cast_vote(carol, question.id)
        assert three.upvotes == 3
        assert three.trending_score == pytest.approx(3 / 3**1.5, rel=1e-3)

        with pytest.raises(AlreadyVotedError):
            await vote_service.cast_vote(alice, question.id)

        after_retract = await vote_service.retract_vote(bob, question.id)
        assert after_retract.upvotes == 2
        assert after_retract.trending_score == pytest.approx(2 / 3**1.5, rel=1e-3)

        # Bob may vote again after retracting
        assert (await vote_service.cast_vote(bob, question.id)).upvotes == 3


class TestReconcile:
    """Tests for reconcile."""

    @pytest.mark.asyncio
    async def test_reconcile_repairs_drifted_counter(self, unit_env):
        """The counter is reset to the ledger count."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _saved_question(unit_env, upvotes=5)
        for _ in range(2):
            await vote_repo.insert(
                Vote(id=VoteId(uuid4()), user_id=UserId(uuid4()), question_id=question.id)
            )

        tally = await vote_service.reconcile(question.id)

        assert tally.upvotes == 2
        assert tally.trending_score == pytest.approx(2 / 2**1.5, rel=1e-3)

    @pytest.mark.asyncio
    async def test_reconcile_consistent_counter_is_noop(self, unit_env):
        """A consistent counter keeps its value."""
        vote_service = await unit_env.get(VoteService)
        question = await _saved_question(unit_env)
        await vote_service.cast_vote(UserId(uuid4()), question.id)

        tally = await vote_service.reconcile(question.id)

        assert tally.upvotes == 1

    @pytest.mark.asyncio
    async def test_reconcile_missing_question_raises(self, unit_env):
        """Reconciling an unknown question fails."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(QuestionNotFoundError):
            await vote_service.reconcile(QuestionId(uuid4()))


class TestVoteStatus:
    """Tests for has_voted and get_user_votes_for_questions."""

    @pytest.mark.asyncio
    async def test_vote_status_lookup(self, unit_env):
        """Batch lookup flags exactly the voted questions."""
        vote_service = await unit_env.get(VoteService)
        voted = await _saved_question(unit_env)
        not_voted = await _saved_question(unit_env)
        user_id = UserId(uuid4())
        await vote_service.cast_vote(user_id, voted.id)

        assert await vote_service.has_voted(user_id, voted.id)
        assert not await vote_service.has_voted(user_id, not_voted.id)
        assert await vote_service.get_user_votes_for_questions(
            user_id, [voted.id, not_voted.id]
        ) == {voted.id: True, not_voted.id: False}
        assert await vote_service.get_user_votes_for_questions(user_id, []) == {}


class SuspendingVoteRepository(InMemoryVoteRepository):
    """Ledger that yields to the event loop on every call, like a real store."""

    async def insert(self, vote):
        await asyncio.sleep(0)
        return await super().insert(vote)

    async def remove(self, user_id, question_id):
        await asyncio.sleep(0)
        return await super().remove(user_id, question_id)

    async def count_by_question(self, question_id):
        await asyncio.sleep(0)
        return await super().count_by_question(question_id)


class TestReconcileConcurrency:
    """Reconciliation interleaved with live votes."""

    @staticmethod
    async def _service_with_question():
        question_repo = InMemoryQuestionRepository()
        vote_repo = SuspendingVoteRepository()
        service = VoteService(vote_repo, QuestionService(question_repo))
        question = make_question()
        await question_repo.save(question)
        return service, question_repo, vote_repo, question

    @pytest.mark.asyncio
    async def test_reconcile_does_not_drop_concurrent_cast(self):
        """A cast racing reconciliation is still counted."""
        service, question_repo, vote_repo, question = await self._service_with_question()
        await service.cast_vote(UserId(uuid4()), question.id)

        await asyncio.gather(
            service.reconcile(question.id),
            service.cast_vote(UserId(uuid4()), question.id),
        )

        stored = await question_repo.find_by_id(question.id)
        assert stored.upvotes == 2
        assert await vote_repo.count_by_question(question.id) == 2

    @pytest.mark.asyncio
    async def test_counter_matches_ledger_after_mixed_traffic(self):
        """Casts, a retract and reconciliations interleave without drift."""
        service, question_repo, vote_repo, question = await self._service_with_question()
        leaver = UserId(uuid4())
        await service.cast_vote(leaver, question.id)

        await asyncio.gather(
            service.cast_vote(UserId(uuid4()), question.id),
            service.reconcile(question.id),
            service.retract_vote(leaver, question.id),
            service.cast_vote(UserId(uuid4()), question.id),
            service.reconcile(question.id),
            service.cast_vote(UserId(uuid4()), question.id),
        )

        stored = await question_repo.find_by_id(question.id)
        assert stored.upvotes == await vote_repo.count_by_question(question.id) == 3
