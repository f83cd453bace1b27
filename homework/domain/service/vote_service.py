"""Vote domain service.

Coordinates the vote ledger and the question counters. The ledger write
always happens first and the counter only moves if it succeeded, so the
ledger's unique constraint is what prevents double counting. Every flow
runs under the question's counter lock, which keeps reconciliation from
overwriting a concurrent cast.
"""

from uuid import UUID, uuid4

import logfire

from homework.domain.error import (
    AlreadyVotedError,
    DuplicateVoteError,
    InvariantViolationError,
    VoteNotFoundError,
)
from homework.domain.model.question import Question
from homework.domain.model.vote import Vote, VoteTally
from homework.domain.repository import VoteRepository
from homework.domain.value import QuestionId, UserId, VoteId, utcnow

from .base import Service
from .question_service import QuestionService

EMPTY_TALLY = VoteTally(upvotes=0, trending_score=0.0)


def _tally(question: Question) -> VoteTally:
    return VoteTally(upvotes=question.upvotes, trending_score=question.trending_score)


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        question_service: QuestionService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository (the ledger)
            question_service: Question domain service
        """
        self.vote_repository = vote_repository
        self.question_service = question_service

    async def cast_vote(self, user_id: UserId, question_id: QuestionId) -> VoteTally:
        """Upvote a question.

        Records the vote in the ledger, then atomically increments the
        question's counter and recomputes its trending score.

        Args:
            user_id: User ID
            question_id: Question ID

        Returns:
            Upvote count and trending score after the vote

        Raises:
            QuestionNotFoundError: If the question doesn't exist
            AlreadyVotedError: If the user already voted (nothing is mutated)
            InvariantViolationError: If the question disappears mid-cast
        """
        with logfire.span(
            "cast_vote", question_id=str(question_id), user_id=str(user_id)
        ):
            async with self.question_service.locked(question_id):
                vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    question_id=question_id,
                    created_at=utcnow(),
                )

                try:
                    await self.vote_repository.insert(vote)
                except DuplicateVoteError:
                    logfire.warn(
                        "Duplicate vote attempt",
                        user_id=str(user_id),
                        question_id=str(question_id),
                    )
                    raise AlreadyVotedError(str(user_id), str(question_id))

                question = await self.question_service.increment_votes(question_id)

            if question is None:
                logfire.error(
                    "Vote recorded for a question that no longer exists",
                    user_id=str(user_id),
                    question_id=str(question_id),
                )
                raise InvariantViolationError(
                    f"Question {question_id} vanished after vote was recorded"
                )

            logfire.info(
                "Vote recorded",
                question_id=str(question_id),
                user_id=str(user_id),
                upvotes=question.upvotes,
            )
            return _tally(question)

    async def retract_vote(self, user_id: UserId, question_id: QuestionId) -> VoteTally:
        """Remove a user's upvote from a question.

        Deletes the ledger entry, then atomically decrements the counter
        (never below 0) and recomputes the trending score.

        Args:
            user_id: User ID
            question_id: Question ID

        Returns:
            Upvote count and trending score after the retraction, or zeros
            if the question no longer exists

        Raises:
            VoteNotFoundError: If the user had not voted on the question
        """
        with logfire.span(
            "retract_vote", question_id=str(question_id), user_id=str(user_id)
        ):
            async with self.question_service.locked(
                question_id, must_exist=False
            ) as current:
                removed = await self.vote_repository.remove(user_id, question_id)
                if removed is None:
                    logfire.info(
                        "No vote to remove from question",
                        question_id=str(question_id),
                        user_id=str(user_id),
                    )
                    raise VoteNotFoundError(str(user_id), str(question_id))

                if current is None:
                    logfire.info(
                        "Vote removed from missing question",
                        question_id=str(question_id),
                    )
                    return EMPTY_TALLY

                if current.upvotes == 0:
                    # A ledger entry existed, so the counter should have been >= 1
                    logfire.error(
                        "Upvote counter drift: ledger entry without counter contribution",
                        question_id=str(question_id),
                        user_id=str(user_id),
                    )

                question = await self.question_service.decrement_votes(question_id)

            if question is None:
                return EMPTY_TALLY

            logfire.info(
                "Vote removed from question",
                question_id=str(question_id),
                user_id=str(user_id),
                upvotes=question.upvotes,
            )
            return _tally(question)

    async def reconcile(self, question_id: QuestionId) -> VoteTally:
        """Realign a question's upvote counter with the vote ledger.

        Sets ``upvotes`` to the number of ledger entries for the question and
        recomputes its trending score. The count and the write happen under
        the question's lock, so a concurrent cast either lands in the count
        or increments after the write.

        Args:
            question_id: Question ID

        Returns:
            Reconciled upvote count and trending score

        Raises:
            QuestionNotFoundError: If the question doesn't exist
        """
        with logfire.span("reconcile_votes", question_id=str(question_id)):
            async with self.question_service.locked(question_id) as question:
                ledger_count = await self.vote_repository.count_by_question(
                    question_id
                )

                if question.upvotes != ledger_count:
                    logfire.warn(
                        "Upvote counter drift repaired",
                        question_id=str(question_id),
                        counter=question.upvotes,
                        ledger=ledger_count,
                    )

                updated = await self.question_service.set_votes(
                    question_id, ledger_count
                )
            return _tally(updated) if updated else EMPTY_TALLY

    async def has_voted(self, user_id: UserId, question_id: QuestionId) -> bool:
        """Check whether a user has voted on a question."""
        return await self.vote_repository.exists(user_id, question_id)

    async def get_user_votes_for_questions(
        self, user_id: UserId, question_ids: list[QuestionId]
    ) -> dict[QuestionId, bool]:
        """Check which questions a user has voted on.

        Args:
            user_id: User ID
            question_ids: List of question IDs to check

        Returns:
            Dictionary mapping question ID to whether user has voted
        """
        if not question_ids:
            return {}

        votes = await self.vote_repository.find_by_user_and_questions(
            user_id=user_id, question_ids=question_ids
        )
        voted_ids = {UUID(str(vote.question_id)) for vote in votes}
        return {qid: UUID(str(qid)) in voted_ids for qid in question_ids}
