"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from homework.domain.error import DuplicateVoteError
from homework.domain.model.vote import Vote
from homework.domain.repository.vote import VoteRepository
from homework.domain.value import QuestionId, UserId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Votes are keyed by (user, question); the duplicate check and the insert
    run without a suspension point, which makes them one atomic step.
    """

    def __init__(self) -> None:
        self._votes: dict[tuple[UUID, UUID], Vote] = {}

    @staticmethod
    def _key(user_id: UserId, question_id: QuestionId) -> tuple[UUID, UUID]:
        return UUID(str(user_id)), UUID(str(question_id))

    async def exists(self, user_id: UserId, question_id: QuestionId) -> bool:
        """Check whether a user has voted on a question."""
        return self._key(user_id, question_id) in self._votes

    async def find_by_user_and_question(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific question."""
        return self._votes.get(self._key(user_id, question_id))

    async def insert(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            DuplicateVoteError: If the pair already has a vote
        """
        key = self._key(vote.user_id, vote.question_id)
        if key in self._votes:
            raise DuplicateVoteError(
                f"User {vote.user_id} already voted on question {vote.question_id}"
            )
        self._votes[key] = vote
        return vote

    async def remove(self, user_id: UserId, question_id: QuestionId) -> Optional[Vote]:
        """Remove a vote, returning the removed record."""
        return self._votes.pop(self._key(user_id, question_id), None)

    async def count_by_question(self, question_id: QuestionId) -> int:
        """Count votes on a question."""
        question_uuid = UUID(str(question_id))
        return sum(1 for v in self._votes.values() if v.question_id == question_uuid)

    async def find_by_user_and_questions(
        self, user_id: UserId, question_ids: Sequence[QuestionId]
    ) -> list[Vote]:
        """Find a user's votes on multiple questions (batch query)."""
        if not question_ids:
            return []

        votes = (self._votes.get(self._key(user_id, qid)) for qid in question_ids)
        return [vote for vote in votes if vote is not None]
