"""Vote repository interface (the vote ledger)."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from homework.domain.model.vote import Vote
from homework.domain.value import QuestionId, UserId


class VoteRepository(ABC):
    """Repository for Vote entity.

    The ledger is the source of truth for "has user X voted on question Y".
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def exists(self, user_id: UserId, question_id: QuestionId) -> bool:
        """Check whether a user has voted on a question.

        Args:
            user_id: The user's ID
            question_id: The question's ID

        Returns:
            True if a vote record exists
        """
        pass

    @abstractmethod
    async def find_by_user_and_question(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific question.

        Args:
            user_id: The user's ID
            question_id: The question's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, vote: Vote) -> Vote:
        """Insert a vote.

        The uniqueness check and the insert are one atomic store operation,
        so concurrent inserts for the same pair cannot both succeed.

        Args:
            vote: The vote to insert

        Returns:
            The inserted vote

        Raises:
            DuplicateVoteError: If the (user, question) pair already has a vote
        """
        pass

    @abstractmethod
    async def remove(self, user_id: UserId, question_id: QuestionId) -> Optional[Vote]:
        """Remove a user's vote on a question.

        Args:
            user_id: The user's ID
            question_id: The question's ID

        Returns:
            The removed vote, or None if no vote existed
        """
        pass

    @abstractmethod
    async def count_by_question(self, question_id: QuestionId) -> int:
        """Count votes on a question.

        Args:
            question_id: The question's ID

        Returns:
            Number of votes in the ledger
        """
        pass

    @abstractmethod
    async def find_by_user_and_questions(
        self, user_id: UserId, question_ids: Sequence[QuestionId]
    ) -> List[Vote]:
        """Find a user's votes on multiple questions (batch query).

        Args:
            user_id: The user's ID
            question_ids: Questions to check

        Returns:
            Votes by the user on the given questions
        """
        pass
