"""Question repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Optional

from homework.domain.model.question import Question
from homework.domain.value import QuestionId, QuestionSortOrder, Subject


class QuestionRepository(ABC):
    """Repository for Question aggregate.

    Counter mutations are single atomic store operations that write the new
    upvote count and its recomputed trending score together.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    def lock(
        self, question_id: QuestionId
    ) -> AbstractAsyncContextManager[Optional[Question]]:
        """Take exclusive hold of a question's counter.

        While held, no other writer can change the question's upvotes. Every
        vote flow enters it before touching the ledger, so a ledger count
        taken inside it matches what the counter should be.

        Args:
            question_id: The question ID

        Returns:
            Async context manager yielding the question, or None if it
            doesn't exist
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.TRENDING,
        subject: Optional[Subject] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering, ordering and pagination.

        Ordering uses the cached trending score; nothing is rescored here.

        Args:
            sort: Sort order (trending, recent or votes)
            subject: Filter by subject (None for all subjects)
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, subject: Optional[Subject] = None) -> int:
        """Count questions matching the given filter.

        Args:
            subject: Filter by subject (None for all subjects)

        Returns:
            Total number of questions matching the filter
        """
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a question (create or update).

        Args:
            question: The question to save

        Returns:
            The saved question
        """
        pass

    @abstractmethod
    async def increment_upvotes(self, question_id: QuestionId) -> Optional[Question]:
        """Atomically add one upvote and recompute the trending score.

        Args:
            question_id: The question ID

        Returns:
            The updated question, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def decrement_upvotes(self, question_id: QuestionId) -> Optional[Question]:
        """Atomically remove one upvote (minimum 0) and recompute the score.

        Args:
            question_id: The question ID

        Returns:
            The updated question, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def set_upvotes(
        self, question_id: QuestionId, upvotes: int
    ) -> Optional[Question]:
        """Overwrite the upvote count and recompute the trending score.

        Used by reconciliation to realign the counter with the vote ledger.
        Callers must hold ``lock`` for the question while counting the ledger
        and writing the result.

        Args:
            question_id: The question ID
            upvotes: New upvote count (clamped at 0)

        Returns:
            The updated question, or None if it doesn't exist
        """
        pass
