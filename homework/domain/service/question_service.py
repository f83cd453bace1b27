"""Question domain service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire

from homework.domain.error import QuestionNotFoundError
from homework.domain.model.question import Question
from homework.domain.repository import QuestionRepository
from homework.domain.value import QuestionId

from .base import Service


class QuestionService(Service):
    """Domain service for the Question aggregate."""

    def __init__(self, question_repository: QuestionRepository) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
        """
        self.question_repository = question_repository

    async def save_question(self, question: Question) -> Question:
        """Save a question.

        Args:
            question: Question to save

        Returns:
            Saved question
        """
        with logfire.span(
            "question_service.save_question",
            question_id=str(question.id),
            subject=question.subject.value,
        ):
            saved = await self.question_repository.save(question)
            logfire.info("Question saved", question_id=str(saved.id))
            return saved

    async def find(self, question_id: QuestionId) -> Question | None:
        """Get a question by ID, or None if it doesn't exist."""
        with logfire.span("question_service.find", question_id=str(question_id)):
            return await self.question_repository.find_by_id(question_id)

    async def get(self, question_id: QuestionId) -> Question:
        """Get a question by ID.

        Args:
            question_id: Question ID

        Returns:
            The question

        Raises:
            QuestionNotFoundError: If the question doesn't exist
        """
        question = await self.find(question_id)
        if not question:
            logfire.warn("Question not found", question_id=str(question_id))
            raise QuestionNotFoundError(str(question_id))
        return question

    @asynccontextmanager
    async def locked(
        self, question_id: QuestionId, must_exist: bool = True
    ) -> AsyncIterator[Question | None]:
        """Hold exclusive access to a question's counter for the block.

        Args:
            question_id: Question ID
            must_exist: Raise instead of yielding None for a missing question

        Raises:
            QuestionNotFoundError: If ``must_exist`` and the question doesn't exist
        """
        async with self.question_repository.lock(question_id) as question:
            if question is None and must_exist:
                logfire.warn("Question not found", question_id=str(question_id))
                raise QuestionNotFoundError(str(question_id))
            yield question

    async def increment_votes(self, question_id: QuestionId) -> Question | None:
        """Atomically add an upvote and refresh the trending score.

        Args:
            question_id: Question ID

        Returns:
            Updated question, or None if it doesn't exist
        """
        with logfire.span(
            "question_service.increment_votes", question_id=str(question_id)
        ):
            question = await self.question_repository.increment_upvotes(question_id)
            if question:
                logfire.info(
                    "Question upvotes incremented",
                    question_id=str(question_id),
                    upvotes=question.upvotes,
                    trending_score=question.trending_score,
                )
            return question

    async def decrement_votes(self, question_id: QuestionId) -> Question | None:
        """Atomically remove an upvote (minimum 0) and refresh the trending score.

        Args:
            question_id: Question ID

        Returns:
            Updated question, or None if it doesn't exist
        """
        with logfire.span(
            "question_service.decrement_votes", question_id=str(question_id)
        ):
            question = await self.question_repository.decrement_upvotes(question_id)
            if question:
                logfire.info(
                    "Question upvotes decremented",
                    question_id=str(question_id),
                    upvotes=question.upvotes,
                    trending_score=question.trending_score,
                )
            return question

    async def set_votes(self, question_id: QuestionId, upvotes: int) -> Question | None:
        """Overwrite the upvote count and refresh the trending score."""
        with logfire.span(
            "question_service.set_votes", question_id=str(question_id), upvotes=upvotes
        ):
            return await self.question_repository.set_upvotes(question_id, upvotes)
