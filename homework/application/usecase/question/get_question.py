"""Get question use case."""

from uuid import UUID

from pydantic import BaseModel

from homework.application.usecase.base import BaseUseCase
from homework.domain.service import QuestionService, VoteService
from homework.domain.value import QuestionId, UserId

from .list_questions import QuestionItem


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetQuestionUseCase(BaseUseCase):
    """Use case for fetching a single question."""

    def __init__(
        self, question_service: QuestionService, vote_service: VoteService
    ) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            vote_service: Vote domain service
        """
        self.question_service = question_service
        self.vote_service = vote_service

    async def execute(self, request: GetQuestionRequest) -> QuestionItem:
        """Fetch a question and the caller's vote status.

        Raises:
            QuestionNotFoundError: If the question doesn't exist
        """
        question_id = QuestionId(UUID(request.question_id))
        question = await self.question_service.get(question_id)

        has_voted = False
        if request.user_id:
            has_voted = await self.vote_service.has_voted(
                UserId(UUID(request.user_id)), question_id
            )

        return QuestionItem.from_question(question, has_voted=has_voted)
