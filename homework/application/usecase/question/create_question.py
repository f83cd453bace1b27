"""Create question use case."""

from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel, Field

from homework.application.usecase.base import BaseUseCase
from homework.domain.model import Question
from homework.domain.service import QuestionService
from homework.domain.value import QuestionId, Subject, UserId, utcnow

from .list_questions import QuestionItem


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    subject: Subject
    question_text: str
    tags: list[str] = Field(default_factory=list)
    author_id: str  # User ID from authenticated user


class CreateQuestionUseCase(BaseUseCase):
    """Use case for submitting a new question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: CreateQuestionRequest) -> QuestionItem:
        """Execute create question flow.

        New questions start with no upvotes and a trending score of 0.

        Args:
            request: Create question request

        Returns:
            The created question

        Raises:
            pydantic.ValidationError: If the question violates model rules
        """
        with logfire.span(
            "create_question.execute",
            subject=request.subject.value,
            tags=request.tags,
        ):
            question = Question(
                id=QuestionId(uuid4()),
                author_id=UserId(UUID(request.author_id)),
                subject=request.subject,
                question_text=request.question_text,
                ai_answer=None,
                upvotes=0,
                trending_score=0.0,
                tags=request.tags,
                created_at=utcnow(),
            )

            saved = await self.question_service.save_question(question)

            logfire.info(
                "Question submitted",
                question_id=str(saved.id),
                subject=saved.subject.value,
            )
            return QuestionItem.from_question(saved)
