"""Question use cases."""

from .create_question import CreateQuestionRequest, CreateQuestionUseCase
from .get_question import GetQuestionRequest, GetQuestionUseCase
from .list_questions import (
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    QuestionItem,
)
from .trending_questions import (
    TrendingQuestionsRequest,
    TrendingQuestionsResponse,
    TrendingQuestionsUseCase,
)

__all__ = [
    "CreateQuestionRequest",
    "CreateQuestionUseCase",
    "GetQuestionRequest",
    "GetQuestionUseCase",
    "ListQuestionsRequest",
    "ListQuestionsResponse",
    "ListQuestionsUseCase",
    "QuestionItem",
    "TrendingQuestionsRequest",
    "TrendingQuestionsResponse",
    "TrendingQuestionsUseCase",
]
