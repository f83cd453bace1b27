"""In-memory repository implementations for testing."""

from .question import InMemoryQuestionRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryQuestionRepository",
    "InMemoryVoteRepository",
]
