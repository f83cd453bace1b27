"""PostgreSQL repository implementations."""

from .question import PostgresQuestionRepository
from .vote import PostgresVoteRepository

__all__ = [
    "PostgresQuestionRepository",
    "PostgresVoteRepository",
]
