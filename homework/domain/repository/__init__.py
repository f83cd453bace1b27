"""Repository interfaces for Homework Helper domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from homework.domain.repository.question import QuestionRepository
from homework.domain.repository.vote import VoteRepository

__all__ = [
    "QuestionRepository",
    "VoteRepository",
]
