"""Domain model entities for Homework Helper."""

from homework.domain.model.question import Question
from homework.domain.model.vote import Vote, VoteTally

__all__ = [
    "Question",
    "Vote",
    "VoteTally",
]
