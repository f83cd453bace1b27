"""Domain value objects for Homework Helper."""

from homework.domain.value.identifiers import QuestionId, UserId, VoteId
from homework.domain.value.trending import (
    DECAY_FACTOR,
    TIME_OFFSET_HOURS,
    age_in_hours,
    trending_score,
)
from homework.domain.value.types import QuestionSortOrder, Subject, as_utc, utcnow

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "VoteId",
    # Types
    "Subject",
    "QuestionSortOrder",
    "utcnow",
    "as_utc",
    # Trending
    "DECAY_FACTOR",
    "TIME_OFFSET_HOURS",
    "age_in_hours",
    "trending_score",
]
