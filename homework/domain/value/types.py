"""Domain value objects for Homework Helper.

Value objects are immutable and defined by their values, not identity.
"""

from datetime import datetime, timezone
from enum import Enum


class Subject(str, Enum):
    """Closed set of subjects a question can be filed under."""

    MATHEMATICS = "Mathematics"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    COMPUTER_SCIENCE = "Computer Science"
    HISTORY = "History"
    LITERATURE = "Literature"
    GEOGRAPHY = "Geography"
    ECONOMICS = "Economics"
    PSYCHOLOGY = "Psychology"
    PHILOSOPHY = "Philosophy"
    ART = "Art"
    MUSIC = "Music"
    FOREIGN_LANGUAGE = "Foreign Language"
    OTHER = "Other"


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    TRENDING = "trending"  # trending_score DESC, created_at DESC
    RECENT = "recent"  # created_at DESC
    VOTES = "votes"  # upvotes DESC, created_at DESC


def utcnow() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to timezone-aware UTC.

    Naive values are interpreted as local time, matching ``datetime.now()``.
    """
    return value.astimezone(timezone.utc)
