"""Question aggregate root.

Questions are submitted by students under one subject and ranked in the feed
by a time-decayed trending score derived from their upvote count.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from homework.domain.model.common import DomainModel
from homework.domain.value import (
    DECAY_FACTOR,
    TIME_OFFSET_HOURS,
    QuestionId,
    Subject,
    UserId,
    age_in_hours,
    as_utc,
    trending_score,
    utcnow,
)

MAX_TAG_LENGTH = 50


class Question(DomainModel):
    """Question aggregate root.

    Business rules:
    - ``upvotes`` never goes below 0
    - ``trending_score`` is a cached value, rewritten whenever ``upvotes``
      changes, from the upvote count and the question's age at that instant
    """

    id: QuestionId
    author_id: UserId
    subject: Subject
    question_text: str = Field(min_length=1, max_length=2000)
    ai_answer: Optional[str] = Field(default=None, max_length=5000)
    upvotes: int = Field(default=0, ge=0)
    trending_score: float = 0.0
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("question_text", mode="before")
    @classmethod
    def strip_question_text(cls, v: str) -> str:
        """Trim surrounding whitespace before length checks."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Trim tags, drop blanks and enforce the per-tag length limit."""
        tags = [tag.strip() for tag in v if tag.strip()]
        for tag in tags:
            if len(tag) > MAX_TAG_LENGTH:
                raise ValueError(f"Tag cannot exceed {MAX_TAG_LENGTH} characters")
        return tags

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        """Store creation time as timezone-aware UTC."""
        return as_utc(v)

    def calculate_trending_score(
        self,
        now: datetime | None = None,
        decay_factor: float = DECAY_FACTOR,
        time_offset: float = TIME_OFFSET_HOURS,
    ) -> float:
        """Evaluate the trending score for the current upvote count.

        Args:
            now: Evaluation instant (defaults to the current time)
            decay_factor: Decay exponent
            time_offset: Hours added to the age

        Returns:
            Trending score at ``now``
        """
        return trending_score(
            self.upvotes,
            age_in_hours(self.created_at, now),
            decay_factor=decay_factor,
            time_offset=time_offset,
        )

    def with_upvotes(
        self,
        upvotes: int,
        now: datetime | None = None,
        decay_factor: float = DECAY_FACTOR,
        time_offset: float = TIME_OFFSET_HOURS,
    ) -> "Question":
        """Return a copy with a new upvote count and a recomputed score.

        Counts below zero are clamped to zero.
        """
        updated = self.model_copy(update={"upvotes": max(upvotes, 0)})
        return updated.model_copy(
            update={
                "trending_score": updated.calculate_trending_score(
                    now, decay_factor=decay_factor, time_offset=time_offset
                )
            }
        )
