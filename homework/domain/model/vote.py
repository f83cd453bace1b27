"""Vote entity.

Votes are upvote-only. Each user can cast one vote per question.
"""

from datetime import datetime

from pydantic import Field

from homework.domain.model.common import DomainModel
from homework.domain.value import QuestionId, UserId, VoteId, utcnow


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per question (enforced by the store's unique constraint)
    - Created by a cast, deleted by a retract, never updated
    """

    id: VoteId
    user_id: UserId
    question_id: QuestionId
    created_at: datetime = Field(default_factory=utcnow)


class VoteTally(DomainModel):
    """Upvote count and cached trending score after a vote mutation."""

    upvotes: int = Field(ge=0)
    trending_score: float
