"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from homework.config import Settings
from homework.domain.model import Question
from homework.domain.value import QuestionId, Subject, UserId, utcnow
from homework.util.jwt import create_token

# Keep test output quiet and offline
logfire.configure(send_to_logfire=False, console=False)


def make_question(
    upvotes: int = 0,
    trending_score: float = 0.0,
    subject: Subject = Subject.MATHEMATICS,
    age: timedelta = timedelta(0),
    created_at: datetime | None = None,
    question_text: str = "How do I solve a quadratic equation?",
) -> Question:
    """Build a question for tests.

    Args:
        upvotes: Starting upvote count
        trending_score: Cached score to store
        subject: Question subject
        age: How long ago the question was created
        created_at: Explicit creation time (overrides ``age``)
        question_text: Question body

    Returns:
        Question domain model
    """
    return Question(
        id=QuestionId(uuid4()),
        author_id=UserId(uuid4()),
        subject=subject,
        question_text=question_text,
        upvotes=upvotes,
        trending_score=trending_score,
        tags=["algebra"],
        created_at=created_at or utcnow() - age,
    )


def auth_headers(user_id: str | None = None) -> dict[str, str]:
    """Authorization header carrying a valid token for ``user_id``."""
    token = create_token(user_id or str(uuid4()), Settings().auth)
    return {"Authorization": f"Bearer {token}"}
