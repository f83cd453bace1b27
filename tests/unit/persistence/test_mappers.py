"""Unit tests for row/domain mappers."""

from datetime import datetime, timezone
from uuid import uuid4

from homework.domain.value import Subject
from homework.persistence.mappers import (
    question_to_dict,
    row_to_question,
    row_to_vote,
)
from tests.conftest import make_question


class TestQuestionMapping:
    """Tests for question mapping."""

    def test_row_with_string_ids(self):
        """String UUIDs and null tags are handled."""
        question_id = uuid4()
        row = {
            "id": str(question_id),
            "author_id": str(uuid4()),
            "subject": "Biology",
            "question_text": "What is mitosis?",
            "ai_answer": None,
            "upvotes": 3,
            "trending_score": 0.5,
            "tags": None,
            "created_at": datetime(2025, 5, 1, tzinfo=timezone.utc),
        }

        question = row_to_question(row)

        assert question.id == question_id
        assert question.subject == Subject.BIOLOGY
        assert question.tags == []
        assert question.upvotes == 3

    def test_question_to_dict_stores_subject_value(self):
        """Subjects are stored as their display value."""
        question = make_question(subject=Subject.FOREIGN_LANGUAGE)

        data = question_to_dict(question)

        assert data["subject"] == "Foreign Language"
        assert data["id"] == question.id
        assert row_to_question(data) == question


class TestVoteMapping:
    """Tests for vote mapping."""

    def test_row_to_vote(self):
        """Vote rows map to Vote models."""
        user_id, question_id = uuid4(), uuid4()

        vote = row_to_vote(
            {
                "id": uuid4(),
                "user_id": user_id,
                "question_id": str(question_id),
                "created_at": datetime(2025, 5, 1, tzinfo=timezone.utc),
            }
        )

        assert vote.user_id == user_id
        assert vote.question_id == question_id
