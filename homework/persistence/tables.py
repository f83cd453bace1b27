"""SQLAlchemy table definitions for Homework Helper.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("author_id", UUID, nullable=False),  # Owned by the auth service
    Column("subject", String(50), nullable=False),
    Column("question_text", String(2000), nullable=False),
    Column("ai_answer", String(5000), nullable=True),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("trending_score", Float, nullable=False, server_default="0"),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="upvotes_non_negative"),
)

Index("idx_questions_author_id", questions_table.c.author_id)
Index("idx_questions_subject", questions_table.c.subject)
Index("idx_questions_created_at", questions_table.c.created_at.desc())
Index("idx_questions_trending_score", questions_table.c.trending_score.desc())
Index("idx_questions_upvotes", questions_table.c.upvotes.desc())
Index(
    "idx_questions_subject_trending",
    questions_table.c.subject,
    questions_table.c.trending_score.desc(),
)

# ============================================================================
# VOTES TABLE (the vote ledger)
# ============================================================================
VOTE_UNIQUE_CONSTRAINT = "uq_votes_user_question"

votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "question_id", name=VOTE_UNIQUE_CONSTRAINT),
)

Index("idx_votes_question_id", votes_table.c.question_id)
Index("idx_votes_user_id", votes_table.c.user_id)
Index("idx_votes_created_at", votes_table.c.created_at.desc())
