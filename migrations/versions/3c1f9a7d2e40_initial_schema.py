"""initial_schema

Create the ranking schema for Homework Helper:
- Questions (subject, text, cached upvote counter and trending score)
- Votes (the vote ledger, one row per user and question)

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2025-11-02 14:12:08.511204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # QUESTIONS table
    # ========================================================================
    op.create_table(
        "questions",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("subject", sa.String(50), nullable=False),
        sa.Column("question_text", sa.String(2000), nullable=False),
        sa.Column("ai_answer", sa.String(5000), nullable=True),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("trending_score", sa.Float(), nullable=False, server_default="0"),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(50)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="upvotes_non_negative"),
    )
    op.create_index("idx_questions_author_id", "questions", ["author_id"])
    op.create_index("idx_questions_subject", "questions", ["subject"])
    op.create_index(
        "idx_questions_created_at", "questions", [sa.text("created_at DESC")]
    )
    op.create_index(
        "idx_questions_trending_score", "questions", [sa.text("trending_score DESC")]
    )
    op.create_index("idx_questions_upvotes", "questions", [sa.text("upvotes DESC")])
    op.create_index(
        "idx_questions_subject_trending",
        "questions",
        ["subject", sa.text("trending_score DESC")],
    )

    # ========================================================================
    # VOTES table (one upvote per user per question)
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["question_id"], ["questions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "question_id", name="uq_votes_user_question"),
    )
    op.create_index("idx_votes_question_id", "votes", ["question_id"])
    op.create_index("idx_votes_user_id", "votes", ["user_id"])
    op.create_index("idx_votes_created_at", "votes", [sa.text("created_at DESC")])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("votes")
    op.drop_table("questions")
