"""initial schema

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-18 09:12:40.118502

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c2a7d1b04"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        )
    ]
    if updated:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.func.now(),
                nullable=False,
            )
        )
    return columns


def owner_column() -> sa.Column:
    return sa.Column(
        "user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column("theme", sa.String(length=20), nullable=False, server_default="dark"),
        sa.Column("language", sa.String(length=10), nullable=False, server_default="en"),
        *timestamps(),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "journal_entries",
        sa.Column("id", sa.String(length=36), primary_key=True),
        owner_column(),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("mood", sa.String(length=20), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        *timestamps(),
    )
    op.create_index(op.f("ix_journal_entries_user_id"), "journal_entries", ["user_id"])

    op.create_table(
        "mood_entries",
        sa.Column("id", sa.String(length=36), primary_key=True),
        owner_column(),
        sa.Column("mood", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("source", sa.String(length=20), nullable=False, server_default="manual"),
        sa.Column(
            "journal_entry_id",
            sa.String(length=36),
            sa.ForeignKey("journal_entries.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *timestamps(),
    )
    op.create_index(op.f("ix_mood_entries_user_id"), "mood_entries", ["user_id"])

    op.create_table(
        "community_posts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        owner_column(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        *timestamps(),
    )
    op.create_index(op.f("ix_community_posts_user_id"), "community_posts", ["user_id"])

    op.create_table(
        "post_likes",
        sa.Column("id", sa.String(length=36), primary_key=True),
        owner_column(),
        sa.Column(
            "post_id",
            sa.String(length=36),
            sa.ForeignKey("community_posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *timestamps(updated=False),
        sa.UniqueConstraint("user_id", "post_id", name="uq_post_likes_user_post"),
    )
    op.create_index(op.f("ix_post_likes_user_id"), "post_likes", ["user_id"])
    op.create_index(op.f("ix_post_likes_post_id"), "post_likes", ["post_id"])

    op.create_table(
        "post_comments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        owner_column(),
        sa.Column(
            "post_id",
            sa.String(length=36),
            sa.ForeignKey("community_posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        *timestamps(),
    )
    op.create_index(op.f("ix_post_comments_user_id"), "post_comments", ["user_id"])
    op.create_index(op.f("ix_post_comments_post_id"), "post_comments", ["post_id"])

    op.create_table(
        "ai_conversations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        owner_column(),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("response", sa.Text(), nullable=False),
        sa.Column("tone", sa.String(length=20), nullable=True),
        *timestamps(updated=False),
    )
    op.create_index(op.f("ix_ai_conversations_user_id"), "ai_conversations", ["user_id"])


def downgrade() -> None:
    # Children first
    op.drop_table("ai_conversations")
    op.drop_table("post_comments")
    op.drop_table("post_likes")
    op.drop_table("community_posts")
    op.drop_table("mood_entries")
    op.drop_table("journal_entries")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
