"""create dictionary schema

Revision ID: 3f9c2d1a7b40
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f9c2d1a7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    table_names = set(sa.inspect(bind).get_table_names())

    if "users" not in table_names:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=True),
            *_timestamps(),
        )
        op.create_index("ix_users_email", "users", ["email"], unique=True)

    if "words" not in table_names:
        op.create_table(
            "words",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("word", sa.String(length=255), nullable=False),
            sa.Column("language", sa.String(length=2), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint("word", "language", name="uq_words_word_language"),
        )
        op.create_index("ix_words_word", "words", ["word"])
        op.create_index("ix_words_language", "words", ["language"])

    if "translation_cache" not in table_names:
        op.create_table(
            "translation_cache",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("cache_key", sa.String(length=64), nullable=False),
            sa.Column("source_text", sa.Text(), nullable=False),
            sa.Column("source_language", sa.String(length=2), nullable=False),
            sa.Column("target_language", sa.String(length=2), nullable=False),
            sa.Column("prompt_version", sa.String(length=20), nullable=False),
            sa.Column("translation", sa.Text(), nullable=False),
            sa.Column("is_word", sa.Boolean(), nullable=False, server_default=sa.false()),
            *_timestamps(),
        )
        op.create_index("ix_translation_cache_cache_key", "translation_cache", ["cache_key"], unique=True)

    if "bookmarks" not in table_names:
        op.create_table(
            "bookmarks",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("word", sa.String(length=255), nullable=False),
            sa.Column("language", sa.String(length=2), nullable=False),
            sa.Column("translation", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint("user_id", "word", "language", name="uq_bookmarks_user_word_language"),
        )
        op.create_index("ix_bookmarks_user_id", "bookmarks", ["user_id"])
        op.create_index("ix_bookmarks_word", "bookmarks", ["word"])

    if "daily_word_sets" not in table_names:
        op.create_table(
            "daily_word_sets",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("date", sa.Date(), nullable=False),
            sa.Column("word_data", sa.JSON(), nullable=False),
            *_timestamps(),
            sa.UniqueConstraint("user_id", "date", name="uq_daily_word_sets_user_date"),
        )
        op.create_index("ix_daily_word_sets_user_id", "daily_word_sets", ["user_id"])
        op.create_index("ix_daily_word_sets_date", "daily_word_sets", ["date"])

    if "user_progress" not in table_names:
        op.create_table(
            "user_progress",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column(
                "daily_set_id",
                sa.Integer(),
                sa.ForeignKey("daily_word_sets.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("correct_answers", sa.JSON(), nullable=False),
            sa.Column("incorrect_answers", sa.JSON(), nullable=False),
            sa.Column("score", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("completed_at", sa.DateTime(), nullable=True),
            *_timestamps(),
            sa.UniqueConstraint("user_id", "daily_set_id", name="uq_user_progress_user_set"),
        )
        op.create_index("ix_user_progress_user_id", "user_progress", ["user_id"])
        op.create_index("ix_user_progress_daily_set_id", "user_progress", ["daily_set_id"])

    if "selected_words" not in table_names:
        op.create_table(
            "selected_words",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("word", sa.String(length=255), nullable=False),
            sa.Column("selected_date", sa.Date(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("ix_selected_words_user_id", "selected_words", ["user_id"])
        op.create_index("ix_selected_words_word", "selected_words", ["word"])


def downgrade() -> None:
    op.drop_table("selected_words")
    op.drop_table("user_progress")
    op.drop_table("daily_word_sets")
    op.drop_table("bookmarks")
    op.drop_table("translation_cache")
    op.drop_table("words")
    op.drop_table("users")
