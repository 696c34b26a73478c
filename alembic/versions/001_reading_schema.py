"""Reading schema: catalog, users, progress and series groupings.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── 1. Catalog ────────────────────────────────────────────────
    op.create_table(
        "libraries",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="manga"),
    )

    op.create_table(
        "series",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("format", sa.String(20), nullable=False, server_default="archive"),
        sa.Column("library_id", sa.Integer, sa.ForeignKey("libraries.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("idx_series_library", "series", ["library_id"])

    op.create_table(
        "volumes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("series_id", sa.Integer, sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.Text, nullable=False, server_default=""),
        sa.Column("min_number", sa.Float, nullable=False, server_default="0"),
        sa.Column("max_number", sa.Float, nullable=False, server_default="0"),
    )
    op.create_index("idx_volumes_series", "volumes", ["series_id"])

    op.create_table(
        "chapters",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("volume_id", sa.Integer, sa.ForeignKey("volumes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("range", sa.Text, nullable=False),
        sa.Column("title", sa.Text, nullable=True),
        sa.Column("min_number", sa.Float, nullable=False, server_default="0"),
        sa.Column("max_number", sa.Float, nullable=False, server_default="0"),
        sa.Column("sort_order", sa.Float, nullable=False, server_default="0"),
        sa.Column("is_special", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("pages", sa.Integer, nullable=False, server_default="0"),
        sa.Column("release_date", sa.DateTime, nullable=True),
    )
    op.create_index("idx_chapters_volume", "chapters", ["volume_id"])

    # ── 2. Users ──────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("username", sa.String(255), unique=True, nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
    )

    # ── 3. Reading Progress ───────────────────────────────────────
    # chapter_id has no foreign key; orphans are removed by maintenance.
    op.create_table(
        "reading_progress",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("chapter_id", sa.Integer, nullable=False),
        sa.Column("volume_id", sa.Integer, nullable=False),
        sa.Column("series_id", sa.Integer, nullable=False),
        sa.Column("library_id", sa.Integer, nullable=False),
        sa.Column("pages_read", sa.Integer, nullable=False, server_default="0"),
        sa.Column("scroll_marker", sa.String(512), nullable=True),
        sa.Column("total_reads", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.Column("last_modified", sa.DateTime, server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_progress_user_chapter", "reading_progress", ["user_id", "chapter_id"])
    op.create_index("idx_progress_user_series", "reading_progress", ["user_id", "series_id"])

    # ── 4. Collections & Genres ───────────────────────────────────
    op.create_table(
        "collection_tags",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("owner_user_id", sa.Integer, nullable=True),
    )
    op.create_table(
        "collection_tag_series",
        sa.Column("collection_tag_id", sa.Integer, sa.ForeignKey("collection_tags.id", ondelete="CASCADE"), nullable=False),
        sa.Column("series_id", sa.Integer, sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("collection_tag_id", "series_id"),
    )

    op.create_table(
        "genres",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), unique=True, nullable=False),
    )
    op.create_table(
        "series_genres",
        sa.Column("genre_id", sa.Integer, sa.ForeignKey("genres.id", ondelete="CASCADE"), nullable=False),
        sa.Column("series_id", sa.Integer, sa.ForeignKey("series.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("genre_id", "series_id"),
    )


def downgrade() -> None:
    op.drop_table("series_genres")
    op.drop_table("genres")
    op.drop_table("collection_tag_series")
    op.drop_table("collection_tags")
    op.drop_table("reading_progress")
    op.drop_table("users")
    op.drop_table("chapters")
    op.drop_table("volumes")
    op.drop_table("series")
    op.drop_table("libraries")
