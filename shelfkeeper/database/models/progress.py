"""Reading progress model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base, utcnow

SCROLL_MARKER_MAX_LENGTH = 512


class ReadingProgressModel(Base):
    """One row per (user, chapter); duplicates are repaired by maintenance.

    ``chapter_id`` carries no foreign key: rows for chapters removed by a
    re-scan remain until the orphan cleanup pass deletes them.
    """

    __tablename__ = "reading_progress"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    chapter_id: Mapped[int] = mapped_column(Integer, nullable=False)
    volume_id: Mapped[int] = mapped_column(Integer, nullable=False)
    series_id: Mapped[int] = mapped_column(Integer, nullable=False)
    library_id: Mapped[int] = mapped_column(Integer, nullable=False)
    pages_read: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    scroll_marker: Mapped[Optional[str]] = mapped_column(
        String(SCROLL_MARKER_MAX_LENGTH), nullable=True
    )
    total_reads: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, server_default=func.now())
    last_modified: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    __table_args__ = (
        Index("idx_progress_user_chapter", "user_id", "chapter_id"),
        Index("idx_progress_user_series", "user_id", "series_id"),
    )

    def mark_modified(self) -> None:
        self.last_modified = utcnow()
