"""Read access to the scanner-owned catalog tables."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, selectinload

from ..database.engine import get_db_session
from ..database.models.catalog import ChapterModel, SeriesModel, VolumeModel
from ..database.models.progress import ReadingProgressModel
from .entities import ChapterInfo, SeriesInfo, SeriesSnapshot, VolumeInfo

logger = logging.getLogger(__name__).getChild("catalog_repository")


class CatalogRepository:
    """Load series, volumes and chapters into immutable snapshots.

    Methods that accept a ``session`` join the caller's unit of work; the
    ``get_*`` conveniences open their own.
    """

    def load_series(self, session: Session, series_id: int) -> Optional[SeriesInfo]:
        model = session.execute(
            select(SeriesModel)
            .where(SeriesModel.id == series_id)
            .options(selectinload(SeriesModel.volumes).selectinload(VolumeModel.chapters))
        ).scalar_one_or_none()
        if model is None:
            return None
        return self._series_to_info(model)

    def load_snapshot(
        self, session: Session, series_id: int, user_id: int
    ) -> Optional[SeriesSnapshot]:
        series = self.load_series(session, series_id)
        if series is None:
            return None

        rows = session.execute(
            select(ReadingProgressModel.chapter_id, func.max(ReadingProgressModel.pages_read))
            .where(
                and_(
                    ReadingProgressModel.user_id == user_id,
                    ReadingProgressModel.series_id == series_id,
                )
            )
            .group_by(ReadingProgressModel.chapter_id)
        ).all()
        pages_read = {int(chapter_id): int(pages or 0) for chapter_id, pages in rows}
        return SeriesSnapshot(
            series=series,
            pages_read=pages_read,
            has_any_progress=bool(rows),
        )

    def get_series(self, series_id: int) -> Optional[SeriesInfo]:
        with get_db_session() as session:
            return self.load_series(session, series_id)

    def get_snapshot(self, series_id: int, user_id: int) -> Optional[SeriesSnapshot]:
        with get_db_session() as session:
            return self.load_snapshot(session, series_id, user_id)

    def get_chapter(self, session: Session, chapter_id: int) -> Optional[ChapterModel]:
        return session.execute(
            select(ChapterModel)
            .where(ChapterModel.id == chapter_id)
            .options(selectinload(ChapterModel.volume).selectinload(VolumeModel.series))
        ).scalar_one_or_none()

    @staticmethod
    def _chapter_to_info(model: ChapterModel) -> ChapterInfo:
        return ChapterInfo(
            id=model.id,
            volume_id=model.volume_id,
            range=model.range,
            sort_order=float(model.sort_order),
            pages=int(model.pages or 0),
            is_special=bool(model.is_special),
            min_number=float(model.min_number),
            max_number=float(model.max_number),
            title=model.title,
            release_date=model.release_date,
        )

    @classmethod
    def _volume_to_info(cls, model: VolumeModel) -> VolumeInfo:
        return VolumeInfo(
            id=model.id,
            series_id=model.series_id,
            name=model.name,
            min_number=float(model.min_number),
            max_number=float(model.max_number),
            chapters=tuple(cls._chapter_to_info(chapter) for chapter in model.chapters),
        )

    @classmethod
    def _series_to_info(cls, model: SeriesModel) -> SeriesInfo:
        return SeriesInfo(
            id=model.id,
            name=model.name,
            format=model.format,
            library_id=model.library_id,
            volumes=tuple(cls._volume_to_info(volume) for volume in model.volumes),
        )


__all__ = ["CatalogRepository"]
