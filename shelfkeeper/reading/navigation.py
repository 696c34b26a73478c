"""Next/previous chapter lookup over the canonical reading order."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..catalog import NOT_FOUND, CatalogRepository, ReadingOrder, build_reading_order
from ..catalog.entities import SeriesInfo
from ..database.engine import get_db_session

logger = logging.getLogger(__name__).getChild("navigation")


class NavigationEngine:
    """Answer "what comes next/before this chapter" for one series.

    Read state never influences the answer; a fully read chapter is still a
    neighbour. Stale identifiers resolve to ``NOT_FOUND`` instead of raising.
    """

    def __init__(self, repository: Optional[CatalogRepository] = None) -> None:
        self._repository = repository or CatalogRepository()

    def get_next_chapter_id(
        self, series_id: int, volume_id: int, chapter_id: int, user_id: int
    ) -> int:
        order, located = self._locate(series_id, volume_id, chapter_id, user_id)
        if order is None or not located:
            return NOT_FOUND
        unit = order.next_after(chapter_id)
        return unit.chapter_id if unit is not None else NOT_FOUND

    def get_prev_chapter_id(
        self, series_id: int, volume_id: int, chapter_id: int, user_id: int
    ) -> int:
        order, located = self._locate(series_id, volume_id, chapter_id, user_id)
        if order is None or not located:
            return NOT_FOUND
        unit = order.previous_before(chapter_id)
        return unit.chapter_id if unit is not None else NOT_FOUND

    def get_reading_order(self, series_id: int) -> Optional[ReadingOrder]:
        series = self._repository.get_series(series_id)
        if series is None:
            return None
        return build_reading_order(series.volumes)

    def _locate(
        self, series_id: int, volume_id: int, chapter_id: int, user_id: int
    ) -> Tuple[Optional[ReadingOrder], bool]:
        with get_db_session() as session:
            series = self._repository.load_series(session, series_id)
        if series is None:
            logger.debug("Navigation requested for unknown series %s", series_id)
            return None, False
        if not self._contains(series, volume_id, chapter_id):
            logger.debug(
                "Chapter %s is not part of volume %s in series %s",
                chapter_id,
                volume_id,
                series_id,
                extra={"user_id": user_id, "series_id": series_id},
            )
            return None, False
        order = build_reading_order(series.volumes)
        return order, order.index_of(chapter_id) is not None

    @staticmethod
    def _contains(series: SeriesInfo, volume_id: int, chapter_id: int) -> bool:
        volume = series.find_volume(volume_id)
        if volume is None:
            return False
        return any(chapter.id == chapter_id for chapter in volume.chapters)


__all__ = ["NavigationEngine"]
