"""Per-user reading progress writes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from .. import logging_manager as log_mgr
from ..catalog import CatalogRepository, VolumeKind
from ..catalog.entities import ChapterInfo, SeriesInfo
from ..database.engine import get_db_session
from ..database.models.progress import SCROLL_MARKER_MAX_LENGTH, ReadingProgressModel
from ..database.models.user import UserModel
from ..notifications import (
    NullScrobbleNotifier,
    ProgressEventHub,
    ProgressUpdateEvent,
    ScrobbleNotifier,
    notify_scrobbler,
)
from .errors import ChapterNotFoundError, SeriesNotFoundError, UserNotFoundError

logger = logging.getLogger(__name__).getChild("progress_ledger")


@dataclass
class _BatchOutcome:
    events: List[ProgressUpdateEvent] = field(default_factory=list)
    touched: int = 0
    completed: int = 0


class ProgressLedger:
    """Create and update progress rows, one unit of work per call.

    Events and scrobble notifications are delivered only after the unit of
    work commits; a failed write never emits anything.
    """

    def __init__(
        self,
        repository: Optional[CatalogRepository] = None,
        event_hub: Optional[ProgressEventHub] = None,
        scrobbler: Optional[ScrobbleNotifier] = None,
    ) -> None:
        self._repository = repository or CatalogRepository()
        self._event_hub = event_hub or ProgressEventHub()
        self._scrobbler = scrobbler or NullScrobbleNotifier()

    @property
    def event_hub(self) -> ProgressEventHub:
        return self._event_hub

    # ------------------------------------------------------------------
    # Single chapter
    # ------------------------------------------------------------------

    def save_reading_progress(
        self,
        user_id: int,
        chapter_id: int,
        volume_id: int,
        series_id: int,
        page_num: Any,
        scroll_marker: Optional[str] = None,
    ) -> bool:
        """Record the page a user reached in a chapter.

        ``page_num`` is clamped into ``[0, chapter.pages]``. Returns ``False``
        when the user or chapter does not exist. Opening a chapter at page 0
        without an existing row writes nothing.
        """

        page = self._coerce_page(page_num)
        marker = self._coerce_marker(scroll_marker)

        with log_mgr.log_context(user_id=user_id, series_id=series_id):
            with get_db_session() as session:
                if session.get(UserModel, user_id) is None:
                    logger.debug("Progress save for unknown user %s", user_id)
                    return False
                chapter = self._repository.get_chapter(session, chapter_id)
                if chapter is None:
                    logger.debug("Progress save for unknown chapter %s", chapter_id)
                    return False

                total_pages = int(chapter.pages or 0)
                page = min(max(page, 0), total_pages)
                actual_volume_id = chapter.volume_id
                actual_series_id = chapter.volume.series_id
                if (volume_id, series_id) != (actual_volume_id, actual_series_id):
                    logger.debug(
                        "Chapter %s belongs to volume %s of series %s; ignoring %s/%s",
                        chapter_id,
                        actual_volume_id,
                        actual_series_id,
                        volume_id,
                        series_id,
                    )

                rows = self._rows_for(session, user_id, [chapter_id]).get(chapter_id, [])
                if not rows and page == 0:
                    return True

                previous = max((row.pages_read for row in rows), default=0)
                if rows:
                    for row in rows:
                        row.pages_read = page
                        row.volume_id = actual_volume_id
                        row.series_id = actual_series_id
                        row.library_id = chapter.volume.series.library_id
                        row.scroll_marker = marker
                        row.mark_modified()
                else:
                    session.add(
                        ReadingProgressModel(
                            user_id=user_id,
                            chapter_id=chapter_id,
                            volume_id=actual_volume_id,
                            series_id=actual_series_id,
                            library_id=chapter.volume.series.library_id,
                            pages_read=page,
                            scroll_marker=marker,
                            total_reads=0,
                        )
                    )
                logger.debug(
                    "Saving progress on series %s, chapter %s to page %s",
                    actual_series_id,
                    chapter_id,
                    page,
                )

            self._event_hub.publish(
                ProgressUpdateEvent(
                    user_id=user_id,
                    series_id=actual_series_id,
                    volume_id=actual_volume_id,
                    chapter_id=chapter_id,
                    pages_read=page,
                )
            )
            if page >= total_pages and previous < total_pages:
                notify_scrobbler(self._scrobbler, user_id, actual_series_id)
            return True

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def mark_chapters_as_read(
        self, user_id: int, series_id: int, chapter_ids: Iterable[int]
    ) -> int:
        return self._mark(user_id, series_id, self._chapter_selector(chapter_ids), read=True)

    def mark_chapters_as_unread(
        self, user_id: int, series_id: int, chapter_ids: Iterable[int]
    ) -> int:
        return self._mark(user_id, series_id, self._chapter_selector(chapter_ids), read=False)

    def mark_series_as_read(self, user_id: int, series_id: int) -> int:
        return self._mark(user_id, series_id, lambda series: list(series.iter_chapters()), read=True)

    def mark_series_as_unread(self, user_id: int, series_id: int) -> int:
        return self._mark(
            user_id, series_id, lambda series: list(series.iter_chapters()), read=False
        )

    def mark_chapters_until_as_read(
        self, user_id: int, series_id: int, chapter_number: Any
    ) -> int:
        """Mark every non-special chapter numbered up to ``chapter_number``.

        Special volumes are skipped; placeholder chapters carry the lowest
        sentinel number and are always included.
        """

        threshold = self._coerce_threshold(chapter_number)
        if threshold is None:
            logger.warning("Ignoring non-numeric chapter threshold %r", chapter_number)
            return 0

        def _select(series: SeriesInfo) -> List[ChapterInfo]:
            selected: List[ChapterInfo] = []
            for volume in sorted(series.volumes, key=lambda v: (v.min_number, v.id)):
                if volume.kind is VolumeKind.SPECIAL:
                    continue
                selected.extend(
                    chapter
                    for chapter in volume.sorted_chapters()
                    if not chapter.is_special and chapter.max_number <= threshold
                )
            return selected

        return self._mark(user_id, series_id, _select, read=True)

    def mark_volumes_until_as_read(
        self, user_id: int, series_id: int, volume_number: Any
    ) -> int:
        """Mark every chapter of the regular volumes numbered up to ``volume_number``."""

        threshold = self._coerce_threshold(volume_number)
        if threshold is None:
            logger.warning("Ignoring non-numeric volume threshold %r", volume_number)
            return 0

        def _select(series: SeriesInfo) -> List[ChapterInfo]:
            selected: List[ChapterInfo] = []
            for volume in sorted(series.volumes, key=lambda v: (v.min_number, v.id)):
                if volume.kind is VolumeKind.REGULAR and volume.min_number <= threshold:
                    selected.extend(volume.sorted_chapters())
            return selected

        return self._mark(user_id, series_id, _select, read=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_progress(self, user_id: int, chapter_id: int) -> Optional[ReadingProgressModel]:
        with get_db_session() as session:
            rows = self._rows_for(session, user_id, [chapter_id]).get(chapter_id, [])
            return rows[0] if rows else None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _chapter_selector(chapter_ids: Iterable[int]):
        wanted = list(dict.fromkeys(chapter_ids))

        def _select(series: SeriesInfo) -> List[ChapterInfo]:
            by_id = {chapter.id: chapter for chapter in series.iter_chapters()}
            missing = [chapter_id for chapter_id in wanted if chapter_id not in by_id]
            if missing:
                raise ChapterNotFoundError(missing[0])
            return [by_id[chapter_id] for chapter_id in wanted]

        return _select

    def _mark(self, user_id: int, series_id: int, selector, *, read: bool) -> int:
        with log_mgr.log_context(user_id=user_id, series_id=series_id):
            with get_db_session() as session:
                if session.get(UserModel, user_id) is None:
                    raise UserNotFoundError(user_id)
                series = self._repository.load_series(session, series_id)
                if series is None:
                    raise SeriesNotFoundError(series_id)
                chapters: Sequence[ChapterInfo] = selector(series)
                outcome = self._apply(session, user_id, series, chapters, read=read)

            self._event_hub.publish_all(outcome.events)
            if outcome.touched and (not read or outcome.completed):
                notify_scrobbler(self._scrobbler, user_id, series_id)
            logger.info(
                "Marked %s chapter(s) as %s",
                outcome.touched,
                "read" if read else "unread",
                extra={"event": "progress.mark"},
            )
        return outcome.touched

    def _apply(
        self,
        session: Session,
        user_id: int,
        series: SeriesInfo,
        chapters: Sequence[ChapterInfo],
        *,
        read: bool,
    ) -> _BatchOutcome:
        outcome = _BatchOutcome()
        if not chapters:
            return outcome

        existing = self._rows_for(session, user_id, [chapter.id for chapter in chapters])
        volume_pages: Dict[int, int] = {}
        for chapter in chapters:
            target = chapter.pages if read else 0
            rows = existing.get(chapter.id, [])
            previous = max((row.pages_read for row in rows), default=0)
            if rows:
                for row in rows:
                    row.pages_read = target
                    row.volume_id = chapter.volume_id
                    row.series_id = series.id
                    row.library_id = series.library_id
                    if read:
                        row.total_reads = (row.total_reads or 0) + 1
                    row.mark_modified()
            else:
                session.add(
                    ReadingProgressModel(
                        user_id=user_id,
                        chapter_id=chapter.id,
                        volume_id=chapter.volume_id,
                        series_id=series.id,
                        library_id=series.library_id,
                        pages_read=target,
                        total_reads=1 if read else 0,
                    )
                )
            if read and previous < chapter.pages:
                outcome.completed += 1
            outcome.touched += 1
            outcome.events.append(
                ProgressUpdateEvent(
                    user_id=user_id,
                    series_id=series.id,
                    volume_id=chapter.volume_id,
                    chapter_id=chapter.id,
                    pages_read=target,
                )
            )
            volume_pages[chapter.volume_id] = volume_pages.get(chapter.volume_id, 0) + target

        for volume_id, pages in volume_pages.items():
            outcome.events.append(
                ProgressUpdateEvent(
                    user_id=user_id,
                    series_id=series.id,
                    volume_id=volume_id,
                    chapter_id=0,
                    pages_read=pages,
                )
            )
        return outcome

    @staticmethod
    def _rows_for(
        session: Session, user_id: int, chapter_ids: Sequence[int]
    ) -> Dict[int, List[ReadingProgressModel]]:
        rows = session.execute(
            select(ReadingProgressModel)
            .where(
                and_(
                    ReadingProgressModel.user_id == user_id,
                    ReadingProgressModel.chapter_id.in_(list(chapter_ids)),
                )
            )
            .order_by(
                ReadingProgressModel.pages_read.desc(),
                ReadingProgressModel.last_modified.desc(),
                ReadingProgressModel.id.desc(),
            )
        ).scalars()
        grouped: Dict[int, List[ReadingProgressModel]] = {}
        for row in rows:
            grouped.setdefault(row.chapter_id, []).append(row)
        return grouped

    @staticmethod
    def _coerce_page(value: Any) -> int:
        if isinstance(value, bool):
            return 0
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @staticmethod
    def _coerce_threshold(value: Any) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _coerce_marker(value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        trimmed = value.strip()[:SCROLL_MARKER_MAX_LENGTH]
        return trimmed or None


__all__ = ["ProgressLedger"]
