"""Facade combining navigation, continue point, progress and pairing."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .. import logging_manager as log_mgr
from ..catalog import CatalogRepository, build_reading_order
from ..config.loader import ReaderConfig, get_reader_config
from ..notifications import NullScrobbleNotifier, ProgressEventHub, ScrobbleNotifier
from .continue_point import select_continue_point
from .errors import SeriesNotFoundError
from .ledger import ProgressLedger
from .maintenance import ProgressMaintenance
from .navigation import NavigationEngine
from .pairing import DimensionLike, get_pairs
from .schemas import ChapterSummary, ProgressPayload

logger = log_mgr.get_logger().getChild("reading.service")


class ReaderService:
    """Entry point used by the API layer and the command line."""

    def __init__(
        self,
        *,
        repository: Optional[CatalogRepository] = None,
        event_hub: Optional[ProgressEventHub] = None,
        scrobbler: Optional[ScrobbleNotifier] = None,
    ) -> None:
        self._repository = repository or CatalogRepository()
        self._event_hub = event_hub or ProgressEventHub()
        self._navigation = NavigationEngine(self._repository)
        self._ledger = ProgressLedger(self._repository, self._event_hub, scrobbler)
        self._maintenance = ProgressMaintenance()

    @property
    def event_hub(self) -> ProgressEventHub:
        return self._event_hub

    @property
    def ledger(self) -> ProgressLedger:
        return self._ledger

    @property
    def maintenance(self) -> ProgressMaintenance:
        return self._maintenance

    # Navigation -------------------------------------------------------

    def get_next_chapter_id(
        self, series_id: int, volume_id: int, chapter_id: int, user_id: int
    ) -> int:
        return self._navigation.get_next_chapter_id(series_id, volume_id, chapter_id, user_id)

    def get_prev_chapter_id(
        self, series_id: int, volume_id: int, chapter_id: int, user_id: int
    ) -> int:
        return self._navigation.get_prev_chapter_id(series_id, volume_id, chapter_id, user_id)

    def get_continue_point(self, series_id: int, user_id: int) -> ChapterSummary:
        """Return the chapter ``user_id`` should resume ``series_id`` from."""

        snapshot = self._repository.get_snapshot(series_id, user_id)
        if snapshot is None:
            raise SeriesNotFoundError(series_id)
        order = build_reading_order(snapshot.series.volumes)
        unit = select_continue_point(order, snapshot.pages_read, snapshot.has_any_progress)
        if unit is None:
            raise SeriesNotFoundError(series_id, f"Series {series_id} has no chapters")
        return ChapterSummary.from_unit(unit, snapshot.pages_read_for(unit.chapter_id))

    # Progress ---------------------------------------------------------

    def save_reading_progress(
        self,
        user_id: int,
        chapter_id: int,
        volume_id: int,
        series_id: int,
        page_num: Any,
        scroll_marker: Optional[str] = None,
    ) -> bool:
        return self._ledger.save_reading_progress(
            user_id, chapter_id, volume_id, series_id, page_num, scroll_marker
        )

    def save_progress(self, user_id: int, payload: ProgressPayload | Dict[str, Any]) -> bool:
        progress = (
            payload
            if isinstance(payload, ProgressPayload)
            else ProgressPayload.model_validate(payload)
        )
        return self._ledger.save_reading_progress(
            user_id,
            progress.chapter_id,
            progress.volume_id,
            progress.series_id,
            progress.page_num,
            progress.scroll_marker,
        )

    def mark_chapters_as_read(self, user_id: int, series_id: int, chapter_ids: Iterable[int]) -> int:
        return self._ledger.mark_chapters_as_read(user_id, series_id, chapter_ids)

    def mark_chapters_as_unread(
        self, user_id: int, series_id: int, chapter_ids: Iterable[int]
    ) -> int:
        return self._ledger.mark_chapters_as_unread(user_id, series_id, chapter_ids)

    def mark_series_as_read(self, user_id: int, series_id: int) -> int:
        return self._ledger.mark_series_as_read(user_id, series_id)

    def mark_series_as_unread(self, user_id: int, series_id: int) -> int:
        return self._ledger.mark_series_as_unread(user_id, series_id)

    def mark_chapters_until_as_read(self, user_id: int, series_id: int, chapter_number: Any) -> int:
        return self._ledger.mark_chapters_until_as_read(user_id, series_id, chapter_number)

    def mark_volumes_until_as_read(self, user_id: int, series_id: int, volume_number: Any) -> int:
        return self._ledger.mark_volumes_until_as_read(user_id, series_id, volume_number)

    # Pairing ----------------------------------------------------------

    @staticmethod
    def get_pairs(dimensions: Iterable[DimensionLike]) -> Dict[int, int]:
        return get_pairs(dimensions)


def build_reader_service(
    config: Optional[ReaderConfig] = None,
    *,
    scrobbler: Optional[ScrobbleNotifier] = None,
) -> ReaderService:
    """Construct a :class:`ReaderService` honouring the side-channel settings."""

    settings = config or get_reader_config()
    hub = ProgressEventHub(enabled=settings.emit_progress_events)
    if not settings.scrobble_enabled or scrobbler is None:
        if settings.scrobble_enabled:
            logger.info("Scrobbling enabled but no notifier supplied; updates are dropped")
        scrobbler = NullScrobbleNotifier()
    return ReaderService(event_hub=hub, scrobbler=scrobbler)


__all__ = ["ReaderService", "build_reader_service"]
