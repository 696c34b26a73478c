"""Progress repair passes run by the nightly cleanup task."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from sqlalchemy import delete, select

from .. import logging_manager as log_mgr
from ..database.engine import get_db_session
from ..database.models.catalog import ChapterModel
from ..database.models.collection import CollectionTagModel, GenreModel
from ..database.models.progress import ReadingProgressModel

logger = logging.getLogger(__name__).getChild("progress_maintenance")

MAINTENANCE_STEPS = ("consolidate", "cleanup", "cap")


@dataclass(frozen=True)
class CleanupReport:
    orphaned_progress: int = 0
    removed_collections: int = 0
    removed_genres: int = 0

    @property
    def total(self) -> int:
        return self.orphaned_progress + self.removed_collections + self.removed_genres


@dataclass(frozen=True)
class MaintenanceSummary:
    consolidated: int = 0
    capped: int = 0
    cleanup: CleanupReport = field(default_factory=CleanupReport)

    def as_dict(self) -> Dict[str, int]:
        return {
            "consolidated": self.consolidated,
            "capped": self.capped,
            "orphaned_progress": self.cleanup.orphaned_progress,
            "removed_collections": self.cleanup.removed_collections,
            "removed_genres": self.cleanup.removed_genres,
        }


def _modified_at(row: ReadingProgressModel) -> float:
    return row.last_modified.timestamp() if row.last_modified is not None else 0.0


def _keep_rank(row: ReadingProgressModel) -> Tuple[int, float, int]:
    return (row.pages_read or 0, _modified_at(row), row.id)


def _marker_rank(row: ReadingProgressModel) -> Tuple[float, int]:
    return (_modified_at(row), row.id)


class ProgressMaintenance:
    """Repair progress rows after catalog changes and historical races."""

    def consolidate_progress(self) -> int:
        """Collapse duplicate (user, chapter) rows into one; return rows deleted."""

        with get_db_session() as session:
            rows = session.execute(
                select(ReadingProgressModel).order_by(
                    ReadingProgressModel.user_id,
                    ReadingProgressModel.chapter_id,
                    ReadingProgressModel.id,
                )
            ).scalars()

            groups: Dict[Tuple[int, int], List[ReadingProgressModel]] = {}
            for row in rows:
                groups.setdefault((row.user_id, row.chapter_id), []).append(row)

            removed_ids: List[int] = []
            for (user_id, chapter_id), group in groups.items():
                if len(group) < 2:
                    continue
                keeper = max(group, key=_keep_rank)
                discarded = [row for row in group if row.id != keeper.id]
                if not keeper.scroll_marker:
                    markers = [row for row in discarded if row.scroll_marker]
                    if markers:
                        keeper.scroll_marker = max(markers, key=_marker_rank).scroll_marker
                        keeper.mark_modified()
                for row in discarded:
                    removed_ids.append(row.id)
                    session.delete(row)
                logger.debug(
                    "Consolidated %s progress rows for user %s chapter %s",
                    len(group),
                    user_id,
                    chapter_id,
                )

        if removed_ids:
            logger.info("Removed %s duplicate progress rows", len(removed_ids))
            logger.debug("Duplicate progress row ids: %s", removed_ids)
        return len(removed_ids)

    def ensure_chapter_progress_is_capped(self) -> int:
        """Clamp ``pages_read`` to the current chapter length; return rows updated."""

        with get_db_session() as session:
            results = session.execute(
                select(ReadingProgressModel, ChapterModel.pages)
                .join(ChapterModel, ChapterModel.id == ReadingProgressModel.chapter_id)
                .where(ReadingProgressModel.pages_read > ChapterModel.pages)
            ).all()
            updated_ids: List[int] = []
            for row, pages in results:
                row.pages_read = int(pages or 0)
                row.mark_modified()
                updated_ids.append(row.id)

        if updated_ids:
            logger.info("Capped %s progress rows exceeding chapter page count", len(updated_ids))
            logger.debug("Capped progress row ids: %s", updated_ids)
        return len(updated_ids)

    def cleanup_db_entries(self) -> CleanupReport:
        """Delete orphaned progress rows and groupings left without series."""

        with get_db_session() as session:
            orphan_ids = list(
                session.execute(
                    select(ReadingProgressModel.id).where(
                        ~select(ChapterModel.id)
                        .where(ChapterModel.id == ReadingProgressModel.chapter_id)
                        .exists()
                    )
                ).scalars()
            )
            if orphan_ids:
                session.execute(
                    delete(ReadingProgressModel).where(ReadingProgressModel.id.in_(orphan_ids))
                )

            empty_tags = list(
                session.execute(
                    select(CollectionTagModel).where(~CollectionTagModel.series.any())
                ).scalars()
            )
            for tag in empty_tags:
                session.delete(tag)

            empty_genres = list(
                session.execute(select(GenreModel).where(~GenreModel.series.any())).scalars()
            )
            for genre in empty_genres:
                session.delete(genre)

        report = CleanupReport(
            orphaned_progress=len(orphan_ids),
            removed_collections=len(empty_tags),
            removed_genres=len(empty_genres),
        )
        if report.total:
            logger.info(
                "Removed %s orphaned progress rows, %s empty collections, %s unused genres",
                report.orphaned_progress,
                report.removed_collections,
                report.removed_genres,
            )
            logger.debug("Orphaned progress row ids: %s", orphan_ids)
        return report

    def run_all(self) -> MaintenanceSummary:
        """Run every pass in order: consolidate, cleanup, cap."""

        with log_mgr.log_context(maintenance_step="consolidate"):
            logger.info("Consolidating progress events")
            consolidated = self.consolidate_progress()
        with log_mgr.log_context(maintenance_step="cleanup"):
            logger.info("Cleaning abandoned database rows")
            cleanup = self.cleanup_db_entries()
        with log_mgr.log_context(maintenance_step="cap"):
            logger.info("Cleaning progress events that exceed chapter page count")
            capped = self.ensure_chapter_progress_is_capped()
        logger.info("Progress maintenance finished")
        return MaintenanceSummary(consolidated=consolidated, capped=capped, cleanup=cleanup)


__all__ = [
    "CleanupReport",
    "MAINTENANCE_STEPS",
    "MaintenanceSummary",
    "ProgressMaintenance",
]
