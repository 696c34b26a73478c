"""Tests for the progress repair passes."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from shelfkeeper import logging_manager as log_mgr
from shelfkeeper.database import get_db_session
from shelfkeeper.database.models import CollectionTagModel, GenreModel, ReadingProgressModel
from shelfkeeper.reading import CleanupReport, ProgressMaintenance

pytestmark = pytest.mark.maintenance


def _rows(user_id: int, chapter_id: int) -> list[ReadingProgressModel]:
    with get_db_session() as session:
        return list(
            session.execute(
                select(ReadingProgressModel).where(
                    ReadingProgressModel.user_id == user_id,
                    ReadingProgressModel.chapter_id == chapter_id,
                )
            ).scalars()
        )


@pytest.fixture
def maintenance() -> ProgressMaintenance:
    return ProgressMaintenance()


# ---------------------------------------------------------------------------
# consolidate_progress
# ---------------------------------------------------------------------------

class TestConsolidateProgress:

    def test_keeps_highest_progress(self, catalog, maintenance) -> None:
        catalog.progress(1, 1, 1)
        catalog.progress(1, 1, 3)

        assert maintenance.consolidate_progress() == 1

        rows = _rows(1, 1)
        assert [row.pages_read for row in rows] == [3]

    def test_tie_prefers_latest_modification(self, catalog, maintenance) -> None:
        now = datetime(2024, 5, 1, 12, 0, 0)
        catalog.progress(1, 1, 5, last_modified=now - timedelta(days=2))
        newer = catalog.progress(1, 1, 5, last_modified=now)
        catalog.progress(1, 1, 5, last_modified=now - timedelta(days=1))

        assert maintenance.consolidate_progress() == 2

        assert [row.id for row in _rows(1, 1)] == [newer]

    def test_adopts_scroll_marker_from_discarded_rows(self, catalog, maintenance) -> None:
        now = datetime(2024, 5, 1, 12, 0, 0)
        catalog.progress(1, 1, 2, scroll_marker="#old", last_modified=now - timedelta(days=3))
        catalog.progress(1, 1, 2, scroll_marker="#recent", last_modified=now - timedelta(days=1))
        catalog.progress(1, 1, 9, last_modified=now - timedelta(days=5))

        maintenance.consolidate_progress()

        (row,) = _rows(1, 1)
        assert row.pages_read == 9
        assert row.scroll_marker == "#recent"

    def test_distinct_users_and_chapters_are_untouched(self, catalog, maintenance) -> None:
        catalog.progress(1, 1, 1)
        catalog.progress(2, 1, 1)
        catalog.progress(1, 2, 1)

        assert maintenance.consolidate_progress() == 0
        assert len(_rows(1, 1)) == len(_rows(2, 1)) == len(_rows(1, 2)) == 1


# ---------------------------------------------------------------------------
# ensure_chapter_progress_is_capped
# ---------------------------------------------------------------------------

class TestCapProgress:

    def test_rescanned_chapter_is_capped(self, catalog, maintenance) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        volume_id = catalog.volume(series_id, 1)
        chapter_id = catalog.chapter(volume_id, "1", pages=2)
        untouched = catalog.chapter(volume_id, "2", pages=5)
        catalog.progress(user_id, chapter_id, 2, volume_id=volume_id, series_id=series_id)
        catalog.progress(user_id, untouched, 4, volume_id=volume_id, series_id=series_id)

        catalog.set_pages(chapter_id, 1)

        assert maintenance.ensure_chapter_progress_is_capped() == 1
        assert [row.pages_read for row in _rows(user_id, chapter_id)] == [1]
        assert [row.pages_read for row in _rows(user_id, untouched)] == [4]

    def test_nothing_to_cap(self, maintenance) -> None:
        assert maintenance.ensure_chapter_progress_is_capped() == 0


# ---------------------------------------------------------------------------
# cleanup_db_entries
# ---------------------------------------------------------------------------

class TestCleanupDbEntries:

    def test_removes_orphaned_progress(self, catalog, maintenance) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        volume_id = catalog.volume(series_id, 1)
        kept = catalog.chapter(volume_id, "1")
        removed = catalog.chapter(volume_id, "2")
        catalog.progress(user_id, kept, 1)
        catalog.progress(user_id, removed, 1)
        catalog.delete_chapter(removed)

        report = maintenance.cleanup_db_entries()

        assert report.orphaned_progress == 1
        assert len(_rows(user_id, kept)) == 1
        assert _rows(user_id, removed) == []

    def test_removes_empty_collections_and_genres(self, catalog, maintenance) -> None:
        kept_series = catalog.series("Kept")
        dropped_series = catalog.series("Dropped")
        catalog.collection("Favourites", kept_series)
        catalog.collection("Abandoned", dropped_series)
        catalog.collection("Empty")
        catalog.genre("Action", kept_series)
        catalog.genre("Horror", dropped_series)
        catalog.delete_series(dropped_series)

        report = maintenance.cleanup_db_entries()

        assert report == CleanupReport(orphaned_progress=0, removed_collections=2, removed_genres=1)
        with get_db_session() as session:
            titles = session.execute(select(CollectionTagModel.title)).scalars().all()
            genres = session.execute(select(GenreModel.title)).scalars().all()
        assert titles == ["Favourites"]
        assert genres == ["Action"]

    def test_clean_database_reports_nothing(self, maintenance) -> None:
        assert maintenance.cleanup_db_entries().total == 0


def test_run_all_repairs_everything(catalog, maintenance) -> None:
    user_id = catalog.user()
    series_id = catalog.series()
    volume_id = catalog.volume(series_id, 1)
    chapter_id = catalog.chapter(volume_id, "1", pages=4)
    gone = catalog.chapter(volume_id, "2", pages=4)
    catalog.progress(user_id, chapter_id, 9)
    catalog.progress(user_id, chapter_id, 3)
    catalog.progress(user_id, gone, 2)
    catalog.delete_chapter(gone)

    summary = maintenance.run_all()

    assert summary.as_dict() == {
        "consolidated": 1,
        "capped": 1,
        "orphaned_progress": 1,
        "removed_collections": 0,
        "removed_genres": 0,
    }
    assert [row.pages_read for row in _rows(user_id, chapter_id)] == [4]


def test_run_all_tags_each_step_in_log_context(monkeypatch, maintenance) -> None:
    steps: list[object] = []

    def _recorder(result):
        def _run():
            steps.append(log_mgr.get_log_context().get("maintenance_step"))
            return result

        return _run

    monkeypatch.setattr(maintenance, "consolidate_progress", _recorder(0))
    monkeypatch.setattr(maintenance, "cleanup_db_entries", _recorder(CleanupReport()))
    monkeypatch.setattr(maintenance, "ensure_chapter_progress_is_capped", _recorder(0))

    maintenance.run_all()

    assert steps == ["consolidate", "cleanup", "cap"]
    assert log_mgr.get_log_context() == {}
