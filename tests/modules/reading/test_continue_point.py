"""Tests for continue-point selection."""

from __future__ import annotations

import pytest

from shelfkeeper.catalog import (
    LOOSE_LEAF_VOLUME_NUMBER,
    SPECIAL_VOLUME_NUMBER,
    ChapterInfo,
    VolumeInfo,
    build_reading_order,
)
from shelfkeeper.reading import ReaderService, SeriesNotFoundError, select_continue_point

pytestmark = pytest.mark.reading


# ---------------------------------------------------------------------------
# select_continue_point (pure)
# ---------------------------------------------------------------------------

def _order():
    main = VolumeInfo(
        id=10,
        series_id=1,
        name="1",
        min_number=1,
        max_number=1,
        chapters=(
            ChapterInfo(id=1, volume_id=10, range="1", sort_order=1, pages=5),
            ChapterInfo(id=2, volume_id=10, range="2", sort_order=2, pages=5),
        ),
    )
    specials = VolumeInfo(
        id=20,
        series_id=1,
        name="100000",
        min_number=SPECIAL_VOLUME_NUMBER,
        max_number=SPECIAL_VOLUME_NUMBER,
        chapters=(ChapterInfo(id=3, volume_id=20, range="SP01", sort_order=1, pages=5, is_special=True),),
    )
    return build_reading_order([specials, main])


class TestSelectContinuePoint:

    def test_empty_order(self) -> None:
        assert select_continue_point(build_reading_order([]), {}, True) is None

    def test_no_progress_returns_first_unit(self) -> None:
        assert select_continue_point(_order(), {1: 5}, False).chapter_id == 1

    def test_first_unfinished_main_unit(self) -> None:
        assert select_continue_point(_order(), {1: 5, 2: 3}, True).chapter_id == 2

    def test_special_after_main_units_read(self) -> None:
        assert select_continue_point(_order(), {1: 5, 2: 5}, True).chapter_id == 3

    def test_all_read_restarts(self) -> None:
        assert select_continue_point(_order(), {1: 5, 2: 5, 3: 5}, True).chapter_id == 1

    def test_unread_special_does_not_preempt_main_units(self) -> None:
        assert select_continue_point(_order(), {3: 5}, True).chapter_id == 1


# ---------------------------------------------------------------------------
# ReaderService.get_continue_point
# ---------------------------------------------------------------------------

class TestGetContinuePoint:

    def test_unknown_series(self) -> None:
        with pytest.raises(SeriesNotFoundError):
            ReaderService().get_continue_point(404, 1)

    def test_series_without_chapters(self, catalog) -> None:
        series_id = catalog.series()
        catalog.volume(series_id, 1)
        with pytest.raises(SeriesNotFoundError):
            ReaderService().get_continue_point(series_id, 1)

    def test_first_time_reader_gets_first_unit(self, catalog) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        loose = catalog.loose_leaf_volume(series_id)
        catalog.chapter(loose, "3")
        volume = catalog.volume(series_id, 1)
        first = catalog.chapter(volume, "1")

        summary = ReaderService().get_continue_point(series_id, user_id)

        assert summary.id == first
        assert summary.pages_read == 0

    def test_only_unread_special_is_returned(self, catalog) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        volume = catalog.volume(series_id, 1)
        one = catalog.chapter(volume, "1", pages=3)
        two = catalog.chapter(volume, "2", pages=3)
        special_volume = catalog.special_volume(series_id)
        special = catalog.chapter(special_volume, "Special", is_special=True, sort_order=1, pages=3)

        service = ReaderService()
        service.mark_chapters_as_read(user_id, series_id, [one, two])
        summary = service.get_continue_point(series_id, user_id)

        assert summary.id == special
        assert summary.is_special

    def test_partially_read_loose_chapter(self, catalog) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        volume_one = catalog.volume(series_id, 1)
        ids = [catalog.chapter(volume_one, "1")]
        volume_two = catalog.volume(series_id, 2)
        ids += [catalog.chapter(volume_two, "21"), catalog.chapter(volume_two, "22")]
        loose = catalog.loose_leaf_volume(series_id)
        ids += [catalog.chapter(loose, "51"), catalog.chapter(loose, "52")]
        ninety_one = catalog.chapter(loose, "91", pages=2)
        special_volume = catalog.special_volume(series_id)
        special = catalog.chapter(
            special_volume, "Special", is_special=True, sort_order=SPECIAL_VOLUME_NUMBER + 1
        )

        service = ReaderService()
        for chapter_id in (*ids, ninety_one, special):
            service.save_reading_progress(user_id, chapter_id, 0, series_id, 1)

        summary = service.get_continue_point(series_id, user_id)
        assert summary.range == "91"
        assert summary.pages_read == 1

    def test_duplicate_numbers_resolve_to_earliest_volume(self, catalog) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        chapters = {}
        for number in (1, 2):
            volume_id = catalog.volume(series_id, number)
            for label in ("1", "2", "21", "22", "32"):
                chapters[(number, label)] = catalog.chapter(volume_id, label)

        service = ReaderService()
        service.save_reading_progress(user_id, chapters[(1, "1")], 0, series_id, 1)
        summary = service.get_continue_point(series_id, user_id)
        assert (summary.range, summary.id) == ("2", chapters[(1, "2")])

        service.save_reading_progress(user_id, chapters[(1, "2")], 0, series_id, 1)
        summary = service.get_continue_point(series_id, user_id)
        assert (summary.range, summary.id) == ("21", chapters[(1, "21")])

    def test_all_read_restarts_at_first_unit(self, catalog) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        volume = catalog.volume(series_id, 1)
        first = catalog.chapter(volume, "1")
        catalog.chapter(volume, "2")
        special_volume = catalog.special_volume(series_id)
        catalog.chapter(special_volume, "1", is_special=True)

        service = ReaderService()
        service.mark_series_as_read(user_id, series_id)

        assert service.get_continue_point(series_id, user_id).id == first

    def test_new_chapters_are_picked_up(self, catalog) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        loose = catalog.loose_leaf_volume(series_id)
        first = catalog.chapter(loose, "1")

        service = ReaderService()
        service.mark_series_as_read(user_id, series_id)
        assert service.get_continue_point(series_id, user_id).id == first

        added = catalog.chapter(loose, "2")
        assert service.get_continue_point(series_id, user_id).id == added

    def test_whole_volume_flag(self, catalog) -> None:
        user_id = catalog.user()
        series_id = catalog.series()
        volume = catalog.volume(series_id, 1)
        catalog.chapter(volume, "-100000", pages=40)

        summary = ReaderService().get_continue_point(series_id, user_id)
        assert summary.whole_volume
        assert summary.pages == 40


def test_loose_leaf_sentinel_is_not_a_regular_volume() -> None:
    loose = VolumeInfo(
        id=1,
        series_id=1,
        name="loose",
        min_number=LOOSE_LEAF_VOLUME_NUMBER,
        max_number=LOOSE_LEAF_VOLUME_NUMBER,
        chapters=(ChapterInfo(id=7, volume_id=1, range="7", sort_order=7, pages=1),),
    )
    order = build_reading_order([loose])
    assert select_continue_point(order, {}, False).chapter_id == 7
