"""Tests for loading catalog snapshots from the database."""

from __future__ import annotations

import pytest

from shelfkeeper.catalog import CatalogRepository, VolumeKind

pytestmark = pytest.mark.catalog


def test_load_series_returns_none_for_unknown_id() -> None:
    assert CatalogRepository().get_series(404) is None


def test_load_series_converts_rows(catalog) -> None:
    series_id = catalog.series("Berserk")
    loose = catalog.loose_leaf_volume(series_id)
    volume = catalog.volume(series_id, 1)
    catalog.chapter(loose, "10", pages=20)
    catalog.chapter(volume, "1-3", pages=60)

    series = CatalogRepository().get_series(series_id)

    assert series is not None
    assert series.name == "Berserk"
    kinds = {info.id: info.kind for info in series.volumes}
    assert kinds == {loose: VolumeKind.LOOSE_LEAF, volume: VolumeKind.REGULAR}
    ranged = series.find_volume(volume).chapters[0]
    assert (ranged.min_number, ranged.max_number, ranged.pages) == (1.0, 3.0, 60)


def test_snapshot_reports_progress_per_chapter(catalog) -> None:
    user_id = catalog.user()
    series_id = catalog.series()
    volume = catalog.volume(series_id, 1)
    first = catalog.chapter(volume, "1", pages=10)
    catalog.chapter(volume, "2", pages=10)
    catalog.progress(user_id, first, 4, volume_id=volume, series_id=series_id)
    catalog.progress(user_id, first, 7, volume_id=volume, series_id=series_id)

    repository = CatalogRepository()
    snapshot = repository.get_snapshot(series_id, user_id)
    other = repository.get_snapshot(series_id, user_id + 1)

    assert snapshot.has_any_progress
    assert snapshot.pages_read == {first: 7}
    assert not other.has_any_progress
    assert other.pages_read_for(first) == 0
