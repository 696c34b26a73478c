"""Catalog snapshot types and the canonical reading order."""

from .constants import (
    DEFAULT_CHAPTER,
    DEFAULT_CHAPTER_NUMBER,
    LOOSE_LEAF_VOLUME_NUMBER,
    NOT_FOUND,
    SPECIAL_VOLUME_NUMBER,
)
from .entities import (
    ChapterInfo,
    ChapterKind,
    SeriesInfo,
    SeriesSnapshot,
    VolumeInfo,
    VolumeKind,
    classify_chapter,
    classify_volume,
)
from .ordering import ReadingOrder, ReadingUnit, Section, build_reading_order
from .repository import CatalogRepository

__all__ = [
    "CatalogRepository",
    "ChapterInfo",
    "ChapterKind",
    "DEFAULT_CHAPTER",
    "DEFAULT_CHAPTER_NUMBER",
    "LOOSE_LEAF_VOLUME_NUMBER",
    "NOT_FOUND",
    "ReadingOrder",
    "ReadingUnit",
    "SPECIAL_VOLUME_NUMBER",
    "Section",
    "SeriesInfo",
    "SeriesSnapshot",
    "VolumeInfo",
    "VolumeKind",
    "build_reading_order",
    "classify_chapter",
    "classify_volume",
]
