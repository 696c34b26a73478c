"""In-memory catalog snapshot used by the ordering and navigation code."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from .constants import (
    DEFAULT_CHAPTER,
    DEFAULT_CHAPTER_NUMBER,
    LOOSE_LEAF_VOLUME_NUMBER,
    SPECIAL_VOLUME_NUMBER,
)


class VolumeKind(str, Enum):
    REGULAR = "regular"
    LOOSE_LEAF = "loose_leaf"
    SPECIAL = "special"


class ChapterKind(str, Enum):
    NUMBERED = "numbered"
    PLACEHOLDER = "placeholder"


def classify_volume(min_number: float) -> VolumeKind:
    """Map a scanner-normalized volume number onto its variant."""

    if min_number == LOOSE_LEAF_VOLUME_NUMBER:
        return VolumeKind.LOOSE_LEAF
    if min_number == SPECIAL_VOLUME_NUMBER:
        return VolumeKind.SPECIAL
    return VolumeKind.REGULAR


def classify_chapter(range_label: str, min_number: float) -> ChapterKind:
    if range_label == DEFAULT_CHAPTER or min_number == DEFAULT_CHAPTER_NUMBER:
        return ChapterKind.PLACEHOLDER
    return ChapterKind.NUMBERED


@dataclass(frozen=True)
class ChapterInfo:
    id: int
    volume_id: int
    range: str
    sort_order: float
    pages: int
    is_special: bool = False
    min_number: float = 0.0
    max_number: float = 0.0
    title: Optional[str] = None
    release_date: Optional[datetime] = None

    @property
    def kind(self) -> ChapterKind:
        return classify_chapter(self.range, self.min_number)

    @property
    def is_placeholder(self) -> bool:
        return self.kind is ChapterKind.PLACEHOLDER


@dataclass(frozen=True)
class VolumeInfo:
    id: int
    series_id: int
    name: str
    min_number: float
    max_number: float
    chapters: Tuple[ChapterInfo, ...] = ()

    @property
    def kind(self) -> VolumeKind:
        return classify_volume(self.min_number)

    def sorted_chapters(self) -> Tuple[ChapterInfo, ...]:
        return tuple(sorted(self.chapters, key=lambda chapter: (chapter.sort_order, chapter.id)))


@dataclass(frozen=True)
class SeriesInfo:
    id: int
    name: str
    format: str
    library_id: int
    volumes: Tuple[VolumeInfo, ...] = ()

    def find_volume(self, volume_id: int) -> Optional[VolumeInfo]:
        for volume in self.volumes:
            if volume.id == volume_id:
                return volume
        return None

    def iter_chapters(self):
        for volume in self.volumes:
            yield from volume.chapters


@dataclass(frozen=True)
class SeriesSnapshot:
    """A series plus one user's per-chapter ``pages_read`` values."""

    series: SeriesInfo
    pages_read: dict[int, int] = field(default_factory=dict)
    has_any_progress: bool = False

    def pages_read_for(self, chapter_id: int) -> int:
        return self.pages_read.get(chapter_id, 0)


__all__ = [
    "ChapterInfo",
    "ChapterKind",
    "SeriesInfo",
    "SeriesSnapshot",
    "VolumeInfo",
    "VolumeKind",
    "classify_chapter",
    "classify_volume",
]
