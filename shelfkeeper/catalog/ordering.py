"""Canonical reading order for a series.

The order is the backbone of navigation and continue-point selection::

    V1 -> V2 -> loose 21 -> loose 22 -> V3 -> ... -> SP01 -> SP02

Regular volumes are ranked by ``min_number``. Loose-leaf chapters are merged
in front of the first Regular volume whose number exceeds theirs, and special
chapters always close the sequence.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Tuple

from .entities import ChapterInfo, VolumeInfo, VolumeKind


class Section(str, Enum):
    MAIN = "main"
    SPECIAL = "special"


@dataclass(frozen=True)
class ReadingUnit:
    """One step of the reading order.

    ``whole_volume`` is set when the unit stands for a volume whose only
    chapter is the placeholder chapter.
    """

    chapter: ChapterInfo
    volume: VolumeInfo
    section: Section
    whole_volume: bool = False

    @property
    def chapter_id(self) -> int:
        return self.chapter.id

    @property
    def is_special(self) -> bool:
        return self.section is Section.SPECIAL


class ReadingOrder:
    """Immutable sequence of :class:`ReadingUnit` with index lookups."""

    def __init__(self, units: Sequence[ReadingUnit]) -> None:
        self._units: Tuple[ReadingUnit, ...] = tuple(units)
        self._index: Dict[int, int] = {}
        for position, unit in enumerate(self._units):
            self._index.setdefault(unit.chapter_id, position)

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self):
        return iter(self._units)

    def __getitem__(self, position: int) -> ReadingUnit:
        return self._units[position]

    @property
    def units(self) -> Tuple[ReadingUnit, ...]:
        return self._units

    @property
    def main_units(self) -> Tuple[ReadingUnit, ...]:
        return tuple(unit for unit in self._units if unit.section is Section.MAIN)

    @property
    def special_units(self) -> Tuple[ReadingUnit, ...]:
        return tuple(unit for unit in self._units if unit.section is Section.SPECIAL)

    def chapter_ids(self) -> List[int]:
        return [unit.chapter_id for unit in self._units]

    def index_of(self, chapter_id: int) -> Optional[int]:
        return self._index.get(chapter_id)

    def first(self) -> Optional[ReadingUnit]:
        return self._units[0] if self._units else None

    def next_after(self, chapter_id: int) -> Optional[ReadingUnit]:
        position = self.index_of(chapter_id)
        if position is None or position + 1 >= len(self._units):
            return None
        return self._units[position + 1]

    def previous_before(self, chapter_id: int) -> Optional[ReadingUnit]:
        position = self.index_of(chapter_id)
        if position is None or position == 0:
            return None
        return self._units[position - 1]


def _volume_units(volume: VolumeInfo) -> List[ReadingUnit]:
    chapters = volume.sorted_chapters()
    if len(chapters) == 1 and chapters[0].is_placeholder:
        return [ReadingUnit(chapters[0], volume, Section.MAIN, whole_volume=True)]
    return [ReadingUnit(chapter, volume, Section.MAIN) for chapter in chapters]


def _sorted_loose_units(volumes: Iterable[VolumeInfo], section: Section) -> List[ReadingUnit]:
    units = [
        ReadingUnit(chapter, volume, section)
        for volume in volumes
        for chapter in volume.chapters
    ]
    units.sort(key=lambda unit: (unit.chapter.sort_order, unit.chapter.id))
    return units


def build_reading_order(volumes: Iterable[VolumeInfo]) -> ReadingOrder:
    """Compute the canonical order for the volumes of a single series."""

    regular: List[VolumeInfo] = []
    loose_leaf: List[VolumeInfo] = []
    specials: List[VolumeInfo] = []
    for volume in volumes:
        kind = volume.kind
        if kind is VolumeKind.LOOSE_LEAF:
            loose_leaf.append(volume)
        elif kind is VolumeKind.SPECIAL:
            specials.append(volume)
        else:
            regular.append(volume)

    regular.sort(key=lambda volume: (volume.min_number, volume.id))
    pending: Deque[ReadingUnit] = deque(_sorted_loose_units(loose_leaf, Section.MAIN))

    units: List[ReadingUnit] = []
    for volume in regular:
        run_open = False
        while pending:
            number = pending[0].chapter.sort_order
            # A tie only goes in front of the volume when it extends a run of
            # loose chapters already placed there.
            if number < volume.min_number or (run_open and number == volume.min_number):
                units.append(pending.popleft())
                run_open = True
                continue
            break
        units.extend(_volume_units(volume))

    units.extend(pending)
    units.extend(_sorted_loose_units(specials, Section.SPECIAL))
    return ReadingOrder(units)


__all__ = ["ReadingOrder", "ReadingUnit", "Section", "build_reading_order"]
