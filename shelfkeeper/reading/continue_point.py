"""Pick the chapter a user should resume a series from."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ..catalog.ordering import ReadingOrder, ReadingUnit


def _first_unfinished(
    units: Iterable[ReadingUnit], pages_read_by_chapter: Mapping[int, int]
) -> Optional[ReadingUnit]:
    for unit in units:
        if pages_read_by_chapter.get(unit.chapter_id, 0) < unit.chapter.pages:
            return unit
    return None


def select_continue_point(
    order: ReadingOrder,
    pages_read_by_chapter: Mapping[int, int],
    has_any_progress: bool,
) -> Optional[ReadingUnit]:
    """Return the unit to resume from, or ``None`` for an empty order.

    Without any progress the first unit is returned. Otherwise the scan walks
    the main units, then the specials, and stops at the first unit that is
    not fully read; a fully read series starts over at the first unit.
    """

    first = order.first()
    if first is None or not has_any_progress:
        return first

    unit = _first_unfinished(order.main_units, pages_read_by_chapter)
    if unit is None:
        unit = _first_unfinished(order.special_units, pages_read_by_chapter)
    return unit or first


__all__ = ["select_continue_point"]
