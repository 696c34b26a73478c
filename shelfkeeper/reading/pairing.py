"""Page pairing for the two-page spread reader."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Union

from .schemas import PageDimension

DimensionLike = Union[PageDimension, Mapping[str, Any]]


def _as_dimension(value: DimensionLike) -> PageDimension:
    if isinstance(value, PageDimension):
        return value
    return PageDimension.model_validate(dict(value))


def get_pairs(dimensions: Iterable[DimensionLike]) -> Dict[int, int]:
    """Map every page number to the page it is displayed with.

    A page mapped to itself starts a spread (or stands alone); a page mapped
    to ``n - 1`` is the right half of the spread opened by page ``n - 1``.
    Wide pages are always shown alone.
    """

    pages = [_as_dimension(value) for value in dimensions]
    pairs: Dict[int, int] = {}
    if not pages:
        return pairs

    pair_start = True
    previous = pages[0]
    pairs[previous.page_number] = previous.page_number

    for page in pages[1:]:
        if page.is_wide:
            pairs[page.page_number] = page.page_number
            pair_start = True
        elif previous.is_wide or previous.page_number == 0:
            pairs[page.page_number] = page.page_number
            pair_start = True
        else:
            pairs[page.page_number] = page.page_number - 1 if pair_start else page.page_number
            pair_start = not pair_start
        previous = page

    return pairs


__all__ = ["DimensionLike", "get_pairs"]
