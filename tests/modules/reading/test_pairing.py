"""Tests for two-page spread pairing."""

from __future__ import annotations

from typing import List

import pytest

from shelfkeeper.reading import PageDimension, ReaderService, get_pairs

pytestmark = pytest.mark.reading


def _pages(wides: List[bool]) -> List[PageDimension]:
    return [
        PageDimension(page_number=index, width=1600 if wide else 800, height=1200, file_name=f"{index:03d}.png")
        for index, wide in enumerate(wides)
    ]


def _expected(pairs: str) -> dict[int, int]:
    result = {}
    for item in pairs.split():
        page, partner = item.split(",")
        result[int(page)] = int(partner)
    return result


F, T = False, True


@pytest.mark.parametrize(
    "case, wides, expected",
    [
        ("no_wides", [F, F, F], "0,0 1,1 2,1"),
        ("odd_spread_1", [F, F, F, F, F, T], "0,0 1,1 2,1 3,3 4,3 5,5"),
        ("odd_spread_2", [F, F, F, F, F, T, F, F], "0,0 1,1 2,1 3,3 4,3 5,5 6,6 7,6"),
        ("even_spread_1", [F, F, F, F, F, F, T], "0,0 1,1 2,1 3,3 4,3 5,5 6,6"),
        ("even_spread_2", [F, F, F, F, F, F, T, F, F], "0,0 1,1 2,1 3,3 4,3 5,5 6,6 7,7 8,7"),
        ("leading_wide", [T, F, F, F], "0,0 1,1 2,1 3,3"),
        ("second_wide", [F, T, F, F, F], "0,0 1,1 2,2 3,2 4,4"),
        ("double_wide", [F, F, F, F, F, T, T, F, F, F], "0,0 1,1 2,1 3,3 4,3 5,5 6,6 7,7 8,7 9,9"),
        ("split_wides", [F, F, F, F, F, T, F, T, F, F], "0,0 1,1 2,1 3,3 4,3 5,5 6,6 7,7 8,8 9,8"),
        ("late_wide", [F, F, F, F, F, T, F, F, T, F], "0,0 1,1 2,1 3,3 4,3 5,5 6,6 7,6 8,8 9,9"),
    ],
)
def test_get_pairs(case: str, wides: List[bool], expected: str) -> None:
    assert get_pairs(_pages(wides)) == _expected(expected), case


def test_empty_input() -> None:
    assert get_pairs([]) == {}


def test_wide_pages_are_never_paired() -> None:
    wides = [F, T, F, F, T, F, F, F, T]
    pairs = get_pairs(_pages(wides))
    for page, wide in enumerate(wides):
        if wide:
            assert pairs[page] == page
            assert pairs.get(page + 1, page + 1) != page
    assert pairs[0] == 0


def test_accepts_mappings_and_derives_wideness() -> None:
    dimensions = [
        {"page_number": 0, "width": 800, "height": 1200},
        {"page_number": 1, "width": 800, "height": 1200},
        {"page_number": 2, "width": 2400, "height": 1200},
        {"page_number": 3, "width": 800, "height": 1200},
    ]
    assert ReaderService.get_pairs(dimensions) == {0: 0, 1: 1, 2: 2, 3: 3}
