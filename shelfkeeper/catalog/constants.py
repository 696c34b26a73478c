"""Sentinel values the scanner writes into volume and chapter numbers."""

from __future__ import annotations

LOOSE_LEAF_VOLUME_NUMBER = -100000.0
SPECIAL_VOLUME_NUMBER = 100000.0
DEFAULT_CHAPTER_NUMBER = -100000.0
DEFAULT_CHAPTER = "-100000"

# Returned by navigation queries when there is no neighbouring unit.
NOT_FOUND = -1
