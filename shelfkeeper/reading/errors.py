"""Exceptions raised by the reading engine."""

from __future__ import annotations


class ReaderError(Exception):
    """Base error for reading navigation and progress operations."""


class SeriesNotFoundError(ReaderError, LookupError):
    """Raised when a series does not exist or has nothing to read."""

    def __init__(self, series_id: int, message: str | None = None) -> None:
        self.series_id = series_id
        super().__init__(message or f"Series {series_id} not found")


class UserNotFoundError(ReaderError, LookupError):
    """Raised when a user does not exist."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class ChapterNotFoundError(ReaderError, LookupError):
    """Raised when a chapter does not exist."""

    def __init__(self, chapter_id: int) -> None:
        self.chapter_id = chapter_id
        super().__init__(f"Chapter {chapter_id} not found")


__all__ = [
    "ChapterNotFoundError",
    "ReaderError",
    "SeriesNotFoundError",
    "UserNotFoundError",
]
