"""Validated payloads exchanged with reading engine callers."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..catalog.ordering import ReadingUnit
from ..database.models.progress import SCROLL_MARKER_MAX_LENGTH


class PageDimension(BaseModel):
    """Pixel size of one page image, in reading order."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(ge=0)
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)
    is_wide: Optional[bool] = None
    file_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_wide(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("is_wide") is None:
            data = dict(data)
            data["is_wide"] = int(data.get("width") or 0) > int(data.get("height") or 0)
        return data


class ProgressPayload(BaseModel):
    """A reader's position inside a chapter."""

    model_config = ConfigDict(extra="forbid")

    series_id: int
    volume_id: int
    chapter_id: int
    page_num: int = 0
    scroll_marker: Optional[str] = None

    @field_validator("page_num", mode="before")
    @classmethod
    def _coerce_page(cls, value: Any) -> int:
        if isinstance(value, bool):
            return 0
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @field_validator("scroll_marker")
    @classmethod
    def _strip_marker(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        stripped = value.strip()[:SCROLL_MARKER_MAX_LENGTH]
        return stripped or None


class ChapterSummary(BaseModel):
    """Chapter returned as a continue point."""

    id: int
    volume_id: int
    range: str
    title: Optional[str] = None
    sort_order: float
    pages: int
    pages_read: int = 0
    is_special: bool = False
    whole_volume: bool = False

    @classmethod
    def from_unit(cls, unit: ReadingUnit, pages_read: int = 0) -> "ChapterSummary":
        chapter = unit.chapter
        return cls(
            id=chapter.id,
            volume_id=chapter.volume_id,
            range=chapter.range,
            title=chapter.title,
            sort_order=chapter.sort_order,
            pages=chapter.pages,
            pages_read=pages_read,
            is_special=unit.is_special,
            whole_volume=unit.whole_volume,
        )


__all__ = ["ChapterSummary", "PageDimension", "ProgressPayload"]
