"""Catalog models: libraries, series, volumes, chapters.

Rows are written by the scanner; the reading engine only reads them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..base import Base


class LibraryModel(Base):
    __tablename__ = "libraries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="manga")

    series: Mapped[list[SeriesModel]] = relationship(
        back_populates="library", cascade="all, delete-orphan"
    )


class SeriesModel(Base):
    __tablename__ = "series"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    format: Mapped[str] = mapped_column(String(20), nullable=False, default="archive")
    library_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("libraries.id", ondelete="CASCADE"), nullable=False
    )

    library: Mapped[LibraryModel] = relationship(back_populates="series")
    volumes: Mapped[list[VolumeModel]] = relationship(
        back_populates="series", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_series_library", "library_id"),)


class VolumeModel(Base):
    __tablename__ = "volumes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    min_number: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    max_number: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    series: Mapped[SeriesModel] = relationship(back_populates="volumes")
    chapters: Mapped[list[ChapterModel]] = relationship(
        back_populates="volume", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_volumes_series", "series_id"),)


class ChapterModel(Base):
    __tablename__ = "chapters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    volume_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("volumes.id", ondelete="CASCADE"), nullable=False
    )
    range: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    min_number: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    max_number: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    sort_order: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    is_special: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pages: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    release_date: Mapped[Optional[datetime]] = mapped_column(nullable=True)

    volume: Mapped[VolumeModel] = relationship(back_populates="chapters")

    __table_args__ = (Index("idx_chapters_volume", "volume_id"),)
