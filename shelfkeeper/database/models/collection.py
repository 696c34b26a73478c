"""Series groupings: user collections and genres."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..base import Base
from .catalog import SeriesModel

collection_tag_series = Table(
    "collection_tag_series",
    Base.metadata,
    Column("collection_tag_id", Integer, ForeignKey("collection_tags.id", ondelete="CASCADE"), primary_key=True),
    Column("series_id", Integer, ForeignKey("series.id", ondelete="CASCADE"), primary_key=True),
)

series_genres = Table(
    "series_genres",
    Base.metadata,
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
    Column("series_id", Integer, ForeignKey("series.id", ondelete="CASCADE"), primary_key=True),
)


class CollectionTagModel(Base):
    __tablename__ = "collection_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    owner_user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    series: Mapped[list[SeriesModel]] = relationship(secondary=collection_tag_series)


class GenreModel(Base):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    series: Mapped[list[SeriesModel]] = relationship(secondary=series_genres)
