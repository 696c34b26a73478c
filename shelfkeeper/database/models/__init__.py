"""SQLAlchemy models; import all to register with Base.metadata."""

from .catalog import ChapterModel, LibraryModel, SeriesModel, VolumeModel
from .collection import CollectionTagModel, GenreModel, collection_tag_series, series_genres
from .progress import SCROLL_MARKER_MAX_LENGTH, ReadingProgressModel
from .user import UserModel

__all__ = [
    "LibraryModel",
    "SeriesModel",
    "VolumeModel",
    "ChapterModel",
    "UserModel",
    "ReadingProgressModel",
    "SCROLL_MARKER_MAX_LENGTH",
    "CollectionTagModel",
    "GenreModel",
    "collection_tag_series",
    "series_genres",
]
