"""Reading navigation, continue point and progress tracking."""

from .continue_point import select_continue_point
from .errors import ChapterNotFoundError, ReaderError, SeriesNotFoundError, UserNotFoundError
from .ledger import ProgressLedger
from .maintenance import CleanupReport, MaintenanceSummary, ProgressMaintenance
from .navigation import NavigationEngine
from .pairing import get_pairs
from .reader_service import ReaderService, build_reader_service
from .schemas import ChapterSummary, PageDimension, ProgressPayload

__all__ = [
    "ChapterNotFoundError",
    "ChapterSummary",
    "CleanupReport",
    "MaintenanceSummary",
    "NavigationEngine",
    "PageDimension",
    "ProgressLedger",
    "ProgressMaintenance",
    "ProgressPayload",
    "ReaderError",
    "ReaderService",
    "SeriesNotFoundError",
    "UserNotFoundError",
    "build_reader_service",
    "get_pairs",
    "select_continue_point",
]
