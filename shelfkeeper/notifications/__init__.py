"""Progress notifications for shelfkeeper."""

from .events import (
    NullScrobbleNotifier,
    ProgressEventHub,
    ProgressSubscriber,
    ProgressUpdateEvent,
    ScrobbleNotifier,
    notify_scrobbler,
)

__all__ = [
    "NullScrobbleNotifier",
    "ProgressEventHub",
    "ProgressSubscriber",
    "ProgressUpdateEvent",
    "ScrobbleNotifier",
    "notify_scrobbler",
]
