"""Best-effort progress events and scrobble notifications.

Delivery failures are logged and swallowed; they never fail the progress
write that triggered them.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Protocol

from .. import logging_manager as log_mgr

logger = log_mgr.get_logger().getChild("notifications.events")


@dataclass(frozen=True)
class ProgressUpdateEvent:
    """Emitted after a progress write for a chapter, or for a whole volume.

    Volume-level events carry ``chapter_id == 0`` and the summed page count.
    """

    user_id: int
    series_id: int
    volume_id: int
    chapter_id: int
    pages_read: int
    emitted_at: float = field(default_factory=time.time)

    @property
    def is_volume_event(self) -> bool:
        return self.chapter_id == 0


ProgressSubscriber = Callable[[ProgressUpdateEvent], None]


class ProgressEventHub:
    """In-process publish/subscribe channel for progress updates."""

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._subscribers: List[ProgressSubscriber] = []

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def subscribe(self, subscriber: ProgressSubscriber) -> Callable[[], None]:
        """Register ``subscriber`` and return a callable that removes it."""

        self._subscribers.append(subscriber)

        def _unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return _unsubscribe

    def publish(self, event: ProgressUpdateEvent) -> None:
        if not self._enabled:
            return
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                logger.warning(
                    "Progress subscriber failed for chapter %s",
                    event.chapter_id,
                    exc_info=True,
                    extra={"event": "progress.publish_failed", "user_id": event.user_id},
                )

    def publish_all(self, events: List[ProgressUpdateEvent]) -> None:
        for event in events:
            self.publish(event)


class ScrobbleNotifier(Protocol):
    """External sync collaborator informed of read/unread transitions."""

    def reading_update(self, user_id: int, series_id: int) -> None:
        ...


class NullScrobbleNotifier:
    """Scrobble collaborator used when syncing is disabled."""

    def reading_update(self, user_id: int, series_id: int) -> None:
        logger.debug("Scrobbling disabled; skipping update for series %s", series_id)


def notify_scrobbler(notifier: ScrobbleNotifier, user_id: int, series_id: int) -> None:
    """Call ``notifier`` without letting its failures escape."""

    try:
        notifier.reading_update(user_id, series_id)
    except Exception:
        logger.warning(
            "Scrobble notification failed for series %s",
            series_id,
            exc_info=True,
            extra={"event": "progress.scrobble_failed", "user_id": user_id},
        )


__all__ = [
    "NullScrobbleNotifier",
    "ProgressEventHub",
    "ProgressSubscriber",
    "ProgressUpdateEvent",
    "ScrobbleNotifier",
    "notify_scrobbler",
]
