"""
Transient user notifications (toasts).

The caches never talk to a rendering library directly. They hand messages
to a ``Notifier``, which drops duplicates through a
``NotificationDeduplicator`` and forwards the rest to a
``NotificationSink`` supplied by the UI layer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from sweetshop.domain.value_objects import NotificationLevel

from .constants import ERROR_TOAST_MS, SUCCESS_TOAST_MS
from .dedup import NotificationDeduplicator

logger = logging.getLogger(__name__)

DEFAULT_DURATIONS_MS = {
    NotificationLevel.SUCCESS: SUCCESS_TOAST_MS,
    NotificationLevel.ERROR: ERROR_TOAST_MS,
}


@dataclass
class Notification:
    """Notification payload as delivered to a sink."""

    message: str
    kind: NotificationLevel
    duration_ms: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "kind": self.kind.value,
            "duration_ms": self.duration_ms,
            "created_at": self.created_at.isoformat(),
        }


class NotificationSink(Protocol):
    """Anything that can show a message to the user. Return value is ignored."""

    def display(self, message: str, *, kind: str, duration_ms: int) -> Any: ...


class LoggingNotificationSink:
    """Sink for headless runs: writes notifications to the log."""

    def display(self, message: str, *, kind: str, duration_ms: int) -> None:
        if kind == NotificationLevel.ERROR.value:
            logger.warning("[toast:%s] %s", kind, message)
        else:
            logger.info("[toast:%s] %s", kind, message)


class InMemoryNotificationSink:
    """Keeps every displayed notification; handy for tests and replay."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def display(self, message: str, *, kind: str, duration_ms: int) -> None:
        self.notifications.append(
            Notification(message=message, kind=NotificationLevel(kind), duration_ms=duration_ms)
        )

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()


class Notifier:
    """Deduplicating front door to a notification sink."""

    def __init__(
        self,
        sink: NotificationSink,
        deduplicator: NotificationDeduplicator | None = None,
        durations_ms: dict[NotificationLevel, int] | None = None,
    ) -> None:
        self._sink = sink
        self._deduplicator = deduplicator if deduplicator is not None else NotificationDeduplicator()
        self._durations = {**DEFAULT_DURATIONS_MS, **(durations_ms or {})}

    @property
    def deduplicator(self) -> NotificationDeduplicator:
        return self._deduplicator

    def emit(
        self,
        message: str,
        *,
        level: NotificationLevel = NotificationLevel.SUCCESS,
        kind: str | None = None,
        key: str | None = None,
    ) -> bool:
        """Show ``message`` unless its ``(kind, key)`` signature is suppressed.

        ``kind`` defaults to the level name and ``key`` to the message text.
        Returns True when the message reached the sink.
        """
        signature_kind = kind or level.value
        signature_key = key if key is not None else message
        if not self._deduplicator.should_emit(signature_kind, signature_key):
            return False

        try:
            self._sink.display(message, kind=level.value, duration_ms=self._durations[level])
        except Exception as e:
            logger.error("Notification sink error for %s:%s: %s", signature_kind, signature_key, e)
            # Never shown, so it must not block the next attempt
            self._deduplicator.forget(signature_kind, signature_key)
            return False
        return True

    def success(self, message: str, *, kind: str | None = None, key: str | None = None) -> bool:
        return self.emit(message, level=NotificationLevel.SUCCESS, kind=kind, key=key)

    def error(self, message: str, *, kind: str | None = None, key: str | None = None) -> bool:
        return self.emit(message, level=NotificationLevel.ERROR, kind=kind, key=key)
