"""Duplicate suppression for user-facing notifications.

A notification is identified by a ``(kind, key)`` signature, e.g.
``("stock-error", product_id)``. The first emission records a suppression
entry; identical signatures are suppressed until the entry expires.
Expiry is passive: entries are checked and swept on lookup, never on a
timer.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from .constants import NOTIFICATION_WINDOW_SECONDS

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class SuppressionEntry:
    """Blocks re-emission of one signature until ``expires_at``."""

    kind: str
    key: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class NotificationDeduplicator:
    """TTL set of recently emitted notification signatures."""

    def __init__(
        self,
        window_seconds: float = NOTIFICATION_WINDOW_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        if window_seconds < 0:
            raise ValueError("window_seconds must not be negative")
        self._window = window_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], SuppressionEntry] = {}

    @property
    def window_seconds(self) -> float:
        return self._window

    def should_emit(self, kind: str, key: str) -> bool:
        """Return False while ``(kind, key)`` is suppressed.

        Otherwise record a fresh suppression entry and return True.
        """
        now = self._clock()
        self._sweep(now)

        signature = (kind, key)
        if signature in self._entries:
            logger.debug("Suppressed duplicate notification %s:%s", kind, key)
            return False

        self._entries[signature] = SuppressionEntry(kind=kind, key=key, expires_at=now + self._window)
        return True

    def is_suppressed(self, kind: str, key: str) -> bool:
        entry = self._entries.get((kind, key))
        return entry is not None and not entry.is_expired(self._clock())

    def forget(self, kind: str, key: str) -> None:
        """Drop the suppression entry for ``(kind, key)`` if there is one."""
        self._entries.pop((kind, key), None)

    def clear(self) -> None:
        self._entries.clear()

    def _sweep(self, now: float) -> None:
        expired = [sig for sig, entry in self._entries.items() if entry.is_expired(now)]
        for sig in expired:
            del self._entries[sig]

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for entry in self._entries.values() if not entry.is_expired(now))
