"""
Claim Events
Observable ``Claimed`` notifications emitted after a successful payout.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimedEvent:
    """Emitted once per index, after the transfer succeeded."""
    index: int
    account: str
    amount: int


ClaimListener = Callable[[ClaimedEvent], None]


class ClaimEventBus:
    """
    Synchronous fan-out of ClaimedEvent to subscribers.

    Listeners run on the claiming thread, in subscription order. A listener
    that raises is logged and the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: list[ClaimListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: ClaimListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ClaimListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def emit(self, event: ClaimedEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(f"Claimed listener failed for index {event.index}")


__all__ = [
    "ClaimedEvent",
    "ClaimListener",
    "ClaimEventBus",
]
