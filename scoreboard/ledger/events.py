"""Fan-out of accepted-submission events to in-process subscribers."""

from __future__ import annotations

import threading
from typing import Callable, List

from ..core.logging import setup_logger
from .types import ScoreSubmitted

Subscriber = Callable[[ScoreSubmitted], None]

logger = setup_logger(__name__)


class EventHub:
    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; the returned function removes it again."""

        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: ScoreSubmitted) -> int:
        """Deliver ``event`` to every subscriber and return how many succeeded.

        A failing subscriber is logged and skipped; the submission it reports
        on is already committed.
        """

        with self._lock:
            subscribers = list(self._subscribers)

        delivered = 0
        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Subscriber %r failed for %s", callback, event.participant_id
                )
                continue
            delivered += 1
        return delivered


__all__ = ["EventHub", "Subscriber"]
