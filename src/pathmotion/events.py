"""Synchronous publish/subscribe registry for animation events."""

from __future__ import annotations
from typing import Any, Callable, Dict, List

STARTED = "started"
PAUSED = "paused"
RESUMED = "resumed"
ENDED = "ended"
SECTION = "section"

Listener = Callable[[Dict[str, Any]], None]


class EventEmitter:
    """Maps event names to listeners, called in registration order.

    Each listener receives a single dict: ``{"source": <owner>, **extra}``.
    """

    def __init__(self, source: Any):
        self._source = source
        self._listeners: Dict[str, List[Listener]] = {}

    def on(self, event: str, listener: Listener) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def fire(self, event: str, **extra: Any) -> None:
        # Copy so a listener may unsubscribe while being called
        for listener in list(self._listeners.get(event, ())):
            listener({"source": self._source, **extra})

    def listeners(self, event: str) -> List[Listener]:
        return list(self._listeners.get(event, ()))
