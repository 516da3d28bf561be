"""Orchestration of several animated paths.

:class:`MotionGroup` forwards every control call to all of its paths at once.
:class:`MotionSequence` plays its paths one after another, starting the next
path when the current one fires ``ended``.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Sequence

from .animation import AnimatedPath
from .events import ENDED, SECTION, STARTED, EventEmitter, Listener

log = logging.getLogger(__name__)


class MotionGroup:

    def __init__(self, paths: Sequence[AnimatedPath]):
        self.paths: List[AnimatedPath] = list(paths)

    def start(self) -> MotionGroup:
        for p in self.paths:
            p.start()
        return self

    def pause(self) -> MotionGroup:
        for p in self.paths:
            p.pause()
        return self

    def resume(self) -> MotionGroup:
        for p in self.paths:
            p.resume()
        return self

    def end(self) -> MotionGroup:
        for p in self.paths:
            p.end()
        return self

    def toggle(self) -> MotionGroup:
        for p in self.paths:
            p.toggle()
        return self

    def set_loop(self, flag: bool) -> MotionGroup:
        for p in self.paths:
            p.set_loop(flag)
        return self


class MotionSequence:
    """Plays paths in order.

    States are ``"stopped"`` and ``"running"``. Each time the current path
    ends a ``section`` event fires with ``path`` and ``index``; after the last
    path the sequence stops and fires ``ended``.

    Example:
        >>> a = AnimatedPath([(0, 0), (0, 1)], {"duration": 1000})
        >>> b = AnimatedPath([(0, 1), (1, 1)], {"duration": 1000})
        >>> seq = MotionSequence([a, b]).start()
        >>> a.advance(1.0)
        >>> seq.current_index, b.running
        (1, True)
    """

    STOPPED = "stopped"
    RUNNING = "running"

    def __init__(self, paths: Sequence[AnimatedPath]):
        self.paths: List[AnimatedPath] = []
        self.current_index = -1
        self.state = self.STOPPED
        self.events = EventEmitter(self)
        for p in paths:
            self.add_path(p, autostart=False)

    def on(self, event: str, listener: Listener) -> MotionSequence:
        self.events.on(event, listener)
        return self

    def off(self, event: str, listener: Listener) -> MotionSequence:
        self.events.off(event, listener)
        return self

    @property
    def current(self):
        if 0 <= self.current_index < len(self.paths):
            return self.paths[self.current_index]
        return None

    def _bind(self, path: AnimatedPath) -> None:
        # One listener per distinct path, even when it appears more than once
        if any(p is path for p in self.paths[:-1]):
            return

        def on_ended(_evt: Dict[str, Any]) -> None:
            if self.state != self.RUNNING or self.current is not path:
                return
            index = self.current_index
            self.events.fire(SECTION, path=path, index=index)
            if index == len(self.paths) - 1:
                self.state = self.STOPPED
                log.debug("Sequence finished after %d sections", len(self.paths))
                self.events.fire(ENDED)
            else:
                self._next()

        path.on(ENDED, on_ended)

    def _next(self) -> None:
        if self.state != self.RUNNING:
            return
        if self.current_index < len(self.paths) - 1:
            self.current_index += 1
            self.paths[self.current_index].start()
        else:
            self.state = self.STOPPED

    def start(self) -> MotionSequence:
        if self.state == self.STOPPED and self.paths:
            self.current_index = 0
            self.state = self.RUNNING
            self.paths[0].start()
            self.events.fire(STARTED)
        return self

    def add_path(self, path: AnimatedPath, autostart: bool = False) -> MotionSequence:
        """Append a path.

        With ``autostart``, a sequence that has already played every earlier
        path resumes running and starts the new one.
        """
        index = len(self.paths)
        self.paths.append(path)
        self._bind(path)

        if autostart:
            finished = self.state == self.STOPPED and self.current_index == index - 1
            if finished:
                self.state = self.RUNNING
                self._next()
        return self
