import logging
import time
from typing import Any, Callable, Dict, Optional

from .manager import MotionManager

log = logging.getLogger(__name__)

FrameCallback = Callable[[Dict[str, Any]], None]


class MotionPlayer:
    """
    Host-side frame loop for a MotionManager.
    Measures the time between frames, steps every path by that delta and
    hands the resulting snapshot to a callback.
    """
    def __init__(
        self,
        manager: MotionManager,
        fps: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.manager = manager
        self.frame_interval = 1.0 / fps
        self._clock = clock
        self._sleep = sleep
        self._running = False
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the loop to exit after the current frame."""
        self._running = False

    def run(
        self,
        on_frame: Optional[FrameCallback] = None,
        max_duration: Optional[float] = None,
        until_idle: bool = False
    ) -> int:
        """
        Drive the manager until stopped.

        Args:
            on_frame: Called with ``manager.frame()`` after every step.
            max_duration: Stop after this many seconds of wall-clock time.
            until_idle: Stop once no path is running.

        Returns:
            Number of frames played.
        """
        self._running = True
        self.frames = 0
        started = last = self._clock()

        try:
            while self._running:
                now = self._clock()
                dt = now - last
                last = now

                self.manager.step(dt)
                if on_frame is not None:
                    on_frame(self.manager.frame())
                self.frames += 1

                if max_duration is not None and now - started >= max_duration:
                    break
                if until_idle and not self.manager.any_running:
                    break

                spent = self._clock() - now
                if self.frame_interval > spent:
                    self._sleep(self.frame_interval - spent)
        finally:
            self._running = False
        log.debug("Player stopped after %d frames", self.frames)
        return self.frames
