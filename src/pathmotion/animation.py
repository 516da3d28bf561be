"""Per-path animation engine.

An :class:`AnimatedPath` owns a geographic path, the distance traveled along
it and a motion rate. It has no timer of its own: the host calls
:meth:`AnimatedPath.advance` once per frame with the elapsed seconds, then
samples the position and the traveled prefix for drawing.

Example:
    Basic usage::

        from pathmotion import AnimatedPath

        plane = AnimatedPath([(0.0, 0.0), (0.0, 1.0)], {"duration": 1000})
        plane.on("ended", lambda evt: print("arrived", evt["source"].id))
        plane.start()
        plane.advance(0.5)
        pos = plane.sample_position()   # halfway, heading 90
"""

from __future__ import annotations
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from .distance import DistanceModel, GeoPoint, Position
from .easing import EasingFunction, get_easing
from .events import ENDED, PAUSED, RESUMED, STARTED, EventEmitter, Listener
from .smoothing import generate_curved_path

log = logging.getLogger(__name__)

KMH_TO_MPS = 1000.0 / 3600.0

# Upper bound on `ended` events fired by a single advance() on a looping path
MAX_LAP_EVENTS = 100

# Corner radius per turn style, in degrees
TURN_RADII = {
    "tight": 0.05,
    "normal": 0.1,
    "loose": 0.2,
}


@dataclass(frozen=True)
class Speed:
    """Constant speed in km/h."""
    kmh: float

    def meters_per_second(self, total_distance: float) -> float:
        return self.kmh * KMH_TO_MPS


@dataclass(frozen=True)
class Duration:
    """Fixed time to cover the whole path, in milliseconds."""
    ms: float

    def meters_per_second(self, total_distance: float) -> float:
        return total_distance / (self.ms / 1000.0)


# None means no rate is configured and the path does not move.
Rate = Optional[Union[Speed, Duration]]


def _to_geo_points(coords: Sequence[Any]) -> List[GeoPoint]:
    points = []
    for c in coords:
        if isinstance(c, GeoPoint):
            points.append(c)
        else:
            points.append(GeoPoint(float(c[0]), float(c[1])))
    return points


def _smooth_lat_lon(points: List[GeoPoint], radius: float) -> List[GeoPoint]:
    # The smoother is planar; feed it (lon, lat) so x runs east.
    lon_lat = np.array([(p.lon, p.lat) for p in points], dtype=np.float64)
    smoothed = generate_curved_path(lon_lat, radius)
    return [GeoPoint(float(lat), float(lon)) for lon, lat in smoothed]


class AnimatedPath:
    """A marker moving along a geographic path.

    States are *running* and *paused*; a finished path is paused with its
    offset equal to the total distance. Engine operations never raise:
    degenerate paths, zero distance and an unset rate simply produce no
    motion.

    Attributes:
        id: Identifier assigned by the owning collection (may be None).
        options: Effective options (see ``DEFAULT_OPTIONS``).
        path: The final path as GeoPoints, after smoothing and closing.
        model: Distance model built from ``path``.
        offset: Meters traveled along the path.
        paused: True unless the animation is running.
        loop: Restart from the beginning instead of stopping at the end.
        visible: Hint for renderers; does not affect motion.
        rate: Active motion rate, a :class:`Speed`, a :class:`Duration` or None.
        easing: Easing function applied to progress when sampling.

    Example:
        >>> p = AnimatedPath([(0, 0), (0, 1)]).set_speed(100).set_duration(1000)
        >>> p.rate
        Duration(ms=1000)
    """

    OPTION_KEYS = ('auto', 'speed', 'duration', 'easing', 'color', 'width', 'turn')

    DEFAULT_OPTIONS = {
        'auto': False,
        'speed': 0.0,      # km/h
        'duration': 0.0,   # ms
        'easing': 'linear',
        'color': '#ff0000',
        'width': 5,
        'turn': None,      # 'tight', 'normal' or 'loose'
    }

    def __init__(
        self,
        coords: Sequence[Any],
        options: Optional[Dict[str, Any]] = None,
        closed: bool = False,
        path_id: Optional[str] = None
    ):
        """Build the path, its segments and default animation state.

        Args:
            coords: ``(lat, lon)`` pairs or GeoPoints. For closed paths a list
                of rings is also accepted; only the first ring is used.
            options: Overrides for ``DEFAULT_OPTIONS``.
            closed: Append the first point at the end when it is missing.
            path_id: Identifier used in frame snapshots.

        Raises:
            ValueError: If ``coords`` is empty or ``options`` has unknown keys.
        """
        self.id = path_id
        self.options = self._merge_options(options or {})

        coords = list(coords)
        if closed and coords and self._is_ring_list(coords):
            coords = list(coords[0])
        if not coords:
            raise ValueError("An animated path needs at least one point")

        points = _to_geo_points(coords)

        turn = self.options['turn']
        if turn:
            radius = TURN_RADII.get(turn)
            if radius is None:
                log.warning("Unknown turn %r, using 'normal'", turn)
                radius = TURN_RADII['normal']
            points = _smooth_lat_lon(points, radius)

        if closed and points[0] != points[-1]:
            points.append(points[0])

        self.path: List[GeoPoint] = points
        self.model = DistanceModel(points)

        self.events = EventEmitter(self)
        self.offset: float = 0.0
        self.paused: bool = not self.options['auto']
        self.loop: bool = False
        self.visible: bool = True
        self.easing: EasingFunction = get_easing(self.options['easing'])

        self.rate: Rate = None
        if self.options['duration'] > 0:
            self.set_duration(self.options['duration'])
        elif self.options['speed'] > 0:
            self.set_speed(self.options['speed'])

        if self.options['auto']:
            self.start()

    # -------------------- Configuration --------------------

    @classmethod
    def _merge_options(cls, options: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(options) - set(cls.OPTION_KEYS)
        if unknown:
            raise ValueError(f"Unknown options: {unknown}. Supported: {set(cls.OPTION_KEYS)}")
        merged = cls.DEFAULT_OPTIONS.copy()
        merged.update(options)
        return merged

    @staticmethod
    def load_options_file(filepath: str) -> Dict[str, Any]:
        """Load animation options from a JSON file.

        Args:
            filepath: Path to the JSON file.

        Returns:
            Dictionary of option values merged with ``DEFAULT_OPTIONS``.

        Raises:
            ValueError: If the file contains unknown keys.
        """
        with open(filepath, 'r') as f:
            data = json.load(f)
        return AnimatedPath._merge_options(data)

    @staticmethod
    def _is_ring_list(coords: List[Any]) -> bool:
        first = coords[0]
        if isinstance(first, GeoPoint):
            return False
        return len(first) > 0 and isinstance(first[0], (list, tuple, GeoPoint, np.ndarray))

    @property
    def total_distance(self) -> float:
        return self.model.total_distance

    @property
    def segments(self):
        return self.model.segments

    @property
    def progress(self) -> float:
        """Raw (un-eased) fraction of the path traveled."""
        if self.total_distance <= 0:
            return 0.0
        return self.offset / self.total_distance

    @property
    def running(self) -> bool:
        return not self.paused

    def set_speed(self, kmh: float) -> AnimatedPath:
        """Move at ``kmh`` km/h. Clears any duration."""
        self.options['speed'] = kmh
        self.options['duration'] = 0.0
        self.rate = Speed(kmh) if kmh > 0 else None
        return self

    def set_duration(self, ms: float) -> AnimatedPath:
        """Cover the whole path in ``ms`` milliseconds. Clears any speed."""
        self.options['duration'] = ms
        self.options['speed'] = 0.0
        self.rate = Duration(ms) if ms > 0 else None
        return self

    def set_loop(self, flag: bool) -> AnimatedPath:
        self.loop = bool(flag)
        return self

    def set_visible(self, flag: bool) -> AnimatedPath:
        self.visible = bool(flag)
        return self

    def on(self, event: str, listener: Listener) -> AnimatedPath:
        self.events.on(event, listener)
        return self

    def off(self, event: str, listener: Listener) -> AnimatedPath:
        self.events.off(event, listener)
        return self

    # -------------------- State transitions --------------------

    def start(self) -> AnimatedPath:
        self.offset = 0.0
        self.paused = False
        log.debug("Path %s started", self.id)
        self.events.fire(STARTED)
        return self

    def pause(self) -> AnimatedPath:
        self.paused = True
        self.events.fire(PAUSED)
        return self

    def resume(self) -> AnimatedPath:
        self.paused = False
        self.events.fire(RESUMED)
        return self

    def toggle(self) -> AnimatedPath:
        if self.paused:
            return self.resume()
        return self.pause()

    def end(self) -> AnimatedPath:
        self.offset = self.total_distance
        self.paused = True
        log.debug("Path %s ended", self.id)
        self.events.fire(ENDED)
        return self

    def advance(self, dt: float) -> None:
        """Move forward by ``dt`` seconds of travel.

        Does nothing while paused, when the path has no length, when no rate
        is set or when ``dt`` is not a positive finite number. When the end is
        reached a looping path wraps around and fires ``ended`` once per
        completed lap, at most ``MAX_LAP_EVENTS`` times per call; otherwise the
        offset is clamped, the path pauses and ``ended`` fires.
        """
        total = self.total_distance
        if self.paused or total <= 0 or self.rate is None or not math.isfinite(dt) or dt <= 0:
            return

        step = self.rate.meters_per_second(total) * dt
        if not math.isfinite(step):
            log.warning("Path %s: ignoring non-finite step for dt=%r", self.id, dt)
            return
        self.offset += step

        if self.offset < total:
            return

        if self.loop:
            laps = int(self.offset // total)
            self.offset %= total
            if laps > MAX_LAP_EVENTS:
                log.warning("Path %s completed %d laps in one advance, firing %d ended events",
                            self.id, laps, MAX_LAP_EVENTS)
                laps = MAX_LAP_EVENTS
            for _ in range(laps):
                self.events.fire(ENDED)
        else:
            self.offset = total
            self.paused = True
            log.debug("Path %s reached its end", self.id)
            self.events.fire(ENDED)

    # -------------------- Sampling --------------------

    def _eased_offset(self) -> float:
        p = min(1.0, max(0.0, self.progress))
        return self.easing(p) * self.total_distance

    def sample_position(self) -> Position:
        """Current position and heading, with easing applied."""
        return self.model.locate(self._eased_offset())

    def sample_traveled_prefix(self) -> List[GeoPoint]:
        """Polyline from the start of the path to the current (eased) position."""
        return self.model.prefix(self._eased_offset())

    def __repr__(self) -> str:
        state = "paused" if self.paused else "running"
        return f"AnimatedPath(id={self.id!r}, points={len(self.path)}, {state}, progress={self.progress:.3f})"
