"""Collection of animated paths, stepped together once per frame."""

from __future__ import annotations
import itertools
import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .animation import AnimatedPath

log = logging.getLogger(__name__)

DEFAULT_RGB = [255, 0, 0]

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(color: Any) -> List[int]:
    """Parse ``#rrggbb`` (hash optional) into ``[r, g, b]``.

    Anything that does not parse falls back to red, ``[255, 0, 0]``.

    Example:
        >>> hex_to_rgb("#00ff7f")
        [0, 255, 127]
        >>> hex_to_rgb("not a colour")
        [255, 0, 0]
    """
    match = _HEX_RE.match(color) if isinstance(color, str) else None
    if match is None:
        return list(DEFAULT_RGB)
    return [int(g, 16) for g in match.groups()]


class MotionManager:
    """Owns animated paths by id and drives them with one ``step(dt)`` per frame.

    Frame snapshots from :meth:`frame` are plain data for a renderer: one icon
    entry (position and heading) and one trail entry (traveled polyline,
    colour and width) per visible path. Positions are ``(lon, lat)``, the order
    most map renderers expect.

    Example:
        >>> mgr = MotionManager()
        >>> plane = mgr.polyline([(0, 0), (0, 1)], {"duration": 1000}).start()
        >>> mgr.step(0.25)
        >>> [icon["id"] for icon in mgr.frame()["icons"]]
        ['m1']
    """

    def __init__(self):
        self.objects: Dict[str, AnimatedPath] = {}
        self._ids = itertools.count(1)

    def _next_id(self) -> str:
        return f"m{next(self._ids)}"

    def add(
        self,
        coords: Sequence[Any],
        options: Optional[Dict[str, Any]] = None,
        closed: bool = False,
        path_id: Optional[str] = None
    ) -> AnimatedPath:
        if path_id is None:
            path_id = self._next_id()
        obj = AnimatedPath(coords, options, closed=closed, path_id=path_id)
        self.objects[path_id] = obj
        log.debug("Added path %s (%d points, %.1f m)", path_id, len(obj.path), obj.total_distance)
        return obj

    def polyline(self, coords: Sequence[Any], options: Optional[Dict[str, Any]] = None) -> AnimatedPath:
        return self.add(coords, options, closed=False)

    def path(self, coords: Sequence[Any], options: Optional[Dict[str, Any]] = None) -> AnimatedPath:
        """Add a closed path; the first point is repeated at the end if needed."""
        return self.add(coords, options, closed=True)

    def remove(self, path_id: str) -> None:
        if self.objects.pop(path_id, None) is not None:
            log.debug("Removed path %s", path_id)

    def get(self, path_id: str) -> Optional[AnimatedPath]:
        return self.objects.get(path_id)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[AnimatedPath]:
        return iter(list(self.objects.values()))

    def __contains__(self, path_id: object) -> bool:
        return path_id in self.objects

    @property
    def any_running(self) -> bool:
        return any(obj.running for obj in self.objects.values())

    def step(self, dt: float) -> None:
        # Listeners may add or remove paths while we iterate
        for obj in list(self.objects.values()):
            obj.advance(dt)

    def frame(self) -> Dict[str, List[Dict[str, Any]]]:
        icons = []
        paths = []
        for path_id, obj in self.objects.items():
            if not obj.visible:
                continue
            pos = obj.sample_position()
            icons.append({
                "id": path_id,
                "position": (pos.lon, pos.lat),
                "heading": pos.heading,
            })
            paths.append({
                "id": path_id,
                "path": [(p.lon, p.lat) for p in obj.sample_traveled_prefix()],
                "color": hex_to_rgb(obj.options['color']),
                "width": obj.options['width'],
            })
        return {"icons": icons, "paths": paths}

    def clear(self) -> None:
        self.objects.clear()
