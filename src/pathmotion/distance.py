"""Distance model for geographic paths.

A path of N points is split into N-1 segments. Segment lengths come from the
haversine formula on a spherical earth; positions inside a segment are found
by linear interpolation of latitude and longitude, which is a good
approximation only while segments stay short. Headings are the initial
bearing of the segment containing the position, not a locally smoothed value.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

EARTH_RADIUS_M = 6371000.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float


@dataclass(frozen=True)
class Segment:
    distance: float
    lat1: float
    lon1: float
    lat2: float
    lon2: float


@dataclass(frozen=True)
class Position:
    """A sampled location with the heading of its segment, in degrees [0, 360)."""
    lat: float
    lon: float
    heading: float


def haversine_meters(lat1, lon1, lat2, lon2):
    """Great-circle distance in meters.

    Accepts scalars or numpy arrays (element-wise).

    Example:
        >>> round(float(haversine_meters(0.0, 0.0, 0.0, 1.0)))
        111195
    """
    phi1, lam1, phi2, lam2 = map(np.radians, (lat1, lon1, lat2, lon2))
    d_phi = phi2 - phi1
    d_lam = lam2 - lam1
    a = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lam / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def initial_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Forward azimuth from point 1 to point 2, normalized to [0, 360)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lam = math.radians(lon2 - lon1)
    y = math.sin(d_lam) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lam)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def interpolate_lat_lon(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    t: float
) -> Tuple[float, float]:
    return lat1 + (lat2 - lat1) * t, lon1 + (lon2 - lon1) * t


def build_segments(points: Sequence[GeoPoint]) -> List[Segment]:
    """Split a path into consecutive segments with their haversine lengths."""
    if len(points) < 2:
        return []
    lats = np.array([p.lat for p in points], dtype=np.float64)
    lons = np.array([p.lon for p in points], dtype=np.float64)
    dists = haversine_meters(lats[:-1], lons[:-1], lats[1:], lons[1:])
    return [
        Segment(float(d), float(lats[i]), float(lons[i]), float(lats[i + 1]), float(lons[i + 1]))
        for i, d in enumerate(dists)
    ]


class DistanceModel:
    """Maps traveled distance along a path to a position and heading.

    Attributes:
        points: The path, as GeoPoints.
        segments: N-1 segments derived from ``points``.
        total_distance: Sum of the segment lengths, in meters.

    Example:
        >>> model = DistanceModel([GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)])
        >>> pos = model.locate(model.total_distance / 2)
        >>> round(pos.lon, 6), pos.heading
        (0.5, 90.0)
    """

    def __init__(self, points: Sequence[GeoPoint]):
        self.points: Tuple[GeoPoint, ...] = tuple(points)
        self.segments: List[Segment] = build_segments(self.points)
        self.total_distance: float = float(sum(s.distance for s in self.segments))

    @staticmethod
    def _heading(seg: Segment) -> float:
        return initial_bearing(seg.lat1, seg.lon1, seg.lat2, seg.lon2)

    def locate(self, distance: float) -> Position:
        """Resolve the point ``distance`` meters from the start of the path.

        Distances at or below zero resolve to the start point, distances past
        the end resolve to the last point. A single-point path always reports
        that point with heading 0.
        """
        if not self.segments:
            p = self.points[0]
            return Position(p.lat, p.lon, 0.0)

        if distance <= 0:
            s = self.segments[0]
            return Position(s.lat1, s.lon1, self._heading(s))

        remaining = distance
        for seg in self.segments:
            if remaining <= seg.distance:
                t = 0.0 if seg.distance == 0 else remaining / seg.distance
                lat, lon = interpolate_lat_lon(seg.lat1, seg.lon1, seg.lat2, seg.lon2, t)
                return Position(lat, lon, self._heading(seg))
            remaining -= seg.distance

        last = self.segments[-1]
        return Position(last.lat2, last.lon2, self._heading(last))

    def prefix(self, distance: float) -> List[GeoPoint]:
        """Return the polyline from the start of the path up to ``distance``."""
        first = self.points[0]
        if distance <= 0 or not self.segments:
            return [first]

        traveled = [first]
        remaining = distance
        for seg in self.segments:
            if remaining < seg.distance:
                t = 0.0 if seg.distance == 0 else remaining / seg.distance
                lat, lon = interpolate_lat_lon(seg.lat1, seg.lon1, seg.lat2, seg.lon2, t)
                traveled.append(GeoPoint(lat, lon))
                break

            traveled.append(GeoPoint(seg.lat2, seg.lon2))
            remaining -= seg.distance
            if remaining <= 0:
                break

        return traveled
