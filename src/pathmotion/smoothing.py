"""Corner smoothing for polyline paths.

Sharp interior corners are replaced by quadratic Bézier arcs that start and
end on the two edges meeting at the corner. The original corner vertex acts
as the control point of the arc and is itself dropped from the output.

The smoother is planar: it treats each point as an ``(x, y)`` pair. For
geographic paths, pass points in ``(lon, lat)`` order so that x runs east.
"""

from __future__ import annotations
import math
from typing import Sequence, Tuple, Union

import numpy as np

from . import vector as vec

PathLike = Union[np.ndarray, Sequence[Tuple[float, float]]]

# Corners within this many radians of straight (or of a full reversal) are kept.
ANGLE_TOLERANCE = 0.1
# Consecutive points closer than this are collapsed into one.
DEDUPE_EPSILON = 1e-6


def _quadratic_bezier(
    start: np.ndarray,
    control: np.ndarray,
    end: np.ndarray,
    t: float
) -> np.ndarray:
    t_ = 1.0 - t
    return vec.add(
        vec.add(vec.scale(start, t_ * t_), vec.scale(control, 2 * t_ * t)),
        vec.scale(end, t * t)
    )


def _dedupe(points: Sequence[np.ndarray], eps: float = DEDUPE_EPSILON) -> np.ndarray:
    kept = [points[0]]
    for p in points[1:]:
        if vec.magnitude(vec.sub(p, kept[-1])) > eps:
            kept.append(p)
    return np.array(kept, dtype=np.float64)


def generate_curved_path(
    path: PathLike,
    radius: float,
    points_per_turn: int = 10
) -> np.ndarray:
    """Round the interior corners of a path.

    Args:
        path: Ordered ``(x, y)`` points, as an (N, 2) array or a sequence of pairs.
        radius: Turn radius, in the same units as the points.
        points_per_turn: Number of intermediate arc points emitted per corner.

    Returns:
        New path as an (M, 2) float64 array. The input is never modified.

    Example:
        >>> square_corner = [(0, 0), (10, 0), (10, 10)]
        >>> out = generate_curved_path(square_corner, radius=2.0, points_per_turn=3)
        >>> out[0], out[-1]
        (array([0., 0.]), array([10., 10.]))
        >>> len(out)  # start, t1, 3 arc points, t2, end
        7

    Note:
        The tangent distance ``radius / tan(angle / 2)`` is clamped to half the
        length of the shorter adjacent edge, so two neighbouring arcs never
        overlap. Paths with fewer than 3 points are returned unchanged.
    """
    P = np.array(path, dtype=np.float64).reshape(-1, 2)
    if len(P) < 3:
        return P

    new_path = [P[0]]

    for i in range(1, len(P) - 1):
        p0, p1, p2 = P[i - 1], P[i], P[i + 1]

        v1 = vec.normalize(vec.sub(p0, p1))
        v2 = vec.normalize(vec.sub(p2, p1))

        angle = math.acos(float(np.clip(vec.dot(v1, v2), -1.0, 1.0)))

        if angle < ANGLE_TOLERANCE or abs(angle - math.pi) < ANGLE_TOLERANCE:
            new_path.append(p1)
            continue

        tan = radius / math.tan(angle / 2)

        dist_to_p0 = vec.magnitude(vec.sub(p0, p1))
        dist_to_p2 = vec.magnitude(vec.sub(p2, p1))
        effective_tan = min(tan, min(dist_to_p0, dist_to_p2) / 2)

        t1 = vec.add(p1, vec.scale(v1, effective_tan))
        t2 = vec.add(p1, vec.scale(v2, effective_tan))

        new_path.append(t1)
        for j in range(1, points_per_turn + 1):
            new_path.append(_quadratic_bezier(t1, p1, t2, j / (points_per_turn + 1)))
        new_path.append(t2)

    new_path.append(P[-1])

    return _dedupe(new_path)
