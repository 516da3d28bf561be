import math

import numpy as np
import pytest
from pathmotion.distance import (
    EARTH_RADIUS_M,
    DistanceModel,
    GeoPoint,
    build_segments,
    haversine_meters,
    initial_bearing,
    interpolate_lat_lon,
)

ONE_DEGREE_M = EARTH_RADIUS_M * math.pi / 180

# -----------------------------------------------------------------------------
# Formulas
# -----------------------------------------------------------------------------

def test_haversine_one_degree_along_equator():
    assert haversine_meters(0.0, 0.0, 0.0, 1.0) == pytest.approx(ONE_DEGREE_M)


def test_haversine_one_degree_of_latitude_anywhere():
    assert haversine_meters(40.0, 10.0, 41.0, 10.0) == pytest.approx(ONE_DEGREE_M)


def test_haversine_is_vectorised():
    d = haversine_meters(np.array([0.0, 0.0]), np.array([0.0, 0.0]),
                         np.array([0.0, 1.0]), np.array([1.0, 0.0]))
    assert np.allclose(d, [ONE_DEGREE_M, ONE_DEGREE_M])


def test_haversine_longitude_shrinks_with_latitude():
    assert haversine_meters(60.0, 0.0, 60.0, 1.0) == pytest.approx(ONE_DEGREE_M / 2, rel=1e-3)


@pytest.mark.parametrize("end, expected", [
    ((1.0, 0.0), 0.0),     # north
    ((0.0, 1.0), 90.0),    # east
    ((-1.0, 0.0), 180.0),  # south
    ((0.0, -1.0), 270.0),  # west
])
def test_initial_bearing_cardinal_directions(end, expected):
    assert initial_bearing(0.0, 0.0, *end) == pytest.approx(expected)


def test_initial_bearing_always_in_range():
    for lat2, lon2 in [(-0.5, -0.5), (0.3, -2.0), (-10.0, 0.0001), (5.0, 179.0)]:
        b = initial_bearing(0.0, 0.0, lat2, lon2)
        assert 0.0 <= b < 360.0


def test_interpolate_lat_lon_is_linear():
    assert interpolate_lat_lon(10.0, 20.0, 12.0, 24.0, 0.25) == pytest.approx((10.5, 21.0))

# -----------------------------------------------------------------------------
# Segments
# -----------------------------------------------------------------------------

def test_build_segments_count_and_endpoints():
    pts = [GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)]
    segs = build_segments(pts)
    assert len(segs) == 2
    assert (segs[0].lat1, segs[0].lon1, segs[0].lat2, segs[0].lon2) == (0, 0, 0, 1)
    assert (segs[1].lat1, segs[1].lon1, segs[1].lat2, segs[1].lon2) == (0, 1, 1, 1)
    assert all(isinstance(s.distance, float) for s in segs)


def test_build_segments_single_point_is_empty():
    assert build_segments([GeoPoint(5, 5)]) == []


def test_segment_sum_equals_total_distance():
    pts = [GeoPoint(52.5, 13.4), GeoPoint(52.52, 13.41), GeoPoint(52.53, 13.45),
           GeoPoint(52.5, 13.5), GeoPoint(52.5, 13.5)]
    model = DistanceModel(pts)
    assert sum(s.distance for s in model.segments) == pytest.approx(model.total_distance)
    assert model.segments[-1].distance == 0.0

# -----------------------------------------------------------------------------
# DistanceModel.locate
# -----------------------------------------------------------------------------

@pytest.fixture
def l_path():
    """East along the equator, then north."""
    return DistanceModel([GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0), GeoPoint(1.0, 1.0)])


def test_locate_start_uses_first_segment_heading(l_path):
    pos = l_path.locate(0.0)
    assert (pos.lat, pos.lon) == (0.0, 0.0)
    assert pos.heading == pytest.approx(90.0)


def test_locate_negative_distance_clamps_to_start(l_path):
    assert l_path.locate(-50.0) == l_path.locate(0.0)


def test_locate_interpolates_within_segment(l_path):
    first = l_path.segments[0].distance
    pos = l_path.locate(first * 0.25)
    assert pos.lat == pytest.approx(0.0)
    assert pos.lon == pytest.approx(0.25)
    assert pos.heading == pytest.approx(90.0)


def test_locate_heading_is_per_segment(l_path):
    first = l_path.segments[0].distance
    pos = l_path.locate(first + l_path.segments[1].distance / 2)
    assert pos.lat == pytest.approx(0.5)
    assert pos.lon == pytest.approx(1.0)
    assert pos.heading == pytest.approx(0.0, abs=1e-9)


def test_locate_past_end_returns_last_point(l_path):
    pos = l_path.locate(l_path.total_distance * 2)
    assert (pos.lat, pos.lon) == (1.0, 1.0)
    assert pos.heading == pytest.approx(0.0, abs=1e-9)


def test_locate_single_point_path():
    model = DistanceModel([GeoPoint(48.0, 2.0)])
    assert model.total_distance == 0.0
    pos = model.locate(100.0)
    assert (pos.lat, pos.lon, pos.heading) == (48.0, 2.0, 0.0)


def test_locate_handles_zero_length_segment():
    model = DistanceModel([GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)])
    pos = model.locate(model.total_distance / 2)
    assert pos.lon == pytest.approx(0.5)
    assert not math.isnan(pos.heading)

# -----------------------------------------------------------------------------
# DistanceModel.prefix
# -----------------------------------------------------------------------------

def test_prefix_at_zero_is_start_only(l_path):
    assert l_path.prefix(0.0) == [GeoPoint(0.0, 0.0)]


def test_prefix_inside_second_segment(l_path):
    first = l_path.segments[0].distance
    prefix = l_path.prefix(first + l_path.segments[1].distance / 2)
    assert prefix[:2] == [GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)]
    assert len(prefix) == 3
    assert prefix[2].lat == pytest.approx(0.5)


def test_prefix_exactly_at_vertex_stops_there(l_path):
    prefix = l_path.prefix(l_path.segments[0].distance)
    assert prefix == [GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)]


def test_prefix_full_length_is_whole_path(l_path):
    assert l_path.prefix(l_path.total_distance) == list(l_path.points)


def test_prefix_single_point_path():
    model = DistanceModel([GeoPoint(1.0, 1.0)])
    assert model.prefix(10.0) == [GeoPoint(1.0, 1.0)]
