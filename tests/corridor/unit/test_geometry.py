import math
import pytest
from src.common.exceptions import ConfigurationError
from src.corridor.domain.entities import BoundingBox
from src.corridor.domain.geometry import (
    BBOX_EPSILON,
    haversine_km,
    min_distance_to_polyline_m,
    normalize_bbox,
    parse_bbox,
    point_to_segment_m,
    sample_along_polyline,
    sample_diagonal,
)

# --- Bounding box ---

def test_normalize_sorts_axes():
    box = normalize_bbox("40.0,-105.5,39.5,-105.0")
    assert box == BoundingBox(min_lat=39.5, min_lon=-105.5, max_lat=40.0, max_lon=-105.0)

def test_incidents_bbox_order():
    box = normalize_bbox("40.0,-105.5,39.5,-105.0")
    assert box.to_incidents_bbox() == "-105.5,39.5,-105.0,40.0"

def test_normalize_detects_swapped_pairs():
    assert normalize_bbox("-105.5,40.0,-105.0,39.5") == normalize_bbox("40.0,-105.5,39.5,-105.0")

def test_normalize_keeps_pair_order_when_both_look_like_latitudes():
    box = normalize_bbox("48.1,11.5,48.2,11.7")
    assert (box.min_lat, box.max_lat) == (48.1, 48.2)
    assert (box.min_lon, box.max_lon) == (11.5, 11.7)

def test_corners():
    box = normalize_bbox("39.8,-105.2,39.6,-104.9")
    assert box.northwest == (39.8, -105.2)
    assert box.southeast == (39.6, -104.9)

def test_zero_span_is_expanded():
    box = normalize_bbox("39.7,-105.0,39.7,-105.0")
    assert box.max_lat - box.min_lat > 0
    assert box.max_lon - box.min_lon > 0
    assert box.max_lat - box.min_lat == pytest.approx(2 * BBOX_EPSILON)
    assert (box.min_lat + box.max_lat) / 2 == pytest.approx(39.7)

@pytest.mark.parametrize("bbox", ["1,2,3", "a,b,c,d", ""])
def test_bad_bbox_raises(bbox):
    with pytest.raises(ConfigurationError):
        parse_bbox(bbox)

# --- Distances ---

def test_haversine_one_degree_on_equator():
    expected = 2 * math.pi * 6371.0088 / 360
    assert haversine_km((0.0, 0.0), (0.0, 1.0)) == pytest.approx(expected, rel=1e-9)

def test_point_to_segment_perpendicular():
    # 0.001 deg north of a west-east segment
    d = point_to_segment_m((0.001, 0.5), (0.0, 0.0), (0.0, 1.0))
    assert d == pytest.approx(111.32, abs=1e-6)

def test_point_to_segment_clamps_to_endpoint():
    d = point_to_segment_m((0.0, -0.001953125), (0.0, 0.0), (0.0, 0.01))
    assert d == 217.421875

def test_zero_length_segment_is_point_distance():
    d = point_to_segment_m((0.0, 0.0), (0.0, 0.001953125), (0.0, 0.001953125))
    assert d == 217.421875

def test_min_distance_needs_two_vertices():
    assert min_distance_to_polyline_m((0.0, 0.0), [(0.0, 0.0)]) == math.inf

def test_min_distance_picks_nearest_segment(equator_polyline):
    d = min_distance_to_polyline_m((0.001, 0.005), equator_polyline)
    assert d == pytest.approx(111.32, abs=1e-6)

# --- Samplers ---

def test_diagonal_single_point_is_midpoint():
    box = normalize_bbox("39.8,-105.2,39.6,-104.9")
    [(lat, lon)] = sample_diagonal(box, 1)
    assert lat == pytest.approx(39.7)
    assert lon == pytest.approx(-105.05)

def test_diagonal_runs_nw_to_se_monotonically():
    box = normalize_bbox("39.8,-105.2,39.6,-104.9")
    points = sample_diagonal(box, 5)
    assert len(points) == 5
    assert points[0] == box.northwest
    assert points[-1] == pytest.approx(box.southeast)
    lats = [p[0] for p in points]
    lons = [p[1] for p in points]
    assert lats == sorted(lats, reverse=True)
    assert lons == sorted(lons)

def test_diagonal_zero_points():
    assert sample_diagonal(normalize_bbox("39.8,-105.2,39.6,-104.9"), 0) == []

def test_polyline_samples_are_evenly_spaced_and_interior():
    line = [(0.0, 0.0), (0.0, 1.0)]
    points = sample_along_polyline(line, 4)
    assert len(points) == 4
    assert [p[1] for p in points] == pytest.approx([0.2, 0.4, 0.6, 0.8])
    assert all(p[0] == pytest.approx(0.0) for p in points)
    assert line[0] not in points and line[-1] not in points

def test_polyline_with_duplicate_vertices():
    line = [(0.0, 0.0), (0.0, 0.0), (0.0, 1.0), (0.0, 1.0)]
    points = sample_along_polyline(line, 3)
    assert [p[1] for p in points] == pytest.approx([0.25, 0.5, 0.75])

def test_polyline_samples_follow_bends():
    # L-shaped route: north 1 deg then east 1 deg (at the equator, near equal lengths)
    line = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
    points = sample_along_polyline(line, 1)
    assert len(points) == 1
    lat, lon = points[0]
    assert lat == pytest.approx(1.0, abs=1e-3)
    assert lon == pytest.approx(0.0, abs=1e-3)

def test_polyline_returns_exactly_n(equator_polyline):
    assert len(sample_along_polyline(equator_polyline, 50)) == 50

@pytest.mark.parametrize("line", [[], [(0.0, 0.0)], [(1.0, 1.0), (1.0, 1.0)]])
def test_degenerate_polyline_yields_nothing(line):
    assert sample_along_polyline(line, 5) == []

def test_polyline_zero_points(equator_polyline):
    assert sample_along_polyline(equator_polyline, 0) == []
