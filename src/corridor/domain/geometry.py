"""
Geometry helpers for corridors: bbox normalization, route sampling and
planar point-to-segment distances.
"""
import math
from typing import List, Sequence, Tuple

import numpy as np

from ...common.exceptions import ConfigurationError
from .entities import BoundingBox, LatLon

EARTH_RADIUS_KM = 6371.0088
METERS_PER_DEGREE = 111320.0
BBOX_EPSILON = 1e-6


def parse_bbox(bbox: str) -> Tuple[float, float, float, float]:
    """Parses "lat1,lon1,lat2,lon2" into four floats."""
    parts = bbox.split(",")
    if len(parts) != 4:
        raise ConfigurationError(f"bbox must be 'lat1,lon1,lat2,lon2', got {bbox!r}")
    try:
        return tuple(float(p.strip()) for p in parts)
    except ValueError as e:
        raise ConfigurationError(f"bbox contains a non-numeric value: {bbox!r}") from e


def _as_lat_lon(a: float, b: float) -> LatLon:
    # A pair is taken as (lat, lon) unless only the first value is out of latitude range
    if abs(a) > 90 and abs(b) <= 90:
        return b, a
    return a, b


def normalize_bbox(bbox: str) -> BoundingBox:
    """
    Sorts a corridor bbox into (minLat, minLon, maxLat, maxLon).
    A collapsed span is widened symmetrically by a small epsilon.
    """
    a, b, c, d = parse_bbox(bbox)
    lat1, lon1 = _as_lat_lon(a, b)
    lat2, lon2 = _as_lat_lon(c, d)

    min_lat, max_lat = min(lat1, lat2), max(lat1, lat2)
    min_lon, max_lon = min(lon1, lon2), max(lon1, lon2)

    if max_lat - min_lat < BBOX_EPSILON:
        min_lat -= BBOX_EPSILON
        max_lat += BBOX_EPSILON
    if max_lon - min_lon < BBOX_EPSILON:
        min_lon -= BBOX_EPSILON
        max_lon += BBOX_EPSILON
    return BoundingBox(min_lat, min_lon, max_lat, max_lon)


def haversine_km(a: LatLon, b: LatLon) -> float:
    lat1, lon1 = math.radians(a[0]), math.radians(a[1])
    lat2, lon2 = math.radians(b[0]), math.radians(b[1])
    s = (math.sin((lat2 - lat1) / 2) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2)
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(s)))


def cumulative_distances_km(polyline: Sequence[LatLon]) -> np.ndarray:
    """Great-circle distance from the first vertex to every vertex."""
    pts = np.radians(np.asarray(polyline, dtype=float))
    lat, lon = pts[:, 0], pts[:, 1]
    s = (np.sin(np.diff(lat) / 2) ** 2
         + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(np.diff(lon) / 2) ** 2)
    segments = 2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.clip(s, 0.0, 1.0)))
    return np.concatenate(([0.0], np.cumsum(segments)))


def sample_along_polyline(polyline: Sequence[LatLon], n: int) -> List[LatLon]:
    """
    Places n points at i * total / (n + 1) along the polyline, i = 1..n.
    Both endpoints are excluded. Returns [] for fewer than two vertices
    or a zero-length line.
    """
    if polyline is None or len(polyline) < 2 or n <= 0:
        return []

    cum = cumulative_distances_km(polyline)
    total = cum[-1]
    if total == 0:
        return []

    pts = np.asarray(polyline, dtype=float)
    targets = np.arange(1, n + 1) * (total / (n + 1))
    # Segment j brackets the target: cum[j] < target <= cum[j + 1]
    j = np.clip(np.searchsorted(cum, targets, side="left") - 1, 0, len(pts) - 2)
    seg_len = cum[j + 1] - cum[j]
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.where(seg_len == 0, 0.0, (targets - cum[j]) / seg_len)

    start, end = pts[j], pts[j + 1]
    sampled = start + t[:, None] * (end - start)
    return [(float(lat), float(lon)) for lat, lon in sampled]


def sample_diagonal(box: BoundingBox, n: int) -> List[LatLon]:
    """
    Fallback sampling: n points on the straight line from the NW to the SE corner.
    """
    if n <= 0:
        return []
    (lat1, lon1), (lat2, lon2) = box.northwest, box.southeast
    points = []
    for i in range(n):
        t = 0.5 if n == 1 else i / (n - 1)
        points.append((lat1 + t * (lat2 - lat1), lon1 + t * (lon2 - lon1)))
    return points


def point_to_segment_m(p: LatLon, a: LatLon, b: LatLon) -> float:
    """
    Distance in meters from p to segment ab, in a planar projection centred on p.
    """
    m_lat = METERS_PER_DEGREE
    m_lon = METERS_PER_DEGREE * math.cos(math.radians(p[0]))

    ax, ay = (a[1] - p[1]) * m_lon, (a[0] - p[0]) * m_lat
    bx, by = (b[1] - p[1]) * m_lon, (b[0] - p[0]) * m_lat

    vx, vy = bx - ax, by - ay
    len2 = vx * vx + vy * vy
    if len2 == 0:
        return math.hypot(ax, ay)

    # Projection of the origin onto ab, clamped to the segment
    t = max(0.0, min(1.0, -(ax * vx + ay * vy) / len2))
    return math.hypot(ax + t * vx, ay + t * vy)


def min_distance_to_polyline_m(p: LatLon, polyline: Sequence[LatLon]) -> float:
    if len(polyline) < 2:
        return math.inf
    return min(
        point_to_segment_m(p, polyline[i], polyline[i + 1])
        for i in range(len(polyline) - 1)
    )
