"""
Incident geofencing: keeps incidents reported on the corridor's road and
lying within a buffer of its route polyline.
"""
import re
from typing import FrozenSet, Iterable, List, Optional, Sequence

from .entities import Corridor, Incident, LatLon, is_number
from .geometry import min_distance_to_polyline_m

DEFAULT_BUFFER_M = 300.0

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def normalize_road(road: str) -> str:
    """"I-25", "I 25" and "i25" all become "I25"."""
    return _NON_ALNUM.sub("", road).upper()


def corridor_road_keys(corridor: Corridor) -> FrozenSet[str]:
    keys = {normalize_road(corridor.name)}
    keys.update(normalize_road(alias) for alias in corridor.road_numbers)
    keys.discard("")
    return frozenset(keys)


def matches_road(incident: Incident, road_keys: FrozenSet[str]) -> bool:
    return any(normalize_road(str(road)) in road_keys for road in incident.road_numbers)


def _lat_lon(coord) -> Optional[LatLon]:
    if not isinstance(coord, (list, tuple)) or len(coord) < 2:
        return None
    lon, lat = coord[0], coord[1]
    if not (is_number(lon) and is_number(lat)):
        return None
    return (float(lat), float(lon))


def incident_points(incident: Incident) -> Optional[List[LatLon]]:
    """
    Vertices of a Point, LineString or MultiLineString incident as (lat, lon).
    Returns None for any other geometry type.
    """
    coords = incident.coordinates
    if incident.geometry_type == "Point":
        point = _lat_lon(coords)
        return [point] if point else []
    if incident.geometry_type == "LineString":
        lines = [coords]
    elif incident.geometry_type == "MultiLineString":
        lines = coords if isinstance(coords, list) else []
    else:
        return None

    points = []
    for line in lines:
        if not isinstance(line, list):
            continue
        points.extend(p for p in map(_lat_lon, line) if p is not None)
    return points


def within_buffer(incident: Incident, polyline: Sequence[LatLon], buffer_m: float = DEFAULT_BUFFER_M) -> bool:
    points = incident_points(incident)
    if not points:
        return False
    return any(min_distance_to_polyline_m(p, polyline) <= buffer_m for p in points)


class IncidentGeofilter:
    """
    Applies the road-number and proximity predicates; both must pass.
    Proximity is skipped when the corridor has no route polyline.
    """

    def __init__(self, buffer_m: float = DEFAULT_BUFFER_M):
        self.buffer_m = buffer_m

    def filter(self, corridor: Corridor, incidents: Iterable[Incident],
               polyline: Sequence[LatLon]) -> List[Incident]:
        road_keys = corridor_road_keys(corridor)
        kept = []
        for incident in incidents:
            if not matches_road(incident, road_keys):
                continue
            if polyline and not within_buffer(incident, polyline, self.buffer_m):
                continue
            kept.append(incident)
        return kept
