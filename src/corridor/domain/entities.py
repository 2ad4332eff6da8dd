"""
Domain entities for the corridor traffic module.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

LatLon = Tuple[float, float]  # (latitude, longitude)

T = TypeVar("T")


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-sorted bounding box in degrees.
    """
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @property
    def northwest(self) -> LatLon:
        return (self.max_lat, self.min_lon)

    @property
    def southeast(self) -> LatLon:
        return (self.min_lat, self.max_lon)

    def to_incidents_bbox(self) -> str:
        """Provider order for the incidents feed: minLon,minLat,maxLon,maxLat."""
        return f"{self.min_lon},{self.min_lat},{self.max_lon},{self.max_lat}"


@dataclass(frozen=True)
class Corridor:
    """
    A named road corridor of interest.
    """
    name: str
    bbox: str  # "lat1,lon1,lat2,lon2", any order
    road_classes: Optional[Tuple[str, ...]] = None  # overrides the aggregator default
    road_numbers: Tuple[str, ...] = ()  # extra aliases counted as a road match


@dataclass(frozen=True)
class RouteGeometry:
    """
    Route polyline of a corridor plus the points sampled along it.
    The polyline is empty when no route was available.
    """
    polyline: Tuple[LatLon, ...]
    samples: Tuple[LatLon, ...]


@dataclass(frozen=True)
class FlowReading:
    """
    One flow measurement at a sample point.
    """
    current_speed: Optional[float] = None
    free_flow_speed: Optional[float] = None
    confidence: Optional[float] = None
    frc: Optional[str] = None  # functional road class, e.g. FRC0


@dataclass
class Incident:
    """
    A provider-reported traffic event.
    Coordinates are in provider order (lon, lat).
    """
    geometry_type: str
    coordinates: Any
    road_numbers: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)  # original provider object


@dataclass(frozen=True)
class TrafficSample:
    """
    Corridor-level summary of one poll.
    Speed fields are None when no reading carried the value.
    """
    corridor: str
    avg_current_speed: Optional[float]
    avg_freeflow_speed: Optional[float]
    min_current_speed: Optional[float]
    confidence: Optional[float]
    incidents_json: str
    polled_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = None


@dataclass(frozen=True)
class Fetched(Generic[T]):
    """
    Result of a best-effort provider fetch.

    ``available`` is False when the provider could not be reached; ``value``
    then holds an empty result that callers treat exactly like "no data".
    """
    value: T
    available: bool = True
    error: Optional[str] = None

    @classmethod
    def unavailable(cls, empty: T, error: Optional[str] = None) -> "Fetched[T]":
        return cls(value=empty, available=False, error=error)


def is_number(value: Any) -> bool:
    """True for finite JSON numbers; booleans and numeric strings do not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
