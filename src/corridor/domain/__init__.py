"""
Domain module initialization.
"""
from .entities import (
    BoundingBox,
    Corridor,
    Fetched,
    FlowReading,
    Incident,
    LatLon,
    RouteGeometry,
    TrafficSample,
)
from .protocols import (
    RouteProvider,
    FlowProvider,
    IncidentProvider,
    TrafficSampleRepository,
)
from .geofilter import IncidentGeofilter, normalize_road
