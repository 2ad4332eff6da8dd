"""
Domain protocols for the corridor traffic module.
"""
from typing import List, Optional, Protocol, Sequence

from .entities import BoundingBox, Fetched, FlowReading, Incident, LatLon, TrafficSample


class RouteProvider(Protocol):
    """
    Resolves a route polyline across a corridor bbox.
    """
    async def resolve(self, box: BoundingBox) -> Fetched[List[LatLon]]:
        ...

class FlowProvider(Protocol):
    """
    Fetches flow readings for sample points, in order.
    """
    async def fetch_all(self, points: Sequence[LatLon]) -> List[FlowReading]:
        ...

class IncidentProvider(Protocol):
    """
    Fetches current incidents inside a bbox.
    """
    async def fetch(self, box: BoundingBox) -> Fetched[List[Incident]]:
        ...

class TrafficSampleRepository(Protocol):
    """
    Storage for computed traffic samples.
    """
    def save(self, sample: TrafficSample) -> int:
        ...

    def latest(self, corridor: str) -> Optional[TrafficSample]:
        ...
