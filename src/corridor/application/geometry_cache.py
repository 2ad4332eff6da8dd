"""
Per-corridor route geometry, computed once and kept for the process lifetime.
"""
import logging
from typing import Dict, Optional

from ..domain.entities import Corridor, RouteGeometry
from ..domain.geometry import normalize_bbox, sample_along_polyline, sample_diagonal
from ..domain.protocols import RouteProvider

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_POINTS = 50


class GeometryCache:
    """
    Keyed store of RouteGeometry by corridor name.

    Lifecycle is compute-once: a geometry built from an available route is
    never recomputed. When routing is unavailable the bbox-diagonal fallback
    is returned without being stored, so the next cycle asks for a route again.
    Concurrent first calls may both compute; the last write wins.
    """

    def __init__(self, resolver: RouteProvider, sample_points: int = DEFAULT_SAMPLE_POINTS):
        self.resolver = resolver
        self.sample_points = sample_points
        self._store: Dict[str, RouteGeometry] = {}

    def get(self, corridor_name: str) -> Optional[RouteGeometry]:
        return self._store.get(corridor_name)

    def __contains__(self, corridor_name: str) -> bool:
        return corridor_name in self._store

    def __len__(self) -> int:
        return len(self._store)

    async def resolve(self, corridor: Corridor) -> RouteGeometry:
        cached = self._store.get(corridor.name)
        if cached is not None:
            return cached

        box = normalize_bbox(corridor.bbox)
        route = await self.resolver.resolve(box)
        polyline = tuple(route.value)

        samples = sample_along_polyline(polyline, self.sample_points)
        if not samples:
            if route.available:
                logger.info(f"Route for {corridor.name} is degenerate, sampling bbox diagonal")
            else:
                logger.warning(
                    f"Routing polyline failed for {corridor.name}: {route.error} "
                    f"- falling back to bbox diagonal"
                )
            samples = sample_diagonal(box, self.sample_points)

        geometry = RouteGeometry(polyline=polyline, samples=tuple(samples))
        if route.available:
            self._store[corridor.name] = geometry
        return geometry
