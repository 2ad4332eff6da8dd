import logging
from typing import List

from pydantic import ValidationError

from ...common.exceptions import MalformedResponseError
from ...common.schemas.tomtom import CalculateRouteResponse
from ..domain.entities import BoundingBox, Fetched, LatLon
from .retry import ROUTING_POLICY, RetryPolicy, call_with_retry
from .tomtom_client import TomTomClient

logger = logging.getLogger(__name__)


class RouteResolver:
    """
    Requests a traffic-aware route from the bbox NW corner to its SE corner.
    Any failure yields an unavailable, empty polyline.
    """

    def __init__(self, client: TomTomClient, policy: RetryPolicy = ROUTING_POLICY):
        self.client = client
        self.policy = policy

    async def _route(self, box: BoundingBox) -> List[LatLon]:
        data = await self.client.calculate_route(box.northwest, box.southeast)
        try:
            points = CalculateRouteResponse.model_validate(data).first_leg_points()
        except ValidationError as e:
            raise MalformedResponseError(f"Unreadable route points: {e.error_count()} errors") from e
        if points is None:
            raise MalformedResponseError("Route response has no routes[0].legs[0]")
        return points

    async def resolve(self, box: BoundingBox) -> Fetched[List[LatLon]]:
        try:
            polyline = await call_with_retry(lambda: self._route(box), self.policy)
        except Exception as e:
            logger.debug(f"Route request failed for {box}: {e!r}")
            return Fetched.unavailable([], error=repr(e))
        return Fetched(polyline)
