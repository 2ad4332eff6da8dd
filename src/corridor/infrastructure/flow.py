import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from ...common.schemas.tomtom import FlowSegmentResponse
from ..domain.entities import FlowReading, LatLon
from .retry import FLOW_POLICY, RetryPolicy, call_with_retry
from .tomtom_client import TomTomClient

logger = logging.getLogger(__name__)


class FlowFetcher:
    """
    Fetches flow readings one point at a time, in sample order.
    A point whose call fails for good is skipped with a warning.
    """

    def __init__(self, client: TomTomClient, policy: RetryPolicy = FLOW_POLICY):
        self.client = client
        self.policy = policy

    async def fetch(self, point: LatLon) -> Optional[FlowReading]:
        try:
            data = await call_with_retry(lambda: self.client.flow_segment(point), self.policy)
            segment = FlowSegmentResponse.model_validate(data).flow_segment_data
        except ValidationError as e:
            logger.warning(f"Flow call failed for {point[0]},{point[1]}: malformed body ({e.error_count()} errors)")
            return None
        except Exception as e:
            logger.warning(f"Flow call failed for {point[0]},{point[1]}: {e!r}")
            return None

        if segment is None:
            return None
        return FlowReading(
            current_speed=segment.current_speed,
            free_flow_speed=segment.free_flow_speed,
            confidence=segment.confidence,
            frc=segment.frc,
        )

    async def fetch_all(self, points: Sequence[LatLon]) -> List[FlowReading]:
        # Sequential on purpose: no bursts against the provider
        readings = []
        for point in points:
            reading = await self.fetch(point)
            if reading is not None:
                readings.append(reading)
        return readings
