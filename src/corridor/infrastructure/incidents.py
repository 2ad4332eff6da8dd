import logging
from typing import List

from pydantic import ValidationError

from ...common.schemas.tomtom import IncidentDetailsResponse, IncidentItem
from ..domain.entities import BoundingBox, Fetched, Incident
from .retry import INCIDENTS_POLICY, RetryPolicy, call_with_retry
from .tomtom_client import TomTomClient

logger = logging.getLogger(__name__)


def parse_incidents(data: dict) -> List[Incident]:
    incidents = []
    for raw in IncidentDetailsResponse.model_validate(data).incidents:
        if not isinstance(raw, dict):
            continue
        try:
            item = IncidentItem.model_validate(raw)
        except ValidationError:
            logger.debug(f"Skipping unreadable incident: {raw!r}")
            continue
        incidents.append(Incident(
            geometry_type=item.geometry.type,
            coordinates=item.geometry.coordinates,
            road_numbers=item.properties.road_numbers,
            raw=raw,
        ))
    return incidents


class IncidentFetcher:
    """
    Fetches incidents valid at present inside a corridor bbox.
    Exhausted retries give an unavailable, empty collection.
    """

    def __init__(self, client: TomTomClient, policy: RetryPolicy = INCIDENTS_POLICY):
        self.client = client
        self.policy = policy

    async def fetch(self, box: BoundingBox) -> Fetched[List[Incident]]:
        try:
            data = await call_with_retry(
                lambda: self.client.incident_details(box.to_incidents_bbox()), self.policy
            )
            return Fetched(parse_incidents(data))
        except Exception as e:
            return Fetched.unavailable([], error=repr(e))
