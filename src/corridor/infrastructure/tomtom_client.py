"""
Thin async client for the TomTom routing, flow and incident endpoints.
"""
from typing import Any, Dict, Optional

import httpx

from ...common.exceptions import MalformedResponseError, ProviderError
from ..domain.entities import LatLon

DEFAULT_BASE_URL = "https://api.tomtom.com"

ROUTE_PATH = "/routing/1/calculateRoute/{start}:{end}/json"
FLOW_PATH = "/traffic/services/4/flowSegmentData/absolute/10/json"
INCIDENTS_PATH = "/traffic/services/5/incidentDetails"
INCIDENT_FIELDS = "{incidents{properties{roadNumbers,iconCategory,delay},geometry{type,coordinates}}}"


def _format_point(point: LatLon) -> str:
    return f"{point[0]:.6f},{point[1]:.6f}"


class TomTomClient:
    """
    Issues single GET requests and maps every failure to ProviderError.
    Retry and timeout policy belong to the callers.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        # No transport timeout: RetryPolicy.timeout_s bounds every attempt
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=None)

    async def get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        query = dict(params)
        query["key"] = self.api_key
        try:
            response = await self._http.get(path, params=query)
        except httpx.TimeoutException as e:
            raise ProviderError(f"Timeout calling {path}", retriable=True) from e
        except httpx.TransportError as e:
            raise ProviderError(f"Transport error calling {path}: {e}", retriable=True) from e

        status = response.status_code
        if status >= 500:
            raise ProviderError(f"{path} returned {status}", status_code=status, retriable=True)
        if status >= 400:
            raise ProviderError(f"{path} returned {status}", status_code=status, retriable=False)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{path} returned a non-JSON body", status_code=status) from e
        if not isinstance(data, dict):
            raise MalformedResponseError(f"{path} returned {type(data).__name__}, expected an object",
                                         status_code=status)
        return data

    async def calculate_route(self, start: LatLon, end: LatLon) -> Dict[str, Any]:
        path = ROUTE_PATH.format(start=_format_point(start), end=_format_point(end))
        return await self.get_json(path, {"traffic": "true", "avoid": "unpavedRoads"})

    async def flow_segment(self, point: LatLon) -> Dict[str, Any]:
        # Flow wants lat,lon
        return await self.get_json(FLOW_PATH, {"point": f"{point[0]},{point[1]}", "unit": "mph"})

    async def incident_details(self, bbox: str) -> Dict[str, Any]:
        # bbox in minLon,minLat,maxLon,maxLat order
        return await self.get_json(INCIDENTS_PATH, {
            "bbox": bbox,
            "timeValidityFilter": "present",
            "fields": INCIDENT_FIELDS,
        })

    async def aclose(self):
        await self._http.aclose()
