from .tomtom import (
    FlowSegmentData,
    FlowSegmentResponse,
    CalculateRouteResponse,
    IncidentItem,
    IncidentDetailsResponse,
)
from .traffic import TrafficSampleOut, PollMetricsOut

__all__ = [
    "FlowSegmentData",
    "FlowSegmentResponse",
    "CalculateRouteResponse",
    "IncidentItem",
    "IncidentDetailsResponse",
    "TrafficSampleOut",
    "PollMetricsOut",
]
