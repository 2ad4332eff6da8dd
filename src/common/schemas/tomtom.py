import math
from typing import Any, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _numeric_or_none(v: Any) -> Optional[float]:
    # JSON numbers only; strings and booleans count as missing
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    return v if math.isfinite(v) else None


class FlowSegmentData(BaseModel):
    """
    Flow measurement for the road segment closest to a sample point.
    Non-numeric values are read as missing.
    """
    model_config = ConfigDict(populate_by_name=True)

    current_speed: Optional[float] = Field(None, alias="currentSpeed", description="Current speed")
    free_flow_speed: Optional[float] = Field(None, alias="freeFlowSpeed", description="Free-flow speed")
    confidence: Optional[float] = Field(None, description="Provider confidence (0-1)")
    frc: Optional[str] = Field(None, description="Functional road class, FRC0 (motorway) to FRC7")

    @field_validator('current_speed', 'free_flow_speed', 'confidence', mode='before')
    @classmethod
    def numeric_only(cls, v):
        return _numeric_or_none(v)

    @field_validator('frc', mode='before')
    @classmethod
    def text_only(cls, v):
        return v if isinstance(v, str) else None


class FlowSegmentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    flow_segment_data: Optional[FlowSegmentData] = Field(None, alias="flowSegmentData")


class RoutePoint(BaseModel):
    latitude: float
    longitude: float


class RouteLeg(BaseModel):
    points: List[RoutePoint] = Field(default_factory=list)


class Route(BaseModel):
    legs: List[RouteLeg] = Field(default_factory=list)


class CalculateRouteResponse(BaseModel):
    """
    Routing answer; only the first leg of the first route is used.
    """
    routes: List[Route] = Field(default_factory=list)

    def first_leg_points(self) -> Optional[List[Tuple[float, float]]]:
        """(lat, lon) vertices, or None when the answer carries no leg."""
        if not self.routes or not self.routes[0].legs:
            return None
        return [(p.latitude, p.longitude) for p in self.routes[0].legs[0].points]


class IncidentGeometry(BaseModel):
    type: str = Field("", description="Point, LineString or MultiLineString")
    coordinates: Any = Field(None, description="GeoJSON coordinates in lon,lat order")

    @field_validator('type', mode='before')
    @classmethod
    def text_only(cls, v):
        return v if isinstance(v, str) else ""


class IncidentProperties(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    road_numbers: List[str] = Field(default_factory=list, alias="roadNumbers")

    @field_validator('road_numbers', mode='before')
    @classmethod
    def list_of_text(cls, v):
        if not isinstance(v, list):
            return []
        return [str(r) for r in v if r is not None]


class IncidentItem(BaseModel):
    properties: IncidentProperties = Field(default_factory=IncidentProperties)
    geometry: IncidentGeometry = Field(default_factory=IncidentGeometry)

    @field_validator('properties', 'geometry', mode='before')
    @classmethod
    def objects_only(cls, v):
        return v if isinstance(v, dict) else {}


class IncidentDetailsResponse(BaseModel):
    incidents: List[Any] = Field(default_factory=list)

    @field_validator('incidents', mode='before')
    @classmethod
    def list_only(cls, v):
        return v if isinstance(v, list) else []
