from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class TrafficSampleOut(BaseModel):
    """
    Latest persisted sample for a corridor, as served by the read API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="Storage identifier")
    corridor: str = Field(..., description="Corridor name")
    avg_current_speed: Optional[float] = Field(None, description="Average current speed")
    avg_freeflow_speed: Optional[float] = Field(None, description="Average free-flow speed")
    min_current_speed: Optional[float] = Field(None, description="Minimum current speed")
    confidence: Optional[float] = Field(None, description="Average provider confidence")
    incidents_json: str = Field(..., description='Serialized {"incidents": [...]} collection')
    polled_at: datetime = Field(..., description="Poll timestamp (UTC)")

class PollMetricsOut(BaseModel):
    """
    Poller health counters.
    """
    cycles: int = Field(..., ge=0)
    corridors_polled: int = Field(..., ge=0)
    corridors_failed: int = Field(..., ge=0)
    flow_points_ok: int = Field(..., ge=0)
    flow_points_skipped: int = Field(..., ge=0)
    avg_corridor_time_ms: float = Field(..., ge=0.0)
    uptime_s: float = Field(..., ge=0.0)
