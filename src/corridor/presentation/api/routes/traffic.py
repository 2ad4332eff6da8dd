"""
Read-side endpoints: latest sample per corridor, health and poller metrics.
"""
from typing import Optional
from fastapi import FastAPI, HTTPException, Query

from .....common.metrics import MetricsCollector
from .....common.schemas.traffic import PollMetricsOut, TrafficSampleOut
from ....domain.protocols import TrafficSampleRepository

app = FastAPI()

# Singletons
_repository: Optional[TrafficSampleRepository] = None
_metrics: Optional[MetricsCollector] = None

def init_traffic_routes(repository: TrafficSampleRepository, metrics: Optional[MetricsCollector] = None):
    global _repository, _metrics
    _repository = repository
    _metrics = metrics

def get_repository() -> TrafficSampleRepository:
    if _repository is None:
        raise HTTPException(500, "Repository not initialized")
    return _repository

def get_metrics() -> MetricsCollector:
    if _metrics is None:
        raise HTTPException(500, "Metrics not initialized")
    return _metrics

@app.get("/api/traffic/latest", response_model=Optional[TrafficSampleOut])
def latest(corridor: str = Query(..., description="Corridor name, e.g. I-25")):
    """Most recent sample for a corridor, or null if none was stored yet."""
    sample = get_repository().latest(corridor)
    if sample is None:
        return None
    return TrafficSampleOut.model_validate(sample)

@app.get("/api/traffic/health")
def health():
    return "ok"

@app.get("/api/traffic/metrics", response_model=PollMetricsOut)
def metrics():
    return PollMetricsOut(**get_metrics().get_metrics().to_dict())
