"""
Poll orchestration: one full cycle per corridor, corridors one after another.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence

from ...common.logging import log_execution_time
from ...common.metrics import MetricsCollector
from ..domain.entities import Corridor, TrafficSample
from ..domain.geofilter import IncidentGeofilter
from ..domain.geometry import normalize_bbox
from ..domain.protocols import FlowProvider, IncidentProvider, TrafficSampleRepository
from .aggregator import TrafficAggregator
from .geometry_cache import GeometryCache

logger = logging.getLogger(__name__)


class PollState(str, Enum):
    IDLE = "idle"
    GEOMETRY_RESOLVING = "geometry_resolving"
    FETCHING = "fetching_flows_and_incidents"
    AGGREGATING = "aggregating"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass
class PollOutcome:
    """
    Result of polling one corridor. ``failed_in`` is the state the pipeline
    was in when an error escaped.
    """
    corridor: str
    state: PollState
    sample: Optional[TrafficSample] = None
    error: Optional[Exception] = None
    failed_in: Optional[PollState] = None


class CorridorPoller:
    """
    Drives geometry -> (flows || incidents) -> aggregate -> persist for each corridor.
    A failure in one corridor is logged and never stops the rest of the cycle.
    """

    def __init__(
        self,
        corridors: Sequence[Corridor],
        geometry_cache: GeometryCache,
        flow_fetcher: FlowProvider,
        incident_fetcher: IncidentProvider,
        repository: TrafficSampleRepository,
        geofilter: Optional[IncidentGeofilter] = None,
        aggregator: Optional[TrafficAggregator] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self.corridors = list(corridors)
        self.geometry_cache = geometry_cache
        self.flow_fetcher = flow_fetcher
        self.incident_fetcher = incident_fetcher
        self.repository = repository
        self.geofilter = geofilter or IncidentGeofilter()
        self.aggregator = aggregator or TrafficAggregator()
        self.metrics_collector = metrics_collector

    @log_execution_time(logger)
    async def poll_all(self) -> List[PollOutcome]:
        outcomes = []
        for corridor in self.corridors:
            outcomes.append(await self.poll_corridor(corridor))
        if self.metrics_collector:
            self.metrics_collector.record_cycle()
        return outcomes

    async def poll_corridor(self, corridor: Corridor) -> PollOutcome:
        state = PollState.IDLE
        start = time.perf_counter()
        try:
            state = PollState.GEOMETRY_RESOLVING
            box = normalize_bbox(corridor.bbox)
            geometry = await self.geometry_cache.resolve(corridor)

            state = PollState.FETCHING
            readings, incidents = await asyncio.gather(
                self.flow_fetcher.fetch_all(geometry.samples),
                self.incident_fetcher.fetch(box),
            )
            if not incidents.available:
                logger.warning(f"Incidents unavailable for {corridor.name}: {incidents.error}")

            state = PollState.AGGREGATING
            kept = self.geofilter.filter(corridor, incidents.value, geometry.polyline)
            sample = self.aggregator.aggregate(corridor, readings, kept)

            sample_id = await asyncio.to_thread(self.repository.save, sample)
            sample = replace(sample, id=sample_id)
            state = PollState.PERSISTED
            logger.info(
                f"Polled {corridor.name} -> points={len(readings)}, "
                f"avgSpeed={sample.avg_current_speed}, minSpeed={sample.min_current_speed}, "
                f"incidents={len(kept)}"
            )
            self._record(start, True, ok=len(readings), skipped=len(geometry.samples) - len(readings))
            return PollOutcome(corridor=corridor.name, state=state, sample=sample)
        except Exception as e:
            logger.exception(f"Poll failed for {corridor.name} during {state.value}: {e}")
            self._record(start, False)
            return PollOutcome(corridor=corridor.name, state=PollState.FAILED, error=e, failed_in=state)

    def _record(self, start: float, succeeded: bool, ok: int = 0, skipped: int = 0):
        if not self.metrics_collector:
            return
        self.metrics_collector.record_corridor((time.perf_counter() - start) * 1000, succeeded)
        if ok or skipped:
            self.metrics_collector.record_flow_points(ok, skipped)
