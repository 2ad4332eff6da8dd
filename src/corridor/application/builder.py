import logging
from typing import Dict, List, Optional

import httpx
from omegaconf import DictConfig, OmegaConf

from ...common.database import create_db_engine, init_db, make_session_factory
from ...common.metrics import MetricsCollector
from ..domain.entities import Corridor
from ..domain.geofilter import IncidentGeofilter
from ..infrastructure.flow import FlowFetcher
from ..infrastructure.incidents import IncidentFetcher
from ..infrastructure.repositories import SqlTrafficSampleRepository
from ..infrastructure.retry import RetryPolicy
from ..infrastructure.routing import RouteResolver
from ..infrastructure.tomtom_client import TomTomClient
from .aggregator import TrafficAggregator
from .geometry_cache import GeometryCache
from .poller import CorridorPoller
from .scheduler import PollScheduler

logger = logging.getLogger(__name__)


def retry_policy_from_config(cfg: DictConfig) -> RetryPolicy:
    return RetryPolicy(
        timeout_s=float(cfg.timeout_s),
        retries=int(cfg.retries),
        backoff_ms=float(cfg.backoff_ms),
        deadline_s=float(cfg.deadline_s) if cfg.get('deadline_s') is not None else None,
    )


def corridors_from_config(traffic_cfg: DictConfig) -> List[Corridor]:
    corridors = []
    for c in traffic_cfg.corridors:
        road_classes = c.get('road_classes')
        corridors.append(Corridor(
            name=str(c.name),
            bbox=str(c.bbox),
            road_classes=tuple(road_classes) if road_classes is not None else None,
            road_numbers=tuple(c.get('road_numbers') or ()),
        ))
    return corridors


class PollerApplicationBuilder:
    """
    Builder pattern for constructing the corridor poller.
    Centralizes component instantiation and wiring.
    """

    def __init__(self, config: DictConfig, http_client: Optional[httpx.AsyncClient] = None,
                 session_factory=None):
        self.config = config
        self.traffic_cfg = config.traffic
        self.metrics_collector = MetricsCollector()
        self._http_client = http_client
        self._session_factory = session_factory

        # Components
        self.client: Optional[TomTomClient] = None
        self.geometry_cache: Optional[GeometryCache] = None
        self.flow_fetcher: Optional[FlowFetcher] = None
        self.incident_fetcher: Optional[IncidentFetcher] = None
        self.repository: Optional[SqlTrafficSampleRepository] = None
        self.poller: Optional[CorridorPoller] = None

    def build_client(self) -> 'PollerApplicationBuilder':
        if not self.traffic_cfg.api_key:
            logger.warning("traffic.api_key is empty; provider calls will be rejected")
        self.client = TomTomClient(
            api_key=self.traffic_cfg.api_key,
            base_url=self.traffic_cfg.base_url,
            http_client=self._http_client,
        )
        return self

    def build_geometry_cache(self) -> 'PollerApplicationBuilder':
        if not self.client:
            self.build_client()
        resolver = RouteResolver(self.client, retry_policy_from_config(self.traffic_cfg.routing))
        self.geometry_cache = GeometryCache(resolver, sample_points=self.traffic_cfg.sample_points)
        return self

    def build_fetchers(self) -> 'PollerApplicationBuilder':
        if not self.client:
            self.build_client()
        self.flow_fetcher = FlowFetcher(self.client, retry_policy_from_config(self.traffic_cfg.flow))
        self.incident_fetcher = IncidentFetcher(self.client, retry_policy_from_config(self.traffic_cfg.incidents))
        return self

    def build_repository(self) -> 'PollerApplicationBuilder':
        session_factory = self._session_factory
        if session_factory is None:
            url = self.config.get('database', {}).get('url', "sqlite:///./traffic.db")
            logger.info(f"Initializing database at {url}")
            engine = create_db_engine(url)
            init_db(engine)
            session_factory = make_session_factory(engine)
        self.repository = SqlTrafficSampleRepository(session_factory)
        return self

    def build_poller(self) -> CorridorPoller:
        if not self.geometry_cache:
            self.build_geometry_cache()
        if not self.flow_fetcher or not self.incident_fetcher:
            self.build_fetchers()
        if not self.repository:
            self.build_repository()

        road_classes = OmegaConf.to_container(self.traffic_cfg.road_classes, resolve=True)
        self.poller = CorridorPoller(
            corridors=corridors_from_config(self.traffic_cfg),
            geometry_cache=self.geometry_cache,
            flow_fetcher=self.flow_fetcher,
            incident_fetcher=self.incident_fetcher,
            repository=self.repository,
            geofilter=IncidentGeofilter(buffer_m=self.traffic_cfg.buffer_m),
            aggregator=TrafficAggregator(road_classes=road_classes),
            metrics_collector=self.metrics_collector,
        )
        return self.poller

    def build_scheduler(self) -> PollScheduler:
        if not self.poller:
            self.build_poller()
        return PollScheduler(
            self.poller,
            interval_s=self.traffic_cfg.poll_seconds,
            initial_delay_s=self.traffic_cfg.initial_delay_seconds,
        )

    def get_components(self) -> Dict:
        """Returns built components for external use (e.g. the read API)"""
        return {
            'client': self.client,
            'geometry_cache': self.geometry_cache,
            'flow_fetcher': self.flow_fetcher,
            'incident_fetcher': self.incident_fetcher,
            'repository': self.repository,
            'poller': self.poller,
            'metrics_collector': self.metrics_collector,
        }
