"""
Application layer: geometry cache, aggregation, orchestration and scheduling.
"""
from .aggregator import TrafficAggregator, average, minimum
from .geometry_cache import GeometryCache
from .poller import CorridorPoller, PollOutcome, PollState
from .scheduler import PollScheduler
