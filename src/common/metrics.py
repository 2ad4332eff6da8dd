from dataclasses import dataclass
from typing import Dict, List
import threading
import time

@dataclass
class PollMetrics:
    """Poller health metrics"""
    cycles: int
    corridors_polled: int
    corridors_failed: int
    flow_points_ok: int
    flow_points_skipped: int
    avg_corridor_time_ms: float
    uptime_s: float

    def to_dict(self) -> Dict:
        return {
            'cycles': self.cycles,
            'corridors_polled': self.corridors_polled,
            'corridors_failed': self.corridors_failed,
            'flow_points_ok': self.flow_points_ok,
            'flow_points_skipped': self.flow_points_skipped,
            'avg_corridor_time_ms': self.avg_corridor_time_ms,
            'uptime_s': self.uptime_s,
        }


class MetricsCollector:
    """Collects and aggregates poll metrics"""

    def __init__(self):
        self.corridor_times: List[float] = []
        self.cycles = 0
        self.corridors_polled = 0
        self.corridors_failed = 0
        self.flow_points_ok = 0
        self.flow_points_skipped = 0
        self.start_time = time.time()
        self._lock = threading.Lock()

    def record_cycle(self):
        with self._lock:
            self.cycles += 1

    def record_corridor(self, duration_ms: float, succeeded: bool):
        with self._lock:
            self.corridor_times.append(duration_ms)
            if succeeded:
                self.corridors_polled += 1
            else:
                self.corridors_failed += 1
            # Keep buffer size manageable
            if len(self.corridor_times) > 1000:
                self.corridor_times.pop(0)

    def record_flow_points(self, ok: int, skipped: int):
        with self._lock:
            self.flow_points_ok += ok
            self.flow_points_skipped += skipped

    def get_metrics(self) -> PollMetrics:
        with self._lock:
            avg_time = sum(self.corridor_times) / len(self.corridor_times) if self.corridor_times else 0.0
            return PollMetrics(
                cycles=self.cycles,
                corridors_polled=self.corridors_polled,
                corridors_failed=self.corridors_failed,
                flow_points_ok=self.flow_points_ok,
                flow_points_skipped=self.flow_points_skipped,
                avg_corridor_time_ms=avg_time,
                uptime_s=time.time() - self.start_time,
            )
