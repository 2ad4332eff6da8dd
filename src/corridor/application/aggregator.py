import json
from typing import Iterable, List, Optional, Sequence

from ..domain.entities import Corridor, FlowReading, Incident, TrafficSample

DEFAULT_ROAD_CLASSES = ("FRC0", "FRC1")


def average(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def minimum(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return min(values)


class TrafficAggregator:
    """
    Reduces per-point flow readings and geofenced incidents into one TrafficSample.
    Readings outside the kept functional road classes are dropped first.
    """

    def __init__(self, road_classes: Iterable[str] = DEFAULT_ROAD_CLASSES):
        self.road_classes = frozenset(road_classes)

    def classes_for(self, corridor: Corridor) -> frozenset:
        if corridor.road_classes is not None:
            return frozenset(corridor.road_classes)
        return self.road_classes

    def aggregate(self, corridor: Corridor, readings: Iterable[FlowReading],
                  incidents: List[Incident]) -> TrafficSample:
        allowed = self.classes_for(corridor)
        kept = [r for r in readings if r.frc is not None and r.frc in allowed]

        # Each statistic only sees the readings that carry its field
        current = [r.current_speed for r in kept if r.current_speed is not None]
        freeflow = [r.free_flow_speed for r in kept if r.free_flow_speed is not None]
        confidences = [r.confidence for r in kept if r.confidence is not None]

        return TrafficSample(
            corridor=corridor.name,
            avg_current_speed=average(current),
            avg_freeflow_speed=average(freeflow),
            min_current_speed=minimum(current),
            confidence=average(confidences),
            incidents_json=json.dumps({"incidents": [i.raw for i in incidents]}),
        )
