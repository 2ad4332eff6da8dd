import pytest
from src.corridor.domain.entities import Corridor, FlowReading, Incident


@pytest.fixture
def corridor():
    return Corridor(name="I-25", bbox="39.8,-105.2,39.6,-104.9")


@pytest.fixture
def equator_polyline():
    # Straight west-east line on the equator, about 2.2 km long
    return [(0.0, -0.01), (0.0, 0.0), (0.0, 0.01)]


@pytest.fixture
def make_incident():
    def _make(geometry_type="Point", coordinates=None, road_numbers=("I25",)):
        raw = {
            "properties": {"roadNumbers": list(road_numbers)},
            "geometry": {"type": geometry_type, "coordinates": coordinates},
        }
        return Incident(
            geometry_type=geometry_type,
            coordinates=coordinates,
            road_numbers=list(road_numbers),
            raw=raw,
        )
    return _make


@pytest.fixture
def freeway_readings():
    return [
        FlowReading(current_speed=55.0, free_flow_speed=65.0, frc="FRC0"),
        FlowReading(current_speed=60.0, free_flow_speed=65.0, frc="FRC1"),
        FlowReading(current_speed=58.0, free_flow_speed=None, frc="FRC0"),
    ]
