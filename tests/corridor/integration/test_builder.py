import re
from pathlib import Path
import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from src.common.config import ConfigManager
from src.common.database import init_db, make_session_factory
from src.corridor.application.builder import PollerApplicationBuilder
from src.corridor.application.poller import PollState

CONF_DIR = Path(__file__).parents[3] / "conf"
ROUTE = re.compile(r"/calculateRoute/([-\d.]+),([-\d.]+):([-\d.]+),([-\d.]+)/json")

def provider(request):
    path = request.url.path
    match = ROUTE.search(path)
    if match:
        lat1, lon1, lat2, lon2 = (float(g) for g in match.groups())
        return httpx.Response(200, json={"routes": [{"legs": [{"points": [
            {"latitude": lat1, "longitude": lon1},
            {"latitude": lat2, "longitude": lon2},
        ]}]}]})
    if "flowSegmentData" in path:
        return httpx.Response(200, json={"flowSegmentData": {
            "frc": "FRC0", "currentSpeed": 50, "freeFlowSpeed": 60, "confidence": 0.9,
        }})
    if "incidentDetails" in path:
        return httpx.Response(200, json={"incidents": []})
    return httpx.Response(404)

@pytest.fixture
def config():
    return ConfigManager(CONF_DIR).load_config()

@pytest.fixture
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    return make_session_factory(engine)

def test_scheduler_uses_configured_timing(config, session_factory):
    builder = PollerApplicationBuilder(config, session_factory=session_factory)
    scheduler = builder.build_scheduler()

    assert scheduler.interval_s == 300
    assert scheduler.initial_delay_s == 5
    assert builder.geometry_cache.sample_points == 50
    assert [c.name for c in builder.poller.corridors] == ["I-25", "I-70", "US-36"]

@pytest.mark.asyncio
async def test_full_cycle_against_mock_provider(config, session_factory):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(provider), base_url="https://api.tomtom.com")
    builder = PollerApplicationBuilder(config, http_client=http_client, session_factory=session_factory)
    poller = builder.build_poller()

    outcomes = await poller.poll_all()

    assert [o.state for o in outcomes] == [PollState.PERSISTED] * 3
    components = builder.get_components()
    assert len(components['geometry_cache']) == 3
    for name in ("I-25", "I-70", "US-36"):
        latest = components['repository'].latest(name)
        assert latest.avg_current_speed == 50
        assert latest.avg_freeflow_speed == 60
        assert latest.confidence == pytest.approx(0.9)

    metrics = components['metrics_collector'].get_metrics()
    assert metrics.cycles == 1
    assert metrics.corridors_polled == 3
    assert metrics.flow_points_ok == 150
    await http_client.aclose()
