from dataclasses import dataclass, field
from typing import Optional, List

@dataclass
class RetryConfig:
    timeout_s: float = 6.0
    retries: int = 2
    backoff_ms: float = 200.0
    deadline_s: Optional[float] = None

@dataclass
class CorridorConfig:
    name: str = "???"
    bbox: str = "???"  # "lat1,lon1,lat2,lon2"
    road_classes: Optional[List[str]] = None
    road_numbers: List[str] = field(default_factory=list)

@dataclass
class TrafficConfig:
    api_key: str = ""
    base_url: str = "https://api.tomtom.com"
    poll_seconds: float = 300.0
    initial_delay_seconds: float = 5.0
    sample_points: int = 50
    buffer_m: float = 300.0
    road_classes: List[str] = field(default_factory=lambda: ["FRC0", "FRC1"])
    flow: RetryConfig = field(default_factory=RetryConfig)
    incidents: RetryConfig = field(default_factory=lambda: RetryConfig(timeout_s=8.0, backoff_ms=300.0))
    routing: RetryConfig = field(default_factory=lambda: RetryConfig(timeout_s=8.0, backoff_ms=300.0, deadline_s=8.0))
    corridors: List[CorridorConfig] = field(default_factory=list)

@dataclass
class DatabaseConfig:
    url: str = "sqlite:///./traffic.db"

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000

@dataclass
class AppConfig:
    traffic: TrafficConfig = field(default_factory=TrafficConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
