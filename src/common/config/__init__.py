from .manager import ConfigManager
from .models import AppConfig, TrafficConfig, CorridorConfig, RetryConfig

__all__ = ["ConfigManager", "AppConfig", "TrafficConfig", "CorridorConfig", "RetryConfig"]
