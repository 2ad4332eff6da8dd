from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path
from typing import Union

from ..exceptions import ConfigurationError
from ...corridor.domain.geometry import parse_bbox
from .models import AppConfig

class ConfigManager:
    """Centralizes loading and validation of the poller configuration"""

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = Path(config_dir)

    def load_config(self, name: str = "config") -> DictConfig:
        """Loads conf/<name>.yaml merged over the typed defaults"""
        config_path = self.config_dir / f"{name}.yaml"

        if not config_path.exists():
            raise ConfigurationError(f"Config not found: {config_path}")

        return self.merge(OmegaConf.load(config_path))

    @staticmethod
    def merge(raw: Union[DictConfig, dict]) -> DictConfig:
        """Merges raw config over the structured schema and validates it"""
        try:
            cfg = OmegaConf.merge(OmegaConf.structured(AppConfig), raw)
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
        ConfigManager.validate(cfg)
        return cfg

    @staticmethod
    def validate(cfg: DictConfig):
        if 'traffic' not in cfg:
            raise ConfigurationError("Missing required config key: traffic")
        traffic = cfg.traffic

        if not traffic.corridors:
            raise ConfigurationError("traffic.corridors must list at least one corridor")

        seen = set()
        for corridor in traffic.corridors:
            if OmegaConf.is_missing(corridor, 'name') or OmegaConf.is_missing(corridor, 'bbox'):
                raise ConfigurationError("Every corridor needs a name and a bbox")
            if corridor.name in seen:
                raise ConfigurationError(f"Duplicate corridor name: {corridor.name}")
            seen.add(corridor.name)
            parse_bbox(str(corridor.bbox))

        if traffic.sample_points < 1:
            raise ConfigurationError("traffic.sample_points must be >= 1")
        if traffic.poll_seconds <= 0:
            raise ConfigurationError("traffic.poll_seconds must be positive")
