from dataclasses import dataclass
from datetime import time
from pathlib import Path
from typing import List

from omegaconf import DictConfig, OmegaConf

from ..exceptions import ConfigurationError
from .models import AnalyticsConfig


@dataclass(frozen=True)
class ServiceWindow:
    """
    A daily time-of-day range used to bucket samples into shifts.
    """
    name: str
    start: time
    end: time
    inclusive_end: bool = False

    def contains(self, moment: time) -> bool:
        if moment < self.start:
            return False
        if self.inclusive_end:
            return moment <= self.end
        return moment < self.end


class ConfigManager:
    """Centralizes loading and validation of configuration"""

    REQUIRED_KEYS = ('database', 'service_windows', 'server')

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = config_dir

    def load_analytics_config(self, profile: str = "default") -> DictConfig:
        """Loads the analytics profile merged onto the structured defaults"""
        config_path = self.config_dir / "analytics" / f"{profile}.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        loaded = OmegaConf.load(config_path)
        for key in self.REQUIRED_KEYS:
            if key not in loaded:
                raise ConfigurationError(f"Missing required config key: {key}")

        cfg = OmegaConf.merge(OmegaConf.structured(AnalyticsConfig), loaded)
        # Fail early on malformed windows
        self.service_windows(cfg)
        return cfg

    @staticmethod
    def service_windows(cfg: DictConfig) -> List[ServiceWindow]:
        """Parses the configured service windows into time bounds."""
        windows = []
        for entry in cfg.service_windows:
            try:
                start = time.fromisoformat(str(entry.start))
                end = time.fromisoformat(str(entry.end))
            except ValueError as e:
                raise ConfigurationError(f"Invalid service window {entry.name}: {e}") from e
            if end < start:
                raise ConfigurationError(f"Service window {entry.name} ends before it starts")
            windows.append(ServiceWindow(
                name=entry.name,
                start=start,
                end=end,
                inclusive_end=bool(entry.get('inclusive_end', False)),
            ))
        return windows
