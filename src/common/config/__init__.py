from .manager import ConfigManager, ServiceWindow
from .models import (
    AnalyticsConfig, DatabaseConfig, ServiceWindowConfig,
    ServerConfig, BroadcastConfig
)

__all__ = [
    "ConfigManager", "ServiceWindow",
    "AnalyticsConfig", "DatabaseConfig", "ServiceWindowConfig",
    "ServerConfig", "BroadcastConfig",
]
