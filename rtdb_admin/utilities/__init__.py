from .config import get_database_settings, get_monitoring_settings
from .monitoring import MonitoringFactory

__all__ = [
    "get_database_settings",
    "get_monitoring_settings",
    "MonitoringFactory",
]
