"""
Monitoring
- Named loggers with console and rotating JSON file output
- In-process metrics for requests and transactions
"""

from .factory import MonitoringFactory
from .logger import MonitoringService

__all__ = ["MonitoringFactory", "MonitoringService"]
