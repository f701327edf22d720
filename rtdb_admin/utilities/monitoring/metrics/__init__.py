from .collectors import MetricsCollector
from .exporters import JSONFileExporter

__all__ = [
    'MetricsCollector',
    'JSONFileExporter'
]
