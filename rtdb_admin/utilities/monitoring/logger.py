import os
import logging
from typing import Optional, Dict, Union

from .logging import setup_logger
from .metrics import MetricsCollector, JSONFileExporter


class MonitoringService:
    """Hands out configured loggers and collects client metrics"""

    def __init__(
        self,
        app_name: str,
        log_dir: Optional[str] = None,
        metrics_dir: str = "metrics",
        level: Union[int, str] = logging.INFO
    ):
        self.app_name = app_name
        self.log_dir = log_dir
        self.metrics_dir = metrics_dir
        self.level = level
        self.loggers: Dict[str, logging.Logger] = {}
        self.metrics_collector = MetricsCollector()
        self.metrics_exporter = JSONFileExporter(metrics_dir)

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create a logger for the specified name"""
        if name not in self.loggers:
            log_file = os.path.join(self.log_dir, f"{name}.log") if self.log_dir else None
            self.loggers[name] = setup_logger(
                f"{self.app_name}.{name}",
                log_file,
                level=self.level
            )
        return self.loggers[name]

    def record_metric(
        self,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric value"""
        self.metrics_collector.record(name, value, labels)

    def export_metrics(self) -> str:
        """Write every collected metric to a JSON file and return its path"""
        return self.metrics_exporter.export(self.metrics_collector.get_metrics())
