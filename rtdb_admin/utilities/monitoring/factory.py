import logging
from typing import Dict, Optional, Union

from .logger import MonitoringService

APP_NAME = "rtdb_admin"


class MonitoringFactory:
    _instance: Optional[MonitoringService] = None

    @classmethod
    def get_monitoring_service(cls) -> MonitoringService:
        if not cls._instance:
            cls._instance = MonitoringService(APP_NAME)
        return cls._instance

    @classmethod
    def configure(
        cls,
        level: Union[int, str] = logging.INFO,
        log_dir: Optional[str] = None,
        metrics_dir: str = "metrics"
    ) -> MonitoringService:
        """
        Replace the monitoring service, re-applying level and handlers to the
        loggers that were already handed out.
        """
        previous = cls._instance
        cls._instance = MonitoringService(APP_NAME, log_dir, metrics_dir, level)
        if previous is not None:
            for name in previous.loggers:
                cls._instance.get_logger(name)
        return cls._instance

    @classmethod
    def get_logger(cls, module_name: str) -> logging.Logger:
        return cls.get_monitoring_service().get_logger(module_name)

    @classmethod
    def record_metric(
        cls,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        cls.get_monitoring_service().record_metric(name, value, labels)
