from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from rtdb_admin.core.entities.monitoring import Metric


class MetricsExporter(ABC):
    @abstractmethod
    def export(self, metrics: Dict[str, List[Metric]]) -> Optional[str]:
        """Export collected metrics, returning where they were written"""
        pass
