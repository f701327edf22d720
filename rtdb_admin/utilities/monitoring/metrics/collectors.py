from collections import deque
from typing import Deque, Dict, List, Optional
import threading

from rtdb_admin.core.entities.monitoring import Metric


class MetricsCollector:
    """Keeps the most recent samples of each metric, at most `max_samples` per name"""

    def __init__(self, max_samples: int = 1000):
        self.max_samples = max_samples
        self._metrics: Dict[str, Deque[Metric]] = {}
        self._lock = threading.Lock()

    def record(
        self,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric value"""
        with self._lock:
            self._metrics.setdefault(name, deque(maxlen=self.max_samples)).append(
                Metric(name=name, value=value, labels=labels or {})
            )

    def get_metrics(self, name: Optional[str] = None) -> Dict[str, List[Metric]]:
        """Get recorded metrics"""
        with self._lock:
            if name:
                return {name: list(self._metrics.get(name, []))}
            return {key: list(values) for key, values in self._metrics.items()}

    def summary(self, name: str) -> Dict[str, float]:
        """Count, total, min and max of the retained samples of one metric"""
        with self._lock:
            values = [m.value for m in self._metrics.get(name, [])]
        if not values:
            return {"count": 0, "total": 0.0, "min": 0.0, "max": 0.0}
        return {
            "count": len(values),
            "total": float(sum(values)),
            "min": float(min(values)),
            "max": float(max(values))
        }

    def clear_metrics(self, name: Optional[str] = None) -> None:
        """Clear recorded metrics"""
        with self._lock:
            if name:
                self._metrics.pop(name, None)
            else:
                self._metrics.clear()
