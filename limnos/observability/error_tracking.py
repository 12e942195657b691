# limnos/observability/error_tracking.py

"""Error tracking and aggregation for engine components."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class EngineError:
    component: str
    error_type: str
    message: str
    lake_id: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    trace_id: str = ""


class ErrorTracker:
    """Tracks failures per component and per lake."""

    def __init__(self, max_history: int = 500):
        self._errors: List[EngineError] = []
        self._counts: Dict[str, int] = defaultdict(int)
        self._max_history = max_history

    def record(self, component: str, error: Exception, lake_id: Optional[str] = None, trace_id: str = ""):
        entry = EngineError(
            component=component,
            error_type=type(error).__name__,
            message=str(error)[:500],
            lake_id=lake_id,
            trace_id=trace_id,
        )
        self._errors.append(entry)
        self._counts[f"{component}:{entry.error_type}"] += 1
        if len(self._errors) > self._max_history:
            self._errors = self._errors[-self._max_history:]
        logger.warning(
            "Error recorded: %s in %s (lake=%s): %s",
            entry.error_type, component, lake_id or "-", entry.message[:100],
        )

    def get_summary(self) -> Dict[str, Any]:
        return {
            "total_errors": len(self._errors),
            "by_component": self._component_breakdown(),
            "by_type": dict(self._counts),
            "recent": [
                {
                    "component": e.component,
                    "type": e.error_type,
                    "lake_id": e.lake_id,
                    "message": e.message[:80],
                    "time": e.timestamp,
                }
                for e in self._errors[-10:]
            ],
        }

    def _component_breakdown(self) -> Dict[str, int]:
        breakdown: Dict[str, int] = defaultdict(int)
        for e in self._errors:
            breakdown[e.component] += 1
        return dict(breakdown)

    def get_component_health(self, component: str) -> Dict[str, Any]:
        component_errors = [e for e in self._errors if e.component == component]
        return {
            "component": component,
            "total_errors": len(component_errors),
            "affected_lakes": sorted({e.lake_id for e in component_errors if e.lake_id}),
            "last_error": component_errors[-1].message[:100] if component_errors else None,
            "healthy": not component_errors,
        }

    def clear(self):
        self._errors.clear()
        self._counts.clear()


# Global singleton
error_tracker = ErrorTracker()
