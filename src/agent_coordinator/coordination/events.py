"""Structured events emitted while coordinating agents.

Coordination components report what happened through ``emit`` instead of
calling the logger inline. Every event is written as one log line and then
handed to registered listeners (metrics, tracing, tests).
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable

from ..logging import get_logger

logger = get_logger(__name__)


class CoordinationEvent(Enum):
    """Things that happen during one coordination call."""
    COORDINATION_STARTED = "coordination_started"
    SPECIALIZATIONS_ANALYZED = "specializations_analyzed"
    ANALYSIS_FALLBACK = "analysis_fallback"
    AGENT_SELECTED = "agent_selected"
    ASSESSMENT_FAILED = "assessment_failed"
    COVERAGE_GAP = "coverage_gap"
    WORKFLOW_CREATED = "workflow_created"
    PLANNING_FALLBACK = "planning_fallback"
    WORKFLOW_OPTIMIZED = "workflow_optimized"
    OPTIMIZATION_SKIPPED = "optimization_skipped"
    STEP_STARTED = "step_started"
    STEP_COMPLETED = "step_completed"
    STEP_FAILED = "step_failed"
    WORKFLOW_TERMINATED = "workflow_terminated"
    SYNTHESIS_FAILED = "synthesis_failed"
    COORDINATION_CANCELLED = "coordination_cancelled"
    COORDINATION_COMPLETED = "coordination_completed"
    COORDINATION_FAILED = "coordination_failed"


_EVENT_LEVELS = {
    CoordinationEvent.ANALYSIS_FALLBACK: logging.WARNING,
    CoordinationEvent.ASSESSMENT_FAILED: logging.WARNING,
    CoordinationEvent.COVERAGE_GAP: logging.WARNING,
    CoordinationEvent.PLANNING_FALLBACK: logging.WARNING,
    CoordinationEvent.STEP_FAILED: logging.WARNING,
    CoordinationEvent.SYNTHESIS_FAILED: logging.ERROR,
    CoordinationEvent.COORDINATION_FAILED: logging.ERROR,
    CoordinationEvent.STEP_STARTED: logging.DEBUG,
}

EventListener = Callable[[CoordinationEvent, dict[str, Any]], None]


class CoordinationEvents:
    """Emitter for coordination events.

    Listeners receive ``(event, fields)``. A listener that raises is logged
    and skipped; it never interrupts coordination.
    """

    def __init__(self):
        self._listeners: list[EventListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: EventListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def emit(self, event: CoordinationEvent, **fields: Any) -> None:
        """Log an event and deliver it to every listener."""
        level = _EVENT_LEVELS.get(event, logging.INFO)
        if logger.isEnabledFor(level):
            details = " ".join(f"{key}={value!r}" for key, value in fields.items())
            logger.log(level, f"{event.value} {details}".rstrip())

        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event, dict(fields))
            except Exception:
                logger.exception(f"event listener failed for {event.value}")
