"""
Bounded in-memory log of security events with a suspicious activity heuristic
"""
import logging
import platform
import time
from collections import Counter, deque
from threading import Lock
from typing import Any, Callable, Deque, Dict, List, Optional

from .. import __version__
from .models import SecurityEvent, SecurityEventType

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"cardguard/{__version__} Python/{platform.python_version()}"


class SecurityMonitor:
    """
    Keeps the most recent security events for inspection.

    The log holds at most ``capacity`` events; once full, each new event
    evicts the oldest one. Nothing is persisted.

    Example:
        >>> monitor = SecurityMonitor()
        >>> _ = monitor.log_event(SecurityEventType.VALIDATION_FAILURE, "Title: Title cannot be empty", user_id="u1")
        >>> monitor.detect_suspicious_activity("u1")
        False
    """

    def __init__(
        self,
        capacity: int = 100,
        user_agent: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        suspicious_threshold: int = 10,
        suspicious_window_seconds: float = 60.0
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.suspicious_threshold = suspicious_threshold
        self.suspicious_window_seconds = suspicious_window_seconds
        self._clock = clock
        self._events: Deque[SecurityEvent] = deque(maxlen=capacity)
        self._lock = Lock()

    def log_event(
        self,
        event_type: SecurityEventType,
        details: str,
        user_id: Optional[str] = None
    ) -> SecurityEvent:
        """Stamp and record an event, evicting the oldest one when full"""
        event = SecurityEvent(
            type=SecurityEventType(event_type),
            details=details,
            timestamp=self._clock(),
            user_id=user_id,
            user_agent=self.user_agent
        )
        with self._lock:
            self._events.append(event)

        logger.warning(f"Security event {event.type.value}: {details}"
                       + (f" (user {user_id})" if user_id else ""))
        return event

    def get_recent_events(self, window_seconds: float = 300.0) -> List[SecurityEvent]:
        """Events newer than the window, oldest first"""
        cutoff = self._clock() - window_seconds
        with self._lock:
            return [event for event in self._events if event.timestamp > cutoff]

    def detect_suspicious_activity(self, user_id: str) -> bool:
        """
        Flag a user with too many recent validation failures.

        Advisory only: callers decide whether to act on it.
        """
        cutoff = self._clock() - self.suspicious_window_seconds
        with self._lock:
            failures = sum(
                1 for event in self._events
                if event.type is SecurityEventType.VALIDATION_FAILURE
                and event.user_id == user_id
                and event.timestamp > cutoff
            )
        return failures > self.suspicious_threshold

    def get_summary(self, window_seconds: float = 300.0, limit: int = 10) -> Dict[str, Any]:
        """Counts per event type and the latest events, for debugging views"""
        events = self.get_recent_events(window_seconds)
        counts = Counter(event.type.value for event in events)

        return {
            "total_events": len(events),
            "counts": {event_type.value: counts.get(event_type.value, 0)
                       for event_type in SecurityEventType},
            "recent": [event.to_dict() for event in events[-limit:]]
        }

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
