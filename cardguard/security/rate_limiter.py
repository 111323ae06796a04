"""
Sliding-window rate limiting for repeatable user actions
"""
import logging
import time
from threading import Lock
from typing import Callable, Dict, List, Optional, Tuple

from .models import SecurityEventType
from .monitor import SecurityMonitor

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_WINDOW_SECONDS = 60.0


class RateLimiter:
    """
    Sliding-window attempt counter keyed by action and user.

    Each (key, user_id) pair keeps the timestamps of its accepted attempts.
    Timestamps older than the window are dropped whenever the pair is
    touched. Rejected attempts are never recorded.

    Example:
        >>> limiter = RateLimiter()
        >>> limiter.can_attempt("generate_flashcard", max_attempts=3, user_id="u1")
        True
    """

    def __init__(
        self,
        monitor: Optional[SecurityMonitor] = None,
        clock: Callable[[], float] = time.time
    ):
        self.monitor = monitor
        self._clock = clock
        self._attempts: Dict[Tuple[str, Optional[str]], List[float]] = {}
        self._lock = Lock()

    def can_attempt(
        self,
        key: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        user_id: Optional[str] = None
    ) -> bool:
        """
        Record an attempt if the budget allows it.

        Args:
            key: Action being limited, e.g. "generate_flashcard"
            max_attempts: Attempts allowed within the window
            window_seconds: Length of the sliding window
            user_id: Caller identity, used for bucketing and event attribution

        Returns:
            True if the attempt was accepted and recorded, False otherwise
        """
        now = self._clock()
        with self._lock:
            recent = self._prune((key, user_id), now, window_seconds)

            if len(recent) >= max_attempts:
                allowed = False
            else:
                recent.append(now)
                allowed = True

        if not allowed:
            self._report_exceeded(key, user_id, max_attempts, window_seconds)
        return allowed

    def get_remaining_time(
        self,
        key: str,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        user_id: Optional[str] = None
    ) -> float:
        """Seconds until the oldest recorded attempt leaves the window"""
        now = self._clock()
        with self._lock:
            attempts = self._attempts.get((key, user_id))
            if not attempts:
                return 0.0
            oldest = min(attempts)
        return max(0.0, window_seconds - (now - oldest))

    def reset(self, key: str, user_id: Optional[str] = None) -> None:
        """Forget all attempts for a key"""
        with self._lock:
            self._attempts.pop((key, user_id), None)

    def _prune(self, bucket: Tuple[str, Optional[str]], now: float, window_seconds: float) -> List[float]:
        """Keep only timestamps inside the window; caller holds the lock"""
        recent = [t for t in self._attempts.get(bucket, []) if now - t < window_seconds]
        self._attempts[bucket] = recent
        return recent

    def _report_exceeded(self, key: str, user_id: Optional[str],
                         max_attempts: int, window_seconds: float) -> None:
        logger.info(f"Rate limit reached for '{key}' ({max_attempts} per {window_seconds:g}s)")
        if self.monitor is None:
            return
        try:
            self.monitor.log_event(
                SecurityEventType.RATE_LIMIT_EXCEEDED,
                f"Rate limit exceeded for {key}",
                user_id=user_id
            )
        except Exception:
            logger.exception("Failed to record rate limit event")
