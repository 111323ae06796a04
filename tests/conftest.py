"""Shared fixtures"""
import pytest

from cardguard.security import ContentValidator, RateLimiter, SecurityMonitor


class FakeClock:
    """Manually advanced replacement for time.time"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def monitor(clock):
    return SecurityMonitor(clock=clock, user_agent="pytest-agent")


@pytest.fixture
def rate_limiter(monitor, clock):
    return RateLimiter(monitor, clock=clock)


@pytest.fixture
def validator(monitor):
    return ContentValidator(monitor)
