"""
Shared fixtures for sliding_breaker tests.
"""

import pytest

from sliding_breaker.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    SlidingWindowType,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    """The reference configuration used across breaker tests."""
    return CircuitBreakerConfig(
        name="test",
        sliding_window_type=SlidingWindowType.COUNT_BASED,
        failure_rate_threshold=50,
        minimum_number_of_calls=6,
        wait_duration_in_open_state=2.0,
        permitted_number_of_calls_in_half_open_state=3,
        sliding_window_size=10,
        slow_call_duration_threshold=0.2,
        slow_call_rate_threshold=50.0,
    )


@pytest.fixture
def breaker(config, clock):
    return CircuitBreaker(config, clock=clock)
