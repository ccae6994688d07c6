"""
Unit Tests for Prometheus Metrics
=================================
"""

import pytest

from sliding_breaker.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitOpenError,
)
from sliding_breaker.metrics import BREAKER_REGISTRY, get_metrics_text


def _sample(name, **labels):
    return BREAKER_REGISTRY.get_sample_value(name, labels) or 0.0


def _fail():
    raise ConnectionError("down")


@pytest.fixture
def metered_breaker(request, clock):
    config = CircuitBreakerConfig(
        name=f"metrics-{request.node.name}",
        minimum_number_of_calls=2,
        sliding_window_size=10,
        slow_call_duration_threshold=0.5,
        wait_duration_in_open_state=5.0,
        permitted_number_of_calls_in_half_open_state=1,
    )
    return CircuitBreaker(config, clock=clock)


class TestBreakerMetrics:
    """Tests for metrics published by the breaker."""

    def test_state_gauge_follows_transitions(self, metered_breaker, clock):
        """Gauge should read 0 closed, 2 open, 1 half-open."""
        name = metered_breaker.name
        assert _sample("circuit_breaker_state", breaker=name) == 0

        for _ in range(2):
            with pytest.raises(ConnectionError):
                metered_breaker.execute(_fail)
        assert _sample("circuit_breaker_state", breaker=name) == 2

        def probe():
            # Still running while the gauge reports half-open
            assert _sample("circuit_breaker_state", breaker=name) == 1
            return "ok"

        clock.advance(5.0)
        metered_breaker.execute(probe)

        assert _sample("circuit_breaker_state", breaker=name) == 0
        assert _sample(
            "circuit_breaker_transitions_total",
            breaker=name, from_state="closed", to_state="open",
        ) == 1

    def test_call_outcomes_counted(self, metered_breaker, clock):
        name = metered_breaker.name

        def slow():
            clock.advance(1.0)

        metered_breaker.execute(lambda: None)
        metered_breaker.execute(slow)
        with pytest.raises(ConnectionError):
            metered_breaker.execute(_fail)

        for outcome in ("success", "slow", "failure"):
            assert _sample(
                "circuit_breaker_calls_total", breaker=name, outcome=outcome
            ) == 1
        assert _sample(
            "circuit_breaker_call_duration_seconds_count", breaker=name
        ) == 3

    def test_rejections_counted(self, metered_breaker):
        name = metered_breaker.name
        for _ in range(2):
            with pytest.raises(ConnectionError):
                metered_breaker.execute(_fail)

        with pytest.raises(CircuitOpenError):
            metered_breaker.execute(lambda: None)

        assert _sample(
            "circuit_breaker_rejections_total", breaker=name, reason="open"
        ) == 1

    def test_exposition_text(self, metered_breaker):
        metered_breaker.execute(lambda: None)

        text = get_metrics_text()

        assert "circuit_breaker_calls_total" in text
        assert metered_breaker.name in text

    def test_reset_publishes_closed_state(self, metered_breaker):
        name = metered_breaker.name
        for _ in range(2):
            with pytest.raises(ConnectionError):
                metered_breaker.execute(_fail)
        assert _sample("circuit_breaker_state", breaker=name) == 2

        metered_breaker.reset()

        assert _sample("circuit_breaker_state", breaker=name) == 0
