"""
Metrics Recording Functions
===========================
Functions for recording circuit breaker metrics.
"""

from prometheus_client import generate_latest

from ..circuit_breaker.models import CircuitState
from .definitions import (
    BREAKER_REGISTRY,
    CIRCUIT_BREAKER_STATE,
    CIRCUIT_BREAKER_CALLS,
    CIRCUIT_BREAKER_REJECTIONS,
    CIRCUIT_BREAKER_TRANSITIONS,
    CIRCUIT_BREAKER_CALL_DURATION,
)

_STATE_VALUES = {
    CircuitState.CLOSED: 0,
    CircuitState.HALF_OPEN: 1,
    CircuitState.OPEN: 2,
}


def record_call(breaker: str, failed: bool, slow: bool, duration_seconds: float):
    """
    Record an executed call.

    Args:
        breaker: Name of the circuit breaker
        failed: Whether the action raised a counted failure
        slow: Whether the call met the slow-call threshold
        duration_seconds: Measured call duration
    """
    if failed:
        outcome = "failure"
    elif slow:
        outcome = "slow"
    else:
        outcome = "success"

    CIRCUIT_BREAKER_CALLS.labels(breaker=breaker, outcome=outcome).inc()
    CIRCUIT_BREAKER_CALL_DURATION.labels(breaker=breaker).observe(
        max(0.0, duration_seconds)
    )


def record_rejection(breaker: str, reason: str):
    """Record a call rejected with reason "open" or "half_open_limit"."""
    CIRCUIT_BREAKER_REJECTIONS.labels(breaker=breaker, reason=reason).inc()


def record_state(breaker: str, state: CircuitState):
    """Publish the current circuit state."""
    CIRCUIT_BREAKER_STATE.labels(breaker=breaker).set(_STATE_VALUES[state])


def record_transition(breaker: str, from_state: CircuitState, to_state: CircuitState):
    """Record a state transition and publish the new state."""
    CIRCUIT_BREAKER_TRANSITIONS.labels(
        breaker=breaker,
        from_state=from_state.value,
        to_state=to_state.value,
    ).inc()
    record_state(breaker, to_state)


def get_metrics_text() -> str:
    """Get circuit breaker metrics in Prometheus exposition format."""
    return generate_latest(BREAKER_REGISTRY).decode("utf-8")
