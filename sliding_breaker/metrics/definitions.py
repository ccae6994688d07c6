"""
Prometheus Metrics Definitions
==============================
Prometheus metric definitions for circuit breaker monitoring.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# Dedicated registry so embedding applications decide where it is exposed
BREAKER_REGISTRY = CollectorRegistry()

CIRCUIT_BREAKER_STATE = Gauge(
    name="circuit_breaker_state",
    documentation="Circuit breaker state (0=closed, 1=half-open, 2=open)",
    labelnames=["breaker"],
    registry=BREAKER_REGISTRY,
)

CIRCUIT_BREAKER_CALLS = Counter(
    name="circuit_breaker_calls_total",
    documentation="Calls executed through a circuit breaker, by outcome",
    labelnames=["breaker", "outcome"],
    registry=BREAKER_REGISTRY,
)

CIRCUIT_BREAKER_REJECTIONS = Counter(
    name="circuit_breaker_rejections_total",
    documentation="Calls rejected without running the guarded action",
    labelnames=["breaker", "reason"],
    registry=BREAKER_REGISTRY,
)

CIRCUIT_BREAKER_TRANSITIONS = Counter(
    name="circuit_breaker_transitions_total",
    documentation="Circuit breaker state transitions",
    labelnames=["breaker", "from_state", "to_state"],
    registry=BREAKER_REGISTRY,
)

CIRCUIT_BREAKER_CALL_DURATION = Histogram(
    name="circuit_breaker_call_duration_seconds",
    documentation="Duration of calls executed through a circuit breaker",
    labelnames=["breaker"],
    buckets=[
        0.001, 0.005, 0.01, 0.025, 0.05,
        0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0,
    ],
    registry=BREAKER_REGISTRY,
)
