"""
Sliding Breaker - Metrics
=========================
Prometheus metrics for circuit breaker monitoring.

Tracks:
- Circuit breaker states and transitions
- Call counts by outcome
- Rejections by reason
- Call latency (histogram)

Usage:
    from sliding_breaker.metrics import get_metrics_text

    # Serve from a /metrics endpoint
    return Response(get_metrics_text(), media_type="text/plain")
"""

from .definitions import (
    BREAKER_REGISTRY,
    CIRCUIT_BREAKER_STATE,
    CIRCUIT_BREAKER_CALLS,
    CIRCUIT_BREAKER_REJECTIONS,
    CIRCUIT_BREAKER_TRANSITIONS,
    CIRCUIT_BREAKER_CALL_DURATION,
)

from .recording import (
    record_call,
    record_rejection,
    record_state,
    record_transition,
    get_metrics_text,
)

__all__ = [
    # Prometheus
    "BREAKER_REGISTRY",
    "CIRCUIT_BREAKER_STATE",
    "CIRCUIT_BREAKER_CALLS",
    "CIRCUIT_BREAKER_REJECTIONS",
    "CIRCUIT_BREAKER_TRANSITIONS",
    "CIRCUIT_BREAKER_CALL_DURATION",
    # Recording
    "record_call",
    "record_rejection",
    "record_state",
    "record_transition",
    "get_metrics_text",
]
