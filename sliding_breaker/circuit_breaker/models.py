"""
Circuit Breaker Models
======================
Data models and enums for the sliding-window circuit breaker.
"""

from dataclasses import dataclass
from enum import Enum


class CircuitState(str, Enum):
    """Circuit breaker states."""
    CLOSED = "closed"        # Normal operation
    OPEN = "open"            # Failing, reject requests
    HALF_OPEN = "half_open"  # Probing recovery


class SlidingWindowType(str, Enum):
    """How the sliding window decides which outcomes are stale."""
    COUNT_BASED = "COUNT_BASED"  # Keep the last N outcomes
    TIME_BASED = "TIME_BASED"    # Keep outcomes from the last N seconds


@dataclass(frozen=True)
class CircuitBreakerConfig:
    """
    Configuration for a circuit breaker.

    Values are copied in as given; callers are responsible for sane
    thresholds. Rate thresholds are percentages in [0, 100], durations
    are seconds.
    """
    name: str = "default"
    failure_rate_threshold: float = 50.0          # % of failed calls that opens the circuit
    slow_call_rate_threshold: float = 100.0       # % of slow calls that opens the circuit
    slow_call_duration_threshold: float = 60.0    # Seconds after which a call is slow
    minimum_number_of_calls: int = 100            # Sample size before rates are evaluated
    sliding_window_type: SlidingWindowType = SlidingWindowType.COUNT_BASED
    sliding_window_size: float = 100              # Calls (count-based) or seconds (time-based)
    permitted_number_of_calls_in_half_open_state: int = 10
    wait_duration_in_open_state: float = 60.0     # Seconds to stay open before probing
    ignored_exceptions: tuple = ()                # Raised but not counted as failures


@dataclass(frozen=True)
class CallOutcome:
    """A single recorded call in the sliding window."""
    failed: bool
    slow: bool
    observed_at: float

    @property
    def counts_as_slow(self) -> bool:
        # Failed calls are never double-counted as slow
        return self.slow and not self.failed
