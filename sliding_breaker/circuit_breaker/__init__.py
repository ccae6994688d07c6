"""
Sliding Breaker - Circuit Breaker
=================================
Thread-safe circuit breaker driven by a sliding window of call outcomes.

The breaker tracks recent failures and slow calls in a count-based or
time-based window. States:

1. CLOSED: Normal operation, calls flow through and are recorded
2. OPEN: Failure or slow-call rate crossed its threshold, calls are rejected
3. HALF-OPEN: After the open wait, a limited number of probe calls decide
   between closing again and reopening

Usage:
    from sliding_breaker.circuit_breaker import (
        CircuitBreaker,
        CircuitBreakerConfig,
        CircuitBreakerError,
        circuit_breaker,
    )

    breaker = CircuitBreaker(CircuitBreakerConfig(name="billing-api"))
    invoice = breaker.execute(lambda: client.get_invoice("inv_1"))

    # Or shared through the registry
    @circuit_breaker("billing-api")
    def get_invoice(invoice_id: str):
        return client.get_invoice(invoice_id)
"""

from .models import (
    CircuitState,
    SlidingWindowType,
    CircuitBreakerConfig,
    CallOutcome,
)

from .exceptions import (
    CircuitBreakerError,
    CircuitOpenError,
    HalfOpenLimitError,
    BreakerNotInitializedError,
    CircuitBreakerConfigurationError,
)

from .state import StateRegister

from .window import (
    SlidingWindow,
    WindowPruner,
    CountBasedPruner,
    TimeBasedPruner,
    create_pruner,
)

from .breaker import CircuitBreaker

from .config import load_config_from_env

from .registry import (
    get_breaker,
    get_all_breaker_metrics,
    reset_breaker,
    reset_all_breakers,
    unregister_breaker,
    get_registered_breakers,
)

from .decorators import circuit_breaker

__all__ = [
    # Models
    "CircuitState",
    "SlidingWindowType",
    "CircuitBreakerConfig",
    "CallOutcome",
    # Exceptions
    "CircuitBreakerError",
    "CircuitOpenError",
    "HalfOpenLimitError",
    "BreakerNotInitializedError",
    "CircuitBreakerConfigurationError",
    # State and window
    "StateRegister",
    "SlidingWindow",
    "WindowPruner",
    "CountBasedPruner",
    "TimeBasedPruner",
    "create_pruner",
    # Breaker
    "CircuitBreaker",
    # Config
    "load_config_from_env",
    # Registry
    "get_breaker",
    "get_all_breaker_metrics",
    "reset_breaker",
    "reset_all_breakers",
    "unregister_breaker",
    "get_registered_breakers",
    # Decorator
    "circuit_breaker",
]
