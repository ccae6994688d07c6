"""
Sliding Breaker
===============
Sliding-window circuit breaker for protecting downstream dependencies.
"""

__version__ = "0.1.0"

# Circuit Breaker
from sliding_breaker.circuit_breaker import (
    CircuitState,
    SlidingWindowType,
    CircuitBreakerConfig,
    CircuitBreaker,
    CircuitBreakerError,
    CircuitOpenError,
    HalfOpenLimitError,
    BreakerNotInitializedError,
    CircuitBreakerConfigurationError,
    load_config_from_env,
    get_breaker,
    get_all_breaker_metrics,
    reset_breaker,
    reset_all_breakers,
    circuit_breaker,
)

# Metrics
from sliding_breaker.metrics import BREAKER_REGISTRY, get_metrics_text

# Logging
from sliding_breaker.log_config import setup_logging, get_logger

__all__ = [
    "__version__",
    # Circuit Breaker
    "CircuitState",
    "SlidingWindowType",
    "CircuitBreakerConfig",
    "CircuitBreaker",
    "CircuitBreakerError",
    "CircuitOpenError",
    "HalfOpenLimitError",
    "BreakerNotInitializedError",
    "CircuitBreakerConfigurationError",
    "load_config_from_env",
    "get_breaker",
    "get_all_breaker_metrics",
    "reset_breaker",
    "reset_all_breakers",
    "circuit_breaker",
    # Metrics
    "BREAKER_REGISTRY",
    "get_metrics_text",
    # Logging
    "setup_logging",
    "get_logger",
]
