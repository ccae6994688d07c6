"""
Circuit Breaker Registry
========================
Global registry for managing circuit breaker instances.

All consumers of one downstream dependency should share one breaker;
the registry hands out the same instance per name.
"""

import dataclasses
import threading
from typing import Any, Dict, Optional

import structlog

from .breaker import CircuitBreaker
from .models import CircuitBreakerConfig

logger = structlog.get_logger(__name__)

# Global registry of circuit breakers
_breakers: Dict[str, CircuitBreaker] = {}
_registry_lock = threading.Lock()


def get_breaker(
    service_name: str,
    config: Optional[CircuitBreakerConfig] = None,
) -> CircuitBreaker:
    """
    Get or create a circuit breaker for a service.

    Args:
        service_name: Name of the downstream service
        config: Optional configuration (only used if creating new breaker)

    Returns:
        CircuitBreaker instance
    """
    if service_name not in _breakers:
        with _registry_lock:
            if service_name not in _breakers:
                if config is None:
                    config = CircuitBreakerConfig(name=service_name)
                elif config.name != service_name:
                    config = dataclasses.replace(config, name=service_name)
                _breakers[service_name] = CircuitBreaker(config)
                logger.debug("breaker_registered", service=service_name)
    return _breakers[service_name]


def get_all_breaker_metrics() -> Dict[str, Dict[str, Any]]:
    """Get metrics for all registered circuit breakers."""
    return {
        name: breaker.metrics
        for name, breaker in get_registered_breakers().items()
    }


def reset_breaker(service_name: str):
    """Reset a circuit breaker to closed state (for testing/admin)."""
    breaker = _breakers.get(service_name)
    if breaker is not None:
        breaker.reset()


def reset_all_breakers():
    """Reset all circuit breakers to closed state."""
    for name in list(_breakers):
        reset_breaker(name)


def unregister_breaker(service_name: str) -> Optional[CircuitBreaker]:
    """Remove a breaker from the registry, returning it if present."""
    with _registry_lock:
        return _breakers.pop(service_name, None)


def get_registered_breakers() -> Dict[str, CircuitBreaker]:
    """Get all registered circuit breakers."""
    with _registry_lock:
        return dict(_breakers)
