"""
Circuit Breaker Exceptions
==========================
Exception classes raised by the circuit breaker itself.

Errors raised by the guarded action are never wrapped; they reach the
caller unchanged.
"""

from typing import Any, Dict, Optional

from .models import CircuitState


class CircuitBreakerError(Exception):
    """
    Base class for breaker rejections.

    Callers should treat any of these as "the operation did not happen",
    which is different from the operation having run and failed.
    """

    def __init__(
        self,
        message: str,
        service_name: str,
        state: Optional[CircuitState] = None,
    ):
        super().__init__(message)
        self.service_name = service_name
        self.state = state

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for API responses and logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "service_name": self.service_name,
            "state": self.state.value if self.state else None,
        }


class CircuitOpenError(CircuitBreakerError):
    """Raised when the circuit is open and the cooling period has not elapsed."""

    def __init__(self, service_name: str, retry_after: float):
        self.retry_after = max(0.0, retry_after)
        super().__init__(
            f"Circuit breaker for '{service_name}' is open. "
            f"Retry after {self.retry_after:.1f}s",
            service_name=service_name,
            state=CircuitState.OPEN,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["retry_after"] = self.retry_after
        return data


class HalfOpenLimitError(CircuitBreakerError):
    """Raised when the probe quota of the current half-open episode is used up."""

    def __init__(self, service_name: str, permitted_calls: int):
        self.permitted_calls = permitted_calls
        super().__init__(
            f"Circuit breaker for '{service_name}' is half-open, "
            f"all {permitted_calls} probe calls are in use",
            service_name=service_name,
            state=CircuitState.HALF_OPEN,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["permitted_calls"] = self.permitted_calls
        return data


class BreakerNotInitializedError(CircuitBreakerError):
    """Raised when a breaker object was never constructed properly."""

    def __init__(self, service_name: str = "unknown"):
        super().__init__(
            f"Circuit breaker '{service_name}' state is not initialized",
            service_name=service_name,
        )


class CircuitBreakerConfigurationError(Exception):
    """Raised when breaker configuration cannot be loaded."""

    def __init__(self, message: str, config_field: str, provided_value: Any = None):
        super().__init__(message)
        self.config_field = config_field
        self.provided_value = provided_value
