"""
Circuit Breaker Configuration
=============================
Build CircuitBreakerConfig values from environment variables.

Variables (with the default "CIRCUIT_BREAKER_" prefix):
    CIRCUIT_BREAKER_FAILURE_RATE_THRESHOLD      percent, e.g. "50"
    CIRCUIT_BREAKER_SLOW_CALL_RATE_THRESHOLD    percent
    CIRCUIT_BREAKER_SLOW_CALL_DURATION_THRESHOLD seconds
    CIRCUIT_BREAKER_MINIMUM_NUMBER_OF_CALLS     integer
    CIRCUIT_BREAKER_SLIDING_WINDOW_TYPE         COUNT_BASED or TIME_BASED
    CIRCUIT_BREAKER_SLIDING_WINDOW_SIZE         calls or seconds
    CIRCUIT_BREAKER_PERMITTED_CALLS_IN_HALF_OPEN integer
    CIRCUIT_BREAKER_WAIT_DURATION_IN_OPEN       seconds
"""

import os
from typing import Any, Callable, Dict

from .exceptions import CircuitBreakerConfigurationError
from .models import CircuitBreakerConfig, SlidingWindowType

DEFAULT_PREFIX = "CIRCUIT_BREAKER_"

# env suffix -> (config field, parser)
_ENV_FIELDS: Dict[str, tuple] = {
    "FAILURE_RATE_THRESHOLD": ("failure_rate_threshold", float),
    "SLOW_CALL_RATE_THRESHOLD": ("slow_call_rate_threshold", float),
    "SLOW_CALL_DURATION_THRESHOLD": ("slow_call_duration_threshold", float),
    "MINIMUM_NUMBER_OF_CALLS": ("minimum_number_of_calls", int),
    "SLIDING_WINDOW_TYPE": ("sliding_window_type", lambda v: SlidingWindowType(v.strip().upper())),
    "SLIDING_WINDOW_SIZE": ("sliding_window_size", float),
    "PERMITTED_CALLS_IN_HALF_OPEN": ("permitted_number_of_calls_in_half_open_state", int),
    "WAIT_DURATION_IN_OPEN": ("wait_duration_in_open_state", float),
}


def _parse(env_name: str, field_name: str, parser: Callable[[str], Any], raw: str) -> Any:
    try:
        return parser(raw)
    except ValueError:
        raise CircuitBreakerConfigurationError(
            f"Invalid value for {env_name}: {raw!r}",
            config_field=field_name,
            provided_value=raw,
        ) from None


def load_config_from_env(name: str, prefix: str = DEFAULT_PREFIX) -> CircuitBreakerConfig:
    """
    Load a circuit breaker configuration from the environment.

    Args:
        name: Breaker name (not read from the environment)
        prefix: Environment variable prefix

    Returns:
        CircuitBreakerConfig with unset variables left at their defaults

    Raises:
        CircuitBreakerConfigurationError: If a variable cannot be parsed
    """
    values: Dict[str, Any] = {"name": name}

    for suffix, (field_name, parser) in _ENV_FIELDS.items():
        env_name = f"{prefix}{suffix}"
        raw = os.getenv(env_name)
        if raw is None or raw == "":
            continue
        values[field_name] = _parse(env_name, field_name, parser, raw)

    if values.get("sliding_window_type", SlidingWindowType.COUNT_BASED) == SlidingWindowType.COUNT_BASED:
        if "sliding_window_size" in values:
            size = values["sliding_window_size"]
            if not size.is_integer():
                raise CircuitBreakerConfigurationError(
                    f"{prefix}SLIDING_WINDOW_SIZE must be a whole number of calls "
                    f"for a count-based window: {size!r}",
                    config_field="sliding_window_size",
                    provided_value=os.getenv(f"{prefix}SLIDING_WINDOW_SIZE"),
                )
            values["sliding_window_size"] = int(size)

    return CircuitBreakerConfig(**values)
