"""
Circuit Breaker Decorator
=========================
Decorator for wrapping sync or async functions with circuit breaker protection.
"""

import functools
import inspect
from typing import Any, Callable, Optional

from .exceptions import CircuitOpenError, HalfOpenLimitError
from .models import CircuitBreakerConfig
from .registry import get_breaker


def circuit_breaker(
    service_name: str,
    config: Optional[CircuitBreakerConfig] = None,
    fallback: Optional[Callable[[], Any]] = None,
):
    """
    Decorator to wrap functions with a shared, named circuit breaker.

    The fallback only replaces rejections; errors raised by the wrapped
    function always propagate. For async functions the fallback may be a
    coroutine function.

    Example:
        @circuit_breaker("geo-service")
        def lookup(ip: str):
            return geo_client.lookup(ip)

        @circuit_breaker("pricing-service", fallback=lambda: {"price": None})
        async def get_price(sku: str):
            return await pricing_client.get(sku)
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        breaker = get_breaker(service_name, config)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await breaker.execute_async(
                        functools.partial(func, *args, **kwargs)
                    )
                except (CircuitOpenError, HalfOpenLimitError) as exc:
                    if fallback is None or exc.service_name != breaker.name:
                        raise
                    result = fallback()
                    if inspect.isawaitable(result):
                        result = await result
                    return result

            async_wrapper.breaker = breaker
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return breaker.execute(functools.partial(func, *args, **kwargs))
            except (CircuitOpenError, HalfOpenLimitError) as exc:
                if fallback is None or exc.service_name != breaker.name:
                    raise
                return fallback()

        wrapper.breaker = breaker
        return wrapper

    return decorator
