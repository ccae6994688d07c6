"""
Circuit Breaker Core
====================
The CircuitBreaker engine: admission, outcome recording and transitions.

The breaker lock is held only for the admission decision and for the
bookkeeping after a call; the guarded action always runs outside it, so
a slow action never delays other callers' admission.
"""

import threading
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

import structlog

from ..metrics import recording
from .exceptions import (
    BreakerNotInitializedError,
    CircuitOpenError,
    HalfOpenLimitError,
)
from .models import CircuitBreakerConfig, CircuitState
from .state import StateRegister
from .window import SlidingWindow, create_pruner

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CircuitBreaker:
    """
    Thread-safe circuit breaker over a sliding window of call outcomes.

    Example:
        breaker = CircuitBreaker(CircuitBreakerConfig(name="billing-api"))

        try:
            invoice = breaker.execute(lambda: client.get_invoice(invoice_id))
        except CircuitBreakerError:
            return cached_invoice
    """

    def __init__(
        self,
        config: Optional[CircuitBreakerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or CircuitBreakerConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._state = StateRegister(CircuitState.CLOSED)
        self._window = SlidingWindow(
            create_pruner(self.config.sliding_window_type, self.config.sliding_window_size)
        )
        self._half_open_calls = 0
        # Bumped on every entry into HALF_OPEN so a probe can tell which
        # episode its quota slot belongs to
        self._half_open_episode = 0
        self._opened_at = 0.0

        # Metrics
        self._total_calls = 0
        self._total_failures = 0
        self._total_slow_calls = 0
        self._total_rejections = 0

        recording.record_state(self.name, CircuitState.CLOSED)

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def state(self) -> CircuitState:
        """Current circuit state."""
        return self._state.get()

    @property
    def half_open_calls(self) -> int:
        """Calls admitted during the current half-open episode."""
        with self._lock:
            return self._half_open_calls

    @property
    def failure_rate(self) -> float:
        with self._lock:
            return self._window.failure_rate

    @property
    def slow_call_rate(self) -> float:
        with self._lock:
            return self._window.slow_call_rate

    @property
    def window_length(self) -> int:
        with self._lock:
            return self._window.length

    @property
    def metrics(self) -> Dict[str, Any]:
        """Get circuit breaker metrics."""
        with self._lock:
            return {
                "name": self.name,
                "state": self._state.get().value,
                "failure_rate": self._window.failure_rate,
                "slow_call_rate": self._window.slow_call_rate,
                "window_length": self._window.length,
                "failure_count": self._window.failure_count,
                "slow_call_count": self._window.slow_count,
                "half_open_calls": self._half_open_calls,
                "total_calls": self._total_calls,
                "total_failures": self._total_failures,
                "total_slow_calls": self._total_slow_calls,
                "total_rejections": self._total_rejections,
            }

    def execute(self, action: Callable[[], T]) -> T:
        """
        Run a zero-argument callable with circuit breaker protection.

        Returns the action's result. Exceptions raised by the action are
        recorded and re-raised unchanged. KeyboardInterrupt and other
        BaseExceptions are not recorded; a half-open probe interrupted
        this way releases its quota slot.

        Raises:
            CircuitOpenError: The circuit is open
            HalfOpenLimitError: The half-open probe quota is used up
            BreakerNotInitializedError: The breaker was never constructed
        """
        permit = self._acquire_permission()

        start = self._clock()
        try:
            result = action()
        except Exception as exc:
            self._on_call_finished(exc, self._clock() - start)
            raise
        except BaseException:
            # Interrupted or cancelled: nothing to record, but a probe
            # hands its half-open slot back
            self._release_permission(permit)
            raise
        self._on_call_finished(None, self._clock() - start)
        return result

    async def execute_async(self, action: Callable[[], Awaitable[T]]) -> T:
        """Async counterpart of execute for a callable returning an awaitable."""
        permit = self._acquire_permission()

        start = self._clock()
        try:
            result = await action()
        except Exception as exc:
            self._on_call_finished(exc, self._clock() - start)
            raise
        except BaseException:
            # Covers asyncio.CancelledError from wait_for timeouts
            self._release_permission(permit)
            raise
        self._on_call_finished(None, self._clock() - start)
        return result

    def reset(self) -> None:
        """Return to CLOSED with an empty window (for testing/admin)."""
        with self._lock:
            previous = self._state.get()
            self._window.clear()
            self._half_open_calls = 0
            self._opened_at = 0.0
            self._state.set(CircuitState.CLOSED)
            recording.record_state(self.name, CircuitState.CLOSED)
        logger.info("circuit_reset", breaker=self.name, previous_state=previous.value)

    def _acquire_permission(self) -> Optional[int]:
        """
        Admit the call or raise a rejection. Runs under the breaker lock.

        Returns the half-open episode when the call was admitted as a probe,
        None otherwise.
        """
        if getattr(self, "_state", None) is None or getattr(self, "_lock", None) is None:
            raise BreakerNotInitializedError(
                getattr(getattr(self, "config", None), "name", "unknown")
            )

        with self._lock:
            now = self._clock()

            if self._state.is_open() and self._open_wait_elapsed(now):
                self._transition(CircuitState.HALF_OPEN)

            if self._state.is_open():
                self._total_rejections += 1
                retry_after = self.config.wait_duration_in_open_state - (now - self._opened_at)
                recording.record_rejection(self.name, "open")
                logger.debug("call_rejected", breaker=self.name, reason="open")
                raise CircuitOpenError(self.name, retry_after)

            if self._state.is_half_open():
                permitted = self.config.permitted_number_of_calls_in_half_open_state
                if self._half_open_calls >= permitted:
                    self._total_rejections += 1
                    recording.record_rejection(self.name, "half_open_limit")
                    logger.debug(
                        "call_rejected",
                        breaker=self.name,
                        reason="half_open_limit",
                        half_open_calls=self._half_open_calls,
                    )
                    raise HalfOpenLimitError(self.name, permitted)
                self._half_open_calls += 1
                return self._half_open_episode

        return None

    def _release_permission(self, permit: Optional[int]) -> None:
        """Return a probe's quota slot if its half-open episode is still current."""
        if permit is None:
            return

        with self._lock:
            if (
                self._state.is_half_open()
                and self._half_open_episode == permit
                and self._half_open_calls > 0
            ):
                self._half_open_calls -= 1
                logger.debug(
                    "probe_released",
                    breaker=self.name,
                    half_open_calls=self._half_open_calls,
                )

    def _on_call_finished(self, exc: Optional[BaseException], duration: float) -> None:
        failed = exc is not None and not isinstance(exc, self.config.ignored_exceptions)
        slow = duration >= self.config.slow_call_duration_threshold

        recording.record_call(self.name, failed, slow, duration)
        self._record_result(failed, slow)

    def _record_result(self, failed: bool, slow: bool) -> None:
        """Update the window, then apply the transition policy."""
        with self._lock:
            now = self._clock()
            self._window.record(failed, slow, now)

            self._total_calls += 1
            if failed:
                self._total_failures += 1
            if slow:
                self._total_slow_calls += 1

            failure_rate = self._window.failure_rate
            slow_call_rate = self._window.slow_call_rate
            state = self._state.get()

            if state == CircuitState.CLOSED:
                if self._window.length >= self.config.minimum_number_of_calls and (
                    failure_rate >= self.config.failure_rate_threshold
                    or slow_call_rate >= self.config.slow_call_rate_threshold
                ):
                    self._transition(CircuitState.OPEN)
                    logger.warning(
                        "circuit_opened",
                        breaker=self.name,
                        failure_rate=failure_rate,
                        slow_call_rate=slow_call_rate,
                        window_length=self._window.length,
                    )

            elif state == CircuitState.OPEN:
                if self._open_wait_elapsed(now):
                    self._transition(CircuitState.HALF_OPEN)

            elif state == CircuitState.HALF_OPEN:
                if failed or slow:
                    self._transition(CircuitState.OPEN)
                    logger.warning(
                        "circuit_reopened",
                        breaker=self.name,
                        failed=failed,
                        slow=slow,
                    )
                elif self._half_open_calls >= self.config.permitted_number_of_calls_in_half_open_state:
                    # Quota consumed with no disqualifying outcome; the window
                    # keeps its history and ages it out through pruning
                    self._transition(CircuitState.CLOSED)
                    logger.info("circuit_closed", breaker=self.name)

    def _open_wait_elapsed(self, now: float) -> bool:
        return now - self._opened_at >= self.config.wait_duration_in_open_state

    def _transition(self, new_state: CircuitState) -> None:
        """Switch state. Must be called while holding self._lock."""
        previous = self._state.get()
        self._state.set(new_state)
        self._half_open_calls = 0

        if new_state == CircuitState.OPEN:
            self._opened_at = self._clock()
        elif new_state == CircuitState.HALF_OPEN:
            self._half_open_episode += 1
            logger.info("circuit_half_open", breaker=self.name)

        recording.record_transition(self.name, previous, new_state)

    def __repr__(self) -> str:
        return f"CircuitBreaker(name={self.name!r}, state={self.state.value})"
