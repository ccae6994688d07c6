"""
Circuit Breaker State Register
==============================
Lock-protected holder for the current lifecycle state.
"""

import threading

from .models import CircuitState


class StateRegister:
    """
    Stores the current circuit state.

    Every read and write takes the register's own lock. Nothing here spans
    two calls atomically; read-then-transition sequences belong to the
    breaker, under its lock.
    """

    def __init__(self, state: CircuitState = CircuitState.CLOSED):
        self._state = state
        self._lock = threading.Lock()

    def set(self, state: CircuitState) -> None:
        with self._lock:
            self._state = state

    def get(self) -> CircuitState:
        with self._lock:
            return self._state

    def is_open(self) -> bool:
        with self._lock:
            return self._state == CircuitState.OPEN

    def is_half_open(self) -> bool:
        with self._lock:
            return self._state == CircuitState.HALF_OPEN

    def is_closed(self) -> bool:
        with self._lock:
            return self._state == CircuitState.CLOSED

    def __repr__(self) -> str:
        return f"StateRegister({self.get().value})"
