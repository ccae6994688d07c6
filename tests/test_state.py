"""
Unit Tests for the State Register
=================================
"""

import threading

from sliding_breaker.circuit_breaker import CircuitState, StateRegister


class TestStateRegister:
    """Tests for lock-protected state storage."""

    def test_defaults_to_closed(self):
        """Should start closed."""
        register = StateRegister()

        assert register.get() == CircuitState.CLOSED
        assert register.is_closed() is True
        assert register.is_open() is False
        assert register.is_half_open() is False

    def test_set_and_predicates(self):
        """Predicates should follow the stored state."""
        register = StateRegister()

        register.set(CircuitState.OPEN)
        assert register.is_open() is True
        assert register.is_closed() is False

        register.set(CircuitState.HALF_OPEN)
        assert register.is_half_open() is True
        assert register.get() == CircuitState.HALF_OPEN

    def test_concurrent_writers(self):
        """Should end in one of the written states under contention."""
        register = StateRegister()
        states = [CircuitState.OPEN, CircuitState.HALF_OPEN, CircuitState.CLOSED]

        def writer(state):
            for _ in range(1000):
                register.set(state)
                assert register.get() in states

        threads = [threading.Thread(target=writer, args=(s,)) for s in states]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert register.get() in states
