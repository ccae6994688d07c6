"""Test breaker configuration loading."""

import pytest

from sliding_breaker.circuit_breaker import (
    CircuitBreakerConfig,
    CircuitBreakerConfigurationError,
    SlidingWindowType,
    load_config_from_env,
)


class TestConfigDefaults:
    """Test configuration defaults."""

    def test_default_config(self):
        config = CircuitBreakerConfig()

        assert config.name == "default"
        assert config.failure_rate_threshold == 50.0
        assert config.sliding_window_type == SlidingWindowType.COUNT_BASED
        assert config.ignored_exceptions == ()

    def test_config_is_immutable(self):
        config = CircuitBreakerConfig()

        with pytest.raises(AttributeError):
            config.failure_rate_threshold = 10


class TestConfigFromEnv:
    """Test configuration loaded from environment variables."""

    def test_unset_variables_use_defaults(self, monkeypatch):
        for key in ("FAILURE_RATE_THRESHOLD", "SLIDING_WINDOW_TYPE", "SLIDING_WINDOW_SIZE"):
            monkeypatch.delenv(f"CIRCUIT_BREAKER_{key}", raising=False)

        config = load_config_from_env("orders")

        assert config.name == "orders"
        assert config.failure_rate_threshold == CircuitBreakerConfig().failure_rate_threshold

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("CIRCUIT_BREAKER_FAILURE_RATE_THRESHOLD", "25")
        monkeypatch.setenv("CIRCUIT_BREAKER_MINIMUM_NUMBER_OF_CALLS", "6")
        monkeypatch.setenv("CIRCUIT_BREAKER_SLIDING_WINDOW_SIZE", "10")
        monkeypatch.setenv("CIRCUIT_BREAKER_WAIT_DURATION_IN_OPEN", "2.5")
        monkeypatch.setenv("CIRCUIT_BREAKER_PERMITTED_CALLS_IN_HALF_OPEN", "3")

        config = load_config_from_env("orders")

        assert config.failure_rate_threshold == 25.0
        assert config.minimum_number_of_calls == 6
        assert config.sliding_window_size == 10
        assert isinstance(config.sliding_window_size, int)
        assert config.wait_duration_in_open_state == 2.5
        assert config.permitted_number_of_calls_in_half_open_state == 3

    def test_time_based_window_from_env(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_SLIDING_WINDOW_TYPE", "time_based")
        monkeypatch.setenv("PAYMENTS_SLIDING_WINDOW_SIZE", "30.5")

        config = load_config_from_env("payments", prefix="PAYMENTS_")

        assert config.sliding_window_type == SlidingWindowType.TIME_BASED
        assert config.sliding_window_size == 30.5

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("CIRCUIT_BREAKER_MINIMUM_NUMBER_OF_CALLS", "many")

        with pytest.raises(CircuitBreakerConfigurationError) as exc_info:
            load_config_from_env("orders")

        assert exc_info.value.config_field == "minimum_number_of_calls"
        assert exc_info.value.provided_value == "many"

    def test_invalid_window_type(self, monkeypatch):
        monkeypatch.setenv("CIRCUIT_BREAKER_SLIDING_WINDOW_TYPE", "SESSION_BASED")

        with pytest.raises(CircuitBreakerConfigurationError):
            load_config_from_env("orders")

    def test_fractional_count_window_size_rejected(self, monkeypatch):
        monkeypatch.delenv("CIRCUIT_BREAKER_SLIDING_WINDOW_TYPE", raising=False)
        monkeypatch.setenv("CIRCUIT_BREAKER_SLIDING_WINDOW_SIZE", "10.7")

        with pytest.raises(CircuitBreakerConfigurationError) as exc_info:
            load_config_from_env("orders")

        assert exc_info.value.config_field == "sliding_window_size"
        assert exc_info.value.provided_value == "10.7"

    def test_whole_float_count_window_size_accepted(self, monkeypatch):
        monkeypatch.delenv("CIRCUIT_BREAKER_SLIDING_WINDOW_TYPE", raising=False)
        monkeypatch.setenv("CIRCUIT_BREAKER_SLIDING_WINDOW_SIZE", "20.0")

        config = load_config_from_env("orders")

        assert config.sliding_window_size == 20
        assert isinstance(config.sliding_window_size, int)
