"""
Unit tests for config module
"""
import json

import pytest

from cardguard.config import (
    ConfigurationError,
    ConfigurationManager,
    SecuritySettings,
    build_components,
    build_generation_guard
)
from cardguard.security import ContentValidator, FieldLimits, RateLimiter, SecurityMonitor


@pytest.fixture
def write_config(tmp_path):
    def _write(data):
        path = tmp_path / "config.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path
    return _write


class TestSecuritySettings:
    """Test cases for SecuritySettings defaults"""

    def test_defaults(self):
        settings = SecuritySettings()

        assert settings.field_limits == FieldLimits()
        assert settings.rate_limit_max_attempts == 5
        assert settings.rate_limit_window_seconds == 60.0
        assert settings.event_log_capacity == 100
        assert settings.suspicious_failure_threshold == 10
        assert settings.suspicious_window_seconds == 60.0
        assert settings.recent_events_window_seconds == 300.0
        assert settings.user_agent is None


class TestConfigurationManager:
    """Test cases for ConfigurationManager"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            ConfigurationManager(tmp_path / "nope.json").load()

    def test_invalid_json(self, write_config):
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            ConfigurationManager(write_config("{not json")).load()

    def test_empty_config_uses_defaults(self, write_config):
        settings = ConfigurationManager(write_config({})).load()

        assert settings == SecuritySettings()

    def test_overrides_merge_with_defaults(self, write_config):
        data = {
            "security": {
                "field_limits": {"title": 120},
                "rate_limit_max_attempts": 3,
                "suspicious_window_seconds": 30,
                "user_agent": "web-client"
            }
        }
        manager = ConfigurationManager(write_config(data))
        settings = manager.load()

        assert settings.field_limits.title == 120
        assert settings.field_limits.question == 2000
        assert settings.rate_limit_max_attempts == 3
        assert settings.suspicious_window_seconds == 30
        assert settings.event_log_capacity == 100
        assert settings.user_agent == "web-client"
        # The raw file contents are kept as loaded
        assert manager.config == data

    @pytest.mark.parametrize("security,message", [
        ({"max_attempts": 3}, "Unknown security settings"),
        ({"field_limits": {"nickname": 3}}, "Unknown field limits"),
        ({"event_log_capacity": 0}, "event_log_capacity must be a positive int"),
        ({"event_log_capacity": 1.5}, "event_log_capacity must be a positive int"),
        ({"rate_limit_window_seconds": -1}, "rate_limit_window_seconds must be a positive float"),
        ({"field_limits": {"title": "long"}}, "title must be a positive int"),
        ({"suspicious_failure_threshold": True}, "suspicious_failure_threshold must be a positive int"),
        ({"user_agent": 5}, "user_agent must be a string"),
    ])
    def test_invalid_settings(self, write_config, security, message):
        with pytest.raises(ConfigurationError, match=message):
            ConfigurationManager(write_config({"security": security})).load()


class TestBuildComponents:
    """Test cases for component wiring"""

    def test_components_share_monitor(self):
        settings = SecuritySettings(event_log_capacity=5, suspicious_failure_threshold=2)
        monitor, rate_limiter, validator = build_components(settings)

        assert isinstance(monitor, SecurityMonitor)
        assert isinstance(rate_limiter, RateLimiter)
        assert isinstance(validator, ContentValidator)
        assert rate_limiter.monitor is monitor
        assert validator.monitor is monitor
        assert monitor.capacity == 5
        assert monitor.suspicious_threshold == 2

    def test_instances_are_isolated(self):
        first, _, first_validator = build_components()
        second, _, _ = build_components()

        first_validator.validate_title("")

        assert len(first) == 1
        assert len(second) == 0

    def test_generation_guard_uses_rate_limit_settings(self):
        settings = SecuritySettings(rate_limit_max_attempts=2, rate_limit_window_seconds=30.0)
        _, rate_limiter, validator = build_components(settings)

        guard = build_generation_guard(validator, rate_limiter, settings)

        assert guard.max_attempts == 2
        assert guard.window_seconds == 30.0
        assert guard.rate_limiter is rate_limiter
