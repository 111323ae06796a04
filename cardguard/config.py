"""
Configuration module for cardguard
"""
import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .generation import GenerationGuard
from .security import ContentValidator, FieldLimits, RateLimiter, SecurityMonitor

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Base exception for configuration errors"""
    pass


@dataclass
class SecuritySettings:
    """Tunable limits for the validation pipeline"""
    field_limits: FieldLimits = field(default_factory=FieldLimits)
    rate_limit_max_attempts: int = 5
    rate_limit_window_seconds: float = 60.0
    event_log_capacity: int = 100
    suspicious_failure_threshold: int = 10
    suspicious_window_seconds: float = 60.0
    recent_events_window_seconds: float = 300.0
    user_agent: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigurationManager:
    """Loads security settings from a JSON file"""

    def __init__(self, config_file: Union[str, Path]):
        self.config_file = Path(config_file)
        self.settings = SecuritySettings()
        self.config: Dict = {}  # Raw file contents

    def load(self) -> SecuritySettings:
        """Load configuration from JSON file, filling in defaults"""
        if not self.config_file.exists():
            error_msg = f"Configuration file not found: {self.config_file}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        try:
            with self.config_file.open('r') as f:
                config_data = json.load(f)

            self.config = config_data
            self.settings = self._create_settings(config_data.get('security', {}))
            logger.info(f"Loaded security settings from {self.config_file}")

            return self.settings

        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in configuration file: {e}")
            raise ConfigurationError(f"Invalid JSON: {e}") from e
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Configuration error: {e}")
            raise ConfigurationError(str(e)) from e

    def _create_settings(self, security_data: Dict[str, Any]) -> SecuritySettings:
        """Validate the 'security' section and merge it over the defaults"""
        known = {f.name for f in fields(SecuritySettings)}
        if unknown := sorted(set(security_data) - known):
            raise KeyError(f"Unknown security settings: {', '.join(unknown)}")

        # Defaults first, then the file's values; the input dict is left untouched
        merged = {**SecuritySettings().to_dict(), **security_data}

        limits_data = merged.pop('field_limits')
        limit_names = {f.name for f in fields(FieldLimits)}
        if unknown := sorted(set(limits_data) - limit_names):
            raise KeyError(f"Unknown field limits: {', '.join(unknown)}")
        limits = FieldLimits(**{**asdict(FieldLimits()), **limits_data})

        defaults = {**asdict(FieldLimits()), **SecuritySettings().to_dict()}
        for name, value in {**asdict(limits), **merged}.items():
            if name == 'user_agent':
                if value is not None and not isinstance(value, str):
                    raise ValueError("user_agent must be a string")
                continue
            # Whole-number settings reject floats; second-based ones accept both
            allowed = (int, float) if isinstance(defaults[name], float) else (int,)
            if isinstance(value, bool) or not isinstance(value, allowed) or value <= 0:
                raise ValueError(f"{name} must be a positive {allowed[-1].__name__}")

        return SecuritySettings(field_limits=limits, **merged)


def build_components(
    settings: Optional[SecuritySettings] = None
) -> Tuple[SecurityMonitor, RateLimiter, ContentValidator]:
    """Initialize and wire the pipeline components.

    Returns:
        Tuple of (monitor, rate_limiter, content_validator)
    """
    settings = settings or SecuritySettings()

    monitor = SecurityMonitor(
        capacity=settings.event_log_capacity,
        user_agent=settings.user_agent,
        suspicious_threshold=settings.suspicious_failure_threshold,
        suspicious_window_seconds=settings.suspicious_window_seconds
    )
    rate_limiter = RateLimiter(monitor)
    content_validator = ContentValidator(monitor, settings.field_limits)

    return monitor, rate_limiter, content_validator


def build_generation_guard(
    validator: ContentValidator,
    rate_limiter: RateLimiter,
    settings: Optional[SecuritySettings] = None
) -> GenerationGuard:
    """Generation guard using the configured rate limit"""
    settings = settings or SecuritySettings()
    return GenerationGuard(
        validator,
        rate_limiter,
        max_attempts=settings.rate_limit_max_attempts,
        window_seconds=settings.rate_limit_window_seconds
    )
