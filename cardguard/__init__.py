"""
cardguard Package
Input validation, rate limiting and security monitoring for flashcard content
"""
__version__ = "0.1.0"

from .config import ConfigurationError, ConfigurationManager, SecuritySettings, build_components, build_generation_guard
from .generation import GenerationGuard, GeneratedCard
from .security import ContentValidator, RateLimiter, SecurityMonitor, ValidationResult

__all__ = [
    'ConfigurationManager',
    'SecuritySettings',
    'ConfigurationError',
    'build_components',
    'build_generation_guard',
    'GenerationGuard',
    'GeneratedCard',
    'ContentValidator',
    'RateLimiter',
    'SecurityMonitor',
    'ValidationResult'
]
