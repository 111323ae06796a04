"""
Client-side content validation and security monitoring
"""
from .models import ValidationResult, SecurityEvent, SecurityEventType
from .patterns import ThreatPatternSet, XSS_PATTERNS, SQL_INJECTION_PATTERNS, DANGEROUS_PATTERNS, matches
from .sanitizer import (
    FieldLimits,
    encode_html,
    enhanced_validate,
    sanitize_for_display,
    validate_and_sanitize_text,
    validate_file_upload
)
from .monitor import SecurityMonitor
from .rate_limiter import RateLimiter
from .content_validator import ContentValidator

__all__ = [
    'ValidationResult',
    'SecurityEvent',
    'SecurityEventType',
    'ThreatPatternSet',
    'XSS_PATTERNS',
    'SQL_INJECTION_PATTERNS',
    'DANGEROUS_PATTERNS',
    'matches',
    'FieldLimits',
    'encode_html',
    'enhanced_validate',
    'sanitize_for_display',
    'validate_and_sanitize_text',
    'validate_file_upload',
    'SecurityMonitor',
    'RateLimiter',
    'ContentValidator'
]
