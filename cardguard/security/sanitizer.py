"""
Length limits, threat screening and HTML entity encoding for user content
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .models import ValidationResult
from .patterns import DANGEROUS_PATTERNS, SQL_INJECTION_PATTERNS, XSS_PATTERNS, matches

logger = logging.getLogger(__name__)

# Applied in order when encoding; '&' must come first
HTML_ENTITIES: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)

ALLOWED_UPLOAD_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class FieldLimits:
    """Maximum lengths per content field, mirroring storage constraints"""
    title: int = 255
    description: int = 1000
    question: int = 2000
    answer: int = 2000
    category: int = 100
    display_name: int = 100

    def for_field(self, field_name: str) -> int:
        """Look up the limit for a field by name"""
        try:
            return getattr(self, field_name)
        except AttributeError:
            raise KeyError(f"No length limit defined for field '{field_name}'") from None


def encode_html(text: str) -> str:
    """Replace the five HTML-significant characters with entities"""
    for char, entity in HTML_ENTITIES:
        text = text.replace(char, entity)
    return text


def sanitize_for_display(text: str) -> str:
    """
    Reverse encode_html for re-rendering stored content.

    Entities are decoded in reverse order so '&amp;' is handled last and
    text such as '&lt;' survives a round trip unchanged.
    """
    for char, entity in reversed(HTML_ENTITIES):
        text = text.replace(entity, char)
    return text


def validate_and_sanitize_text(
    text: Optional[str],
    max_length: int,
    field_name: str = "Input"
) -> ValidationResult:
    """
    Validate text against emptiness, length and threat patterns.

    Args:
        text: Raw user input
        max_length: Maximum number of characters allowed
        field_name: Label used in error messages

    Returns:
        A rejected result with a human readable error, or a valid result
        carrying the trimmed, entity-encoded text
    """
    if not text or not text.strip():
        return ValidationResult.reject(f"{field_name} cannot be empty")

    if len(text) > max_length:
        return ValidationResult.reject(f"{field_name} must be {max_length} characters or less")

    if matches(text, XSS_PATTERNS):
        logger.debug(f"XSS pattern matched in {field_name}")
        return ValidationResult.reject(f"{field_name} contains potentially dangerous content")

    if matches(text, SQL_INJECTION_PATTERNS):
        logger.debug(f"SQL injection pattern matched in {field_name}")
        return ValidationResult.reject(f"{field_name} contains invalid characters")

    return ValidationResult.ok(encode_html(text.strip()))


def enhanced_validate(text: str) -> ValidationResult:
    """Second pass over the original text using the extended dangerous pattern set"""
    if text and matches(text, DANGEROUS_PATTERNS):
        return ValidationResult.reject("Content contains potentially dangerous elements")
    return ValidationResult.ok()


def validate_file_upload(
    content_type: str,
    size: int,
    allowed_types: Iterable[str] = ALLOWED_UPLOAD_TYPES,
    max_size: int = MAX_UPLOAD_BYTES
) -> ValidationResult:
    """Check an uploaded image's MIME type and size"""
    if content_type not in tuple(allowed_types):
        return ValidationResult.reject("Only JPEG, PNG, GIF, and WebP images are allowed")

    if size > max_size:
        return ValidationResult.reject(f"File size must be less than {max_size // (1024 * 1024)}MB")

    return ValidationResult.ok()
