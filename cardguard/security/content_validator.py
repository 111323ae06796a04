"""
Per-field validation that ties the sanitizer to the security monitor
"""
import logging
from typing import Dict, Optional

from .models import SecurityEventType, ValidationResult
from .monitor import SecurityMonitor
from .sanitizer import FieldLimits, enhanced_validate, validate_and_sanitize_text

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "question": "Question",
    "answer": "Answer",
    "title": "Title",
    "description": "Description",
    "category": "Category",
    "display_name": "Display name",
}


class ContentValidator:
    """Validates flashcard and deck fields, reporting failures to the monitor"""

    def __init__(self, monitor: SecurityMonitor, limits: Optional[FieldLimits] = None):
        self.monitor = monitor
        self.limits = limits or FieldLimits()

    def validate_question(self, question: Optional[str], user_id: Optional[str] = None) -> ValidationResult:
        return self._validate_field("question", question, user_id)

    def validate_answer(self, answer: Optional[str], user_id: Optional[str] = None) -> ValidationResult:
        return self._validate_field("answer", answer, user_id)

    def validate_title(self, title: Optional[str], user_id: Optional[str] = None) -> ValidationResult:
        return self._validate_field("title", title, user_id)

    def validate_description(self, description: Optional[str], user_id: Optional[str] = None) -> ValidationResult:
        """Descriptions are optional; blank input is valid and sanitizes to ''"""
        if not description or not description.strip():
            return ValidationResult.ok("")
        return self._validate_field("description", description, user_id)

    def validate_category(self, category: Optional[str], user_id: Optional[str] = None) -> ValidationResult:
        return self._validate_field("category", category, user_id, extended=False)

    def validate_display_name(self, display_name: Optional[str], user_id: Optional[str] = None) -> ValidationResult:
        return self._validate_field("display_name", display_name, user_id, extended=False)

    def validate_flashcard(
        self,
        question: Optional[str],
        answer: Optional[str],
        user_id: Optional[str] = None
    ) -> Dict[str, ValidationResult]:
        """Validate both sides of a card"""
        return {
            "question": self.validate_question(question, user_id),
            "answer": self.validate_answer(answer, user_id),
        }

    def validate_deck(
        self,
        title: Optional[str],
        description: Optional[str],
        user_id: Optional[str] = None
    ) -> Dict[str, ValidationResult]:
        """Validate a deck's title and description"""
        return {
            "title": self.validate_title(title, user_id),
            "description": self.validate_description(description, user_id),
        }

    def validate(self, field_name: str, value: Optional[str], user_id: Optional[str] = None) -> ValidationResult:
        """Dispatch to the validator for a field by name"""
        if field_name not in FIELD_LABELS:
            raise KeyError(f"Unknown content field '{field_name}'")
        return getattr(self, f"validate_{field_name}")(value, user_id)

    def _validate_field(
        self,
        field_name: str,
        value: Optional[str],
        user_id: Optional[str],
        extended: bool = True
    ) -> ValidationResult:
        label = FIELD_LABELS[field_name]
        result = validate_and_sanitize_text(value, self.limits.for_field(field_name), label)
        if not result.is_valid:
            self._record_failure(label, result.error, user_id)
            return result

        if extended and not (enhanced := enhanced_validate(value)).is_valid:
            self._record_failure(label, enhanced.error, user_id)
            return enhanced

        return result

    def _record_failure(self, label: str, error: str, user_id: Optional[str]) -> None:
        """Log a validation failure and escalate repeated ones; never raises"""
        try:
            self.monitor.log_event(
                SecurityEventType.VALIDATION_FAILURE,
                f"{label}: {error}",
                user_id=user_id
            )
            if user_id is not None and self.monitor.detect_suspicious_activity(user_id):
                self.monitor.log_event(
                    SecurityEventType.SUSPICIOUS_ACTIVITY,
                    f"Repeated validation failures, last on {label}",
                    user_id=user_id
                )
        except Exception:
            logger.exception(f"Failed to record validation failure for {label}")
