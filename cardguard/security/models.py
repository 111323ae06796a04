"""
Data models for content validation and security monitoring
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a single piece of user content"""
    is_valid: bool
    error: Optional[str] = None
    sanitized: Optional[str] = None

    def __post_init__(self):
        if self.is_valid and self.error is not None:
            raise ValueError("A valid result cannot carry an error")
        if not self.is_valid and self.error is None:
            raise ValueError("A rejected result must carry an error")
        if not self.is_valid and self.sanitized is not None:
            raise ValueError("A rejected result cannot carry sanitized content")

    @classmethod
    def ok(cls, sanitized: Optional[str] = None) -> "ValidationResult":
        return cls(is_valid=True, sanitized=sanitized)

    @classmethod
    def reject(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, leaving out absent fields"""
        data: Dict[str, Any] = {"is_valid": self.is_valid}
        if self.error is not None:
            data["error"] = self.error
        if self.sanitized is not None:
            data["sanitized"] = self.sanitized
        return data


class SecurityEventType(str, Enum):
    """Kinds of events recorded by the security monitor"""
    VALIDATION_FAILURE = "validation_failure"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"


@dataclass(frozen=True)
class SecurityEvent:
    """Record of a detected anomaly"""
    type: SecurityEventType
    details: str
    timestamp: float
    user_id: Optional[str] = None
    user_agent: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "details": self.details,
            "timestamp": self.timestamp,
            "user_id": self.user_id,
            "user_agent": self.user_agent,
        }
