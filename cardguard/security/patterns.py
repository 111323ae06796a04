"""
Threat pattern sets and the matcher that evaluates text against them
"""
import re
from dataclasses import dataclass
from typing import Pattern as RePattern, Tuple


@dataclass(frozen=True)
class ThreatPatternSet:
    """A named, ordered collection of pre-compiled threat patterns"""
    name: str
    patterns: Tuple[RePattern[str], ...]

    def extended(self, *patterns: RePattern[str]) -> "ThreatPatternSet":
        """Return a copy of this set with additional patterns appended"""
        return ThreatPatternSet(self.name, self.patterns + tuple(patterns))

    def __len__(self) -> int:
        return len(self.patterns)


XSS_PATTERNS = ThreatPatternSet("xss", (
    re.compile(r'<\s*script\b', re.IGNORECASE),
    re.compile(r'<\s*iframe\b', re.IGNORECASE),
    re.compile(r'<\s*object\b', re.IGNORECASE),
    re.compile(r'<\s*embed\b', re.IGNORECASE),
    re.compile(r'\bon\w+\s*=', re.IGNORECASE),
    re.compile(r'javascript:', re.IGNORECASE),
    re.compile(r'vbscript:', re.IGNORECASE),
    re.compile(r'data:text/html', re.IGNORECASE),
))

SQL_INJECTION_PATTERNS = ThreatPatternSet("sql_injection", (
    re.compile(r"'|;"),
    re.compile(r'union\s+select', re.IGNORECASE),
    re.compile(r'insert\s+into', re.IGNORECASE),
    re.compile(r'delete\s+from', re.IGNORECASE),
    re.compile(r'update\s+set', re.IGNORECASE),
    re.compile(r'drop\s+table', re.IGNORECASE),
    re.compile(r'alter\s+table', re.IGNORECASE),
))

DANGEROUS_PATTERNS = ThreatPatternSet("dangerous", (
    re.compile(r'data:text/html;base64', re.IGNORECASE),
    re.compile(r'<\s*svg\b[^>]*\bonload', re.IGNORECASE),
    re.compile(r'expression\s*\(', re.IGNORECASE),
    re.compile(r'@import', re.IGNORECASE),
    re.compile(r'data:application', re.IGNORECASE),
))


def matches(text: str, pattern_set: ThreatPatternSet) -> bool:
    """Check whether any pattern in the set occurs in the text"""
    # any() stops at the first hit
    return any(pattern.search(text) for pattern in pattern_set.patterns)
