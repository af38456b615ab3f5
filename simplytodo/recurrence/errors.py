"""
Recurrence engine errors.

Every error carries a machine readable code, a human message and an
optional details dict so the HTTP layer can report it without parsing text.
"""

from typing import Any, Dict, Optional


class RecurrenceError(Exception):
    """Base exception for recurrence errors"""

    code = "RECURRENCE_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, code: Optional[str] = None):
        self.message = message
        self.details = details or {}
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class DateParseError(RecurrenceError, ValueError):
    """A date or time-of-day string could not be parsed."""

    code = "DATE_PARSE_ERROR"


class InvalidRuleError(RecurrenceError):
    """A rule violates its field contract (bounds, ranges, end before start)."""

    code = "INVALID_RULE"


class InvalidTransitionError(RecurrenceError):
    """A rule lifecycle transition that the deletion state machine forbids."""

    code = "INVALID_TRANSITION"
