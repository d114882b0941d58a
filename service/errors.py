"""
Error taxonomy of the assignment engine.

Classes that simply cannot be staffed are not errors: they come back as
Violation entries on a successful SolveResult.
"""
from typing import Dict, List, Optional


class SchedulingError(Exception):
    """Base class for fatal solve failures."""


class ValidationError(SchedulingError):
    """Malformed or inconsistent input, raised before any assignment work."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        messages = [msg for field_messages in errors.values() for msg in field_messages]
        super().__init__("; ".join(messages) or "Invalid scheduling input")

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


class InternalConsistencyError(SchedulingError):
    """The solver broke one of its own invariants. Always a bug, never bad data."""

    def __init__(self, message: str, class_id: Optional[str] = None, professor_id: Optional[str] = None):
        self.class_id = class_id
        self.professor_id = professor_id
        super().__init__(message)
