"""
Schedule assignment engine: professors to fixed class slots, one section at a time.
"""
from .engine import solve, solve_section
from .errors import InternalConsistencyError, SchedulingError, ValidationError

__all__ = [
    "solve",
    "solve_section",
    "SchedulingError",
    "ValidationError",
    "InternalConsistencyError"
]
