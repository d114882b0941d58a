"""
Domain snapshots and Pydantic schemas for the section scheduling API.
"""
from .domain import (
    WEEKDAYS,
    SectionClass,
    Professor,
    ProfessorLink,
    Preference,
    Section,
    ViolationReason,
    Violation,
    SolveResult
)
from .schemas import (
    SectionScheduleRequest,
    ScheduleSlot,
    DaySchedule,
    SectionScheduleResponse
)

__all__ = [
    "WEEKDAYS",
    "SectionClass",
    "Professor",
    "ProfessorLink",
    "Preference",
    "Section",
    "ViolationReason",
    "Violation",
    "SolveResult",
    "SectionScheduleRequest",
    "ScheduleSlot",
    "DaySchedule",
    "SectionScheduleResponse"
]
