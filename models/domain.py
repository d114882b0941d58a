"""
Domain snapshots consumed and produced by the assignment engine.

Every entity is frozen: the engine reads these snapshots and returns a new
SolveResult, it never mutates what the caller handed in.
"""
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel


WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


# ===========================
# Section Inputs
# ===========================

class SectionClass(BaseModel):
    """A fixed time slot for one subject within a section."""
    class_id: str
    section_id: str
    subject_id: str
    subject_name: Optional[str] = None
    day: str                              # lowercase: "monday", "tuesday", etc.
    start_time: str                       # HH:MM format, inclusive
    end_time: str                         # HH:MM format, exclusive
    professor_id: Optional[str] = None    # currently persisted assignment, never read by the solver

    class Config:
        frozen = True


class Professor(BaseModel):
    professor_id: str
    name: str
    owner_id: Optional[str] = None
    subjects: FrozenSet[str] = frozenset()

    class Config:
        frozen = True


class ProfessorLink(BaseModel):
    """Professor attached to a section with a maximum class load."""
    link_id: Optional[str] = None
    section_id: str
    professor: Professor
    total_classes: int

    class Config:
        frozen = True

    @property
    def professor_id(self) -> str:
        return self.professor.professor_id


class Preference(BaseModel):
    """
    Weighted wish about who should teach what.

    A preference with ``class_id`` targets one class, one with only
    ``subject_id`` targets every class of that subject, and one with neither
    applies to the professor across the whole section.
    """
    preference_id: Optional[str] = None
    section_id: str
    professor_id: str
    class_id: Optional[str] = None
    subject_id: Optional[str] = None
    value: float                 # signed: positive = desired, negative = avoided
    importance: float = 1.0

    class Config:
        frozen = True


class Section(BaseModel):
    section_id: str
    owner_id: Optional[str] = None
    name: Optional[str] = None
    classes: List[SectionClass] = []
    professor_links: List[ProfessorLink] = []
    preferences: List[Preference] = []

    class Config:
        frozen = True


# ===========================
# Solve Output
# ===========================

class ViolationReason(str, Enum):
    NO_ELIGIBLE_PROFESSOR = "NO_ELIGIBLE_PROFESSOR"
    CAPACITY_EXHAUSTED = "CAPACITY_EXHAUSTED"
    TIME_CONFLICT = "TIME_CONFLICT"


class Violation(BaseModel):
    """A class left unassigned, with the check that eliminated its last candidate."""
    class_id: str
    reason_code: ViolationReason
    detail: str

    class Config:
        frozen = True


class SolveResult(BaseModel):
    section_id: str
    assignments: Dict[str, Optional[str]]   # class_id -> professor_id or None
    total_score: float
    violations: List[Violation] = []

    # Diagnostics
    strategy: str = "greedy"
    refinement_moves: int = 0
    professor_loads: Dict[str, int] = {}
    solve_time_seconds: float = 0.0

    class Config:
        frozen = True

    @property
    def is_complete(self) -> bool:
        return not self.violations
