from pydantic import BaseModel
from typing import Dict, List, Literal, Optional

from .domain import Preference, ProfessorLink, SectionClass, Violation


# ===========================
# Request Schema
# ===========================

class SectionScheduleRequest(BaseModel):
    """Snapshot of one section as stored by the dashboard"""
    owner_id: Optional[str] = None
    classes: List[SectionClass]
    professor_links: List[ProfessorLink] = []
    preferences: List[Preference] = []
    strategy: Optional[Literal["greedy", "optimal"]] = None  # None = server default
    refine: Optional[bool] = None                            # None = server default


# ===========================
# Response Schema
# ===========================

class ScheduleSlot(BaseModel):
    """One class in the timetable with its assigned professor"""
    day: str
    start_time: str
    end_time: str
    duration: Optional[str] = None  # Human-readable: "1h 30min"
    class_id: str
    subject_id: str
    subject_name: Optional[str] = None
    professor_id: Optional[str] = None   # None = unassigned
    professor_name: Optional[str] = None


class DaySchedule(BaseModel):
    """Schedule for a single day"""
    day: str
    slots: List[ScheduleSlot]


class SectionScheduleResponse(BaseModel):
    section_id: str
    status: Literal["COMPLETE", "PARTIAL"]
    assignments: Dict[str, Optional[str]]
    total_score: float
    violations: List[Violation] = []
    timetable: List[DaySchedule] = []

    # Additional metadata for debugging
    strategy: Optional[str] = None
    refinement_moves: int = 0
    professor_loads: Dict[str, int] = {}
    solve_time_seconds: Optional[float] = None
