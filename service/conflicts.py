"""
Time-overlap and eligibility predicates.

Intervals are half-open: a class ending at 10:00 does not conflict with one
starting at 10:00 on the same day.
"""
from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from models.domain import WEEKDAYS, Professor, ProfessorLink, SectionClass
from service.errors import ValidationError


def parse_time(time_str: str) -> int:
    """Parse an HH:MM string into minutes since midnight."""
    try:
        parsed = datetime.strptime(time_str, '%H:%M').time()
    except (TypeError, ValueError):
        raise ValidationError.single(
            "time", f"Invalid time '{time_str}'. Use HH:MM format (e.g., '09:30')"
        )
    return parsed.hour * 60 + parsed.minute


def day_index(day: str) -> int:
    try:
        return WEEKDAYS.index(day.lower())
    except (AttributeError, ValueError):
        raise ValidationError.single(
            "day", f"Invalid day '{day}'. Use valid weekdays: Monday through Sunday"
        )


def class_interval(section_class: SectionClass) -> Tuple[int, int, int]:
    """Return (day_index, start_minutes, end_minutes), rejecting empty or inverted slots."""
    day = day_index(section_class.day)
    start = parse_time(section_class.start_time)
    end = parse_time(section_class.end_time)
    if start >= end:
        raise ValidationError.single(
            f"classes -> {section_class.class_id}",
            f"Class {section_class.class_id}: start time ({section_class.start_time}) "
            f"must be before end time ({section_class.end_time})"
        )
    return day, start, end


def times_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    return start1 < end2 and start2 < end1


def conflicts(a: SectionClass, b: SectionClass) -> bool:
    """True iff both classes fall on the same day and their intervals overlap."""
    day_a, start_a, end_a = class_interval(a)
    day_b, start_b, end_b = class_interval(b)
    return day_a == day_b and times_overlap(start_a, end_a, start_b, end_b)


class ConflictDetector:
    """
    Eligibility and conflict checks for one solve.

    Built from the section's professor links so that eligibility can check
    both subject competence and membership of the class's section.
    """

    def __init__(self, professor_links: Iterable[ProfessorLink]):
        self._linked_sections: Dict[str, set] = {}
        for link in professor_links:
            self._linked_sections.setdefault(link.professor_id, set()).add(link.section_id)
        self._intervals: Dict[str, Tuple[int, int, int]] = {}

    def interval(self, section_class: SectionClass) -> Tuple[int, int, int]:
        interval = self._intervals.get(section_class.class_id)
        if interval is None:
            interval = class_interval(section_class)
            self._intervals[section_class.class_id] = interval
        return interval

    def is_eligible(self, professor: Professor, section_class: SectionClass) -> bool:
        if section_class.subject_id not in professor.subjects:
            return False
        return section_class.section_id in self._linked_sections.get(professor.professor_id, ())

    def conflicts(self, a: SectionClass, b: SectionClass) -> bool:
        day_a, start_a, end_a = self.interval(a)
        day_b, start_b, end_b = self.interval(b)
        return day_a == day_b and times_overlap(start_a, end_a, start_b, end_b)

    def has_conflict(self, section_class: SectionClass, assigned: List[SectionClass]) -> bool:
        """Check a class against a professor's already confirmed classes."""
        return any(
            self.conflicts(section_class, other)
            for other in assigned
            if other.class_id != section_class.class_id
        )
