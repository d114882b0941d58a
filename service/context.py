"""
Read-only view of one section shared by the solver phases.
"""
from typing import Dict, List, Mapping, Optional

from models.domain import Preference, Professor, ProfessorLink, SectionClass
from service.conflicts import ConflictDetector
from service.scoring import PreferenceScorer


def class_sort_key(detector: ConflictDetector, section_class: SectionClass):
    """Processing order: day, then start time, then class id."""
    day, start, _ = detector.interval(section_class)
    return day, start, section_class.class_id


class SolveContext:
    """
    Everything a solve needs to look up, computed once.

    ``candidates`` maps each class id to its eligible professors ranked by
    descending preference score, ties broken by professor id.
    """

    def __init__(
        self,
        section_id: str,
        classes: List[SectionClass],
        professor_links: List[ProfessorLink],
        preferences: List[Preference]
    ):
        self.section_id = section_id
        self.detector = ConflictDetector(professor_links)
        self.scorer = PreferenceScorer(preferences)

        self.professors: Dict[str, Professor] = {
            link.professor_id: link.professor for link in professor_links
        }
        self.limits: Dict[str, int] = {
            link.professor_id: link.total_classes for link in professor_links
        }

        self.ordered_classes: List[SectionClass] = sorted(
            classes, key=lambda cls: class_sort_key(self.detector, cls)
        )
        self.classes: Dict[str, SectionClass] = {cls.class_id: cls for cls in self.ordered_classes}

        self.candidates: Dict[str, List[str]] = {}
        for cls in self.ordered_classes:
            eligible = [
                professor.professor_id
                for professor in self.professors.values()
                if self.detector.is_eligible(professor, cls)
            ]
            eligible.sort(key=lambda pid: (-self.scorer.score(pid, cls), pid))
            self.candidates[cls.class_id] = eligible

    def score(self, professor_id: str, class_id: str) -> float:
        return self.scorer.score(professor_id, self.classes[class_id])

    def is_candidate(self, professor_id: str, class_id: str) -> bool:
        return professor_id in self.candidates.get(class_id, ())


def group_by_professor(context: SolveContext, assignments: Mapping[str, Optional[str]]) -> Dict[str, List[SectionClass]]:
    grouped: Dict[str, List[SectionClass]] = {}
    for cls in context.ordered_classes:
        professor_id = assignments.get(cls.class_id)
        if professor_id is not None:
            grouped.setdefault(professor_id, []).append(cls)
    return grouped


def hard_constraint_breaches(context: SolveContext, assignments: Mapping[str, Optional[str]]) -> List[str]:
    """List every eligibility, capacity or overlap breach in an assignment map."""
    breaches = []
    for class_id, professor_id in assignments.items():
        if professor_id is not None and not context.is_candidate(professor_id, class_id):
            breaches.append(f"Professor {professor_id} is not eligible for class {class_id}")

    for professor_id, assigned in group_by_professor(context, assignments).items():
        limit = context.limits.get(professor_id, 0)
        if len(assigned) > limit:
            breaches.append(f"Professor {professor_id} holds {len(assigned)} classes, limit is {limit}")
        for i, first in enumerate(assigned):
            for second in assigned[i + 1:]:
                if context.detector.conflicts(first, second):
                    breaches.append(
                        f"Professor {professor_id} has overlapping classes {first.class_id} and {second.class_id}"
                    )
    return breaches
