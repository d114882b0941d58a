"""
Builders shared by the test modules.
"""
from typing import Iterable, Optional

from models.domain import Preference, Professor, ProfessorLink, SectionClass, SolveResult
from service.conflicts import conflicts


SECTION_ID = "s1"


def make_class(class_id: str, day: str = "monday", start: str = "09:00", end: str = "10:00",
               subject: str = "math", section_id: str = SECTION_ID) -> SectionClass:
    return SectionClass(
        class_id=class_id,
        section_id=section_id,
        subject_id=subject,
        day=day,
        start_time=start,
        end_time=end
    )


def make_professor(professor_id: str, subjects: Iterable[str] = ("math",),
                   owner_id: Optional[str] = None) -> Professor:
    return Professor(
        professor_id=professor_id,
        name=f"Professor {professor_id.upper()}",
        owner_id=owner_id,
        subjects=frozenset(subjects)
    )


def make_link(professor_id: str, total_classes: int = 5, subjects: Iterable[str] = ("math",),
              section_id: str = SECTION_ID, owner_id: Optional[str] = None) -> ProfessorLink:
    return ProfessorLink(
        section_id=section_id,
        professor=make_professor(professor_id, subjects, owner_id),
        total_classes=total_classes
    )


def make_preference(professor_id: str, value: float, importance: float = 1.0,
                    class_id: Optional[str] = None, subject_id: Optional[str] = None,
                    section_id: str = SECTION_ID) -> Preference:
    return Preference(
        section_id=section_id,
        professor_id=professor_id,
        class_id=class_id,
        subject_id=subject_id,
        value=value,
        importance=importance
    )


def weekly_fixture():
    """A week of overlapping classes over three subjects and four professors."""
    classes = [
        make_class("m1", "monday", "08:00", "09:30", "math"),
        make_class("m2", "monday", "09:00", "10:00", "physics"),
        make_class("m3", "monday", "09:30", "11:00", "math"),
        make_class("m4", "monday", "10:00", "11:00", "chemistry"),
        make_class("t1", "tuesday", "08:00", "09:00", "math"),
        make_class("t2", "tuesday", "08:00", "09:00", "math"),
        make_class("t3", "tuesday", "08:30", "10:00", "physics"),
        make_class("t4", "tuesday", "13:00", "14:00", "chemistry"),
        make_class("w1", "wednesday", "08:00", "10:00", "physics"),
        make_class("w2", "wednesday", "09:00", "11:00", "math"),
        make_class("w3", "wednesday", "10:00", "12:00", "chemistry"),
        make_class("f1", "friday", "14:00", "15:00", "biology"),
    ]
    links = [
        make_link("p1", 4, ("math", "physics")),
        make_link("p2", 3, ("math",)),
        make_link("p3", 2, ("physics", "chemistry")),
        make_link("p4", 3, ("chemistry", "math")),
    ]
    preferences = [
        make_preference("p1", 5, 2, subject_id="physics"),
        make_preference("p1", -2, 1, class_id="m1"),
        make_preference("p2", 4, 1, subject_id="math"),
        make_preference("p3", 3, 3, subject_id="chemistry"),
        make_preference("p4", 1, 1),
        make_preference("p4", -5, 1, class_id="w3"),
        make_preference("p2", 2, 0, class_id="t1"),
    ]
    return classes, links, preferences



def capacity_chain_fixture():
    """Tuesday classes where one more slot for p0 reshuffles p1's day.

    Returns the classes plus the links before and after p0 gains capacity.
    """
    classes = [
        make_class("c0", "tuesday", "11:00", "13:00", "a"),
        make_class("c1", "tuesday", "10:00", "12:00", "b"),
        make_class("c2", "tuesday", "10:00", "11:00", "a"),
        make_class("c3", "monday", "08:00", "09:00", "b"),
        make_class("c4", "tuesday", "09:00", "11:00", "a"),
    ]
    before = [make_link("p0", 0, ("a",)), make_link("p1", 3, ("a", "b"))]
    after = [make_link("p0", 1, ("a",)), make_link("p1", 3, ("a", "b"))]
    return classes, before, after

def assert_hard_constraints(result: SolveResult, classes, links):
    """Independent check of eligibility, capacity and overlap rules."""
    by_id = {cls.class_id: cls for cls in classes}
    by_professor = {link.professor_id: link for link in links}
    taught = {}

    for class_id, professor_id in result.assignments.items():
        if professor_id is None:
            continue
        link = by_professor[professor_id]
        assert by_id[class_id].subject_id in link.professor.subjects
        taught.setdefault(professor_id, []).append(by_id[class_id])

    for professor_id, assigned in taught.items():
        assert len(assigned) <= by_professor[professor_id].total_classes
        for i, first in enumerate(assigned):
            for second in assigned[i + 1:]:
                assert not conflicts(first, second), \
                    f"{professor_id} teaches overlapping {first.class_id} and {second.class_id}"
