"""
Up-front validation of a section snapshot.

All problems are collected and raised together as one ValidationError so the
caller can fix the input in a single round trip.
"""
import math
from typing import Dict, List, Optional

from models.domain import Preference, ProfessorLink, SectionClass
from service.conflicts import class_interval
from service.errors import ValidationError


def validate_section_input(
    section_id: str,
    classes: List[SectionClass],
    professor_links: List[ProfessorLink],
    preferences: List[Preference],
    owner_id: Optional[str] = None
):
    """Raise ValidationError if the snapshot is malformed or internally inconsistent."""
    errors: Dict[str, List[str]] = {}

    def add(field: str, message: str):
        errors.setdefault(field, []).append(message)

    class_ids = set()
    for cls in classes:
        field = f"classes -> {cls.class_id}"
        if cls.class_id in class_ids:
            add(field, f"Duplicate class id {cls.class_id}")
        class_ids.add(cls.class_id)
        if cls.section_id != section_id:
            add(field, f"Class {cls.class_id} belongs to section {cls.section_id}, not {section_id}")
        try:
            class_interval(cls)
        except ValidationError as exc:
            for messages in exc.errors.values():
                for message in messages:
                    add(field, message)

    linked_professors = set()
    for link in professor_links:
        field = f"professor_links -> {link.professor_id}"
        if link.section_id != section_id:
            add(field, f"Professor {link.professor_id} is linked to section {link.section_id}, not {section_id}")
        if link.professor_id in linked_professors:
            add(field, f"Professor {link.professor_id} is linked to the section more than once")
        linked_professors.add(link.professor_id)
        if link.total_classes < 0:
            add(field, f"Professor {link.professor.name} has negative total classes ({link.total_classes})")
        if owner_id is not None and link.professor.owner_id is not None and link.professor.owner_id != owner_id:
            add(field, f"Professor {link.professor.name} belongs to a different owner than section {section_id}")

    for index, pref in enumerate(preferences):
        field = f"preferences -> {pref.preference_id or index}"
        if pref.section_id != section_id:
            add(field, f"Preference belongs to section {pref.section_id}, not {section_id}")
        if pref.professor_id not in linked_professors:
            add(field, f"Preference references professor {pref.professor_id} who is not linked to the section")
        if pref.class_id is not None and pref.class_id not in class_ids:
            add(field, f"Preference references unknown class {pref.class_id}")
        if not math.isfinite(pref.value):
            add(field, f"Preference value must be a finite number ({pref.value})")
        if not math.isfinite(pref.importance):
            add(field, f"Preference importance must be a finite number ({pref.importance})")
        elif pref.importance < 0:
            add(field, f"Preference importance must not be negative ({pref.importance})")

    if errors:
        raise ValidationError(errors)
