"""
Packaging of solver output into an immutable SolveResult.
"""
from datetime import datetime
from typing import Dict, List, Mapping, Optional

from models.domain import ProfessorLink, SectionClass, SolveResult, Violation
from models.schemas import DaySchedule, ScheduleSlot
from service.conflicts import day_index, parse_time
from service.context import SolveContext, group_by_professor, hard_constraint_breaches
from service.errors import InternalConsistencyError


class ResultReporter:
    """Checks a finished assignment against the solve context and freezes it."""

    def __init__(self, context: SolveContext):
        self.context = context

    def build(
        self,
        assignments: Mapping[str, Optional[str]],
        violations: List[Violation],
        strategy: str = "greedy",
        refinement_moves: int = 0,
        solve_time_seconds: float = 0.0
    ) -> SolveResult:
        context = self.context

        unknown = [class_id for class_id in assignments if class_id not in context.classes]
        if unknown:
            raise InternalConsistencyError(
                f"Assignment map references unknown classes: {', '.join(sorted(unknown))}",
                class_id=unknown[0]
            )
        missing = [class_id for class_id in context.classes if class_id not in assignments]
        if missing:
            raise InternalConsistencyError(
                f"Assignment map is missing classes: {', '.join(missing)}",
                class_id=missing[0]
            )

        breaches = hard_constraint_breaches(context, assignments)
        if breaches:
            raise InternalConsistencyError("; ".join(breaches))

        by_class = {violation.class_id: violation for violation in violations}
        for class_id, professor_id in assignments.items():
            if professor_id is None and class_id not in by_class:
                raise InternalConsistencyError(f"Class {class_id} is unassigned without a violation", class_id=class_id)
            if professor_id is not None and class_id in by_class:
                raise InternalConsistencyError(f"Class {class_id} is assigned but reported as a violation", class_id=class_id)

        # Processing order for both the mapping and the violation list
        ordered = {cls.class_id: assignments[cls.class_id] for cls in context.ordered_classes}
        total_score = sum(
            context.score(professor_id, class_id)
            for class_id, professor_id in ordered.items()
            if professor_id is not None
        )

        loads: Dict[str, int] = {professor_id: 0 for professor_id in sorted(context.limits)}
        for professor_id, taught in group_by_professor(context, ordered).items():
            loads[professor_id] = len(taught)

        return SolveResult(
            section_id=context.section_id,
            assignments=ordered,
            total_score=total_score,
            violations=[by_class[class_id] for class_id in ordered if class_id in by_class],
            strategy=strategy,
            refinement_moves=refinement_moves,
            professor_loads=loads,
            solve_time_seconds=solve_time_seconds
        )


def build_timetable(
    result: SolveResult,
    classes: List[SectionClass],
    professor_links: List[ProfessorLink]
) -> List[DaySchedule]:
    """Group a result by day for display, classes sorted by start time."""
    names = {link.professor_id: link.professor.name for link in professor_links}
    ordered = sorted(
        classes,
        key=lambda cls: (day_index(cls.day), parse_time(cls.start_time), cls.class_id)
    )

    timetable: List[DaySchedule] = []
    slots_by_day: Dict[str, List[ScheduleSlot]] = {}
    for section_class in ordered:
        professor_id = result.assignments.get(section_class.class_id)
        day = section_class.day.lower()
        slots_by_day.setdefault(day, []).append(ScheduleSlot(
            day=day.capitalize(),
            start_time=section_class.start_time,
            end_time=section_class.end_time,
            duration=_format_duration(section_class.start_time, section_class.end_time),
            class_id=section_class.class_id,
            subject_id=section_class.subject_id,
            subject_name=section_class.subject_name,
            professor_id=professor_id,
            professor_name=names.get(professor_id) if professor_id else None
        ))

    # Classes are sorted by weekday, so insertion order is weekday order
    for day, slots in slots_by_day.items():
        timetable.append(DaySchedule(day=day.capitalize(), slots=slots))
    return timetable


def _format_duration(start_str: str, end_str: str) -> str:
    """Format duration between two times as 'Xh Ymin'."""
    start = datetime.strptime(start_str, '%H:%M')
    end = datetime.strptime(end_str, '%H:%M')
    total_minutes = int((end - start).total_seconds() / 60)

    hours = total_minutes // 60
    minutes = total_minutes % 60

    if hours > 0 and minutes > 0:
        return f"{hours}h {minutes}min"
    elif hours > 0:
        return f"{hours}h"
    else:
        return f"{minutes}min"
