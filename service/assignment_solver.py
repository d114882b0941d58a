"""
Greedy professor-to-class assignment for one section.

Classes are processed in a fixed order (day, start time, class id). Each class
goes to the best-scoring eligible professor who is free at that time and
still has capacity; otherwise it is recorded as a violation and the solve
moves on. An optional local-search pass then improves the total score
without ever breaking a hard constraint.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from models.domain import Preference, ProfessorLink, SectionClass, SolveResult, Violation, ViolationReason
from service.capacity import CapacityTracker
from service.context import SolveContext, group_by_professor
from service.errors import InternalConsistencyError
from service.refinement import refine_assignments
from service.reporter import ResultReporter
from service.validation import validate_section_input

logger = logging.getLogger(__name__)


class SolverState(str, Enum):
    INITIALIZED = "INITIALIZED"
    ASSIGNING = "ASSIGNING"
    REFINING = "REFINING"
    FINALIZED = "FINALIZED"


class AssignmentSolver:
    """
    Single-use solver for one section snapshot.

    Create a new instance per solve; calling solve() twice raises
    InternalConsistencyError.
    """

    strategy = "greedy"

    def __init__(
        self,
        section_id: str,
        classes: List[SectionClass],
        professor_links: List[ProfessorLink],
        preferences: List[Preference],
        refine: bool = True,
        max_refinement_iterations: int = 200,
        owner_id: Optional[str] = None
    ):
        """
        Initialize the solver.

        Args:
            section_id: Section every input record must belong to
            classes: Fixed time slots to staff
            professor_links: Professors linked to the section with their max load
            preferences: Weighted preference records for the section
            refine: If True, run the swap/relocate local search after assignment
            max_refinement_iterations: Upper bound on applied refinement moves
            owner_id: Section owner, checked against professor owners when set
        """
        self.section_id = section_id
        self.classes = list(classes)
        self.professor_links = list(professor_links)
        self.preferences = list(preferences)
        self.refine = refine
        self.max_refinement_iterations = max_refinement_iterations
        self.owner_id = owner_id

        self.state = SolverState.INITIALIZED
        self._started = False
        self.context: Optional[SolveContext] = None
        self.tracker: Optional[CapacityTracker] = None
        self.violations: Dict[str, Violation] = {}

    def solve(self) -> SolveResult:
        """
        Validate the snapshot, assign professors, refine and report.

        Raises:
            ValidationError: Input is malformed; no assignment work was done
            InternalConsistencyError: The solver broke one of its invariants
        """
        if self._started:
            raise InternalConsistencyError(
                f"Solver for section {self.section_id} was already used (state {self.state.value})"
            )
        self._started = True
        start_time = datetime.now()

        logger.info(
            f"Solving section {self.section_id}: {len(self.classes)} classes, "
            f"{len(self.professor_links)} professors, {len(self.preferences)} preferences "
            f"(strategy={self.strategy})"
        )

        # Step 1: Validation is fatal and happens before any assignment
        validate_section_input(
            self.section_id, self.classes, self.professor_links, self.preferences, self.owner_id
        )
        self.context = SolveContext(self.section_id, self.classes, self.professor_links, self.preferences)
        self.tracker = CapacityTracker(self.context.limits)

        # Step 2: Per-class assignment
        self.state = SolverState.ASSIGNING
        assignments = self._assign()

        # Step 3: Optional local improvement
        moves = 0
        if self.refine and any(pid is not None for pid in assignments.values()):
            self.state = SolverState.REFINING
            assignments, moves = refine_assignments(
                self.context, assignments, self.max_refinement_iterations
            )
            if moves:
                assignments = self._settle_unassigned(assignments)

        # Step 4: Package the result
        self.state = SolverState.FINALIZED
        solve_time = (datetime.now() - start_time).total_seconds()
        result = ResultReporter(self.context).build(
            assignments,
            list(self.violations.values()),
            strategy=self.strategy,
            refinement_moves=moves,
            solve_time_seconds=solve_time
        )

        logger.info(
            f"Section {self.section_id} solved: {len(assignments) - len(result.violations)}/"
            f"{len(assignments)} classes assigned, score {result.total_score}, "
            f"{moves} refinement moves"
        )
        return result

    def _assign(self) -> Dict[str, Optional[str]]:
        """Greedy single pass in processing order."""
        assignments: Dict[str, Optional[str]] = {}
        confirmed: Dict[str, List[SectionClass]] = {}

        for section_class in self.context.ordered_classes:
            professor_id = self._place(section_class, confirmed, self.tracker)
            assignments[section_class.class_id] = professor_id
            if professor_id is not None:
                confirmed.setdefault(professor_id, []).append(section_class)

        return assignments

    def _place(
        self,
        section_class: SectionClass,
        confirmed: Dict[str, List[SectionClass]],
        tracker: CapacityTracker
    ) -> Optional[str]:
        """
        Try candidates best-first; record a violation if none fits.

        The conflict check runs before the capacity check, so the reason
        reported is whichever check rejected the last candidate.
        """
        candidates = self.context.candidates[section_class.class_id]
        reason: Optional[ViolationReason] = None
        busy = full = 0

        for professor_id in candidates:
            if self.context.detector.has_conflict(section_class, confirmed.get(professor_id, [])):
                reason = ViolationReason.TIME_CONFLICT
                busy += 1
                continue
            if not tracker.try_reserve(professor_id):
                reason = ViolationReason.CAPACITY_EXHAUSTED
                full += 1
                continue
            self.violations.pop(section_class.class_id, None)
            return professor_id

        if reason is None:
            reason = ViolationReason.NO_ELIGIBLE_PROFESSOR
        self.violations[section_class.class_id] = self._violation(section_class, reason, busy, full)
        logger.debug(f"Class {section_class.class_id} left unassigned: {reason.value}")
        return None

    def _settle_unassigned(self, assignments: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
        """
        Give unassigned classes another attempt against a finished mapping.

        Rebuilds the capacity counters from the mapping, so it also serves to
        diagnose violations for mappings produced outside the greedy pass.
        """
        tracker = CapacityTracker(self.context.limits)
        for class_id, professor_id in assignments.items():
            if professor_id is not None and not tracker.try_reserve(professor_id):
                raise InternalConsistencyError(
                    f"Professor {professor_id} exceeds capacity in the assignment for section {self.section_id}",
                    class_id=class_id,
                    professor_id=professor_id
                )

        settled = dict(assignments)
        confirmed = group_by_professor(self.context, settled)
        for section_class in self.context.ordered_classes:
            if settled.get(section_class.class_id) is not None:
                continue
            professor_id = self._place(section_class, confirmed, tracker)
            if professor_id is not None:
                settled[section_class.class_id] = professor_id
                confirmed.setdefault(professor_id, []).append(section_class)

        self.tracker = tracker
        return settled

    def _violation(self, section_class: SectionClass, reason: ViolationReason, busy: int, full: int) -> Violation:
        slot = f"{section_class.day} {section_class.start_time}-{section_class.end_time}"
        subject = section_class.subject_name or section_class.subject_id

        if reason == ViolationReason.NO_ELIGIBLE_PROFESSOR:
            detail = f"No professor linked to section {self.section_id} can teach {subject}"
        else:
            tried = len(self.context.candidates[section_class.class_id])
            detail = (
                f"{tried} eligible professor(s) for {subject} on {slot}: "
                f"{busy} already teaching at that time, {full} at capacity"
            )
        return Violation(class_id=section_class.class_id, reason_code=reason, detail=detail)
