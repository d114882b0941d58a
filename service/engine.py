"""
Entry point of the assignment engine.

Every call builds its own solver, scorer and capacity tracker, so solves for
different sections can run in parallel threads without sharing state.
"""
from typing import List, Optional

from config import settings
from models.domain import Preference, ProfessorLink, Section, SectionClass, SolveResult
from service.assignment_solver import AssignmentSolver
from service.errors import ValidationError
from service.ortools_solver import ORToolsAssignmentSolver

STRATEGIES = ("greedy", "optimal")


def solve_section(
    section_id: str,
    classes: List[SectionClass],
    professor_links: List[ProfessorLink],
    preferences: List[Preference],
    strategy: Optional[str] = None,
    refine: Optional[bool] = None,
    owner_id: Optional[str] = None
) -> SolveResult:
    """
    Assign professors to the classes of one section.

    Args:
        section_id: Section being solved
        classes: Fixed time slots of the section
        professor_links: Professors linked to the section with their max load
        preferences: Weighted preference records of the section
        strategy: "greedy" or "optimal"; defaults to settings.solver_strategy
        refine: Run local search after assignment; defaults to settings.refinement_enabled
        owner_id: Section owner, checked against professor owners when set

    Returns:
        SolveResult with the mapping, total score and unassignable classes

    Raises:
        ValidationError: Input is malformed or inconsistent
        InternalConsistencyError: Solver bug
    """
    strategy = (strategy or settings.solver_strategy).lower()
    if refine is None:
        refine = settings.refinement_enabled

    common = dict(
        refine=refine,
        max_refinement_iterations=settings.refinement_max_iterations,
        owner_id=owner_id
    )

    if strategy == "greedy":
        solver = AssignmentSolver(section_id, classes, professor_links, preferences, **common)
    elif strategy == "optimal":
        solver = ORToolsAssignmentSolver(
            section_id, classes, professor_links, preferences,
            time_limit_seconds=settings.solver_timeout_seconds,
            random_seed=settings.solver_random_seed,
            num_workers=settings.solver_num_workers,
            **common
        )
    else:
        raise ValidationError.single(
            "strategy", f"Unknown strategy '{strategy}'. Use one of: {', '.join(STRATEGIES)}"
        )

    return solver.solve()


def solve(section: Section, **kwargs) -> SolveResult:
    """Solve a full Section snapshot."""
    return solve_section(
        section.section_id,
        section.classes,
        section.professor_links,
        section.preferences,
        owner_id=section.owner_id,
        **kwargs
    )
