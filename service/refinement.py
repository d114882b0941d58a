"""
Bounded local search over a finished assignment.

Works on immutable snapshots: every candidate move produces a new mapping,
and a rejected move leaves nothing to roll back. Two move types are tried:

* swap: two assigned classes exchange professors (loads stay unchanged)
* relocate: one assigned class moves to another eligible professor with
  spare capacity

Only the single best strictly improving move is applied per iteration.
"""
import logging
from typing import Dict, List, Mapping, Optional, Tuple

from service.context import SolveContext, group_by_professor, hard_constraint_breaches
from service.errors import InternalConsistencyError

logger = logging.getLogger(__name__)

EPSILON = 1e-9

Move = Tuple[Tuple[str, str], ...]  # ((class_id, new_professor_id), ...)


def find_best_move(context: SolveContext, assignments: Mapping[str, Optional[str]]) -> Optional[Tuple[Move, float]]:
    """Return the most improving legal move and its score gain, or None."""
    by_professor = group_by_professor(context, assignments)
    assigned_ids = [
        cls.class_id for cls in context.ordered_classes
        if assignments.get(cls.class_id) is not None
    ]

    best: Optional[Move] = None
    best_gain = EPSILON

    # Relocations
    for class_id in assigned_ids:
        current = assignments[class_id]
        section_class = context.classes[class_id]
        current_score = context.score(current, class_id)
        for professor_id in context.candidates[class_id]:
            if professor_id == current:
                continue
            taught = by_professor.get(professor_id, [])
            if len(taught) >= context.limits[professor_id]:
                continue
            if context.detector.has_conflict(section_class, taught):
                continue
            gain = context.score(professor_id, class_id) - current_score
            if gain > best_gain:
                best, best_gain = ((class_id, professor_id),), gain

    # Pairwise swaps
    for i, first_id in enumerate(assigned_ids):
        first_prof = assignments[first_id]
        first_class = context.classes[first_id]
        for second_id in assigned_ids[i + 1:]:
            second_prof = assignments[second_id]
            if second_prof == first_prof:
                continue
            if not context.is_candidate(second_prof, first_id) or not context.is_candidate(first_prof, second_id):
                continue
            gain = (
                context.score(second_prof, first_id) + context.score(first_prof, second_id)
                - context.score(first_prof, first_id) - context.score(second_prof, second_id)
            )
            if gain <= best_gain:
                continue
            second_class = context.classes[second_id]
            second_others = _without(by_professor.get(second_prof, []), second_id)
            if context.detector.has_conflict(first_class, second_others):
                continue
            first_others = _without(by_professor.get(first_prof, []), first_id)
            if context.detector.has_conflict(second_class, first_others):
                continue
            best, best_gain = ((first_id, second_prof), (second_id, first_prof)), gain

    if best is None:
        return None
    return best, best_gain


def apply_move(assignments: Mapping[str, Optional[str]], move: Move) -> Dict[str, Optional[str]]:
    candidate = dict(assignments)
    for class_id, professor_id in move:
        candidate[class_id] = professor_id
    return candidate


def refine_assignments(
    context: SolveContext,
    assignments: Mapping[str, Optional[str]],
    max_iterations: int
) -> Tuple[Dict[str, Optional[str]], int]:
    """
    Improve an assignment until no move helps or the budget runs out.

    Returns:
        The refined mapping and the number of moves applied
    """
    current = dict(assignments)
    moves = 0

    while moves < max_iterations:
        found = find_best_move(context, current)
        if found is None:
            break
        move, gain = found
        candidate = apply_move(current, move)

        breaches = hard_constraint_breaches(context, candidate)
        if breaches:
            raise InternalConsistencyError(
                f"Refinement move {move} broke hard constraints: {'; '.join(breaches)}"
            )

        logger.debug(f"Refinement move {moves + 1}: {move} (+{gain:.3f})")
        current = candidate
        moves += 1

    return current, moves


def _without(classes: List, class_id: str) -> List:
    return [cls for cls in classes if cls.class_id != class_id]
