from fastapi import APIRouter
from models.schemas import SectionScheduleRequest, SectionScheduleResponse
from models.domain import SolveResult
from service import solve_section
from service.reporter import build_timetable
from service.validation import validate_section_input

# Create a router instance
router = APIRouter()


def _to_response(result: SolveResult, request: SectionScheduleRequest) -> SectionScheduleResponse:
    return SectionScheduleResponse(
        section_id=result.section_id,
        status="COMPLETE" if result.is_complete else "PARTIAL",
        assignments=result.assignments,
        total_score=result.total_score,
        violations=result.violations,
        timetable=build_timetable(result, request.classes, request.professor_links),
        strategy=result.strategy,
        refinement_moves=result.refinement_moves,
        professor_loads=result.professor_loads,
        solve_time_seconds=result.solve_time_seconds
    )


@router.post("/sections/{section_id}/schedule/with-preference", response_model=SectionScheduleResponse)
def solve_schedule_with_preference(section_id: str, request: SectionScheduleRequest):
    """
    Assign professors to the section's classes, maximizing preference score.

    Classes no professor can take come back in ``violations``; the rest of
    the section is still staffed.
    """
    result = solve_section(
        section_id,
        request.classes,
        request.professor_links,
        request.preferences,
        strategy=request.strategy,
        refine=request.refine,
        owner_id=request.owner_id
    )
    return _to_response(result, request)


@router.post("/sections/{section_id}/schedule/without-preference", response_model=SectionScheduleResponse)
def solve_schedule_without_preference(section_id: str, request: SectionScheduleRequest):
    """
    Assign professors considering hard constraints only.

    Preferences are still validated against the section but every pairing
    scores zero, so the result only reflects feasibility.
    """
    validate_section_input(
        section_id,
        request.classes,
        request.professor_links,
        request.preferences,
        request.owner_id
    )
    result = solve_section(
        section_id,
        request.classes,
        request.professor_links,
        [],
        strategy=request.strategy,
        refine=request.refine,
        owner_id=request.owner_id
    )
    return _to_response(result, request)
