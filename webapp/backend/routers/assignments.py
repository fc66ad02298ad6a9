"""Assignment generation endpoints: plan one day, a run of days, or check input."""
from datetime import date

from fastapi import APIRouter, HTTPException, Query

from dayplan.engine import generate_assignments, generate_range
from dayplan.models import AssignmentRequest
from dayplan.schemas import AssignmentRequestIn, AssignmentResultOut, CheckOut, RangeResultOut
from dayplan.validate import check_inputs, clock_issues

router = APIRouter()

MAX_RANGE_DAYS = 31


def _plannable(data: AssignmentRequestIn) -> AssignmentRequest:
    """Convert the body, rejecting dates and clock strings the allocator cannot read."""
    try:
        date.fromisoformat(data.target_date)
    except ValueError:
        raise HTTPException(400, f"target_date must be YYYY-MM-DD, got {data.target_date!r}")
    request = data.to_request()
    issues = clock_issues(request)
    if issues:
        raise HTTPException(400, "; ".join(issues))
    return request


@router.post("/generate", response_model=AssignmentResultOut)
def generate(data: AssignmentRequestIn):
    """Plan data.target_date. Unassignable tasks come back in unassigned_tasks, not as errors."""
    result = generate_assignments(_plannable(data))
    return AssignmentResultOut.from_result(result)


@router.post("/generate-range", response_model=RangeResultOut)
def generate_days(data: AssignmentRequestIn, days: int = Query(7, ge=1, le=MAX_RANGE_DAYS)):
    results = generate_range(_plannable(data), days)
    return RangeResultOut(days={d: AssignmentResultOut.from_result(r) for d, r in results.items()})


@router.post("/check", response_model=CheckOut)
def check(data: AssignmentRequestIn):
    ok, messages = check_inputs(data.to_request())
    return CheckOut(ok=ok, messages=messages)
