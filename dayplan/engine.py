"""
Entry points: plan one target day, or a run of consecutive days.
"""

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Dict, List, Optional

from .allocator import Allocator
from .models import AssignmentRequest, AssignmentResult
from .ranking import rank_tasks
from .report import aggregate, no_staff_result

logger = logging.getLogger(__name__)


def generate_assignments(request: AssignmentRequest) -> AssignmentResult:
    """
    Plan request.target_date.

    Steps:
    1) No roster (or an empty one) for the date → every task unassigned
    2) Seed per-member capacity from the roster
    3) Pre-consume locked assignments for the date
    4) Rank tasks and allocate greedily in that order
    5) Aggregate workloads, unassigned tasks and over-capacity members
    """
    target = request.target_date
    day = request.schedule_day(target)
    logger.info("Assignment run started for %s (%d tasks)", target, len(request.tasks))

    if day is None or not day.shifts:
        logger.warning("No scheduled members for %s; all tasks unassigned", target)
        return no_staff_result(request.tasks)

    allocator = Allocator(target, request.members, day, request.member_skills)
    allocator.preload(request.locked_assignments, request.tasks)
    allocator.run(rank_tasks(request.tasks, request.order_set_items))
    result = aggregate(allocator, request.tasks)

    logger.info(
        "Assignment run finished for %s: %d assignment(s), %d unassigned",
        target, len(result.generated_assignments), len(result.unassigned_tasks),
    )
    return result


def next_dates(start: str, days: int) -> List[str]:
    first = date.fromisoformat(start)
    return [(first + timedelta(days=i)).isoformat() for i in range(days)]


def generate_range(
    request: AssignmentRequest,
    days: int,
    start_date: Optional[str] = None,
) -> Dict[str, AssignmentResult]:
    """
    Plan `days` consecutive days starting at start_date (default: target_date).
    Days are planned one after another; the only state handed forward is the
    locked-assignment list, which is passed whole to every day.
    """
    results: Dict[str, AssignmentResult] = {}
    for d in next_dates(start_date or request.target_date, days):
        results[d] = generate_assignments(replace(request, target_date=d))
    return results
