"""
Outcome aggregation: turn the allocator's final state into an AssignmentResult,
plus a plain-text summary for terminal output.
"""

from typing import Dict, Iterable, List, Optional

from .allocator import Allocator
from .models import (
    AssignmentResult, Member, OverCapacityMember, Task, UnassignedTask,
    REASON_NO_STAFF,
)


def task_display_name(task: Optional[Task]) -> str:
    if task is None:
        return "Unknown Task"
    if task.code:
        return f"{task.code}: {task.name}"
    return task.name


def no_staff_result(tasks: Iterable[Task]) -> AssignmentResult:
    """Every task unassigned, no workloads: the day has no roster."""
    return AssignmentResult(
        unassigned_tasks=[UnassignedTask(task=t, reason=REASON_NO_STAFF) for t in tasks],
    )


def aggregate(allocator: Allocator, tasks: Iterable[Task]) -> AssignmentResult:
    by_id = {t.id: t for t in tasks}

    unassigned = [
        UnassignedTask(task=by_id[tid], reason=", ".join(reasons))
        for tid, reasons in allocator.reasons.items()
        if tid in by_id
    ]
    unassigned_ids = [u.task.id for u in unassigned]

    workloads = []
    for m in allocator.members:
        wl = allocator.workloads[m.id]
        wl.unassigned_task_ids = list(unassigned_ids)
        workloads.append(wl)

    # Generated assignments never overflow; only locked minutes can.
    over = [
        OverCapacityMember(
            member_id=m.id, name=m.name, date=allocator.date,
            over_capacity=allocator.workloads[m.id].total_duration - allocator.workloads[m.id].capacity,
        )
        for m in allocator.members
        if allocator.workloads[m.id].total_duration > allocator.workloads[m.id].capacity
    ]

    return AssignmentResult(
        generated_assignments=list(allocator.assignments),
        daily_workloads=workloads,
        unassigned_tasks=unassigned,
        over_capacity_members=over,
    )


def format_summary(
    result: AssignmentResult,
    members: Iterable[Member],
    tasks: Iterable[Task],
    date: str = "",
) -> List[str]:
    """Report lines: per-member load and tasks, then unassigned and over-capacity."""
    names: Dict[str, str] = {m.id: m.name for m in members}
    task_by_id = {t.id: t for t in tasks}
    lines = []
    if date:
        lines.append(f"Plan for {date}")

    if not result.daily_workloads:
        lines.append("  No workloads (no staff scheduled).")
    for wl in result.daily_workloads:
        name = names.get(wl.member_id, wl.member_id)
        lines.append(
            f"  {name}: {wl.total_duration}/{wl.capacity} min"
            + (f" (+{wl.upkeep_duration} upkeep)" if wl.upkeep_duration else "")
        )
        for a in wl.assigned_tasks:
            flag = " [locked]" if a.locked else ""
            lines.append(
                f"    {a.start_time}-{a.end_time}  {task_display_name(task_by_id.get(a.task_id))}{flag}"
            )

    if result.unassigned_tasks:
        lines.append(f"  Unassigned ({len(result.unassigned_tasks)}):")
        for u in result.unassigned_tasks:
            lines.append(f"    {task_display_name(u.task)} — {u.reason or 'unknown'}")

    for oc in result.over_capacity_members:
        lines.append(f"  OVER CAPACITY: {oc.name} by {oc.over_capacity} min")
    return lines
