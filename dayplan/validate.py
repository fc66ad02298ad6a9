"""
Post-run validation and pre-run input checks.
"""

from datetime import date
from typing import Dict, List, Tuple

from .allocator import skill_map
from .capacity import resolve_capacity, scheduled_member_ids
from .models import (
    AssignmentRequest, AssignmentResult, DUE_CONTINUOUS, DUE_EOD, RECURRENCE_WEEKLY,
)
from .timeutil import SHORT_WEEKDAY_NAMES, WEEKDAY_NAMES, is_clock_time


def validate_assignments(
    result: AssignmentResult,
    request: AssignmentRequest,
) -> Tuple[bool, List[str]]:
    """
    Re-check a result against the allocation invariants.
    Returns (is_valid, list_of_violation_messages).
    """
    violations = []
    tasks = {t.id: t for t in request.tasks}
    members = {m.id: m for m in request.members}
    day = request.schedule_day()
    scheduled = scheduled_member_ids(day)

    # Replay in commit order: locked minutes first, then each generated one.
    used: Dict[str, int] = {}
    for a in result.generated_assignments:
        if a.locked:
            task = tasks.get(a.task_id)
            if task is None or not task.is_upkeep:
                used[a.member_id] = used.get(a.member_id, 0) + a.duration

    per_task: Dict[str, List[str]] = {}
    for a in result.generated_assignments:
        if a.locked:
            continue
        task = tasks.get(a.task_id)
        member = members.get(a.member_id)
        if task is None:
            violations.append(f"{a.id}: unknown task {a.task_id}")
            continue
        if member is None:
            violations.append(f"{a.id}: unknown member {a.member_id}")
            continue
        if a.member_id not in scheduled:
            violations.append(f"{a.id}: {member.name} is not scheduled on {a.date}")
        if a.date != request.target_date:
            violations.append(f"{a.id}: dated {a.date}, expected {request.target_date}")

        if not task.is_upkeep:
            used[a.member_id] = used.get(a.member_id, 0) + a.duration
            cap = resolve_capacity(member, day)
            if used[a.member_id] > cap:
                violations.append(
                    f"{member.name}: {used[a.member_id]} min after {task.id} (capacity {cap})")

        holders = per_task.setdefault(a.task_id, [])
        if a.member_id in holders and not task.allow_multi_assign:
            violations.append(f"{task.id}: assigned to {member.name} twice")
        holders.append(a.member_id)

    for tid, holders in per_task.items():
        need = tasks[tid].required_coverage
        if len(holders) > need:
            violations.append(f"{tid}: {len(holders)} assignments (coverage {need})")

    for wl in result.daily_workloads:
        ordinary = sum(
            a.duration for a in wl.assigned_tasks
            if not (tasks.get(a.task_id) and tasks[a.task_id].is_upkeep)
        )
        if ordinary != wl.total_duration:
            violations.append(
                f"{wl.member_id}: workload total {wl.total_duration} != assigned {ordinary}")

    return len(violations) == 0, violations


def _shift_clock_issues(day, s) -> List[str]:
    if is_clock_time(s.start) and is_clock_time(s.end):
        return []
    return [f"{day.date}: shift {s.id} has bad times {s.start!r}-{s.end!r}"]


def _task_clock_issues(t) -> List[str]:
    msgs = []
    if not is_clock_time(t.earliest_start):
        msgs.append(f"{t.id}: earliest_start {t.earliest_start!r} is not HH:MM")
    if t.due_by and t.due_by not in (DUE_EOD, DUE_CONTINUOUS) and not is_clock_time(t.due_by):
        msgs.append(f"{t.id}: due_by {t.due_by!r} is not HH:MM, EOD or Continuous")
    return msgs


def clock_issues(request: AssignmentRequest) -> List[str]:
    """Malformed clock strings on shifts and tasks; the allocator cannot plan with these."""
    msgs = []
    for day in request.weekly_schedule:
        for s in day.shifts:
            msgs.extend(_shift_clock_issues(day, s))
    for t in request.tasks:
        msgs.extend(_task_clock_issues(t))
    return msgs


def check_inputs(request: AssignmentRequest) -> Tuple[bool, List[str]]:
    """Flag malformed or unreferenced input before a run."""
    msgs = []
    try:
        date.fromisoformat(request.target_date)
    except ValueError:
        msgs.append(f"target_date {request.target_date!r} is not YYYY-MM-DD")

    member_ids = {m.id for m in request.members}
    skill_ids = {s.id for s in request.skills}
    held = skill_map(request.members, request.member_skills)
    all_held = set().union(*held.values()) if held else set()

    for ms in request.member_skills:
        if ms.member_id not in member_ids:
            msgs.append(f"member_skills: unknown member {ms.member_id}")

    for day in request.weekly_schedule:
        for s in day.shifts:
            if s.member_id not in member_ids:
                msgs.append(f"{day.date}: shift {s.id} names unknown member {s.member_id}")
            msgs.extend(_shift_clock_issues(day, s))

    if request.schedule_day() is None:
        msgs.append(f"{request.target_date}: no roster for the target date")

    weekdays = {n.lower() for n in WEEKDAY_NAMES + SHORT_WEEKDAY_NAMES}
    for t in request.tasks:
        if t.estimated_duration < 0:
            msgs.append(f"{t.id}: negative duration {t.estimated_duration}")
        msgs.extend(_task_clock_issues(t))
        if t.recurrence_type == RECURRENCE_WEEKLY and (t.recurrence_detail or "").strip().lower() not in weekdays:
            msgs.append(f"{t.id}: weekly task without a valid weekday ({t.recurrence_detail!r})")
        for sid in t.skill_ids or []:
            if skill_ids and sid not in skill_ids:
                msgs.append(f"{t.id}: unknown skill {sid}")
            elif sid not in all_held:
                msgs.append(f"{t.id}: no member holds skill {sid}")

    return len(msgs) == 0, msgs
