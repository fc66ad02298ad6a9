"""Builders for engine tests."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from dayplan.models import (
    AssignmentRequest, Member, MemberSkill, ScheduleDay, ScheduleShift, Skill, Task,
)
from dayplan.timeutil import task_number_from_code

MONDAY = "2024-06-03"
TUESDAY = "2024-06-04"


def member(mid: str, commitments: int = 0, name: Optional[str] = None) -> Member:
    return Member(id=mid, name=name or mid.title(), fixed_commitments_minutes=commitments)


def task(tid: str, duration: int = 60, **overrides) -> Task:
    if "code" in overrides and "task_number" not in overrides:
        overrides["task_number"] = task_number_from_code(overrides["code"])
    return Task(id=tid, name=overrides.pop("name", tid), estimated_duration=duration, **overrides)


def shift(member_id: str, start: str = "08:00", end: str = "16:00", sid: Optional[str] = None) -> ScheduleShift:
    return ScheduleShift(id=sid or f"s-{member_id}-{start}", member_id=member_id, start=start, end=end)


def window(minutes: int, start: str = "08:00") -> tuple[str, str]:
    """(start, end) clock strings for a shift of the given length."""
    h, m = map(int, start.split(":"))
    total = h * 60 + m + minutes
    return start, f"{total // 60:02d}:{total % 60:02d}"


def request(
    members: Sequence[Member],
    tasks: Sequence[Task],
    shifts: Iterable[ScheduleShift] = (),
    date: str = MONDAY,
    member_skills: Iterable[tuple[str, str]] = (),
    **kw,
) -> AssignmentRequest:
    shifts = list(shifts)
    schedule: List[ScheduleDay] = kw.pop("weekly_schedule", None) or (
        [ScheduleDay(date=date, shifts=shifts)] if shifts else []
    )
    skill_ids = sorted({sid for _, sid in member_skills})
    return AssignmentRequest(
        members=list(members),
        tasks=list(tasks),
        target_date=date,
        weekly_schedule=schedule,
        skills=kw.pop("skills", [Skill(id=s, name=s.title()) for s in skill_ids]),
        member_skills=[MemberSkill(member_id=m, skill_id=s) for m, s in member_skills],
        **kw,
    )


def staffed(capacities: dict[str, int], tasks: Sequence[Task], date: str = MONDAY, **kw) -> AssignmentRequest:
    """One shift per member sized to exactly the given capacity."""
    members = [member(mid) for mid in capacities]
    shifts = [shift(mid, *window(cap)) for mid, cap in capacities.items()]
    return request(members, tasks, shifts, date=date, **kw)
