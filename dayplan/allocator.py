"""
Greedy assignment allocator.

The Allocator owns the day's workload table. Tasks are fed to it in ranked
order and each commitment is visible to every later eligibility check, so the
order of allocate() calls is the order of priority.
"""

import logging
import uuid
from typing import Dict, Iterable, List, Optional, Set

from .capacity import active_members, resolve_capacity
from .models import (
    Assignment, DailyWorkload, Member, MemberSkill, ScheduleDay, Task,
    ASSIGNED_REASON, RECURRENCE_WEEKLY, REASON_NO_CAPACITY, REASON_NO_SKILL,
    STATUS_ASSIGNED,
)
from .timeutil import minutes_to_time, same_weekday, time_to_minutes

logger = logging.getLogger(__name__)

_ID_NAMESPACE = uuid.UUID("6f1c2f62-3c55-4a8e-9d7e-2b1f0f6a9c11")


def runs_on(task: Task, date: str) -> bool:
    """Weekly tasks run only on their configured weekday; others run every day."""
    if task.recurrence_type == RECURRENCE_WEEKLY:
        return same_weekday(task.recurrence_detail, date)
    return True


def skill_map(members: Iterable[Member], member_skills: Iterable[MemberSkill]) -> Dict[str, Set[str]]:
    """member_id → held skill ids (relation rows plus any inline skill_ids)."""
    held: Dict[str, Set[str]] = {}
    for m in members:
        held[m.id] = set(m.skill_ids or [])
    for ms in member_skills:
        held.setdefault(ms.member_id, set()).add(ms.skill_id)
    return held


class Allocator:
    """Commits tasks to members one at a time, tracking per-member workload."""

    def __init__(
        self,
        date: str,
        members: List[Member],
        day: Optional[ScheduleDay],
        member_skills: Iterable[MemberSkill] = (),
    ) -> None:
        self.date = date
        self.members = list(members)
        self.active = active_members(self.members, day)
        self.held_skills = skill_map(self.members, member_skills)
        self.workloads: Dict[str, DailyWorkload] = {
            m.id: DailyWorkload(date=date, member_id=m.id, capacity=resolve_capacity(m, day))
            for m in self.members
        }
        self.assignments: List[Assignment] = []
        self.reasons: Dict[str, List[str]] = {}   # task_id -> reason codes, first-seen order
        self.locked_task_ids: Set[str] = set()

    # ── workload bookkeeping ──
    def _consume(self, workload: DailyWorkload, assignment: Assignment, upkeep: bool) -> None:
        workload.assigned_tasks.append(assignment)
        if upkeep:
            workload.upkeep_duration += assignment.duration
        else:
            workload.total_duration += assignment.duration

    def preload(self, locked: Iterable[Assignment], tasks: Iterable[Task]) -> int:
        """
        Take over locked assignments for this date as pre-consumed capacity.
        Their tasks are not allocated again. Returns the number accepted.
        """
        by_id = {t.id: t for t in tasks}
        count = 0
        for a in locked:
            if not a.locked or a.date != self.date:
                continue
            self.assignments.append(a)
            self.locked_task_ids.add(a.task_id)
            count += 1
            wl = self.workloads.get(a.member_id)
            if wl is None:
                logger.debug("Locked assignment %s names unknown member %s", a.id, a.member_id)
                continue
            task = by_id.get(a.task_id)
            self._consume(wl, a, upkeep=task is not None and task.is_upkeep)
        if count:
            logger.info("[%s] %d locked assignment(s) pre-consumed", self.date, count)
        return count

    # ── eligibility ──
    def holds_skills(self, member: Member, task: Task) -> bool:
        held = self.held_skills.get(member.id, set())
        return all(sid in held for sid in (task.skill_ids or []))

    def has_room(self, member: Member, task: Task) -> bool:
        wl = self.workloads[member.id]
        return wl.total_duration + task.estimated_duration <= wl.capacity

    def already_on(self, member: Member, task: Task) -> bool:
        return any(a.task_id == task.id and a.member_id == member.id for a in self.assignments)

    def _note(self, reasons: List[str], code: str) -> None:
        if code not in reasons:
            reasons.append(code)

    def eligible_members(self, task: Task, reasons: List[str]) -> List[Member]:
        """
        Active members who hold every required skill, have room for the task in
        their ordinary-task total, and (unless multi-assign is allowed) do not
        already carry it. Least-loaded first; ties keep roster order.
        """
        pool = []
        for m in self.active:
            if not self.holds_skills(m, task):
                self._note(reasons, REASON_NO_SKILL)
                continue
            if not self.has_room(m, task):
                self._note(reasons, REASON_NO_CAPACITY)
                continue
            if not task.allow_multi_assign and self.already_on(m, task):
                continue
            pool.append(m)
        pool.sort(key=lambda m: self.workloads[m.id].total_duration)
        return pool

    # ── commitment ──
    def _assignment_id(self, task: Task, member: Member) -> str:
        key = f"{self.date}/{task.id}/{member.id}/{len(self.assignments)}"
        return str(uuid.uuid5(_ID_NAMESPACE, key))

    def commit(self, task: Task, member: Member) -> Assignment:
        start = time_to_minutes(task.earliest_start)
        a = Assignment(
            id=self._assignment_id(task, member),
            task_id=task.id,
            member_id=member.id,
            date=self.date,
            start_time=task.earliest_start,
            end_time=minutes_to_time(start + task.estimated_duration),
            duration=task.estimated_duration,
            reason=ASSIGNED_REASON,
            locked=False,
            status=STATUS_ASSIGNED,
        )
        self.assignments.append(a)
        self._consume(self.workloads[member.id], a, upkeep=task.is_upkeep)
        logger.debug("[%s] %s -> %s (%d min)", self.date, task.id, member.id, task.estimated_duration)
        return a

    def allocate(self, task: Task) -> List[Assignment]:
        """
        Cover one task with up to min_coverage members. Tasks that do not run
        today, or that are held by a locked assignment, are skipped silently.
        """
        if not runs_on(task, self.date) or task.id in self.locked_task_ids:
            return []

        reasons = self.reasons.setdefault(task.id, [])
        pool = self.eligible_members(task, reasons)
        committed = []
        while len(committed) < task.required_coverage and pool:
            committed.append(self.commit(task, pool.pop(0)))

        if committed:
            # Partial coverage still counts as assigned.
            del self.reasons[task.id]
        else:
            logger.debug("[%s] %s unassigned: %s", self.date, task.id, ", ".join(reasons) or "-")
        return committed

    def run(self, ranked_tasks: Iterable[Task]) -> None:
        for task in ranked_tasks:
            self.allocate(task)
