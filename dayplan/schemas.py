"""Pydantic schemas for the engine's request/response records."""
from dataclasses import asdict
from typing import Dict, List, Optional

from pydantic import BaseModel

from .models import (
    Assignment, AssignmentRequest, AssignmentResult, ExplicitRule, ManagerSettings,
    Member, MemberSkill, OrderSetItem, RuleSelector, ScheduleDay, ScheduleShift,
    Skill, Task,
)
from .timeutil import task_number_from_code


class SkillIn(BaseModel):
    id: str
    name: str


class MemberSkillIn(BaseModel):
    member_id: str
    skill_id: str


class MemberIn(BaseModel):
    id: str
    name: str
    title: Optional[str] = None
    role_tags: List[str] = []
    skill_ids: List[str] = []
    fixed_commitments_minutes: int = 0


class ShiftIn(BaseModel):
    id: str
    member_id: str
    start: str
    end: str
    shift_class: Optional[str] = None


class ScheduleDayIn(BaseModel):
    id: Optional[str] = None
    date: str
    shifts: List[ShiftIn] = []


class TaskIn(BaseModel):
    id: str
    code: str = ""
    name: str
    description: Optional[str] = None
    skill_ids: List[str] = []
    estimated_duration: int
    task_type: str = "standard"
    priority_weight: int = 0
    allow_multi_assign: bool = False
    earliest_start: str = "00:00"
    due_by: str = "Continuous"
    recurrence_type: str = "daily"
    recurrence_detail: Optional[str] = None
    is_must_run: bool = False
    min_coverage: Optional[int] = 1
    task_number: Optional[int] = None  # derived from a "T<N>" code when omitted

    def to_task(self) -> Task:
        data = self.model_dump()
        if data["task_number"] is None:
            data["task_number"] = task_number_from_code(self.code)
        return Task(**data)


class OrderSetItemIn(BaseModel):
    id: Optional[str] = None
    order_set_id: Optional[str] = None
    task_id: str
    position: int


class RuleSelectorIn(BaseModel):
    id: str
    mode: str
    value: str


class ExplicitRuleIn(BaseModel):
    id: str
    task_id: str
    primary_selector: Optional[RuleSelectorIn] = None
    fallback_selectors: List[RuleSelectorIn] = []
    exclude_day: List[str] = []
    prefer_shift_class: Optional[str] = None
    earliest_start: Optional[str] = None
    due_by: Optional[str] = None
    max_per_member_per_day: Optional[int] = None
    reason_template: Optional[str] = None

    def to_rule(self) -> ExplicitRule:
        data = self.model_dump(exclude={"primary_selector", "fallback_selectors"})
        return ExplicitRule(
            primary_selector=RuleSelector(**self.primary_selector.model_dump()) if self.primary_selector else None,
            fallback_selectors=[RuleSelector(**s.model_dump()) for s in self.fallback_selectors],
            **data,
        )


class ManagerSettingsIn(BaseModel):
    id: Optional[str] = None
    floor_sla_time: int = 0
    tie_break_seed: int = 0
    over_capacity_threshold: int = 0
    assignment_start_time: str = "06:00"


class AssignmentOut(BaseModel):
    id: str
    task_id: str
    member_id: str
    date: str
    start_time: str
    end_time: str
    duration: int
    reason: str
    locked: bool = False
    status: str = "assigned"


class AssignmentRequestIn(BaseModel):
    members: List[MemberIn] = []
    tasks: List[TaskIn] = []
    skills: List[SkillIn] = []
    member_skills: List[MemberSkillIn] = []
    weekly_schedule: List[ScheduleDayIn] = []
    explicit_rules: List[ExplicitRuleIn] = []
    manager_settings: ManagerSettingsIn = ManagerSettingsIn()
    target_date: str
    order_set_items: List[OrderSetItemIn] = []
    assignments: List[AssignmentOut] = []  # prior assignments; only locked ones are honored

    def to_request(self) -> AssignmentRequest:
        return AssignmentRequest(
            members=[Member(**m.model_dump()) for m in self.members],
            tasks=[t.to_task() for t in self.tasks],
            target_date=self.target_date,
            weekly_schedule=[
                ScheduleDay(
                    id=d.id, date=d.date,
                    shifts=[ScheduleShift(**s.model_dump()) for s in d.shifts],
                )
                for d in self.weekly_schedule
            ],
            skills=[Skill(**s.model_dump()) for s in self.skills],
            member_skills=[MemberSkill(**ms.model_dump()) for ms in self.member_skills],
            explicit_rules=[r.to_rule() for r in self.explicit_rules],
            settings=ManagerSettings(**self.manager_settings.model_dump()),
            order_set_items=[OrderSetItem(**i.model_dump()) for i in self.order_set_items],
            locked_assignments=[Assignment(**a.model_dump()) for a in self.assignments if a.locked],
        )


class DailyWorkloadOut(BaseModel):
    date: str
    member_id: str
    capacity: int
    total_duration: int
    upkeep_duration: int
    assigned_tasks: List[AssignmentOut] = []
    unassigned_task_ids: List[str] = []


class UnassignedTaskOut(TaskIn):
    unassigned_reason: str


class OverCapacityMemberOut(BaseModel):
    member_id: str
    name: str
    date: str
    over_capacity: int


class AssignmentResultOut(BaseModel):
    generated_assignments: List[AssignmentOut] = []
    daily_workloads: List[DailyWorkloadOut] = []
    unassigned_tasks: List[UnassignedTaskOut] = []
    over_capacity_members: List[OverCapacityMemberOut] = []

    @classmethod
    def from_result(cls, result: AssignmentResult) -> "AssignmentResultOut":
        return cls(
            generated_assignments=[AssignmentOut(**asdict(a)) for a in result.generated_assignments],
            daily_workloads=[DailyWorkloadOut(**asdict(w)) for w in result.daily_workloads],
            unassigned_tasks=[
                UnassignedTaskOut(**asdict(u.task), unassigned_reason=u.reason)
                for u in result.unassigned_tasks
            ],
            over_capacity_members=[OverCapacityMemberOut(**asdict(o)) for o in result.over_capacity_members],
        )


class RangeResultOut(BaseModel):
    days: Dict[str, AssignmentResultOut] = {}


class CheckOut(BaseModel):
    ok: bool
    messages: List[str] = []
