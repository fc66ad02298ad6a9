"""
Data models for the DayPlan assignment engine.
Field names follow the records exchanged with the persistence/UI layer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


# ---------------------------------------------------------------------------
# Literal tokens used in task records
# ---------------------------------------------------------------------------
DUE_EOD = "EOD"
DUE_CONTINUOUS = "Continuous"

TASK_TYPE_UPKEEP = "upkeep"
RECURRENCE_WEEKLY = "weekly"

STATUS_ASSIGNED = "assigned"
ASSIGNED_REASON = "Skill and priority matched"

# Unassigned reason codes
REASON_NO_STAFF = "no_staff_today"
REASON_NO_SKILL = "no_skill"
REASON_NO_CAPACITY = "no_capacity"


@dataclass(frozen=True)
class Skill:
    id: str
    name: str


@dataclass(frozen=True)
class MemberSkill:
    """Membership relation: member holds skill."""
    member_id: str
    skill_id: str


@dataclass
class Member:
    """Staff member. Immutable for the duration of one scheduling run."""
    id: str
    name: str
    role_tags: List[str] = field(default_factory=list)
    fixed_commitments_minutes: int = 0   # non-task time deducted from shift length
    title: Optional[str] = None
    skill_ids: List[str] = field(default_factory=list)  # legacy inline skills


@dataclass
class ScheduleShift:
    id: str
    member_id: str
    start: str                          # "HH:MM"
    end: str                            # "HH:MM"; earlier than start = overnight
    shift_class: Optional[str] = None   # "Opening", "Closing", ...


@dataclass
class ScheduleDay:
    """Shift roster for one calendar day."""
    date: str                           # "YYYY-MM-DD"
    shifts: List[ScheduleShift] = field(default_factory=list)
    id: Optional[str] = None


@dataclass
class Task:
    id: str
    name: str
    estimated_duration: int             # minutes
    code: str = ""
    skill_ids: List[str] = field(default_factory=list)
    min_coverage: Optional[int] = 1
    is_must_run: bool = False
    due_by: str = DUE_CONTINUOUS        # "HH:MM", "EOD" or "Continuous"
    earliest_start: str = "00:00"
    task_type: str = "standard"         # "standard", "upkeep" or "project"
    recurrence_type: str = "daily"      # "daily", "weekly", "monthly", "one-time"
    recurrence_detail: Optional[str] = None  # weekday for weekly tasks
    priority_weight: int = 0
    allow_multi_assign: bool = False
    task_number: Optional[int] = None   # N of a "T<N>" code, set at ingestion
    description: Optional[str] = None

    @property
    def is_upkeep(self) -> bool:
        return self.task_type == TASK_TYPE_UPKEEP

    @property
    def required_coverage(self) -> int:
        return self.min_coverage or 1


@dataclass(frozen=True)
class OrderSetItem:
    """Manual ranking hint: task_id sits at position in an order set."""
    task_id: str
    position: int
    id: Optional[str] = None
    order_set_id: Optional[str] = None


@dataclass
class RuleSelector:
    id: str
    mode: str                           # "member", "skill" or "role_tag"
    value: str


@dataclass
class ExplicitRule:
    """Per-task override rule. Carried through, not consumed by the greedy pass."""
    id: str
    task_id: str
    primary_selector: Optional[RuleSelector] = None
    fallback_selectors: List[RuleSelector] = field(default_factory=list)
    exclude_day: List[str] = field(default_factory=list)
    prefer_shift_class: Optional[str] = None
    earliest_start: Optional[str] = None
    due_by: Optional[str] = None
    max_per_member_per_day: Optional[int] = None
    reason_template: Optional[str] = None


@dataclass
class ManagerSettings:
    """Manager-level parameters sent alongside each request."""
    floor_sla_time: int = 0
    tie_break_seed: int = 0
    over_capacity_threshold: int = 0
    assignment_start_time: str = "06:00"
    id: Optional[str] = None


@dataclass
class Assignment:
    id: str
    task_id: str
    member_id: str
    date: str
    start_time: str
    end_time: str
    duration: int
    reason: str = ASSIGNED_REASON
    locked: bool = False
    status: str = STATUS_ASSIGNED       # "assigned", "unassigned", "over-capacity", "conflict"


@dataclass
class DailyWorkload:
    """Per-member running totals for one day."""
    date: str
    member_id: str
    capacity: int
    total_duration: int = 0             # ordinary tasks, counted against capacity
    upkeep_duration: int = 0            # upkeep tasks, tracked separately
    assigned_tasks: List[Assignment] = field(default_factory=list)
    unassigned_task_ids: List[str] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return self.capacity - self.total_duration


@dataclass
class UnassignedTask:
    task: Task
    reason: str                         # comma-joined reason codes


@dataclass
class OverCapacityMember:
    member_id: str
    name: str
    date: str
    over_capacity: int                  # minutes above capacity


@dataclass
class AssignmentRequest:
    """Everything the engine needs to plan one target day."""
    members: List[Member]
    tasks: List[Task]
    target_date: str
    weekly_schedule: List[ScheduleDay] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    member_skills: List[MemberSkill] = field(default_factory=list)
    explicit_rules: List[ExplicitRule] = field(default_factory=list)
    settings: ManagerSettings = field(default_factory=ManagerSettings)
    order_set_items: List[OrderSetItem] = field(default_factory=list)
    locked_assignments: List[Assignment] = field(default_factory=list)

    def schedule_day(self, date: Optional[str] = None) -> Optional[ScheduleDay]:
        date = date or self.target_date
        for day in self.weekly_schedule:
            if day.date == date:
                return day
        return None


@dataclass
class AssignmentResult:
    generated_assignments: List[Assignment] = field(default_factory=list)
    daily_workloads: List[DailyWorkload] = field(default_factory=list)
    unassigned_tasks: List[UnassignedTask] = field(default_factory=list)
    over_capacity_members: List[OverCapacityMember] = field(default_factory=list)

    def workload_for(self, member_id: str) -> Optional[DailyWorkload]:
        for wl in self.daily_workloads:
            if wl.member_id == member_id:
                return wl
        return None

    def assignments_by_task(self) -> Dict[str, List[Assignment]]:
        out: Dict[str, List[Assignment]] = {}
        for a in self.generated_assignments:
            out.setdefault(a.task_id, []).append(a)
        return out

