"""
Capacity resolution: available work minutes per scheduled member for one day.
"""

from typing import Iterable, List, Optional, Set

from .models import Member, ScheduleDay
from .timeutil import shift_minutes


def total_shift_minutes(member_id: str, day: Optional[ScheduleDay]) -> int:
    """Sum of all of the member's shifts on the day (multiple shifts add up)."""
    if day is None:
        return 0
    return sum(shift_minutes(s.start, s.end) for s in day.shifts if s.member_id == member_id)


def resolve_capacity(member: Member, day: Optional[ScheduleDay]) -> int:
    """max(0, shift minutes - fixed commitments)."""
    available = total_shift_minutes(member.id, day) - (member.fixed_commitments_minutes or 0)
    return max(0, available)


def scheduled_member_ids(day: Optional[ScheduleDay]) -> Set[str]:
    if day is None:
        return set()
    return {s.member_id for s in day.shifts}


def active_members(members: Iterable[Member], day: Optional[ScheduleDay]) -> List[Member]:
    """Members with at least one shift on the day, in roster (input) order."""
    scheduled = scheduled_member_ids(day)
    return [m for m in members if m.id in scheduled]
