"""
Task ranking: the order in which the allocator visits the day's tasks.

Precedence, highest first:
  1) must-run tasks
  2) due rank: specific clock time < "EOD" < "Continuous" / no deadline
  3) specific-time tasks: earliest due time first
  4) everything else: highest composite score first

Python's sort is stable, so tasks with identical keys keep their input order
and ranking an already-ranked list leaves it unchanged.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from .models import DUE_CONTINUOUS, DUE_EOD, OrderSetItem, Task
from .timeutil import time_to_minutes

DUE_RANK_TIME = 0
DUE_RANK_EOD = 1
DUE_RANK_CONTINUOUS = 2

MANUAL_ORDER_BASE = 100
MUST_RUN_BONUS = 30
DUE_TIME_BONUS = 15
TASK_NUMBER_CEILING = 10


def due_rank(due_by: Optional[str]) -> int:
    if not due_by or due_by == DUE_CONTINUOUS:
        return DUE_RANK_CONTINUOUS
    if due_by == DUE_EOD:
        return DUE_RANK_EOD
    return DUE_RANK_TIME


def task_score(task: Task, position: Optional[int] = None) -> int:
    """priority weight + manual order + must-run + due-time + low task-number bonuses."""
    score = task.priority_weight or 0
    if position is not None:
        score += MANUAL_ORDER_BASE - position
    if task.is_must_run:
        score += MUST_RUN_BONUS
    if due_rank(task.due_by) == DUE_RANK_TIME:
        score += DUE_TIME_BONUS
    if task.task_number is not None:
        score += max(0, TASK_NUMBER_CEILING - task.task_number)
    return score


def order_positions(order_set_items: Iterable[OrderSetItem]) -> Dict[str, int]:
    """
    task_id -> manual position. Only one order set is active per run: the set
    of the first item. Items belonging to any other set are ignored.
    """
    positions: Dict[str, int] = {}
    active_set = None
    for n, item in enumerate(order_set_items):
        if n == 0:
            active_set = item.order_set_id
        if item.order_set_id == active_set:
            positions.setdefault(item.task_id, item.position)
    return positions


def rank_key(task: Task, position: Optional[int] = None) -> Tuple[int, int, int, int]:
    rank = due_rank(task.due_by)
    if rank == DUE_RANK_TIME:
        # Same-time tasks are not separated by score; input order decides.
        return (0 if task.is_must_run else 1, rank, time_to_minutes(task.due_by), 0)
    return (0 if task.is_must_run else 1, rank, 0, -task_score(task, position))


def rank_tasks(tasks: Iterable[Task], order_set_items: Iterable[OrderSetItem] = ()) -> List[Task]:
    """Return a new list of tasks in processing order. Input is not mutated."""
    positions = order_positions(order_set_items)
    return sorted(tasks, key=lambda t: rank_key(t, positions.get(t.id)))
