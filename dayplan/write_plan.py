"""
Write generated plans to an Excel workbook.
One ASSIGNMENTS / WORKLOADS / UNASSIGNED sheet each; rows carry their date so
a multi-day run lands in the same three sheets.
"""

from pathlib import Path
from typing import Dict, Iterable

import openpyxl
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .models import AssignmentResult, Member, Task
from .report import task_display_name

ASSIGNMENT_HEADERS = ["Date", "Task", "Member", "Start", "End", "Minutes", "Reason", "Locked", "Status"]
WORKLOAD_HEADERS = ["Date", "Member", "Capacity", "Task Minutes", "Upkeep Minutes", "Remaining", "Tasks"]
UNASSIGNED_HEADERS = ["Date", "Task", "Minutes", "Due By", "Reason"]


def _header(ws, headers) -> None:
    bold = Font(bold=True)
    for col, label in enumerate(headers, 1):
        ws.cell(1, col, label).font = bold
        ws.column_dimensions[get_column_letter(col)].width = max(10, len(label) + 4)
    ws.freeze_panes = "A2"


def write_plan(
    output_path: str,
    results: Dict[str, AssignmentResult],
    members: Iterable[Member],
    tasks: Iterable[Task],
) -> str:
    """results = {date: AssignmentResult}. Returns the written path."""
    names = {m.id: m.name for m in members}
    task_by_id = {t.id: t for t in tasks}

    wb = openpyxl.Workbook()
    ws_a = wb.active
    ws_a.title = "ASSIGNMENTS"
    ws_w = wb.create_sheet("WORKLOADS")
    ws_u = wb.create_sheet("UNASSIGNED")
    _header(ws_a, ASSIGNMENT_HEADERS)
    _header(ws_w, WORKLOAD_HEADERS)
    _header(ws_u, UNASSIGNED_HEADERS)

    for date in sorted(results):
        result = results[date]
        for a in result.generated_assignments:
            ws_a.append([
                a.date, task_display_name(task_by_id.get(a.task_id)),
                names.get(a.member_id, a.member_id), a.start_time, a.end_time,
                a.duration, a.reason, "Y" if a.locked else None, a.status,
            ])
        for wl in result.daily_workloads:
            ws_w.append([
                date, names.get(wl.member_id, wl.member_id), wl.capacity,
                wl.total_duration, wl.upkeep_duration, wl.remaining, len(wl.assigned_tasks),
            ])
        for u in result.unassigned_tasks:
            ws_u.append([date, task_display_name(u.task), u.task.estimated_duration, u.task.due_by, u.reason])

    out = Path(output_path)
    wb.save(out)
    return str(out)
