"""A small request payload shared by the schema, API and CLI tests."""
from __future__ import annotations

import copy

PAYLOAD = {
    "target_date": "2024-06-03",
    "members": [
        {"id": "m1", "name": "Ana", "role_tags": ["lead"], "fixed_commitments_minutes": 30},
        {"id": "m2", "name": "Ben", "fixed_commitments_minutes": 0},
        {"id": "m3", "name": "Cy"},
    ],
    "skills": [{"id": "sk-bake", "name": "Bakery"}, {"id": "sk-cut", "name": "Cutting"}],
    "member_skills": [
        {"member_id": "m1", "skill_id": "sk-cut"},
        {"member_id": "m2", "skill_id": "sk-cut"},
    ],
    "weekly_schedule": [
        {
            "id": "wk-1",
            "date": "2024-06-03",
            "shifts": [
                {"id": "s1", "member_id": "m1", "start": "06:00", "end": "10:30", "shift_class": "Opening"},
                {"id": "s2", "member_id": "m2", "start": "10:00", "end": "14:00"},
            ],
        },
        {
            "id": "wk-2",
            "date": "2024-06-04",
            "shifts": [{"id": "s3", "member_id": "m3", "start": "08:00", "end": "12:00"}],
        },
    ],
    "tasks": [
        {"id": "t1", "code": "T1", "name": "Cull wet rack", "estimated_duration": 60,
         "earliest_start": "06:00", "due_by": "08:00", "is_must_run": True},
        {"id": "t2", "code": "T4", "name": "Cut fruit", "estimated_duration": 90,
         "skill_ids": ["sk-cut"], "earliest_start": "07:00", "due_by": "EOD"},
        {"id": "t3", "code": "T7", "name": "Bake rolls", "estimated_duration": 45,
         "skill_ids": ["sk-bake"]},
        {"id": "t4", "code": "U1", "name": "Sweep", "estimated_duration": 20, "task_type": "upkeep"},
        {"id": "t5", "code": "T9", "name": "Truck", "estimated_duration": 120,
         "recurrence_type": "weekly", "recurrence_detail": "Tuesday"},
    ],
    "explicit_rules": [
        {"id": "r1", "task_id": "t2",
         "primary_selector": {"id": "ps1", "mode": "member", "value": "m1"},
         "exclude_day": ["Sun"]},
    ],
    "manager_settings": {"floor_sla_time": 300, "over_capacity_threshold": 15},
    "order_set_items": [{"id": "o1", "order_set_id": "os1", "task_id": "t3", "position": 1}],
    "assignments": [],
}


def payload() -> dict:
    return copy.deepcopy(PAYLOAD)
