"""
DayPlan — daily task assignment engine.
Ranks the day's recurring tasks and assigns them greedily to scheduled staff
by skill, remaining capacity and coverage.
"""

__version__ = "1.0.0"
