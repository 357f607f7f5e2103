"""Planning engine."""

from .allocator import allocate_hours
from .runner import generate_study_plan, run_planner
from .scheduler import build_task_queue, place_tasks, schedule_tasks
from .scoring import DEFAULT_SCORE_WEIGHTS, compute_score, rank_subjects, score_subject, score_subjects
from .slot_builder import build_daily_slots
from .summary import build_weekly_focuses
from .workload import compute_study_horizon

__all__ = [
    "DEFAULT_SCORE_WEIGHTS",
    "allocate_hours",
    "build_daily_slots",
    "build_task_queue",
    "build_weekly_focuses",
    "compute_score",
    "compute_study_horizon",
    "generate_study_plan",
    "place_tasks",
    "rank_subjects",
    "run_planner",
    "schedule_tasks",
    "score_subject",
    "score_subjects",
]
