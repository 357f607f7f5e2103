"""Study plan generator."""

from .engine import generate_study_plan, run_planner
from .models import PlanRequest, StudyPlan

__all__ = ["PlanRequest", "StudyPlan", "generate_study_plan", "run_planner"]
