"""Schedule metrics collector."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from study_planner.models import TASK_TYPES


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def collect_metrics(result: dict[str, Any]) -> dict[str, Any]:
    """Summarize how much of the allocation reached the calendar.

    Ratios are clamped into [0, 1]; counts and hours are raw.
    """
    plan = result.get("study_plan", {}) if isinstance(result.get("study_plan"), dict) else {}
    tasks = [item for item in plan.get("schedule", []) if isinstance(item, dict)]
    subject_plans = [item for item in plan.get("subjectPlans", []) if isinstance(item, dict)]
    slots = [item for item in result.get("slots", []) if isinstance(item, dict)]
    queue = [item for item in result.get("queue", []) if isinstance(item, dict)]

    scheduled_hours = 0.0
    hours_by_day: dict[str, float] = defaultdict(float)
    tasks_by_type: dict[str, int] = {task_type: 0 for task_type in TASK_TYPES}
    hours_by_subject: dict[str, float] = defaultdict(float)
    for task in tasks:
        hours = max(0.0, float(task.get("hours", 0.0) or 0.0))
        scheduled_hours += hours
        hours_by_day[str(task.get("date", ""))] += hours
        hours_by_subject[str(task.get("subject", ""))] += hours
        task_type = str(task.get("taskType", ""))
        if task_type in tasks_by_type:
            tasks_by_type[task_type] += 1

    allocated_hours = float(sum(int(item.get("totalHours", 0) or 0) for item in subject_plans))
    queued_hours = sum(float(item.get("hours", 0.0) or 0.0) for item in queue)

    utilization_values: list[float] = []
    for slot in slots:
        capacity = float(slot.get("capacity_hours", 0.0) or 0.0)
        if capacity <= 0:
            continue
        utilization_values.append(_clamp01(hours_by_day.get(str(slot.get("date", "")), 0.0) / capacity))

    return {
        "queue_size": len(queue),
        "placed_tasks": len(tasks),
        "skipped_tasks": len(result.get("skipped_positions", []) or []),
        "dropped_tasks": len(result.get("dropped_positions", []) or []),
        "scheduled_hours": round(scheduled_hours, 2),
        "allocated_hours": allocated_hours,
        "queued_hours": round(queued_hours, 2),
        "placement_ratio": round(_clamp01(scheduled_hours / queued_hours), 4) if queued_hours > 0 else 1.0,
        "study_days": len(hours_by_day),
        "tasks_by_type": tasks_by_type,
        "scheduled_hours_by_subject": {sid: round(hours, 2) for sid, hours in sorted(hours_by_subject.items())},
        "peak_day_utilization": round(max(utilization_values), 4) if utilization_values else 0.0,
        "mean_day_utilization": (
            round(sum(utilization_values) / len(utilization_values), 4) if utilization_values else 0.0
        ),
    }
