"""Warning and suggestion generation for planning output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from study_planner.models import StudyPlan

if TYPE_CHECKING:
    from study_planner.engine.scheduler import ScheduleResult

PERCENTAGE_TOTAL = 100


def _queued_hours(schedule: ScheduleResult, positions: tuple[int, ...]) -> float:
    return sum(schedule.queue[position].hours for position in positions)


def build_warnings_and_suggestions(
    *,
    study_plan: StudyPlan,
    schedule: ScheduleResult,
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Flag where the placed schedule falls short of the allocation."""
    warnings: list[dict[str, Any]] = []
    suggestions: list[dict[str, Any]] = []

    # (1) No study days before the target date.
    if study_plan.days_remaining == 0:
        warnings.append(
            {
                "code": "WARN_EMPTY_HORIZON",
                "severity": "warning",
                "message": "The target date leaves no study days; the schedule is empty.",
            }
        )
        suggestions.append(
            {
                "code": "SUGGEST_EXTEND_TARGET_DATE",
                "message": "Move the target date at least one day into the future.",
            }
        )

    # (2) Tasks still queued when the target date passed.
    if schedule.dropped_positions:
        dropped_subjects = sorted({schedule.queue[p].subject for p in schedule.dropped_positions})
        warnings.append(
            {
                "code": "WARN_TASKS_DROPPED",
                "severity": "warning",
                "message": "Not every allocated task fits before the target date.",
                "dropped_tasks": len(schedule.dropped_positions),
                "dropped_hours": round(_queued_hours(schedule, schedule.dropped_positions), 2),
                "subjects": dropped_subjects,
            }
        )
        suggestions.append(
            {
                "code": "SUGGEST_EXTEND_TARGET_DATE",
                "message": "Move the target date later to fit the remaining tasks.",
            }
        )
        suggestions.append(
            {
                "code": "SUGGEST_INCREASE_DAILY_HOURS",
                "message": "Add study hours on weekdays or weekends.",
            }
        )

    # (3) Tasks lost because the day had too little capacity left.
    if schedule.skipped_positions:
        warnings.append(
            {
                "code": "WARN_TRUNCATED_TASKS_SKIPPED",
                "severity": "warning",
                "message": "Some tasks were skipped because too little time was left on their day.",
                "skipped_tasks": len(schedule.skipped_positions),
                "skipped_hours": round(_queued_hours(schedule, schedule.skipped_positions), 2),
            }
        )
        suggestions.append(
            {
                "code": "SUGGEST_ALIGN_DAILY_HOURS",
                "message": "Use daily hours that are a multiple of the task length to avoid unusable leftovers.",
            }
        )

    # (4) Rounded percentages not adding up to 100.
    percentage_sum = sum(plan.percentage_allocation for plan in study_plan.subject_plans)
    if study_plan.subject_plans and percentage_sum != PERCENTAGE_TOTAL:
        warnings.append(
            {
                "code": "WARN_PERCENTAGE_DRIFT",
                "severity": "info",
                "message": "Rounded subject percentages do not add up to exactly 100.",
                "percentage_sum": percentage_sum,
            }
        )

    unique_suggestions: list[dict[str, Any]] = []
    seen: set[str] = set()
    for item in suggestions:
        code = str(item.get("code", ""))
        if code in seen:
            continue
        seen.add(code)
        unique_suggestions.append(item)

    return warnings, unique_suggestions
