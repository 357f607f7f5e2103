"""Planning engine runner."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from study_planner.models import PlanRequest, StudyPlan
from study_planner.normalization import DEFAULT_PLANNER_CONFIG, normalize_request, resolve_planner_config
from study_planner.reporting.decision_trace import DecisionTraceCollector
from study_planner.reporting.warnings import build_warnings_and_suggestions
from study_planner.validation import ValidationReport

from .allocator import allocate_hours
from .rounding import round_half_up
from .scheduler import ScheduleResult, schedule_tasks
from .scoring import rank_subjects, score_subjects
from .summary import (
    STUDY_TIPS,
    build_completion_timeline,
    build_confidence_boost,
    build_next_week_focus,
    build_weekly_focuses,
)
from .workload import compute_study_horizon

logger = logging.getLogger(__name__)


def _build_plan(
    request: PlanRequest,
    config: dict[str, Any],
    today: date,
    decision_trace: DecisionTraceCollector | None,
) -> tuple[StudyPlan, ScheduleResult]:
    availability = request.availability
    horizon = compute_study_horizon(
        availability,
        today=today,
        weekdays_per_week=int(config["weekdays_per_week"]),
        weekend_days_per_week=int(config["weekend_days_per_week"]),
    )

    ranked = rank_subjects(score_subjects(request.subjects))
    subject_plans = allocate_hours(
        ranked,
        horizon["total_available_hours"],
        horizon["weeks_remaining"],
        weekly_taper=float(config["weekly_taper"]),
        confidence_hours_scale=float(config["confidence_hours_scale"]),
    )
    schedule = schedule_tasks(
        ranked,
        subject_plans,
        availability,
        today=today,
        target_date=availability.target_date,
        task_hours=float(config["task_hours"]),
        max_tasks_per_day=int(config["max_tasks_per_day"]),
        min_task_hours=float(config["min_task_hours"]),
        decision_trace=decision_trace,
    )
    weekly_focuses = build_weekly_focuses(
        ranked,
        subject_plans,
        horizon["weeks"],
        subjects_per_week=int(config["weekly_focus_subjects"]),
        hours_share=float(config["weekly_focus_hours_share"]),
    )

    plan = StudyPlan(
        student_name=request.student.name,
        target_date=availability.target_date,
        days_remaining=horizon["days_remaining"],
        total_available_hours=round_half_up(horizon["total_available_hours"]),
        schedule=schedule.tasks,
        weekly_focuses=tuple(weekly_focuses),
        subject_plans=tuple(subject_plans),
        next_week_focus=build_next_week_focus(ranked),
        completion_timeline=build_completion_timeline(horizon["days_remaining"], horizon["total_available_hours"]),
        confidence_boost=build_confidence_boost(subject_plans),
        tips=STUDY_TIPS,
    )
    return plan, schedule


def generate_study_plan(
    request: PlanRequest,
    *,
    today: date | None = None,
    config: dict[str, Any] | None = None,
) -> StudyPlan:
    """Generate the complete study plan for one request.

    Pure function of its arguments once ``today`` is fixed. ``request`` must
    hold at least one subject; the allocator raises ``ValueError`` otherwise.
    """
    effective_config = {**DEFAULT_PLANNER_CONFIG, **(config or {})}
    plan, _ = _build_plan(request, effective_config, today or date.today(), decision_trace=None)
    return plan


def _daily_plan(plan: StudyPlan, schedule: ScheduleResult) -> list[dict[str, Any]]:
    capacity_by_day = {slot["date"]: slot["capacity_hours"] for slot in schedule.slots}
    by_day: dict[date, list[dict[str, Any]]] = {}
    for task in plan.schedule:
        by_day.setdefault(task.date, []).append(task.as_dict())
    return [
        {
            "date": day.isoformat(),
            "day_of_week": tasks[0]["dayOfWeek"],
            "capacity_hours": capacity_by_day.get(day, 0.0),
            "scheduled_hours": sum(item["hours"] for item in tasks),
            "tasks": tasks,
        }
        for day, tasks in sorted(by_day.items(), key=lambda entry: entry[0])
    ]


def run_planner(payload: dict[str, Any], *, today: date | None = None) -> dict[str, Any]:
    """Run the full pipeline on a raw request payload.

    ``payload`` may carry a pre-resolved ``effective_config``; otherwise the
    optional ``config`` object is resolved against the defaults.
    """
    reference_day = today or date.today()
    effective_config = payload.get("effective_config")
    if not isinstance(effective_config, dict):
        effective_config = resolve_planner_config(payload, ValidationReport())

    request = normalize_request(payload)
    decision_trace = DecisionTraceCollector.for_day(reference_day)
    plan, schedule = _build_plan(request, effective_config, reference_day, decision_trace)

    logger.info(
        "generated plan for %d subjects: %d tasks over %d days (%d queued)",
        len(request.subjects),
        len(plan.schedule),
        plan.days_remaining,
        len(schedule.queue),
    )

    warnings, suggestions = build_warnings_and_suggestions(study_plan=plan, schedule=schedule)
    daily_plan = _daily_plan(plan, schedule)

    return {
        "status": "ok",
        "study_plan": plan.as_dict(),
        "daily_plan": daily_plan,
        "plan_summary": {
            "student_name": plan.student_name,
            "subjects_count": len(plan.subject_plans),
            "horizon_start": reference_day.isoformat(),
            "horizon_end": plan.target_date.isoformat(),
            "days_remaining": plan.days_remaining,
            "study_days": len(daily_plan),
            "total_tasks": len(plan.schedule),
            "total_scheduled_hours": sum(float(task.hours) for task in plan.schedule),
        },
        "warnings": warnings,
        "suggestions": suggestions,
        "queue": [
            {
                "position": item.position,
                "subject": item.subject,
                "topic": item.topic,
                "hours": item.hours,
                "priority": item.priority,
            }
            for item in schedule.queue
        ],
        "placed_positions": list(schedule.placed_positions),
        "skipped_positions": list(schedule.skipped_positions),
        "dropped_positions": list(schedule.dropped_positions),
        "slots": [
            {**slot, "date": slot["date"].isoformat()}
            for slot in schedule.slots
        ],
        "effective_config": effective_config,
        "decision_trace": decision_trace.as_list(),
    }
