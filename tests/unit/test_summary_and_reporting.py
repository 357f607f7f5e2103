from __future__ import annotations

from datetime import date, datetime, timezone

from study_planner.engine import generate_study_plan, run_planner
from study_planner.engine.allocator import allocate_hours
from study_planner.engine.scoring import rank_subjects, score_subjects
from study_planner.engine.summary import (
    STUDY_TIPS,
    build_completion_timeline,
    build_confidence_boost,
    build_next_week_focus,
    build_weekly_focuses,
    weekly_milestones,
)
from study_planner.metrics import collect_metrics
from study_planner.models import AvailabilityData, PlanRequest, StudentData, Subject
from study_planner.reporting import build_success_report, export_filename, render_plan_text
from study_planner.validation import ValidationReport

TODAY = date(2026, 1, 5)


def _subject(name: str, credits: int, confidence: int, weak: tuple[str, ...] = (), strong: tuple[str, ...] = ()) -> Subject:
    return Subject(
        id=name.lower(),
        name=name,
        credits=credits,
        confidence_level=confidence,
        strong_areas=strong,
        weak_areas=weak,
    )


def _request(*subjects: Subject, target: date = date(2026, 1, 19), name: str = "Ada Lovelace") -> PlanRequest:
    return PlanRequest(
        student=StudentData(name=name, college="MIT", branch="CS", graduation_year=2027, email="ada@example.com"),
        subjects=subjects,
        availability=AvailabilityData(weekday_hours=3, weekend_hours=6, target_date=target),
    )


def _payload(subjects: list[dict], *, target: str = "2026-01-19") -> dict:
    return {
        "student": {"name": "Ada Lovelace", "college": "MIT", "branch": "CS", "graduationYear": 2027, "email": "ada@example.com"},
        "subjects": subjects,
        "availability": {"weekdayHours": 3, "weekendHours": 6, "targetDate": target, "preferredTime": "night"},
    }


def test_weekly_focuses_repeat_top_two_subjects_every_week() -> None:
    subjects = [
        _subject("Algo", 6, 1, weak=("DP", "Greedy", "Graphs")),
        _subject("Ethics", 1, 5, strong=("Kant",)),
        _subject("Physics", 4, 3, weak=("Optics",)),
    ]
    ranked = rank_subjects(score_subjects(subjects))
    plans = allocate_hours(ranked, 54.0, 2.0)
    focuses = build_weekly_focuses(ranked, plans, 2)

    assert [focus.week for focus in focuses] == [1, 2]
    assert focuses[0].subjects == focuses[1].subjects
    first, second = focuses[0].subjects
    assert (first.subject_name, second.subject_name) == ("Algo", "Physics")
    assert first.focus_topics == ("DP", "Greedy")
    assert first.priority == "High Priority"
    assert second.priority == "Medium Priority"
    assert focuses[1].key_milestones == weekly_milestones("Algo", 2)
    assert focuses[0].key_milestones[2] == "Review and consolidate Week 0 concepts"


def test_weekly_focuses_empty_without_weeks() -> None:
    ranked = rank_subjects(score_subjects([_subject("Algo", 6, 1)]))
    plans = allocate_hours(ranked, 0.0, 0.0)
    assert build_weekly_focuses(ranked, plans, 0) == []


def test_narrative_strings() -> None:
    ranked = rank_subjects(score_subjects([_subject("Algo", 6, 1)]))
    assert build_next_week_focus(ranked) == "Next 7 days focus: Algo"

    ranked = rank_subjects(score_subjects([_subject("Algo", 6, 1, strong=("Sorting", "Heaps", "Tries"))]))
    assert build_next_week_focus(ranked) == "Next 7 days focus: Sorting, Heaps"

    assert build_completion_timeline(14, 54.0) == "14 days remaining | ~54 total study hours available"
    assert build_completion_timeline(30, 128.57) == "30 days remaining | ~129 total study hours available"

    plans = allocate_hours(ranked, 54.0, 2.0)
    assert build_confidence_boost(plans) == "Expected confidence improvement: +4 levels across subjects"


def test_generate_study_plan_fills_every_section() -> None:
    plan = generate_study_plan(_request(_subject("Algo", 5, 1, weak=("Trees", "Graphs"), strong=("Arrays",))), today=TODAY)

    assert plan.student_name == "Ada Lovelace"
    assert plan.days_remaining == 14
    assert plan.total_available_hours == 54
    assert plan.tips == STUDY_TIPS
    assert len(plan.weekly_focuses) == 2
    assert plan.weekly_focuses[0].subjects[0].hours_allocated == 19
    assert plan.next_week_focus == "Next 7 days focus: Trees, Graphs"
    assert plan.schedule[0].as_dict() == {
        "date": "2026-01-05",
        "dayOfWeek": "Monday",
        "subject": "Algo",
        "topic": "Trees",
        "taskType": "learning",
        "hours": 1.5,
        "priority": "high",
        "focusLevel": "high",
    }


def test_generate_study_plan_honours_config_overrides() -> None:
    request = _request(_subject("Algo", 5, 1, weak=("Trees",)))
    plan = generate_study_plan(request, today=TODAY, config={"task_hours": 1.0, "max_tasks_per_day": 2})
    assert {task.hours for task in plan.schedule} == {1.0}
    per_day: dict[date, int] = {}
    for task in plan.schedule:
        per_day[task.date] = per_day.get(task.date, 0) + 1
    assert max(per_day.values()) == 2


def test_render_plan_text_layout() -> None:
    plan = generate_study_plan(_request(_subject("Algo", 5, 1, weak=("Trees", "Graphs"), strong=("Arrays",))), today=TODAY)
    text = render_plan_text(plan)
    lines = text.splitlines()

    assert lines[0] == "AI STUDY PLANNER - PERSONALIZED STUDY SCHEDULE"
    assert lines[1] == "=" * len(lines[0])
    assert "Student: Ada Lovelace" in lines
    assert "Target Completion Date: 2026-01-19" in lines
    assert "Days Remaining: 14" in lines
    assert "  - Hours: 54h (100%)" in lines
    assert "  - Key Topics: Trees, Graphs, Arrays" in lines
    assert "  - Expected Confidence Improvement: +4 levels" in lines
    assert f"5. {STUDY_TIPS[4]}" in lines
    assert text.endswith("\n")
    assert render_plan_text(plan.as_dict()) == text


def test_export_filename_replaces_whitespace() -> None:
    plan = generate_study_plan(_request(_subject("Algo", 5, 1), name="Ada  King Lovelace"), today=TODAY)
    assert export_filename(plan) == "study-plan-Ada--King-Lovelace.txt"
    assert export_filename(plan.as_dict()) == "study-plan-Ada--King-Lovelace.txt"


def test_run_planner_warns_about_skipped_tasks_and_percentage_drift() -> None:
    subjects = [
        {"id": f"s{i}", "name": name, "credits": 3, "confidenceLevel": 3, "weakAreas": "A, B", "strongAreas": ""}
        for i, name in enumerate(("Math", "Physics", "Chemistry"))
    ]
    result = run_planner(_payload(subjects), today=TODAY)

    codes = [item["code"] for item in result["warnings"]]
    assert "WARN_TRUNCATED_TASKS_SKIPPED" in codes
    assert "WARN_PERCENTAGE_DRIFT" in codes
    drift = next(item for item in result["warnings"] if item["code"] == "WARN_PERCENTAGE_DRIFT")
    assert drift["percentage_sum"] == 99
    assert [item["code"] for item in result["suggestions"]] == ["SUGGEST_ALIGN_DAILY_HOURS"]


def test_run_planner_warns_about_dropped_tasks() -> None:
    payload = _payload([{"name": "Algo", "credits": 8, "confidenceLevel": 2, "weakAreas": "DP"}], target="2026-01-06")
    payload["availability"].update({"weekdayHours": 12, "weekendHours": 16})
    result = run_planner(payload, today=TODAY)

    assert len(result["queue"]) == 9
    assert result["placed_positions"] == [0, 1, 2, 3, 4, 5]
    assert result["dropped_positions"] == [6, 7, 8]
    dropped = next(item for item in result["warnings"] if item["code"] == "WARN_TASKS_DROPPED")
    assert dropped["dropped_tasks"] == 3
    assert dropped["dropped_hours"] == 4.5
    assert dropped["subjects"] == ["Algo"]
    assert [item["code"] for item in result["suggestions"]] == [
        "SUGGEST_EXTEND_TARGET_DATE",
        "SUGGEST_INCREASE_DAILY_HOURS",
    ]


def test_collect_metrics_for_single_subject_plan() -> None:
    payload = _payload([{"name": "Algo", "credits": 5, "confidenceLevel": 1, "weakAreas": "Trees,Graphs", "strongAreas": "Arrays"}])
    metrics = collect_metrics(run_planner(payload, today=TODAY))

    assert metrics["queue_size"] == 36
    assert metrics["placed_tasks"] == 26
    assert metrics["skipped_tasks"] == 10
    assert metrics["dropped_tasks"] == 0
    assert metrics["scheduled_hours"] == 39.0
    assert metrics["allocated_hours"] == 54.0
    assert metrics["queued_hours"] == 54.0
    assert metrics["placement_ratio"] == 0.7222
    assert metrics["study_days"] == 12
    assert sum(metrics["tasks_by_type"].values()) == 26
    assert metrics["tasks_by_type"]["learning"] == 10
    assert metrics["scheduled_hours_by_subject"] == {"Algo": 39.0}
    assert metrics["peak_day_utilization"] == 1.0


def test_success_report_identifies_plan_deterministically() -> None:
    payload = _payload([{"name": "Algo", "credits": 5, "confidenceLevel": 1, "weakAreas": "Trees"}])
    result = run_planner(payload, today=TODAY)
    metrics = collect_metrics(result)
    stamp = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)

    report = build_success_report(result, metrics, ValidationReport(), generated_at=stamp)
    again = build_success_report(result, metrics, ValidationReport(), generated_at=stamp)

    assert report == again
    assert report["status"] == "ok"
    assert report["headline"] == {
        "tasks": metrics["placed_tasks"],
        "scheduled_hours": metrics["scheduled_hours"],
        "warnings": ["WARN_TRUNCATED_TASKS_SKIPPED"],
    }
    plan_output = report["plan_output"]
    assert plan_output["generated_at"] == "2026-01-05T09:30:00Z"
    assert plan_output["plan_id"] == "plan-ada-lovelace-20260105093000"
    assert plan_output["export_filename"] == "study-plan-Ada-Lovelace.txt"
