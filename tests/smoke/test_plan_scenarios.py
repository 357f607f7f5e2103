from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from study_planner.cli import run_plan_command
from study_planner.engine import run_planner


def _write(path: Path, payload: dict) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def _request(subjects: list[dict], *, weekday: float = 3, weekend: float = 6, target: str = "2026-01-19") -> dict:
    return {
        "student": {
            "name": "Ada Lovelace",
            "college": "Analytical College",
            "branch": "Mathematics",
            "graduationYear": 2027,
            "email": "ada@example.com",
        },
        "subjects": subjects,
        "availability": {
            "weekdayHours": weekday,
            "weekendHours": weekend,
            "preferredTime": "evening",
            "targetDate": target,
        },
    }


def _run_cli(tmp_path: Path, request: dict, today: str = "2026-01-05") -> dict:
    request_path = tmp_path / "plan_request.json"
    output = tmp_path / "plan_output.json"
    _write(request_path, request)
    code = run_plan_command(str(request_path), str(output), today=date.fromisoformat(today))
    payload = json.loads(output.read_text(encoding="utf-8"))
    payload["_exit_code"] = code
    return payload


def test_smoke_scenario_1_single_subject_two_weeks(tmp_path: Path) -> None:
    payload = _run_cli(
        tmp_path,
        _request(
            [
                {
                    "id": "ds",
                    "name": "Data Structures",
                    "credits": 5,
                    "confidenceLevel": 1,
                    "strongAreas": "Arrays",
                    "weakAreas": "Trees, Graphs",
                }
            ]
        ),
    )
    assert payload["_exit_code"] == 0
    assert payload["status"] == "ok"

    plan = payload["plan_output"]["study_plan"]
    assert plan["daysRemaining"] == 14
    assert plan["totalAvailableHours"] == 54
    assert plan["completionTimeline"] == "14 days remaining | ~54 total study hours available"
    assert plan["confidenceBoost"] == "Expected confidence improvement: +4 levels across subjects"
    assert plan["nextWeekFocus"] == "Next 7 days focus: Trees, Graphs"

    (subject_plan,) = plan["subjectPlans"]
    assert subject_plan["percentageAllocation"] == 100
    assert subject_plan["totalHours"] == 54
    assert subject_plan["weeklyBreakdown"] == [27, 24]
    assert subject_plan["keyTopics"] == ["Trees", "Graphs", "Arrays"]
    assert subject_plan["allocation"].startswith("High priority")

    schedule = plan["schedule"]
    assert len(schedule) == 26
    assert schedule[-1]["date"] == "2026-01-16"
    assert schedule[-1]["taskType"] == "buffer"
    assert [task["topic"] for task in schedule[:2]] == ["Trees", "Graphs"]
    weekend = [task for task in schedule if task["dayOfWeek"] in ("Saturday", "Sunday")]
    assert len(weekend) == 6

    assert [focus["week"] for focus in plan["weeklyFocuses"]] == [1, 2]
    assert plan["weeklyFocuses"][0]["subjects"][0]["hoursAllocated"] == 19

    codes = [item["code"] for item in payload["plan_output"]["warnings"]]
    assert codes == ["WARN_TRUNCATED_TASKS_SKIPPED"]
    assert payload["metrics"]["skipped_tasks"] == 10


def test_smoke_scenario_2_four_subjects_two_months(tmp_path: Path) -> None:
    payload = _run_cli(
        tmp_path,
        _request(
            [
                {"id": "os", "name": "Operating Systems", "credits": 4, "confidenceLevel": 2, "weakAreas": "Paging, Scheduling"},
                {"id": "db", "name": "Databases", "credits": 3, "confidenceLevel": 4, "strongAreas": "SQL"},
                {"id": "ml", "name": "Machine Learning", "credits": 6, "confidenceLevel": 1, "weakAreas": "Backprop"},
                {"id": "et", "name": "Ethics", "credits": 1, "confidenceLevel": 5},
            ],
            weekday=2,
            weekend=4,
            target="2026-03-06",
        ),
    )
    assert payload["_exit_code"] == 0
    plan = payload["plan_output"]["study_plan"]

    assert [item["subjectName"] for item in plan["subjectPlans"]] == [
        "Machine Learning",
        "Operating Systems",
        "Databases",
        "Ethics",
    ]
    assert abs(sum(item["percentageAllocation"] for item in plan["subjectPlans"]) - 100) <= 2
    assert plan["schedule"][0]["subject"] == "Machine Learning"
    assert all(task["date"] <= "2026-03-06" for task in plan["schedule"])
    assert len(plan["weeklyFocuses"]) == 9
    assert [entry["subjectName"] for entry in plan["weeklyFocuses"][0]["subjects"]] == [
        "Machine Learning",
        "Operating Systems",
    ]
    ethics = [task for task in plan["schedule"] if task["subject"] == "Ethics"]
    assert all(task["topic"] == "Ethics" for task in ethics)


def test_smoke_scenario_3_target_today_gives_empty_plan() -> None:
    result = run_planner(
        _request([{"id": "m", "name": "Math", "credits": 4, "confidenceLevel": 2, "weakAreas": "Limits"}], target="2026-01-05"),
        today=date(2026, 1, 5),
    )
    plan = result["study_plan"]

    assert plan["daysRemaining"] == 0
    assert plan["totalAvailableHours"] == 0
    assert plan["schedule"] == []
    assert plan["weeklyFocuses"] == []
    assert plan["completionTimeline"] == "0 days remaining | ~0 total study hours available"
    assert plan["confidenceBoost"] == "Expected confidence improvement: +0 levels across subjects"
    assert plan["subjectPlans"][0]["percentageAllocation"] == 100
    assert plan["subjectPlans"][0]["weeklyBreakdown"] == []
    assert [item["code"] for item in result["warnings"]] == ["WARN_EMPTY_HORIZON"]
    assert [item["code"] for item in result["suggestions"]] == ["SUGGEST_EXTEND_TARGET_DATE"]


def test_smoke_scenario_4_past_target_is_rejected_by_cli(tmp_path: Path) -> None:
    payload = _run_cli(
        tmp_path,
        _request([{"id": "m", "name": "Math", "credits": 4, "confidenceLevel": 2}], target="2025-12-31"),
    )
    assert payload["_exit_code"] == 2
    assert payload["error"]["code"] == "validation_error"
    assert [item["code"] for item in payload["error"]["details"]] == ["TARGET_DATE_NOT_IN_FUTURE"]
