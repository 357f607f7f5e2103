"""Plain-text rendering of a study plan for download."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from study_planner.models import StudyPlan


def _heading(title: str, underline: str = "-") -> list[str]:
    return [title, underline * len(title)]


def render_plan_text(plan: StudyPlan | Mapping[str, Any]) -> str:
    """Render the plan as the downloadable text document.

    Accepts a :class:`StudyPlan` or its ``as_dict()`` form.
    """
    data = plan.as_dict() if isinstance(plan, StudyPlan) else plan

    lines: list[str] = []
    lines += _heading("AI STUDY PLANNER - PERSONALIZED STUDY SCHEDULE", "=")
    lines += [
        "",
        f"Student: {data['studentName']}",
        f"Target Completion Date: {data['targetDate']}",
        f"Days Remaining: {data['daysRemaining']}",
        "",
    ]
    lines += _heading("OVERVIEW")
    lines += [data["completionTimeline"], data["confidenceBoost"], ""]
    lines += _heading("NEXT WEEK FOCUS")
    lines += [data["nextWeekFocus"], ""]
    lines += _heading("SUBJECT ALLOCATION")
    for subject in data["subjectPlans"]:
        lines += [
            "",
            subject["subjectName"],
            f"  - Hours: {subject['totalHours']}h ({subject['percentageAllocation']}%)",
            f"  - {subject['allocation']}",
            f"  - Key Topics: {', '.join(subject['keyTopics'])}",
            f"  - Expected Confidence Improvement: +{subject['estimatedConfidenceImprovement']} levels",
        ]
    lines.append("")
    lines += _heading("STUDY TIPS")
    lines += [f"{idx}. {tip}" for idx, tip in enumerate(data["tips"], start=1)]
    return "\n".join(lines) + "\n"


def export_filename(plan: StudyPlan | Mapping[str, Any]) -> str:
    name = plan.student_name if isinstance(plan, StudyPlan) else str(plan.get("studentName", ""))
    slug = re.sub(r"\s", "-", name)
    return f"study-plan-{slug}.txt"
