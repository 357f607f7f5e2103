"""Turn a raw wizard payload into immutable request objects."""

from __future__ import annotations

from datetime import date
from typing import Any

from study_planner.models import AvailabilityData, PlanRequest, StudentData, Subject


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_topics(raw: Any) -> tuple[str, ...]:
    """Split a comma-separated topic list into trimmed entries.

    An empty string yields no topics; empty segments are kept as empty entries.
    """
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        return tuple(str(item).strip() for item in raw)
    text = str(raw)
    if not text:
        return ()
    return tuple(part.strip() for part in text.split(","))


def normalize_subject(raw: dict[str, Any], index: int) -> Subject:
    subject_id = raw.get("id")
    return Subject(
        id=str(subject_id) if subject_id is not None else f"subject-{index + 1}",
        name=str(raw.get("name", "")).strip(),
        credits=int(_as_float(raw.get("credits"), 0.0)),
        confidence_level=int(_as_float(raw.get("confidenceLevel"), 3.0)),
        strong_areas=parse_topics(raw.get("strongAreas")),
        weak_areas=parse_topics(raw.get("weakAreas")),
    )


def normalize_request(payload: dict[str, Any]) -> PlanRequest:
    """Build a :class:`PlanRequest` from a validated camelCase payload."""
    student = payload.get("student") if isinstance(payload.get("student"), dict) else {}
    subjects = payload.get("subjects") if isinstance(payload.get("subjects"), list) else []
    availability = payload.get("availability") if isinstance(payload.get("availability"), dict) else {}

    year = student.get("graduationYear")
    target_date = availability.get("targetDate")

    return PlanRequest(
        student=StudentData(
            name=str(student.get("name", "")).strip(),
            college=str(student.get("college", "")).strip(),
            branch=str(student.get("branch", "")).strip(),
            graduation_year=int(year) if isinstance(year, (int, float)) and not isinstance(year, bool) else None,
            email=str(student.get("email", "")).strip(),
        ),
        subjects=tuple(
            normalize_subject(raw, idx) for idx, raw in enumerate(subjects) if isinstance(raw, dict)
        ),
        availability=AvailabilityData(
            weekday_hours=_as_float(availability.get("weekdayHours"), 0.0),
            weekend_hours=_as_float(availability.get("weekendHours"), 0.0),
            target_date=target_date if isinstance(target_date, date) else date.fromisoformat(str(target_date)),
            preferred_time=str(availability.get("preferredTime", "night")),
        ),
    )
