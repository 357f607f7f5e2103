"""Domain rules for student, subject and availability inputs."""

from __future__ import annotations

import re
from datetime import date
from typing import Any

from .errors import ValidationReport

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PREFERRED_TIMES = ("morning", "afternoon", "evening", "night", "flexible")

MIN_GRADUATION_YEAR = 2024
CREDITS_RANGE = (1, 8)
CONFIDENCE_RANGE = (1, 5)
WEEKDAY_HOURS_RANGE = (1, 12)
WEEKEND_HOURS_RANGE = (1, 16)


def validate_domain_inputs(payload: dict[str, Any], *, today: date | None = None) -> ValidationReport:
    """Validate a plan request against the wizard rules, reporting every issue."""
    report = ValidationReport()
    reference_day = today or date.today()

    student = payload.get("student", {})
    if isinstance(student, dict):
        _validate_student(student, report)

    subjects = payload.get("subjects", [])
    if isinstance(subjects, list):
        _validate_subjects(subjects, report)

    availability = payload.get("availability", {})
    if isinstance(availability, dict):
        _validate_availability(availability, reference_day, report)

    return report


def _validate_student(student: dict[str, Any], report: ValidationReport) -> None:
    for key, label in (("name", "Name"), ("college", "College name"), ("branch", "Branch/Program")):
        if not _non_blank(student.get(key)):
            report.add_error(
                code="MISSING_REQUIRED_FIELD",
                message=f"{label} is required",
                field_path=f"$.student.{key}",
            )

    email = student.get("email")
    if not _non_blank(email):
        report.add_error(code="MISSING_REQUIRED_FIELD", message="Email is required", field_path="$.student.email")
    elif not _EMAIL_RE.match(str(email).strip()):
        report.add_error(code="INVALID_EMAIL_FORMAT", message="Invalid email format", field_path="$.student.email")

    year = student.get("graduationYear")
    if year is not None and (not _is_number(year) or year < MIN_GRADUATION_YEAR):
        report.add_error(
            code="OUT_OF_RANGE",
            message=f"Year must be {MIN_GRADUATION_YEAR} or later",
            field_path="$.student.graduationYear",
        )


def _validate_subjects(subjects: list[Any], report: ValidationReport) -> None:
    if not subjects:
        report.add_error(
            code="EMPTY_SUBJECTS",
            message="Please add at least one subject",
            field_path="$.subjects",
            suggested_fix="Add one subject with its credits and confidence level.",
        )
        return

    seen_ids: set[str] = set()
    for idx, subject in enumerate(subjects):
        if not isinstance(subject, dict):
            continue
        path = f"$.subjects[{idx}]"

        subject_id = subject.get("id")
        if subject_id is not None:
            key = str(subject_id)
            if key in seen_ids:
                report.add_error(
                    code="DUPLICATE_SUBJECT_ID",
                    message=f"Duplicate subject id: {key}",
                    field_path=f"{path}.id",
                )
            seen_ids.add(key)

        if not _non_blank(subject.get("name")):
            report.add_error(code="MISSING_REQUIRED_FIELD", message="Subject name is required", field_path=f"{path}.name")

        _check_range(subject.get("credits"), CREDITS_RANGE, "Credits", f"{path}.credits", report, whole=True)
        _check_range(
            subject.get("confidenceLevel"),
            CONFIDENCE_RANGE,
            "Confidence level",
            f"{path}.confidenceLevel",
            report,
            whole=True,
        )

        for key in ("strongAreas", "weakAreas"):
            value = subject.get(key)
            if value is not None and not isinstance(value, (str, list)):
                report.add_error(
                    code="INVALID_TYPE",
                    message=f"{key} must be a comma-separated string or a list of topics",
                    field_path=f"{path}.{key}",
                )


def _validate_availability(availability: dict[str, Any], today: date, report: ValidationReport) -> None:
    _check_range(
        availability.get("weekdayHours"),
        WEEKDAY_HOURS_RANGE,
        "Weekday hours",
        "$.availability.weekdayHours",
        report,
    )
    _check_range(
        availability.get("weekendHours"),
        WEEKEND_HOURS_RANGE,
        "Weekend hours",
        "$.availability.weekendHours",
        report,
    )

    raw_target = availability.get("targetDate")
    target = _parse_date(raw_target) if isinstance(raw_target, str) else None
    if target is None:
        report.add_error(
            code="INVALID_DATE_FORMAT",
            message="Target date must be an ISO date (YYYY-MM-DD)",
            field_path="$.availability.targetDate",
        )
    elif target <= today:
        report.add_error(
            code="TARGET_DATE_NOT_IN_FUTURE",
            message="Target date must be in the future",
            field_path="$.availability.targetDate",
            suggested_fix=f"Pick a date after {today.isoformat()}.",
        )

    preferred = availability.get("preferredTime")
    if preferred is not None and preferred not in _PREFERRED_TIMES:
        report.add_error(
            code="INVALID_ENUM_VALUE",
            message=f"Preferred time {preferred!r} not in {', '.join(_PREFERRED_TIMES)}",
            field_path="$.availability.preferredTime",
        )


def _check_range(
    value: Any,
    bounds: tuple[int, int],
    label: str,
    path: str,
    report: ValidationReport,
    *,
    whole: bool = False,
) -> None:
    low, high = bounds
    if whole and isinstance(value, float) and not value.is_integer():
        report.add_error(
            code="INVALID_TYPE",
            message=f"{label} must be a whole number",
            field_path=path,
            suggested_fix=f"Use a whole number between {low}-{high}.",
        )
        return
    if not _is_number(value) or not low <= value <= high:
        report.add_error(
            code="OUT_OF_RANGE",
            message=f"{label} must be between {low}-{high}",
            field_path=path,
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _non_blank(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _parse_date(raw: str) -> date | None:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None
