"""JSON report envelopes written by the CLI."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from study_planner.validation import ValidationError, ValidationReport

from .export import export_filename

REPORT_SCHEMA_VERSION = "1.0.0"


def _utc_stamp(moment: datetime | None) -> str:
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _plan_id(student_name: str, generated_at: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", student_name.lower()).strip("-") or "student"
    return f"plan-{slug}-{re.sub(r'[^0-9]', '', generated_at)}"


def build_error_report(errors: list[ValidationError], code: str = "validation_error") -> dict[str, Any]:
    """Return the envelope for a rejected request; no plan is produced."""
    return {
        "status": "error",
        "error": {
            "code": code,
            "count": len(errors),
            "details": [err.as_dict() for err in errors],
        },
    }


def build_error_report_with_validation(
    errors: list[ValidationError],
    validation_report: ValidationReport,
    code: str = "validation_error",
) -> dict[str, Any]:
    payload = build_error_report(errors, code=code)
    payload["validation_report"] = validation_report.as_dict()
    return payload


def build_success_report(
    result: dict[str, Any],
    metrics: dict[str, Any],
    validation_report: ValidationReport,
    *,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Wrap a ``run_planner`` result with identifiers, metrics and validation infos.

    ``generated_at`` defaults to now; it is the only non-deterministic field.
    """
    stamp = _utc_stamp(generated_at)
    study_plan = result.get("study_plan", {})
    warnings = result.get("warnings", [])
    plan_output = {
        "schema_version": REPORT_SCHEMA_VERSION,
        "plan_id": _plan_id(str(study_plan.get("studentName", "")), stamp),
        "generated_at": stamp,
        "export_filename": export_filename(study_plan),
        "study_plan": study_plan,
        "plan_summary": result.get("plan_summary", {}),
        "daily_plan": result.get("daily_plan", []),
        "metrics": metrics,
        "warnings": warnings,
        "suggestions": result.get("suggestions", []),
        "decision_trace": result.get("decision_trace", []),
        "effective_config": result.get("effective_config", {}),
        "validation_report": validation_report.as_dict(),
    }
    return {
        "status": "ok",
        "headline": {
            "tasks": metrics.get("placed_tasks", 0),
            "scheduled_hours": metrics.get("scheduled_hours", 0.0),
            "warnings": [item.get("code") for item in warnings],
        },
        "metrics": metrics,
        "plan_output": plan_output,
    }
