"""Resolve effective planner configuration from defaults and request overrides."""

from __future__ import annotations

from typing import Any

from study_planner.validation import ValidationReport

DEFAULT_PLANNER_CONFIG: dict[str, Any] = {
    "task_hours": 1.5,
    "max_tasks_per_day": 3,
    "min_task_hours": 0.5,
    "weekdays_per_week": 5,
    "weekend_days_per_week": 2,
    "weekly_taper": 0.2,
    "confidence_hours_scale": 50.0,
    "weekly_focus_subjects": 2,
    "weekly_focus_hours_share": 0.7,
}

_INTEGER_KEYS = {"max_tasks_per_day", "weekdays_per_week", "weekend_days_per_week", "weekly_focus_subjects"}

# (min, max); None leaves the side open.
_BOUNDS: dict[str, tuple[float | None, float | None]] = {
    "task_hours": (0.25, 8.0),
    "max_tasks_per_day": (1, 12),
    "min_task_hours": (0.0, 8.0),
    "weekdays_per_week": (0, 5),
    "weekend_days_per_week": (0, 2),
    "weekly_taper": (0.0, 1.0),
    "confidence_hours_scale": (1.0, None),
    "weekly_focus_subjects": (1, None),
    "weekly_focus_hours_share": (0.0, 1.0),
}


def resolve_planner_config(payload: dict[str, Any], validation_report: ValidationReport) -> dict[str, Any]:
    """Merge the optional ``config`` object of a request over the defaults.

    Unknown keys and non-numeric values are reported as errors and ignored;
    out-of-range values are clamped and reported as infos.
    """
    config = dict(DEFAULT_PLANNER_CONFIG)
    source = payload.get("config")
    if not isinstance(source, dict):
        return config

    for key, value in source.items():
        path = f"$.config.{key}"
        if key not in DEFAULT_PLANNER_CONFIG:
            validation_report.add_error(
                code="INVALID_CONFIG_KEY",
                message=f"Config key {key!r} is not allowed",
                field_path=path,
                suggested_fix=f"Use one of: {', '.join(sorted(DEFAULT_PLANNER_CONFIG))}",
            )
            continue

        if not _is_valid_number(key, value):
            validation_report.add_error(
                code="INVALID_TYPE",
                message=f"Config key {key!r} expects {'an integer' if key in _INTEGER_KEYS else 'a number'}",
                field_path=path,
            )
            continue

        clamped = _clamp(key, value)
        if clamped != value:
            validation_report.add_info(
                code="INFO_CLAMP_CONFIG_APPLIED",
                message=f"{key} was clamped into its allowed range",
                field_path=path,
                extra={"applied_value": clamped},
            )
        config[key] = int(clamped) if key in _INTEGER_KEYS else float(clamped)

    return config


def _is_valid_number(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if key in _INTEGER_KEYS:
        return isinstance(value, int)
    return isinstance(value, (int, float))


def _clamp(key: str, value: float) -> float:
    low, high = _BOUNDS[key]
    if low is not None:
        value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value
