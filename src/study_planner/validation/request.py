"""Shape checks for the plan request payload."""

from __future__ import annotations

from typing import Any

from .errors import ValidationError

_REQUIRED_SECTIONS: tuple[tuple[str, type], ...] = (
    ("student", dict),
    ("subjects", list),
    ("availability", dict),
)


def validate_plan_request(payload: dict[str, Any]) -> list[ValidationError]:
    """Check that the top-level sections exist with the right container type."""
    errors: list[ValidationError] = []

    for section, expected in _REQUIRED_SECTIONS:
        value = payload.get(section)
        if value is None:
            errors.append(
                ValidationError(
                    code="missing_field",
                    message=f"Missing required field: {section}",
                    path=f"$.{section}",
                )
            )
        elif not isinstance(value, expected):
            errors.append(
                ValidationError(
                    code="invalid_type",
                    message=f"Field {section} must be a JSON {'array' if expected is list else 'object'}",
                    path=f"$.{section}",
                )
            )

    subjects = payload.get("subjects")
    if isinstance(subjects, list):
        for idx, item in enumerate(subjects):
            if not isinstance(item, dict):
                errors.append(
                    ValidationError(
                        code="invalid_type",
                        message="Each subject must be a JSON object",
                        path=f"$.subjects[{idx}]",
                    )
                )

    config = payload.get("config")
    if config is not None and not isinstance(config, dict):
        errors.append(
            ValidationError(code="invalid_type", message="Field config must be a JSON object", path="$.config")
        )

    return errors
