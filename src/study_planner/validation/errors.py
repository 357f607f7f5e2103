"""Validation result types shared by the request checks and the config resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SEVERITY_ERROR = "error"
SEVERITY_INFO = "info"


@dataclass(slots=True)
class ValidationError:
    """A blocking problem, as listed in the ``details`` of an error report."""

    code: str
    message: str
    path: str

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message, "path": self.path}


@dataclass(slots=True)
class ValidationIssue:
    code: str
    message: str
    field_path: str
    severity: str = SEVERITY_ERROR
    suggested_fix: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "field_path": self.field_path}
        if self.suggested_fix:
            payload["suggested_fix"] = self.suggested_fix
        payload.update(self.extra)
        return payload

    def to_error(self) -> ValidationError:
        return ValidationError(code=self.code, message=self.message, path=self.field_path)


@dataclass(slots=True)
class ValidationReport:
    """Every rule runs and appends here; nothing stops at the first failure.

    Errors reject the request. Infos (for instance a clamped config value)
    travel with a successful plan.
    """

    errors: list[ValidationIssue] = field(default_factory=list)
    infos: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(
        self,
        *,
        code: str,
        message: str,
        field_path: str,
        suggested_fix: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.errors.append(
            ValidationIssue(code, message, field_path, SEVERITY_ERROR, suggested_fix, dict(extra or {}))
        )

    def add_info(self, *, code: str, message: str, field_path: str, extra: dict[str, Any] | None = None) -> None:
        self.infos.append(ValidationIssue(code, message, field_path, SEVERITY_INFO, None, dict(extra or {})))

    def extend(self, other: ValidationReport) -> None:
        self.errors += other.errors
        self.infos += other.infos

    def codes(self) -> list[str]:
        return [issue.code for issue in self.errors]

    def as_errors(self) -> list[ValidationError]:
        return [issue.to_error() for issue in self.errors]

    def as_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "errors": [issue.as_dict() for issue in self.errors],
            "infos": [issue.as_dict() for issue in self.infos],
        }
