"""Validation helpers."""

from .domain_validator import validate_domain_inputs
from .errors import ValidationError, ValidationIssue, ValidationReport
from .request import validate_plan_request

__all__ = [
    "ValidationError",
    "ValidationIssue",
    "ValidationReport",
    "validate_domain_inputs",
    "validate_plan_request",
]
