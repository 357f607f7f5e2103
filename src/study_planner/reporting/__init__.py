"""Reporting utilities."""

from .export import export_filename, render_plan_text
from .reports import build_error_report, build_error_report_with_validation, build_success_report
from .warnings import build_warnings_and_suggestions

__all__ = [
    "build_error_report",
    "build_error_report_with_validation",
    "build_success_report",
    "build_warnings_and_suggestions",
    "export_filename",
    "render_plan_text",
]
