"""CLI entrypoint for the study planner."""

from __future__ import annotations

import argparse
import logging
from datetime import date

from study_planner.engine import run_planner
from study_planner.io import read_json, write_json, write_text
from study_planner.metrics import collect_metrics
from study_planner.normalization import resolve_planner_config
from study_planner.reporting import (
    build_error_report,
    build_error_report_with_validation,
    build_success_report,
    render_plan_text,
)
from study_planner.validation import (
    ValidationError,
    ValidationReport,
    validate_domain_inputs,
    validate_plan_request,
)

logger = logging.getLogger(__name__)


def run_plan_command(
    request_path: str,
    output_path: str,
    *,
    today: date | None = None,
    text_path: str | None = None,
) -> int:
    reference_day = today or date.today()
    validation_report = ValidationReport()

    try:
        request_payload = read_json(request_path)
    except (OSError, ValueError) as exc:
        logger.warning("cannot read plan request %s: %s", request_path, exc)
        error = build_error_report(
            [ValidationError(code="invalid_request", message=str(exc), path="$.request")],
            code="request_read_error",
        )
        write_json(output_path, error)
        return 2

    errors = validate_plan_request(request_payload)
    if errors:
        logger.warning("plan request rejected with %d shape errors", len(errors))
        write_json(output_path, build_error_report(errors))
        return 2

    effective_config = resolve_planner_config(request_payload, validation_report)
    validation_report.extend(validate_domain_inputs(request_payload, today=reference_day))

    if not validation_report.ok:
        logger.warning("plan request rejected: %s", ", ".join(validation_report.codes()))
        write_json(
            output_path,
            build_error_report_with_validation(
                validation_report.as_errors(),
                validation_report=validation_report,
                code="validation_error",
            ),
        )
        return 2

    result = run_planner({**request_payload, "effective_config": effective_config}, today=reference_day)
    metrics = collect_metrics(result)
    write_json(output_path, build_success_report(result, metrics, validation_report))
    if text_path:
        write_text(text_path, render_plan_text(result["study_plan"]))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="study-planner", description="Study plan generator CLI")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser("plan", help="Generate a study plan from a request JSON")
    plan_parser.add_argument("--request", required=True, help="Path to the plan request JSON")
    plan_parser.add_argument("--output", required=True, help="Path to the plan output JSON")
    plan_parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Planning start date (YYYY-MM-DD), defaults to the current date",
    )
    plan_parser.add_argument("--text", default=None, help="Also write the plain-text plan to this path")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "plan":
        return run_plan_command(args.request, args.output, today=args.today, text_path=args.text)

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
