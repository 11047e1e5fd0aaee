"""CLI entry point for FormBuilder."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from formbuilder import __version__, logger
from formbuilder.exceptions import PackageError
from formbuilder.form import Form
from formbuilder.logging import configure_logging
from formbuilder.settings import get_settings
from formbuilder.typing.models import SubmittedData


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="formbuilder")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render a form schema to HTML")
    render_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    render_parser.add_argument("--data", default=None, help="URL-encoded request data, e.g. 'frmID=user&txtName=Jaime'")
    render_parser.add_argument("--method", default="POST")

    validate_parser = subparsers.add_parser("validate", help="Validate request data against a form schema")
    validate_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    validate_parser.add_argument("--data", required=True, help="URL-encoded request data")
    validate_parser.add_argument("--method", default="POST")
    validate_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    return parser


def _build_submitted_data(args: argparse.Namespace) -> SubmittedData | None:
    """Build the request snapshot from CLI arguments.

    Args:
        args (argparse.Namespace): Parsed CLI args.

    Returns:
        SubmittedData | None: Snapshot, or None when no data was given.
    """
    if args.data is None:
        return None
    return SubmittedData.from_encoded(args.data, method=args.method)


def build_validation_report(form: Form, submitted: SubmittedData) -> dict[str, Any]:
    """Validate the request and summarize the outcome.

    Args:
        form (Form): Form to validate.
        submitted (SubmittedData): Request snapshot.

    Returns:
        dict[str, Any]: `submitted`, `valid`, `errors` and, when valid, `data`.
    """
    result = form.validate(submitted)
    return {
        "submitted": form.submitted(submitted),
        "valid": result.is_valid,
        "errors": result.errors,
        "data": form.get_data_map() if result.is_valid else {},
    }


def persist_report(report: dict[str, Any], output_path: Path) -> None:
    """Write a validation report as JSON.

    Args:
        report (dict[str, Any]): Report payload.
        output_path (Path): Target path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2, sort_keys=True), encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, `sys.argv[1:]` when omitted.

    Returns:
        int: Exit code (0 for success, 1 for error or invalid data).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in {"render", "validate"}:
        parser.print_help()
        return 0

    try:
        form = Form.from_path(args.schema_path, settings=settings)
        submitted = _build_submitted_data(args)
        if args.command == "render":
            sys.stdout.write(form.render(submitted) + "\n")
            return 0
        report = build_validation_report(form, submitted if submitted is not None else SubmittedData())
    except PackageError:
        logger.exception("Form processing failed")
        return 1

    if args.output_path is not None:
        persist_report(report, args.output_path)
        logger.info("Validation report written", extra={"output_path": str(args.output_path)})
    sys.stdout.write(json.dumps(report, indent=2, sort_keys=True) + "\n")
    return 0 if report["valid"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
