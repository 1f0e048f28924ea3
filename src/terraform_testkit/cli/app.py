"""Command-line interface for inspecting and checking Terraform plans."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ..adapters import TerraformCommandError, read_plan_file
from ..matchers import IncludeOutputChange, IncludeResourceChange, PlanChangeMatcher
from ..models import Plan
from ..models.query import FLAG_FIELDS, KIND_FLAGS
from ..models.values import PathSegment

logger = logging.getLogger(__name__)


class UsageError(ValueError):
    """Raised for command line input that cannot be turned into a check."""


def render_table(headers: Tuple[str, ...], rows: Sequence[Tuple[str, ...]]) -> str:
    """Render rows as a simple text table for terminal output."""

    all_rows = [headers, *rows]
    widths = [max(len(str(row[idx])) for row in all_rows) for idx in range(len(headers))]

    def format_row(values: Tuple[str, ...]) -> str:
        return "  ".join(
            str(value).ljust(width) for value, width in zip(values, widths, strict=True)
        ).rstrip()

    lines = [format_row(headers)]
    lines.append("  ".join("=" * width for width in widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def summarize(plan: Plan) -> Dict[str, Any]:
    return {
        "format_version": plan.format_version,
        "terraform_version": plan.terraform_version,
        "resource_changes": [
            {
                "address": resource_change.address,
                "type": resource_change.type,
                "kind": resource_change.change.kind.value,
                "actions": list(resource_change.change.actions),
            }
            for resource_change in plan.resource_changes
        ],
        "output_changes": [
            {
                "name": output_change.name,
                "kind": output_change.change.kind.value,
                "actions": list(output_change.change.actions),
            }
            for output_change in plan.output_changes.values()
        ],
    }


def render_summary(summary: Mapping[str, Any]) -> str:
    sections: List[str] = []

    resources = summary["resource_changes"]
    if resources:
        sections.append(
            render_table(
                ("Kind", "Type", "Address"),
                [(entry["kind"], entry["type"], entry["address"]) for entry in resources],
            )
        )
    else:
        sections.append("No resource changes.")

    outputs = summary["output_changes"]
    if outputs:
        sections.append(
            render_table(("Kind", "Output"), [(entry["kind"], entry["name"]) for entry in outputs])
        )
    else:
        sections.append("No output changes.")

    return "\n\n".join(sections)


# ----------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="terraform-testkit", description="Inspect and check Terraform plans"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    summary_parser = subparsers.add_parser(
        "summary", help="List the resource and output changes of a plan."
    )
    _add_plan_arguments(summary_parser)
    summary_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format for the summary.",
    )

    check_parser = subparsers.add_parser(
        "check", help="Check that a plan includes a resource or output change."
    )
    _add_plan_arguments(check_parser)
    check_parser.add_argument(
        "--resource",
        dest="resource_fields",
        action="append",
        default=None,
        metavar="FIELD=VALUE",
        help="Resource change field to match, such as type=aws_s3_bucket.",
    )
    check_parser.add_argument(
        "--kind",
        choices=sorted(KIND_FLAGS),
        default=None,
        help="Kind of change to match.",
    )
    check_parser.add_argument(
        "--attribute",
        dest="attributes",
        action="append",
        default=None,
        metavar="PATH=VALUE",
        help="Attribute value to require; PATH is dotted, VALUE is JSON or a plain string.",
    )
    check_parser.add_argument(
        "--stage",
        choices=["before", "after"],
        default="after",
        help="Side of the change the attribute values are checked against.",
    )
    check_parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Require exactly this many matching resource changes.",
    )
    check_parser.add_argument(
        "--output",
        dest="output_name",
        default=None,
        help="Check an output change with this name instead of a resource change.",
    )
    check_parser.add_argument(
        "--value",
        dest="output_value",
        default=None,
        help="Expected output value after apply; JSON or a plain string.",
    )
    check_parser.add_argument(
        "--absent",
        action="store_true",
        help="Require that no matching change is included.",
    )

    return parser


def _add_plan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "plan_json",
        type=Path,
        nargs="?",
        default=None,
        help="Path to a plan exported with `terraform show -json`.",
    )
    parser.add_argument(
        "--plan-file",
        type=Path,
        default=None,
        help="Path to a binary Terraform plan file generated via `terraform plan -out`.",
    )
    parser.add_argument(
        "--terraform-bin",
        default="terraform",
        help="Name or path of the Terraform executable used to read --plan-file.",
    )


# ----------------------------------------------------------------------
def parse_value(raw: str) -> Any:
    """Decode ``raw`` as JSON, falling back to the plain string."""

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_attribute_path(raw: str) -> Tuple[PathSegment, ...]:
    segments: List[PathSegment] = []
    for part in raw.split("."):
        if not part:
            raise UsageError(f"Attribute path must not contain empty segments: {raw}")
        segments.append(int(part) if part.isdigit() else part)
    return tuple(segments)


def _split_assignment(value: str, label: str) -> Tuple[str, str]:
    if "=" not in value:
        raise UsageError(f"{label} must be in {label.upper()}=VALUE form: {value}")
    key, raw = value.split("=", 1)
    return key.strip(), raw


def load_plan(args: argparse.Namespace) -> Plan:
    if args.plan_json and args.plan_file:
        raise UsageError("Provide either a plan JSON path or --plan-file, not both")

    if args.plan_file:
        return Plan.from_json(read_plan_file(args.plan_file, binary=args.terraform_bin))

    if not args.plan_json:
        raise UsageError("A plan JSON path or --plan-file is required")

    path: Path = args.plan_json
    if not path.exists():
        raise UsageError(f"Terraform plan JSON artifact not found: {path}")
    return Plan.from_json(path.read_text(encoding="utf-8"))


def build_matcher(args: argparse.Namespace) -> PlanChangeMatcher:
    """Translate the ``check`` arguments into a plan change matcher."""

    flags: Dict[str, Any] = {args.kind: True} if args.kind else {}

    if args.output_name is not None:
        if args.resource_fields or args.attributes or args.count is not None:
            raise UsageError("--output cannot be combined with resource options")
        output_matcher = IncludeOutputChange(name=args.output_name, **flags)
        if args.output_value is not None:
            output_matcher.with_value(parse_value(args.output_value))
        return output_matcher

    if args.output_value is not None:
        raise UsageError("--value requires --output")

    definition: Dict[str, Any] = {}
    for field in args.resource_fields or []:
        key, raw = _split_assignment(field, "field")
        if key in FLAG_FIELDS:
            raise UsageError(f"Change kind '{key}' belongs in --kind, not --resource")
        definition[key] = parse_value(raw) if key == "index" else raw
    definition.update(flags)

    resource_matcher = IncludeResourceChange(definition, count=args.count)
    for attribute in args.attributes or []:
        path, raw = _split_assignment(attribute, "path")
        resource_matcher.with_attribute_value(
            args.stage, parse_attribute_path(path), parse_value(raw)
        )
    return resource_matcher


def _handle_summary(args: argparse.Namespace) -> int:
    try:
        summary = summarize(load_plan(args))
    except (ValueError, TerraformCommandError) as exc:
        print(f"Error: {exc}")
        return 2

    if args.format == "json":
        print(json.dumps(summary, indent=2))
    else:
        print(render_summary(summary))
    return 0


def _handle_check(args: argparse.Namespace) -> int:
    try:
        plan = load_plan(args)
        matcher = build_matcher(args)
        matched = matcher.matches(plan)
    except (ValueError, TerraformCommandError) as exc:
        print(f"Error: {exc}")
        return 2

    if args.absent:
        if matched:
            print(matcher.failure_message_when_negated(plan).lstrip("\n"))
            return 1
        print("OK: no matching change included")
        return 0

    if not matched:
        print(matcher.failure_message(plan).lstrip("\n"))
        return 1
    print(f"OK: {matcher.describe()}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "summary":
        return _handle_summary(args)
    if args.command == "check":
        return _handle_check(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
