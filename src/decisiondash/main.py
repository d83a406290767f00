"""decisiondash command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from decisiondash import __version__
from decisiondash.logging import configure_logging


def _add_build_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--artifact-id", "-a", dest="artifact_id", help="Artifact id of the deployable")
    parser.add_argument("--version", dest="version", help="Version of the deployable")


def _add_dashboard_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("endpoint", help="Endpoint (handler) name")
    _add_build_arguments(parser)
    parser.add_argument("--template", "-t", help="Template file path or packaged template name")
    parser.add_argument("--name", help="Dashboard name (default: <artifact>_<version> - <endpoint>)")
    parser.add_argument("--audit-link", action="store_true", help="Add the 'Audit UI' dashboard link")
    parser.add_argument("--output", "-o", help="Output file (default: <output_dir>/dashboards/...)")
    parser.add_argument("--dry-run", action="store_true", help="Print dashboard JSON without writing a file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decisiondash",
        description="Generate Grafana dashboards for decision-service endpoints",
    )
    parser.add_argument("--version-info", action="version", version=f"decisiondash {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Human-readable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    operational_parser = subparsers.add_parser("operational", help="Generate an operational dashboard")
    _add_dashboard_arguments(operational_parser)

    decision_parser = subparsers.add_parser("decision", help="Generate a domain dashboard for a decision model")
    _add_dashboard_arguments(decision_parser)
    decision_parser.add_argument("--decisions", "-d", required=True, help="YAML file listing the decisions")

    rules_parser = subparsers.add_parser("rules", help="Generate a domain dashboard for a rule unit")
    _add_dashboard_arguments(rules_parser)

    endpoint_parser = subparsers.add_parser("endpoint", help="Generate all dashboards of an endpoint")
    endpoint_parser.add_argument("endpoint", help="Endpoint (handler) name")
    _add_build_arguments(endpoint_parser)
    endpoint_parser.add_argument("--decisions", "-d", help="YAML file listing the decisions (decision models only)")
    endpoint_parser.add_argument("--output-dir", help="Output directory (default: settings output_dir)")
    endpoint_parser.add_argument("--audit-link", action="store_true", default=None, help="Add the 'Audit UI' link")

    name_parser = subparsers.add_parser("name", help="Print the dashboard name of a handler")
    name_parser.add_argument("handler", help="Handler name")
    _add_build_arguments(name_parser)

    subparsers.add_parser("list-types", help="List decision types that get panels")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(logging.DEBUG, json_output=False)
    else:
        configure_logging()

    if args.command in ("operational", "decision", "rules"):
        from decisiondash.cli.dashboard import (
            generate_decision_command,
            generate_operational_command,
            generate_rule_command,
        )

        common = dict(
            endpoint=args.endpoint,
            artifact_id=args.artifact_id,
            version=args.version,
            template=args.template,
            name=args.name,
            audit_link=args.audit_link,
            output=args.output,
            dry_run=args.dry_run,
        )
        if args.command == "operational":
            sys.exit(generate_operational_command(**common))
        if args.command == "decision":
            sys.exit(generate_decision_command(decisions_file=args.decisions, **common))
        sys.exit(generate_rule_command(**common))

    if args.command == "endpoint":
        from decisiondash.cli.dashboard import generate_endpoint_command

        sys.exit(generate_endpoint_command(
            endpoint=args.endpoint,
            artifact_id=args.artifact_id,
            version=args.version,
            decisions_file=args.decisions,
            output_dir=args.output_dir,
            audit_link=args.audit_link,
        ))

    if args.command == "name":
        from decisiondash.cli.dashboard import dashboard_name_command

        sys.exit(dashboard_name_command(args.handler, args.artifact_id, args.version))

    if args.command == "list-types":
        from decisiondash.cli.dashboard import list_types_command

        sys.exit(list_types_command())

    parser.print_help()


if __name__ == "__main__":
    main()
