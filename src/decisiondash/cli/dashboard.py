"""CLI commands for generating decision-service dashboards."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from decisiondash.cli import ux
from decisiondash.config import get_settings
from decisiondash.core.errors import ExitCode, ValidationError, main_with_error_handling
from decisiondash.dashboards import decision_types
from decisiondash.dashboards.generated import (
    GeneratedFile,
    domain_dashboard_file,
    generate_endpoint_dashboards,
    operational_dashboard_file,
    write_generated_files,
)
from decisiondash.dashboards.synthesizer import DashboardSynthesizer, build_dashboard_name
from decisiondash.domain import BuildCoordinate, load_decisions


def _build_coordinate(artifact_id: Optional[str], version: Optional[str]) -> Optional[BuildCoordinate]:
    if artifact_id and version:
        return BuildCoordinate(artifact_id=artifact_id, version=version)
    if artifact_id or version:
        raise ValidationError(
            "--artifact-id and --version must be given together",
            {"artifact_id": artifact_id, "version": version},
        )
    return None


def _require_build(artifact_id: Optional[str], version: Optional[str]) -> BuildCoordinate:
    build = _build_coordinate(artifact_id, version)
    if build is None:
        raise ValidationError("--artifact-id and --version are required to generate dashboards")
    return build


def _emit(generated: GeneratedFile, output: Optional[str], dry_run: bool) -> None:
    if dry_run:
        # Plain print keeps the JSON pipeable
        print(generated.text)
        return

    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(generated.contents)
    else:
        (path,) = write_generated_files([generated], get_settings().output_dir)
    ux.success(f"Dashboard written to {path}")


def _report_warnings(warnings: List[str]) -> int:
    for message in warnings:
        ux.warning(message)
    return ExitCode.WARNING if warnings else ExitCode.SUCCESS


@main_with_error_handling()
def generate_operational_command(
    endpoint: str,
    artifact_id: Optional[str],
    version: Optional[str],
    template: Optional[str] = None,
    name: Optional[str] = None,
    audit_link: bool = False,
    output: Optional[str] = None,
    dry_run: bool = False,
) -> int:
    """Generate the operational dashboard of one endpoint.

    Returns:
        Exit code
    """
    build = _require_build(artifact_id, version)
    dashboard_name = name or build_dashboard_name(build, endpoint)

    text = DashboardSynthesizer().operational_dashboard(
        template or get_settings().operational_template,
        dashboard_name,
        endpoint,
        build,
        audit_link,
    )
    _emit(operational_dashboard_file(endpoint, text), output, dry_run)
    return ExitCode.SUCCESS


@main_with_error_handling()
def generate_decision_command(
    endpoint: str,
    decisions_file: str,
    artifact_id: Optional[str],
    version: Optional[str],
    template: Optional[str] = None,
    name: Optional[str] = None,
    audit_link: bool = False,
    output: Optional[str] = None,
    dry_run: bool = False,
) -> int:
    """Generate the domain dashboard of a decision-model endpoint.

    Returns:
        Exit code (1 when some decisions had no panel generated)
    """
    build = _require_build(artifact_id, version)
    decisions = load_decisions(decisions_file)
    dashboard_name = name or build_dashboard_name(build, endpoint)

    synthesizer = DashboardSynthesizer()
    text = synthesizer.decision_dashboard(
        template or get_settings().domain_template,
        dashboard_name,
        endpoint,
        build,
        decisions,
        audit_link,
    )
    _emit(domain_dashboard_file(endpoint, text), output, dry_run)
    return _report_warnings(synthesizer.warnings)


@main_with_error_handling()
def generate_rule_command(
    endpoint: str,
    artifact_id: Optional[str],
    version: Optional[str],
    template: Optional[str] = None,
    name: Optional[str] = None,
    audit_link: bool = False,
    output: Optional[str] = None,
    dry_run: bool = False,
) -> int:
    """Generate the domain dashboard of a rule-unit endpoint."""
    build = _require_build(artifact_id, version)
    dashboard_name = name or build_dashboard_name(build, endpoint)

    text = DashboardSynthesizer().rule_dashboard(
        template or get_settings().domain_template,
        dashboard_name,
        endpoint,
        build,
        audit_link,
    )
    _emit(domain_dashboard_file(endpoint, text), output, dry_run)
    return ExitCode.SUCCESS


@main_with_error_handling()
def generate_endpoint_command(
    endpoint: str,
    artifact_id: Optional[str],
    version: Optional[str],
    decisions_file: Optional[str] = None,
    output_dir: Optional[str] = None,
    audit_link: Optional[bool] = None,
) -> int:
    """Generate operational and domain dashboards of an endpoint into a directory."""
    build = _require_build(artifact_id, version)
    decisions = load_decisions(decisions_file) if decisions_file else None

    ux.header(f"Dashboards for {endpoint}")
    ux.print_key_value(
        {
            "Artifact": build.artifact_id,
            "Version": build.version,
            "Flavor": "decision model" if decisions is not None else "rule unit",
        }
    )

    synthesizer = DashboardSynthesizer()
    files = generate_endpoint_dashboards(
        endpoint,
        build,
        decisions=decisions,
        generate_audit_link=audit_link,
        synthesizer=synthesizer,
    )
    for path in write_generated_files(files, output_dir or get_settings().output_dir):
        ux.success(f"Wrote {path}")
    return _report_warnings(synthesizer.warnings)


@main_with_error_handling()
def dashboard_name_command(
    handler: str,
    artifact_id: Optional[str] = None,
    version: Optional[str] = None,
) -> int:
    """Print the dashboard name for a handler."""
    print(build_dashboard_name(_build_coordinate(artifact_id, version), handler))
    return ExitCode.SUCCESS


def list_types_command() -> int:
    """List decision types that get dashboard panels."""
    rows = []
    for type_name in decision_types.list_supported_types():
        function = decision_types.function_for(type_name)
        rows.append([type_name, function.kind.value, decision_types.y_axis_for(type_name)])
    ux.print_table("Supported decision types", ["Type", "Query function", "Y-axis"], rows)
    return ExitCode.SUCCESS
