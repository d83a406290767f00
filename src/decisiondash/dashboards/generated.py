"""Generated dashboard files.

Wraps synthesized dashboards as files with conventional relative paths and
writes them below an output directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import structlog

from decisiondash.config import get_settings
from decisiondash.dashboards.customizer import IdentitySource
from decisiondash.dashboards.synthesizer import DashboardSynthesizer, build_dashboard_name
from decisiondash.domain.models import BuildCoordinate, DecisionDescriptor

logger = structlog.get_logger()

DASHBOARDS_DIR = "dashboards"


class GeneratedFileType(Enum):
    """Kinds of generated files."""
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class GeneratedFile:
    """A generated file, identified by its path relative to the output root."""

    type: GeneratedFileType
    relative_path: str
    contents: bytes = field(compare=False, repr=False)

    @classmethod
    def from_text(cls, file_type: GeneratedFileType, relative_path: str, text: str) -> "GeneratedFile":
        return cls(file_type, relative_path, text.encode("utf-8"))

    @property
    def text(self) -> str:
        return self.contents.decode("utf-8")


def operational_dashboard_file(dashboard_name: str, text: str) -> GeneratedFile:
    return GeneratedFile.from_text(
        GeneratedFileType.DASHBOARD,
        f"{DASHBOARDS_DIR}/operational-dashboard-{dashboard_name}.json",
        text,
    )


def domain_dashboard_file(dashboard_name: str, text: str) -> GeneratedFile:
    return GeneratedFile.from_text(
        GeneratedFileType.DASHBOARD,
        f"{DASHBOARDS_DIR}/domain-dashboard-{dashboard_name}.json",
        text,
    )


def generate_endpoint_dashboards(
    endpoint: str,
    build: BuildCoordinate,
    decisions: Optional[Sequence[DecisionDescriptor]] = None,
    generate_audit_link: Optional[bool] = None,
    identity: Optional[IdentitySource] = None,
    synthesizer: Optional[DashboardSynthesizer] = None,
) -> List[GeneratedFile]:
    """Generate the operational and domain dashboards for one endpoint.

    Uses the packaged templates configured in settings. With ``decisions``
    the domain dashboard gets decision panels; without, it is the rule
    flavor.

    Args:
        endpoint: Endpoint/handler name
        build: Artifact id and version
        decisions: Decisions of a decision-model endpoint, or None for rule units
        generate_audit_link: Add the "Audit UI" link (defaults to settings)
        identity: Source of dashboard id/uid
        synthesizer: Synthesizer to reuse (its warnings accumulate)

    Returns:
        Operational and domain dashboard files, in that order
    """
    settings = get_settings()
    if generate_audit_link is None:
        generate_audit_link = settings.generate_audit_link
    synthesizer = synthesizer or DashboardSynthesizer(identity=identity)

    # File names use the bare endpoint; titles carry the build coordinate
    title_name = build_dashboard_name(build, endpoint)

    operational = synthesizer.operational_dashboard(
        settings.operational_template, title_name, endpoint, build, generate_audit_link
    )
    if decisions is not None:
        domain = synthesizer.decision_dashboard(
            settings.domain_template, title_name, endpoint, build, decisions, generate_audit_link
        )
    else:
        domain = synthesizer.rule_dashboard(
            settings.domain_template, title_name, endpoint, build, generate_audit_link
        )

    return [
        operational_dashboard_file(endpoint, operational),
        domain_dashboard_file(endpoint, domain),
    ]


def write_generated_files(files: Iterable[GeneratedFile], output_dir: str | Path) -> List[Path]:
    """Write files below ``output_dir``, creating directories as needed.

    Returns:
        Paths written, in input order
    """
    root = Path(output_dir)
    written = []
    for generated in files:
        path = root / generated.relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(generated.contents)
        logger.info("generated_file_written", path=str(path), type=generated.type.value)
        written.append(path)
    return written
