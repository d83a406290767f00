"""Dashboard synthesizer for decision-service endpoints.

Generates three dashboard flavors from JSON templates:
- Operational dashboard (per endpoint: traffic, latency, exceptions)
- Domain dashboard for decision models, with one panel per decision output
- Domain dashboard for rule units (template panels only)

Every flavor goes through the same pipeline: load the template, substitute
placeholder markers, parse, retitle, optionally add the audit link, then
serialize. Decision panels pick their query shape from the decision type
registry; decisions with a missing or unsupported type are skipped with a
warning.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog

from decisiondash.config import get_settings
from decisiondash.core.errors import ConfigurationError, SerializationError
from decisiondash.dashboards import decision_types
from decisiondash.dashboards.customizer import IdentitySource, RandomIdentitySource, customize_template
from decisiondash.dashboards.document import DocumentError, GrafanaDocument, PanelKind
from decisiondash.dashboards.functions import Label
from decisiondash.dashboards.templates import load_template
from decisiondash.domain.models import BuildCoordinate, DecisionDescriptor

logger = structlog.get_logger()

AUDIT_LINK_NAME = "Audit UI"
AUDIT_LINK_URL_PLACEHOLDER = "${{urlPlaceholder}}"

OPERATIONAL_SUFFIX = "Operational Dashboard"
DOMAIN_SUFFIX = "Domain Dashboard"


def build_dashboard_name(build: Optional[BuildCoordinate], handler_name: str) -> str:
    """Dashboard name for an endpoint, namespaced by the build when known.

    Example:
        >>> build_dashboard_name(BuildCoordinate("acme", "1.0.0"), "checkHandler")
        'acme_1.0.0 - checkHandler'
        >>> build_dashboard_name(None, "checkHandler")
        'checkHandler'
    """
    if build is not None:
        return f"{build.artifact_id}_{build.version} - {handler_name}"
    return handler_name


def quoted(value: str) -> str:
    """Wrap a literal label value in double quotes.

    Backslashes, double quotes and newlines are escaped as PromQL string
    literals require.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return '"' + escaped + '"'


class DashboardSynthesizer:
    """Synthesizes Grafana dashboards for decision-service endpoints.

    Skipped decisions are collected in ``warnings`` as well as logged.
    """

    def __init__(
        self,
        identity: Optional[IdentitySource] = None,
        metric_name: Optional[str] = None,
        indent: Optional[int] = None,
    ):
        settings = get_settings()
        self.identity = identity or RandomIdentitySource()
        self.metric_name = metric_name or settings.metric_name
        self.indent = settings.json_indent if indent is None else indent
        self.warnings: List[str] = []

    def operational_dashboard(
        self,
        template_path: str,
        dashboard_name: str,
        handler_name: str,
        build: BuildCoordinate,
        generate_audit_link: bool = False,
    ) -> str:
        document = self._initialize(
            template_path, handler_name, build, f"{dashboard_name} - {OPERATIONAL_SUFFIX}", generate_audit_link
        )
        return self._serialize(document)

    def decision_dashboard(
        self,
        template_path: str,
        dashboard_name: str,
        endpoint: str,
        build: BuildCoordinate,
        decisions: Sequence[DecisionDescriptor],
        generate_audit_link: bool = False,
    ) -> str:
        title = f"{dashboard_name} - {DOMAIN_SUFFIX}"
        document = self._initialize(template_path, endpoint, build, title, generate_audit_link)

        added = 0
        for decision in decisions:
            if self._add_decision_panel(document, endpoint, build, decision):
                added += 1

        logger.info(
            "decision_panels_added",
            dashboard=title,
            added=added,
            skipped=len(decisions) - added,
        )
        return self._serialize(document)

    def rule_dashboard(
        self,
        template_path: str,
        dashboard_name: str,
        endpoint: str,
        build: BuildCoordinate,
        generate_audit_link: bool = False,
    ) -> str:
        document = self._initialize(
            template_path, endpoint, build, f"{dashboard_name} - {DOMAIN_SUFFIX}", generate_audit_link
        )
        return self._serialize(document)

    def _initialize(
        self,
        template_path: str,
        handler_name: str,
        build: BuildCoordinate,
        title: str,
        generate_audit_link: bool,
    ) -> GrafanaDocument:
        try:
            template = load_template(template_path)
        except OSError as e:
            logger.error("template_unreadable", dashboard=title, template=template_path, error=str(e))
            raise ConfigurationError(
                f"Could not read the dashboard template for the dashboard {title}",
                {"dashboard": title, "template": template_path},
            ) from e

        template = customize_template(template, handler_name, build.artifact_id, build.version, self.identity)

        try:
            document = GrafanaDocument.parse(template).set_title(title)
        except DocumentError as e:
            logger.error("template_unparseable", dashboard=title, template=template_path, error=str(e))
            raise ConfigurationError(
                f"Could not parse the dashboard template for the dashboard {title}",
                {"dashboard": title, "template": template_path},
            ) from e

        if generate_audit_link:
            document.add_link(AUDIT_LINK_NAME, AUDIT_LINK_URL_PLACEHOLDER)
        return document

    def _add_decision_panel(
        self,
        document: GrafanaDocument,
        endpoint: str,
        build: BuildCoordinate,
        decision: DecisionDescriptor,
    ) -> bool:
        type_name = decision.local_type_name
        if type_name is None:
            message = f'Type of the decision "{decision.name}" with id "{decision.identifier}" is not declared.'
            logger.warning("decision_type_missing", decision=decision.name, decision_id=decision.identifier)
            self.warnings.append(message)
            return False

        if not decision_types.is_supported(type_name):
            message = (
                f'Type "{type_name}" of the decision "{decision.name}" '
                f'with id "{decision.identifier}" is not supported.'
            )
            logger.warning(
                "decision_type_unsupported",
                decision=decision.name,
                decision_id=decision.identifier,
                type=type_name,
            )
            self.warnings.append(message)
            return False

        # Label order is part of the output contract
        labels = [
            Label("endpoint", quoted(endpoint)),
            Label("decision", quoted(decision.name)),
            Label("artifactId", quoted(build.artifact_id)),
            Label("version", quoted(build.version)),
        ]
        query = decision_types.function_for(type_name).render(self.metric_name, labels)

        document.add_panel(
            PanelKind.TIMESERIES,
            f"Decision {decision.name}",
            query,
            decision_types.y_axis_for(type_name),
        )
        logger.debug("decision_panel_added", decision=decision.name, type=type_name)
        return True

    def _serialize(self, document: GrafanaDocument) -> str:
        try:
            text = document.serialize(indent=self.indent)
        except DocumentError as e:
            logger.error("dashboard_serialization_failed", dashboard=document.title, error=str(e))
            raise SerializationError(
                "Could not serialize the grafana dashboard", {"dashboard": document.title}
            ) from e
        logger.info("dashboard_synthesized", dashboard=document.title, panels=len(document.panels))
        return text


def generate_operational_dashboard(
    template_path: str,
    dashboard_name: str,
    handler_name: str,
    build: BuildCoordinate,
    generate_audit_link: bool = False,
    identity: Optional[IdentitySource] = None,
) -> str:
    """Generate an operational dashboard for one endpoint.

    Args:
        template_path: Dashboard template (file path or packaged template name)
        dashboard_name: Name used in the dashboard title
        handler_name: Endpoint name substituted into the template
        build: Artifact id and version of the deployable
        generate_audit_link: Whether to add the "Audit UI" link
        identity: Source of the dashboard id/uid (random by default)

    Returns:
        Dashboard JSON text

    Raises:
        ConfigurationError: If the template cannot be read or parsed
        SerializationError: If the result cannot be serialized
    """
    return DashboardSynthesizer(identity=identity).operational_dashboard(
        template_path, dashboard_name, handler_name, build, generate_audit_link
    )


def generate_domain_specific_decision_dashboard(
    template_path: str,
    dashboard_name: str,
    endpoint: str,
    build: BuildCoordinate,
    decisions: Sequence[DecisionDescriptor],
    generate_audit_link: bool = False,
    identity: Optional[IdentitySource] = None,
) -> str:
    """Generate a domain dashboard with one panel per supported decision.

    Decisions whose type is missing or unsupported contribute no panel and
    are logged as warnings.
    """
    return DashboardSynthesizer(identity=identity).decision_dashboard(
        template_path, dashboard_name, endpoint, build, decisions, generate_audit_link
    )


def generate_domain_specific_rule_dashboard(
    template_path: str,
    dashboard_name: str,
    endpoint: str,
    build: BuildCoordinate,
    generate_audit_link: bool = False,
    identity: Optional[IdentitySource] = None,
) -> str:
    """Generate a domain dashboard for a rule unit endpoint."""
    return DashboardSynthesizer(identity=identity).rule_dashboard(
        template_path, dashboard_name, endpoint, build, generate_audit_link
    )
