"""Grafana dashboard generation for decision-service endpoints.

- Template customization (id/uid and build placeholders)
- Decision type registry and PromQL query functions
- Operational and domain dashboard synthesis
"""

from decisiondash.dashboards.customizer import (
    FixedIdentitySource,
    IdentitySource,
    RandomIdentitySource,
    customize_template,
)
from decisiondash.dashboards.decision_types import (
    SUPPORTED_DECISION_TYPES,
    function_for,
    is_supported,
    y_axis_for,
)
from decisiondash.dashboards.document import GrafanaDocument, PanelKind
from decisiondash.dashboards.functions import Label, QueryFunction, QueryFunctionKind, render
from decisiondash.dashboards.generated import (
    GeneratedFile,
    GeneratedFileType,
    generate_endpoint_dashboards,
    write_generated_files,
)
from decisiondash.dashboards.synthesizer import (
    AUDIT_LINK_NAME,
    AUDIT_LINK_URL_PLACEHOLDER,
    DashboardSynthesizer,
    build_dashboard_name,
    generate_domain_specific_decision_dashboard,
    generate_domain_specific_rule_dashboard,
    generate_operational_dashboard,
)

__all__ = [
    # Customization
    "IdentitySource",
    "RandomIdentitySource",
    "FixedIdentitySource",
    "customize_template",
    # Registry
    "SUPPORTED_DECISION_TYPES",
    "is_supported",
    "function_for",
    "y_axis_for",
    # Queries
    "Label",
    "QueryFunction",
    "QueryFunctionKind",
    "render",
    # Document
    "GrafanaDocument",
    "PanelKind",
    # Synthesis
    "AUDIT_LINK_NAME",
    "AUDIT_LINK_URL_PLACEHOLDER",
    "DashboardSynthesizer",
    "build_dashboard_name",
    "generate_operational_dashboard",
    "generate_domain_specific_decision_dashboard",
    "generate_domain_specific_rule_dashboard",
    # Files
    "GeneratedFile",
    "GeneratedFileType",
    "generate_endpoint_dashboards",
    "write_generated_files",
]
