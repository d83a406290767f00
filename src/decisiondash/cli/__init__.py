"""
CLI commands for decisiondash.
"""

from decisiondash.cli.dashboard import (
    dashboard_name_command,
    generate_decision_command,
    generate_endpoint_command,
    generate_operational_command,
    generate_rule_command,
    list_types_command,
)

__all__ = [
    "generate_operational_command",
    "generate_decision_command",
    "generate_rule_command",
    "generate_endpoint_command",
    "dashboard_name_command",
    "list_types_command",
]
