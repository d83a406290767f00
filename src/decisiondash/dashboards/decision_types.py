"""
Decision Type Registry.

Maps the declared value type of a decision to the query function and Y-axis
label used for its dashboard panel. Types not listed here are not
visualized: the synthesizer logs a warning and skips the decision.

Type names are matched on their local part (``number``, ``boolean``...),
case-sensitively, as declared by the decision model.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from decisiondash.core.errors import RegistryInconsistencyError
from decisiondash.dashboards.functions import QueryFunction, QueryFunctionKind


@dataclass(frozen=True)
class DecisionType:
    """Panel settings for one supported decision value type."""

    name: str
    function: Optional[QueryFunction]
    y_axis: Optional[str]


# Shared by categorical outputs: one series per observed value
_EVALUATION_RATE = QueryFunction(QueryFunctionKind.COUNTER_RATE, range_window="1m", group_by="identifier")

_SUPPORTED = (
    DecisionType(
        name="number",
        function=QueryFunction(QueryFunctionKind.HISTOGRAM_QUANTILE, range_window="1m", quantile=0.95),
        y_axis="value",
    ),
    DecisionType(name="boolean", function=_EVALUATION_RATE, y_axis="evaluations/s"),
    DecisionType(name="string", function=_EVALUATION_RATE, y_axis="evaluations/s"),
    DecisionType(
        name="days and time duration",
        function=QueryFunction(QueryFunctionKind.GAUGE_VALUE),
        y_axis="duration (ms)",
    ),
    DecisionType(
        name="years and months duration",
        function=QueryFunction(QueryFunctionKind.GAUGE_VALUE),
        y_axis="duration (months)",
    ),
)

SUPPORTED_DECISION_TYPES: Mapping[str, DecisionType] = MappingProxyType(
    {decision_type.name: decision_type for decision_type in _SUPPORTED}
)


def is_supported(type_name: Optional[str]) -> bool:
    """Whether decisions of ``type_name`` get a dashboard panel."""
    return type_name is not None and type_name in SUPPORTED_DECISION_TYPES


def _lookup(type_name: str) -> DecisionType:
    try:
        return SUPPORTED_DECISION_TYPES[type_name]
    except KeyError:
        raise RegistryInconsistencyError(
            f"Decision type '{type_name}' is not supported",
            {"type": type_name},
        ) from None


def function_for(type_name: str) -> QueryFunction:
    """Query function for a supported type.

    Raises:
        RegistryInconsistencyError: If the type is unsupported or has no function
    """
    decision_type = _lookup(type_name)
    if decision_type.function is None:
        raise RegistryInconsistencyError(
            "Mismatch between supported decision types and defined query functions",
            {"type": type_name},
        )
    return decision_type.function


def y_axis_for(type_name: str) -> str:
    """Y-axis label for a supported type.

    Raises:
        RegistryInconsistencyError: If the type is unsupported or has no label
    """
    decision_type = _lookup(type_name)
    if decision_type.y_axis is None:
        raise RegistryInconsistencyError(
            "Mismatch between supported decision types and Y-axis labels",
            {"type": type_name},
        )
    return decision_type.y_axis


def list_supported_types() -> list:
    """Supported type names in registry order."""
    return list(SUPPORTED_DECISION_TYPES)
