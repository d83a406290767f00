"""
PromQL query functions for decision panels.

A QueryFunction describes how a metric name and an ordered set of label
matchers are assembled into a PromQL expression. The set of kinds is closed:

    GAUGE_VALUE          metric{labels}
    COUNTER_RATE         sum by (group) (rate(metric_total{labels}[range]))
    HISTOGRAM_QUANTILE   histogram_quantile(q, sum by (le) (rate(metric_bucket{labels}[range])))

Label values are emitted verbatim. Callers quote string literals themselves.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from decisiondash.core.errors import RegistryInconsistencyError


class QueryFunctionKind(Enum):
    """Rendering strategies for decision queries."""
    GAUGE_VALUE = "gauge_value"
    COUNTER_RATE = "counter_rate"
    HISTOGRAM_QUANTILE = "histogram_quantile"


@dataclass(frozen=True)
class Label:
    """A single label equality matcher, e.g. ``endpoint="loans"``."""

    key: str
    value: str

    def render(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class QueryFunction:
    """A query shape plus the literal fragments it needs."""

    kind: QueryFunctionKind
    range_window: str = "1m"
    quantile: Optional[float] = None
    group_by: Optional[str] = None

    def render(self, metric_name: str, labels: Sequence[Label]) -> str:
        return render(self, metric_name, labels)


def render_selector(metric_name: str, labels: Sequence[Label]) -> str:
    """Render ``metric{k1=v1,k2=v2}`` keeping label order."""
    if not labels:
        return metric_name
    return metric_name + "{" + ",".join(label.render() for label in labels) + "}"


def render(function: QueryFunction, metric_name: str, labels: Sequence[Label]) -> str:
    """
    Render a PromQL expression for ``function``.

    Args:
        function: Query function selected for the decision type
        metric_name: Base metric name (e.g. ``dmn_result``)
        labels: Ordered label matchers

    Returns:
        PromQL query text
    """
    kind = function.kind

    if kind is QueryFunctionKind.GAUGE_VALUE:
        return render_selector(metric_name, labels)

    if kind is QueryFunctionKind.COUNTER_RATE:
        selector = render_selector(f"{metric_name}_total", labels)
        rate = f"rate({selector}[{function.range_window}])"
        if function.group_by:
            return f"sum by ({function.group_by}) ({rate})"
        return f"sum({rate})"

    if kind is QueryFunctionKind.HISTOGRAM_QUANTILE:
        if function.quantile is None:
            raise RegistryInconsistencyError(
                "Histogram quantile function defined without a quantile",
                {"metric": metric_name},
            )
        selector = render_selector(f"{metric_name}_bucket", labels)
        return (
            f"histogram_quantile({function.quantile}, "
            f"sum by (le) (rate({selector}[{function.range_window}])))"
        )

    raise RegistryInconsistencyError(f"Unknown query function kind: {kind!r}")
