"""Decision model metadata used to drive dashboard generation."""

from decisiondash.domain.loader import load_decisions
from decisiondash.domain.models import BuildCoordinate, DecisionDescriptor

__all__ = [
    "BuildCoordinate",
    "DecisionDescriptor",
    "load_decisions",
]
