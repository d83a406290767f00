"""Load decision descriptors from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

import structlog
import yaml

from decisiondash.core.errors import ConfigurationError
from decisiondash.domain.models import DecisionDescriptor

logger = structlog.get_logger()


def load_decisions(path: str | Path) -> List[DecisionDescriptor]:
    """Load decisions from a YAML file.

    Expected format::

        decisions:
          - name: Eligibility
            id: _0a1b
            type: boolean

    ``id`` defaults to the decision name and ``type`` may be omitted.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Decision file not found: {path}", {"path": str(path)})

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in decision file: {e}", {"path": str(path)}) from e

    if data is None:
        return []
    if not isinstance(data, dict) or not isinstance(data.get("decisions", []), list):
        raise ConfigurationError(
            "Decision file must contain a 'decisions' list", {"path": str(path)}
        )

    decisions = [_parse_decision(entry, index, path) for index, entry in enumerate(data.get("decisions", []))]
    logger.debug("decisions_loaded", path=str(path), count=len(decisions))
    return decisions


def _parse_decision(entry: Any, index: int, path: Path) -> DecisionDescriptor:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise ConfigurationError(
            f"Decision #{index} has no 'name'", {"path": str(path), "index": index}
        )

    name = str(entry["name"])
    value_type = entry.get("type")
    return DecisionDescriptor(
        name=name,
        identifier=str(entry.get("id") or name),
        value_type=str(value_type) if value_type is not None else None,
    )
