"""Decision and build metadata consumed by dashboard synthesis."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BuildCoordinate:
    """Artifact id and version of the deployable whose endpoints are dashboarded."""

    artifact_id: str
    version: str


@dataclass(frozen=True)
class DecisionDescriptor:
    """A decision output declared by a decision model."""

    name: str
    identifier: str
    value_type: str | None = None

    @property
    def local_type_name(self) -> str | None:
        """Type name without namespace qualification.

        ``{http://www.omg.org/spec/DMN/20180521/FEEL/}number`` and
        ``feel:number`` both reduce to ``number``.
        """
        if self.value_type is None:
            return None
        local = self.value_type.rsplit("}", 1)[-1]
        return local.rsplit(":", 1)[-1].strip()
