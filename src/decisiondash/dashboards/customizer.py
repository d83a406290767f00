"""Template customization for dashboard templates.

Dashboard templates carry a fixed set of ``$marker$`` placeholders:

- ``$handlerName$`` - endpoint/handler name
- ``$id$`` - numeric dashboard id (random per call)
- ``$uid$`` - dashboard uid (random UUID per call)
- ``$gavArtifactId$`` - artifact id of the build
- ``$gavVersion$`` - version of the build

Grafana keys dashboards on id/uid, so every generated document gets fresh
values even when template and inputs are identical.
"""

import random
import re
import uuid
from abc import ABC, abstractmethod
from typing import Optional

HANDLER_NAME_MARKER = "$handlerName$"
ID_MARKER = "$id$"
UID_MARKER = "$uid$"
ARTIFACT_ID_MARKER = "$gavArtifactId$"
VERSION_MARKER = "$gavVersion$"

MARKERS = (HANDLER_NAME_MARKER, ID_MARKER, UID_MARKER, ARTIFACT_ID_MARKER, VERSION_MARKER)
_MARKER_PATTERN = re.compile("|".join(re.escape(marker) for marker in MARKERS))

_MAX_ID = 2**31 - 1


class IdentitySource(ABC):
    """Supplies the per-dashboard id and uid."""

    @abstractmethod
    def next_numeric_id(self) -> int:
        ...

    @abstractmethod
    def next_unique_id(self) -> str:
        ...


class RandomIdentitySource(IdentitySource):
    """Random ids: a non-negative 31-bit integer and a UUID4."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def next_numeric_id(self) -> int:
        return self._rng.randint(0, _MAX_ID)

    def next_unique_id(self) -> str:
        return str(uuid.uuid4())


class FixedIdentitySource(IdentitySource):
    """Always returns the same id and uid (reproducible output)."""

    def __init__(self, numeric_id: int = 1, unique_id: str = "00000000-0000-0000-0000-000000000000"):
        self.numeric_id = numeric_id
        self.unique_id = unique_id

    def next_numeric_id(self) -> int:
        return self.numeric_id

    def next_unique_id(self) -> str:
        return self.unique_id


def customize_template(
    template: str,
    handler_name: str,
    artifact_id: str,
    version: str,
    identity: Optional[IdentitySource] = None,
) -> str:
    """Replace every placeholder marker in ``template``.

    Replacement is literal, so values containing ``$`` or backslashes are
    inserted unchanged. Unknown markers are left alone.

    Example:
        >>> customize_template('"$handlerName$"', "loans", "acme", "1.0.0")
        '"loans"'
    """
    identity = identity or RandomIdentitySource()

    values = {
        HANDLER_NAME_MARKER: handler_name,
        ID_MARKER: str(identity.next_numeric_id()),
        UID_MARKER: identity.next_unique_id(),
        ARTIFACT_ID_MARKER: artifact_id,
        VERSION_MARKER: version,
    }

    # Single pass: markers appearing inside substituted values stay as text
    return _MARKER_PATTERN.sub(lambda match: values[match.group(0)], template)
