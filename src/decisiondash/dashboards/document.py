"""
Editable Grafana dashboard document.

Wraps a dashboard JSON template so that synthesis can retitle it, add links
and append generated panels, then serialize it back to JSON. Generated
panels are built with the Grafana Foundation SDK and merged into the
template's own panel list.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from grafana_foundation_sdk.builders import gauge, prometheus, stat, timeseries
from grafana_foundation_sdk.cog.encoder import JSONEncoder

GRID_WIDTH = 24
PANEL_WIDTH = 12
PANEL_HEIGHT = 8


class DocumentError(ValueError):
    """Raised when a dashboard document cannot be parsed or serialized."""


class PanelKind(Enum):
    """Grafana panel types generated panels can use."""
    TIMESERIES = "timeseries"
    STAT = "stat"
    GAUGE = "gauge"


_BUILDERS = {
    PanelKind.TIMESERIES: timeseries.Panel,
    PanelKind.STAT: stat.Panel,
    PanelKind.GAUGE: gauge.Panel,
}


class GrafanaDocument:
    """A parsed Grafana dashboard that can be edited in place."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data
        self.data.setdefault("panels", [])
        self.data.setdefault("links", [])
        self._check_panels()
        self._next_x = 0
        try:
            self._next_y = self._content_bottom()
        except (TypeError, ValueError) as e:
            raise DocumentError(f"Invalid panel gridPos: {e}") from e

    @classmethod
    def parse(cls, text: str) -> "GrafanaDocument":
        """Parse dashboard JSON text.

        Raises:
            DocumentError: If the text is not a JSON object
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentError(f"Invalid dashboard JSON: {e}") from e
        if not isinstance(data, dict):
            raise DocumentError("Dashboard JSON must be an object")
        if not isinstance(data.get("panels", []), list) or not isinstance(data.get("links", []), list):
            raise DocumentError("Dashboard 'panels' and 'links' must be lists")
        return cls(data)

    @property
    def title(self) -> Optional[str]:
        return self.data.get("title")

    @property
    def panels(self) -> List[Dict[str, Any]]:
        return self.data["panels"]

    @property
    def links(self) -> List[Dict[str, Any]]:
        return self.data["links"]

    def set_title(self, title: str) -> "GrafanaDocument":
        self.data["title"] = title
        return self

    def add_link(self, title: str, url: str) -> "GrafanaDocument":
        """Add a dashboard link, replacing any link with the same title."""
        link = {
            "asDropdown": False,
            "icon": "external link",
            "includeVars": False,
            "keepTime": False,
            "tags": [],
            "targetBlank": True,
            "title": title,
            "tooltip": "",
            "type": "link",
            "url": url,
        }
        self.data["links"] = [existing for existing in self.links if existing.get("title") != title]
        self.data["links"].append(link)
        return self

    def add_panel(
        self,
        kind: PanelKind,
        title: str,
        query: str,
        y_axis_label: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Append a single-query Prometheus panel below the existing content.

        Returns:
            The panel as it appears in the dashboard JSON
        """
        builder = _BUILDERS[kind]()
        builder.title(title)

        target = prometheus.Dataquery()
        target.expr(query)
        builder.with_target(target)

        panel = json.loads(JSONEncoder(sort_keys=False).encode(builder.build()))

        # Post-build settings the template conventions rely on
        panel["id"] = self._next_panel_id()
        panel["gridPos"] = self._next_grid_pos()
        for ref_index, panel_target in enumerate(panel.get("targets", [])):
            panel_target["refId"] = chr(ord("A") + ref_index)
        datasource = self._default_datasource()
        if datasource is not None:
            panel["datasource"] = datasource
            for panel_target in panel.get("targets", []):
                panel_target.setdefault("datasource", datasource)
        if y_axis_label:
            defaults = panel.setdefault("fieldConfig", {}).setdefault("defaults", {})
            defaults.setdefault("custom", {})["axisLabel"] = y_axis_label

        self.panels.append(panel)
        return panel

    def serialize(self, indent: Optional[int] = 2) -> str:
        """Serialize the dashboard back to JSON text.

        Raises:
            DocumentError: If the document holds values JSON cannot encode
        """
        try:
            return json.dumps(self.data, indent=indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise DocumentError(f"Could not serialize dashboard: {e}") from e

    def _check_panels(self) -> None:
        for index, panel in enumerate(self.panels):
            if not isinstance(panel, dict):
                raise DocumentError(f"Panel {index} must be an object")
            if not isinstance(panel.get("gridPos") or {}, dict):
                raise DocumentError(f"Panel {index} gridPos must be an object")
            nested = panel.get("panels") or []
            if not isinstance(nested, list) or not all(isinstance(child, dict) for child in nested):
                raise DocumentError(f"Row panel {index} must hold a list of panel objects")

    def _all_panels(self) -> List[Dict[str, Any]]:
        # Collapsed rows keep their children nested
        result = []
        for panel in self.panels:
            result.append(panel)
            result.extend(panel.get("panels", []) or [])
        return result

    def _next_panel_id(self) -> int:
        ids = [p["id"] for p in self._all_panels() if isinstance(p.get("id"), int)]
        return max(ids, default=0) + 1

    def _content_bottom(self) -> int:
        bottom = 0
        for panel in self.panels:
            grid = panel.get("gridPos") or {}
            bottom = max(bottom, int(grid.get("y", 0)) + int(grid.get("h", 0)))
        return bottom

    def _next_grid_pos(self) -> Dict[str, int]:
        if self._next_x + PANEL_WIDTH > GRID_WIDTH:
            self._next_x = 0
            self._next_y += PANEL_HEIGHT
        pos = {"h": PANEL_HEIGHT, "w": PANEL_WIDTH, "x": self._next_x, "y": self._next_y}
        self._next_x += PANEL_WIDTH
        return pos

    def _default_datasource(self) -> Optional[Any]:
        for panel in self._all_panels():
            if panel.get("type") != "row" and panel.get("datasource"):
                return panel["datasource"]
        return None
