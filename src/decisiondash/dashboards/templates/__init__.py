"""Built-in dashboard templates.

Templates are Grafana dashboard JSON files containing the placeholder
markers understood by :mod:`decisiondash.dashboards.customizer`.
"""

from importlib import resources
from pathlib import Path

OPERATIONAL_TEMPLATE = "operational-dashboard-template.json"
DOMAIN_TEMPLATE = "domain-dashboard-template.json"


def load_template(template_path: str) -> str:
    """Read template text.

    ``template_path`` is either an existing filesystem path or the name of
    a packaged template (leading slashes are ignored).

    Raises:
        FileNotFoundError: If neither resolves to a file
    """
    path = Path(template_path)
    if path.is_file():
        return path.read_text(encoding="utf-8")

    packaged = resources.files(__name__).joinpath(template_path.lstrip("/"))
    if not packaged.is_file():
        raise FileNotFoundError(f"Dashboard template not found: {template_path}")
    return packaged.read_text(encoding="utf-8")
