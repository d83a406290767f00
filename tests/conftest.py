"""Root test configuration."""

import json
import logging

import pytest
import structlog

from decisiondash.config import get_settings
from decisiondash.dashboards.customizer import FixedIdentitySource
from decisiondash.domain.models import BuildCoordinate, DecisionDescriptor


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings independent of the developer's environment and .env."""
    for name in (
        "DECISIONDASH_METRIC_NAME",
        "DECISIONDASH_OUTPUT_DIR",
        "DECISIONDASH_GENERATE_AUDIT_LINK",
        "DECISIONDASH_JSON_INDENT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def identity():
    return FixedIdentitySource(numeric_id=4242, unique_id="3f2c8a52-6a51-4c07-9d3c-1b7e6f0a9e11")


@pytest.fixture
def build():
    return BuildCoordinate(artifact_id="acme", version="1.0.0")


@pytest.fixture
def decisions():
    return [
        DecisionDescriptor(name="Eligibility", identifier="_d1", value_type="boolean"),
        DecisionDescriptor(name="Score", identifier="_d2", value_type="number"),
        DecisionDescriptor(name="Category", identifier="_d3", value_type="string"),
    ]


@pytest.fixture
def minimal_template(tmp_path):
    """A template with no panels of its own."""
    path = tmp_path / "minimal-template.json"
    path.write_text(
        json.dumps(
            {
                "id": "$id$",
                "uid": "$uid$",
                "title": "$handlerName$",
                "tags": ["$gavArtifactId$", "$gavVersion$"],
                "panels": [],
                "links": [],
            }
        )
    )
    return str(path)
