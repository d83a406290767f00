"""Tests for dashboards/synthesizer.py.

Covers the three dashboard flavors, decision panel generation and failure
handling.
"""

import json

import pytest
from structlog.testing import capture_logs

from decisiondash.core.errors import ConfigurationError, SerializationError
from decisiondash.dashboards import synthesizer as synthesizer_module
from decisiondash.dashboards.customizer import MARKERS
from decisiondash.dashboards.document import DocumentError, GrafanaDocument
from decisiondash.dashboards.synthesizer import (
    AUDIT_LINK_NAME,
    AUDIT_LINK_URL_PLACEHOLDER,
    DashboardSynthesizer,
    build_dashboard_name,
    generate_domain_specific_decision_dashboard,
    generate_domain_specific_rule_dashboard,
    generate_operational_dashboard,
    quoted,
)
from decisiondash.dashboards.templates import DOMAIN_TEMPLATE, OPERATIONAL_TEMPLATE
from decisiondash.domain.models import BuildCoordinate, DecisionDescriptor


def _decision_panels(data):
    return [p for p in data["panels"] if p["title"].startswith("Decision ")]


class TestBuildDashboardName:
    """Tests for build_dashboard_name."""

    def test_with_build(self):
        assert build_dashboard_name(BuildCoordinate("acme", "1.0.0"), "checkHandler") == "acme_1.0.0 - checkHandler"

    def test_without_build(self):
        assert build_dashboard_name(None, "checkHandler") == "checkHandler"


class TestQuoted:
    """Tests for label value quoting."""

    def test_plain_value(self):
        assert quoted("loans") == '"loans"'

    def test_escapes_quotes_and_backslashes(self):
        assert quoted('Loan "A" \\ B') == r'"Loan \"A\" \\ B"'


class TestOperationalDashboard:
    """Tests for generate_operational_dashboard."""

    def test_packaged_template(self, build, identity):
        text = generate_operational_dashboard(OPERATIONAL_TEMPLATE, "acme_1.0.0 - loans", "loans", build, False, identity)

        data = json.loads(text)
        assert data["title"] == "acme_1.0.0 - loans - Operational Dashboard"
        assert data["id"] == 4242
        assert data["uid"] == identity.unique_id
        assert data["links"] == []
        assert not any(marker in text for marker in MARKERS)
        assert 'handler=\\"loans\\"' in text

    def test_audit_link(self, build, identity):
        data = json.loads(generate_operational_dashboard(OPERATIONAL_TEMPLATE, "loans", "loans", build, True, identity))

        audit = [link for link in data["links"] if link["title"] == AUDIT_LINK_NAME]
        assert len(audit) == 1
        assert audit[0]["url"] == AUDIT_LINK_URL_PLACEHOLDER

    def test_distinct_ids_without_identity(self, build):
        first = json.loads(generate_operational_dashboard(OPERATIONAL_TEMPLATE, "n", "loans", build))
        second = json.loads(generate_operational_dashboard(OPERATIONAL_TEMPLATE, "n", "loans", build))

        assert first["uid"] != second["uid"]

    def test_filesystem_template(self, minimal_template, build, identity):
        data = json.loads(generate_operational_dashboard(minimal_template, "n", "loans", build, False, identity))

        assert data["tags"] == ["acme", "1.0.0"]
        assert data["id"] == "4242"


class TestDecisionDashboard:
    """Tests for generate_domain_specific_decision_dashboard."""

    def test_one_panel_per_supported_decision(self, minimal_template, build, identity, decisions):
        text = generate_domain_specific_decision_dashboard(
            minimal_template, "acme_1.0.0 - loans", "loans", build, decisions, False, identity
        )

        data = json.loads(text)
        assert data["title"] == "acme_1.0.0 - loans - Domain Dashboard"
        assert [p["title"] for p in data["panels"]] == [
            "Decision Eligibility",
            "Decision Score",
            "Decision Category",
        ]

    def test_query_shape_and_label_order(self, minimal_template, build, identity, decisions):
        data = json.loads(
            generate_domain_specific_decision_dashboard(minimal_template, "n", "loans", build, decisions, False, identity)
        )

        eligibility, score, _ = data["panels"]
        assert eligibility["targets"][0]["expr"] == (
            'sum by (identifier) (rate(dmn_result_total{endpoint="loans",decision="Eligibility",'
            'artifactId="acme",version="1.0.0"}[1m]))'
        )
        assert score["targets"][0]["expr"] == (
            'histogram_quantile(0.95, sum by (le) (rate(dmn_result_bucket{endpoint="loans",'
            'decision="Score",artifactId="acme",version="1.0.0"}[1m])))'
        )
        assert score["fieldConfig"]["defaults"]["custom"]["axisLabel"] == "value"
        assert eligibility["type"] == "timeseries"

    def test_decision_name_with_quotes_is_escaped(self, minimal_template, build, identity):
        decisions = [DecisionDescriptor(name='Loan "A"', identifier="_l", value_type="number")]

        data = json.loads(
            generate_domain_specific_decision_dashboard(minimal_template, "n", "loans", build, decisions, False, identity)
        )

        assert 'decision="Loan \\"A\\""' in data["panels"][0]["targets"][0]["expr"]

    def test_unsupported_and_missing_types_skipped(self, minimal_template, build, identity):
        decisions = [
            DecisionDescriptor(name="Due", identifier="_d1", value_type="date"),
            DecisionDescriptor(name="Untyped", identifier="_d2", value_type=None),
            DecisionDescriptor(name="Amount", identifier="_d3", value_type="feel:number"),
        ]
        synthesizer = DashboardSynthesizer(identity=identity)

        with capture_logs() as logs:
            text = synthesizer.decision_dashboard(minimal_template, "n", "loans", build, decisions)

        data = json.loads(text)
        assert [p["title"] for p in data["panels"]] == ["Decision Amount"]
        assert len(synthesizer.warnings) == 2
        events = [entry["event"] for entry in logs if entry["log_level"] == "warning"]
        assert events == ["decision_type_unsupported", "decision_type_missing"]

    def test_only_unsupported_decisions_adds_no_panels(self, build, identity):
        decisions = [DecisionDescriptor(name="Due", identifier="_d1", value_type="date and time")]

        data = json.loads(
            generate_domain_specific_decision_dashboard(DOMAIN_TEMPLATE, "n", "loans", build, decisions, False, identity)
        )

        assert _decision_panels(data) == []
        assert len(data["panels"]) == 1

    def test_namespaced_type(self, minimal_template, build, identity):
        decisions = [
            DecisionDescriptor(
                name="Approved",
                identifier="_a",
                value_type="{http://www.omg.org/spec/DMN/20180521/FEEL/}boolean",
            )
        ]

        data = json.loads(
            generate_domain_specific_decision_dashboard(minimal_template, "n", "loans", build, decisions, False, identity)
        )

        assert len(data["panels"]) == 1

    def test_configured_metric_name(self, minimal_template, build, identity, monkeypatch):
        monkeypatch.setenv("DECISIONDASH_METRIC_NAME", "decision_result")
        synthesizer_module.get_settings.cache_clear()
        decisions = [DecisionDescriptor(name="Total", identifier="_t", value_type="days and time duration")]

        data = json.loads(
            generate_domain_specific_decision_dashboard(minimal_template, "n", "loans", build, decisions, False, identity)
        )

        assert data["panels"][0]["targets"][0]["expr"].startswith('decision_result{endpoint="loans"')

    def test_panels_added_after_template_panels(self, build, identity, decisions):
        data = json.loads(
            generate_domain_specific_decision_dashboard(DOMAIN_TEMPLATE, "n", "loans", build, decisions, True, identity)
        )

        assert len(data["panels"]) == 1 + len(decisions)
        assert [p["id"] for p in data["panels"]] == [1, 2, 3, 4]
        assert all(p["gridPos"]["y"] >= 4 for p in _decision_panels(data))
        assert len([link for link in data["links"] if link["title"] == AUDIT_LINK_NAME]) == 1


class TestRuleDashboard:
    """Tests for generate_domain_specific_rule_dashboard."""

    def test_rule_dashboard(self, build, identity):
        data = json.loads(generate_domain_specific_rule_dashboard(DOMAIN_TEMPLATE, "rules", "rules", build, True, identity))

        assert data["title"] == "rules - Domain Dashboard"
        assert _decision_panels(data) == []
        assert [link["title"] for link in data["links"]] == [AUDIT_LINK_NAME]


class TestFailures:
    """Fatal errors abort synthesis."""

    def test_missing_template(self, build):
        with pytest.raises(ConfigurationError) as exc_info:
            generate_operational_dashboard("does-not-exist.json", "loans", "loans", build)

        assert exc_info.value.details["dashboard"] == "loans - Operational Dashboard"

    def test_unparseable_template(self, tmp_path, build):
        template = tmp_path / "broken.json"
        template.write_text('{"title": "$handlerName$",')

        with pytest.raises(ConfigurationError, match="loans - Domain Dashboard"):
            generate_domain_specific_rule_dashboard(str(template), "loans", "loans", build)

    @pytest.mark.parametrize(
        "panels",
        [
            [1],
            [{"gridPos": {"y": None, "h": 8}}],
            [{"gridPos": {"y": "top"}}],
        ],
    )
    def test_malformed_template_panels(self, tmp_path, build, panels):
        template = tmp_path / "malformed.json"
        template.write_text(json.dumps({"title": "$handlerName$", "panels": panels}))

        with pytest.raises(ConfigurationError) as exc_info:
            generate_operational_dashboard(str(template), "loans", "loans", build)

        assert exc_info.value.details["dashboard"] == "loans - Operational Dashboard"

    def test_serialization_failure(self, minimal_template, build, monkeypatch):
        def fail(self, indent=2):
            raise DocumentError("boom")

        monkeypatch.setattr(GrafanaDocument, "serialize", fail)

        with pytest.raises(SerializationError):
            generate_operational_dashboard(minimal_template, "loans", "loans", build)
