# tests/test_exporter.py
# Tests for the Prometheus exposition layer.

"""
Integration tests for ScraperCollector and build_prometheus_registry.

Scrapes go through a dedicated prometheus_client CollectorRegistry; no HTTP
server is started.
"""

import pytest
from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.parser import text_string_to_metric_families

from openshift_audit_exporter.collector.registry import ScraperRegistry
from openshift_audit_exporter.collector.scraper import LoginAttemptsScraper
from openshift_audit_exporter.core.config import ExporterConfig
from openshift_audit_exporter.exporter import (
    PrometheusSink,
    ScraperCollector,
    build_prometheus_registry,
)

from helpers import StaticLogFetcher

SUCCESSFUL = "openshift_audit_login_attempts_successful_total"
FAILED = "openshift_audit_login_attempts_failed_total"


def prometheus_registry(scrapers: ScraperRegistry) -> CollectorRegistry:
    return build_prometheus_registry(ExporterConfig(), scrapers)


@pytest.mark.integration
class TestScraperCollector:
    """Tests for the custom prometheus collector."""

    def test_login_counters(self, scraper_registry):
        """Test that both counters are exposed with subject/provider labels."""
        registry = prometheus_registry(scraper_registry)

        assert registry.get_sample_value(
            SUCCESSFUL, {"subject": "alice", "provider": "htpasswd"}
        ) == 1.0
        assert registry.get_sample_value(FAILED, {"subject": "bob", "provider": "github"}) == 1.0
        assert registry.get_sample_value(
            SUCCESSFUL, {"subject": "bob", "provider": "github"}
        ) is None

    def test_health_gauges(self, scraper_registry):
        """Test the per-collector success and duration gauges."""
        registry = prometheus_registry(scraper_registry)
        labels = {"collector": "login_attempts"}

        assert registry.get_sample_value(
            "openshift_audit_exporter_collector_success", labels
        ) == 1.0
        assert registry.get_sample_value(
            "openshift_audit_exporter_collector_duration_seconds", labels
        ) >= 0.0

    def test_failed_cycle_reports_failure_without_counters(self):
        """Test that a discovery failure exposes success 0 and no login counters."""
        scrapers = ScraperRegistry()
        scrapers.register(LoginAttemptsScraper(StaticLogFetcher({}, discovery_error="denied")))

        output = generate_latest(prometheus_registry(scrapers)).decode()

        assert 'openshift_audit_exporter_collector_success{collector="login_attempts"} 0.0' in output
        assert "login_attempts_successful_total{" not in output
        assert "login_attempts_failed_total{" not in output

    def test_every_scrape_runs_a_fresh_cycle(self, static_fetcher):
        """Test that counts reflect the logs at scrape time, not a cached cycle."""
        scrapers = ScraperRegistry()
        scrapers.register(LoginAttemptsScraper(static_fetcher))
        registry = prometheus_registry(scrapers)
        labels = {"subject": "alice", "provider": "htpasswd"}

        assert registry.get_sample_value(SUCCESSFUL, labels) == 1.0
        static_fetcher.logs["oauth-openshift-b"].append(
            static_fetcher.logs["oauth-openshift-a"][1]
        )
        assert registry.get_sample_value(SUCCESSFUL, labels) == 2.0

    def test_text_exposition(self, scraper_registry):
        """Test the rendered text format."""
        output = generate_latest(prometheus_registry(scraper_registry)).decode()
        assert "The amount of succeeded login actions" in output
        assert "The amount of failed login actions" in output
        samples = [
            (s.name, s.labels, s.value)
            for family in text_string_to_metric_families(output)
            for s in family.samples
        ]
        assert (SUCCESSFUL, {"subject": "alice", "provider": "htpasswd"}, 1.0) in samples
        assert (FAILED, {"subject": "bob", "provider": "github"}, 1.0) in samples

    def test_registration_does_not_scrape(self, static_fetcher):
        """Test that registering the collector does not touch the log sources."""
        scrapers = ScraperRegistry()
        scrapers.register(LoginAttemptsScraper(static_fetcher))
        CollectorRegistry().register(ScraperCollector(scrapers))
        assert static_fetcher.fetched == []


class TestPrometheusSink:
    """Tests for PrometheusSink."""

    def test_groups_by_metric(self, login_scraper):
        """Test that observations are grouped into one family per counter."""
        sink = PrometheusSink()
        login_scraper.scrape(sink)

        families = {f.name: f for f in sink.families()}
        assert set(families) == {
            "openshift_audit_login_attempts_successful",
            "openshift_audit_login_attempts_failed",
        }
        assert families["openshift_audit_login_attempts_failed"].type == "counter"
        samples = families["openshift_audit_login_attempts_failed"].samples
        assert [(s.labels, s.value) for s in samples] == [
            ({"subject": "bob", "provider": "github"}, 1.0)
        ]
