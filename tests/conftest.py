# tests/conftest.py
# Pytest configuration and fixtures for openshift-audit-exporter tests.

"""
Shared pytest fixtures for testing the exporter.

Provides:
- Sample oauth-openshift log lines for every built-in pattern
- An in-memory log source fetcher with injectable failures
- Orchestrator, scraper and registry fixtures wired to that fetcher
"""

from pathlib import Path

import pytest

from openshift_audit_exporter.collector.emitter import ListSink
from openshift_audit_exporter.collector.orchestrator import ScrapeOrchestrator
from openshift_audit_exporter.collector.registry import ScraperRegistry
from openshift_audit_exporter.collector.scraper import LoginAttemptsScraper
from openshift_audit_exporter.core.config import clear_config_cache

from helpers import StaticLogFetcher, basic_line, external_line


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Keep the module-level config cache from leaking between tests."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def two_pod_logs() -> dict[str, list[str]]:
    """Pod A has one basic success for alice, pod B one external failure for bob."""
    return {
        "oauth-openshift-a": [
            "I1019 10:15:00.000000       1 server.go:12] starting oauth server",
            basic_line("htpasswd", "alice"),
        ],
        "oauth-openshift-b": [
            external_line("github", "bob", outcome="failed"),
            "W1019 10:17:00.000000       1 handler.go:80] slow request",
        ],
    }


@pytest.fixture
def static_fetcher(two_pod_logs) -> StaticLogFetcher:
    return StaticLogFetcher(two_pod_logs)


@pytest.fixture
def orchestrator(static_fetcher) -> ScrapeOrchestrator:
    return ScrapeOrchestrator(static_fetcher)


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture
def login_scraper(static_fetcher) -> LoginAttemptsScraper:
    return LoginAttemptsScraper(static_fetcher)


@pytest.fixture
def scraper_registry(login_scraper) -> ScraperRegistry:
    registry = ScraperRegistry()
    registry.register(login_scraper)
    return registry


@pytest.fixture
def log_dir(tmp_path: Path, two_pod_logs) -> Path:
    """A directory with one .log file per pod."""
    directory = tmp_path / "logs"
    directory.mkdir()
    for name, lines in two_pod_logs.items():
        (directory / f"{name}.log").write_text("\n".join(lines) + "\n")
    return directory
