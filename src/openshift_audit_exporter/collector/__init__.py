# src/openshift_audit_exporter/collector/__init__.py
# Collector framework: patterns, aggregation, orchestration and scrapers.

"""
The collector turns authentication log text into login-attempt counters.

This module provides:
- Login patterns and the line extractor
- The LoginAttempts aggregate
- Log source fetchers (kubectl, directory)
- The concurrent scrape orchestrator and metric emitter
- The scraper contract and registry
"""

from openshift_audit_exporter.collector.attempts import LoginAttempts
from openshift_audit_exporter.collector.emitter import (
    ListSink,
    MetricSink,
    build_descriptors,
    emit,
)
from openshift_audit_exporter.collector.orchestrator import (
    CycleOutcome,
    CyclePhase,
    ScrapeOrchestrator,
)
from openshift_audit_exporter.collector.patterns import (
    DEFAULT_PATTERNS,
    LoginPattern,
    extract,
    extract_attempts,
)
from openshift_audit_exporter.collector.registry import (
    ScraperRegistry,
    create_scraper_registry,
)
from openshift_audit_exporter.collector.scraper import BaseScraper, LoginAttemptsScraper
from openshift_audit_exporter.collector.sources import (
    DirectoryLogFetcher,
    KubectlLogFetcher,
    LogSourceFetcher,
)

__all__ = [
    "BaseScraper",
    "CycleOutcome",
    "CyclePhase",
    "DEFAULT_PATTERNS",
    "DirectoryLogFetcher",
    "KubectlLogFetcher",
    "ListSink",
    "LogSourceFetcher",
    "LoginAttempts",
    "LoginAttemptsScraper",
    "LoginPattern",
    "MetricSink",
    "ScrapeOrchestrator",
    "ScraperRegistry",
    "build_descriptors",
    "create_scraper_registry",
    "emit",
    "extract",
    "extract_attempts",
]
