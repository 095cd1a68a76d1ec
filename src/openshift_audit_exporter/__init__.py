# src/openshift_audit_exporter/__init__.py
# Main package init - exports public API for the exporter.

"""
openshift-audit-exporter: Prometheus counters of successful and failed logins,
extracted from the logs of the OpenShift authentication pods.

CLI Usage:
    audit-exporter init                    # Write a default config
    audit-exporter scrape                  # Run one scrape cycle
    audit-exporter serve                   # Expose /metrics
    audit-exporter scrapers                # List registered scrapers
"""

__version__ = "0.1.0"

from openshift_audit_exporter.collector import (
    BaseScraper,
    LoginAttempts,
    LoginAttemptsScraper,
    LoginPattern,
    ScrapeOrchestrator,
    ScraperRegistry,
    create_scraper_registry,
    emit,
    extract,
)
from openshift_audit_exporter.core.config import ExporterConfig, load_config
from openshift_audit_exporter.exceptions import (
    AuditExporterError,
    DiscoveryError,
    FetchError,
    PatternConstructionError,
)
from openshift_audit_exporter.models import (
    LogSource,
    Mechanism,
    MetricDescriptor,
    MetricObservation,
    OutcomeClass,
    ScrapeResult,
)

__all__ = [
    # Collector
    "BaseScraper",
    "LoginAttempts",
    "LoginAttemptsScraper",
    "LoginPattern",
    "ScrapeOrchestrator",
    "ScraperRegistry",
    "create_scraper_registry",
    "emit",
    "extract",
    # Configuration
    "ExporterConfig",
    "load_config",
    # Errors
    "AuditExporterError",
    "DiscoveryError",
    "FetchError",
    "PatternConstructionError",
    # Models
    "LogSource",
    "Mechanism",
    "MetricDescriptor",
    "MetricObservation",
    "OutcomeClass",
    "ScrapeResult",
]
