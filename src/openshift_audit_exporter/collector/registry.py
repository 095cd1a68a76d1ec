# src/openshift_audit_exporter/collector/registry.py
# Registry for managing and running scrapers.

"""
ScraperRegistry is the host-side view of the scraper contract.

Use this to:
- Register scrapers under a unique name
- Run one scraper or all of them against a shared sink
- Get a ScrapeResult per scraper describing success or failure
"""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterator

from openshift_audit_exporter.collector.emitter import ListSink, MetricSink
from openshift_audit_exporter.collector.scraper import BaseScraper
from openshift_audit_exporter.exceptions import AuditExporterError
from openshift_audit_exporter.models import ScrapeResult, ScrapeStatus

if TYPE_CHECKING:
    from openshift_audit_exporter.core.config import ExporterConfig

logger = logging.getLogger(__name__)


class ScraperRegistry:
    """
    Central registry of scraper instances.

    Every run writes into a private buffer that reaches the shared sink only
    if the scraper completes, so a failed scraper never leaves a partial set
    of observations behind.
    """

    def __init__(self) -> None:
        self._scrapers: dict[str, BaseScraper] = {}

    def register(self, scraper: BaseScraper) -> None:
        """Register a scraper; names must be unique."""
        if scraper.name in self._scrapers:
            raise ValueError(f"Scraper already registered: {scraper.name}")
        self._scrapers[scraper.name] = scraper

    def get(self, name: str) -> BaseScraper | None:
        return self._scrapers.get(name)

    def list_names(self) -> list[str]:
        return list(self._scrapers.keys())

    def list_all(self) -> list[BaseScraper]:
        return list(self._scrapers.values())

    def run(self, name: str, sink: MetricSink) -> ScrapeResult:
        """Run a single scraper by name."""
        scraper = self._scrapers.get(name)
        if scraper is None:
            raise ValueError(f"Unknown scraper: {name}")

        buffer = ListSink()
        started_at = datetime.now(timezone.utc)
        try:
            scraper.scrape(buffer)
        except Exception as e:
            logger.error(
                "Scraper %s failed: %s",
                name,
                e,
                exc_info=not isinstance(e, AuditExporterError),
            )
            return ScrapeResult(
                scraper=name,
                status=ScrapeStatus.ERROR,
                started_at=started_at,
                ended_at=datetime.now(timezone.utc),
                error=str(e),
                metadata=scraper.describe(),
            )

        buffer.forward(sink)
        return ScrapeResult(
            scraper=name,
            status=ScrapeStatus.SUCCESS,
            started_at=started_at,
            ended_at=datetime.now(timezone.utc),
            observations=len(buffer),
            metadata=scraper.describe(),
        )

    def run_all(self, sink: MetricSink) -> list[ScrapeResult]:
        """Run every registered scraper in registration order."""
        return [self.run(name, sink) for name in self._scrapers]

    def __contains__(self, name: str) -> bool:
        return name in self._scrapers

    def __len__(self) -> int:
        return len(self._scrapers)

    def __iter__(self) -> Iterator[BaseScraper]:
        return iter(self._scrapers.values())


def create_scraper_registry(config: "ExporterConfig") -> ScraperRegistry:
    """Build a registry with the built-in scrapers configured from `config`."""
    from openshift_audit_exporter.collector.scraper import LoginAttemptsScraper
    from openshift_audit_exporter.collector.sources import create_fetcher
    from openshift_audit_exporter.core.config import compile_patterns

    registry = ScraperRegistry()
    registry.register(
        LoginAttemptsScraper(
            fetcher=create_fetcher(config.source),
            patterns=compile_patterns(config),
            namespace=config.metrics_namespace,
        )
    )
    return registry
