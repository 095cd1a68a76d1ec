# src/openshift_audit_exporter/collector/scraper.py
# Scraper contract and the login-attempts scraper.

"""
A scraper is a named, versioned unit of work that performs one full scrape
cycle and sends its observations to a sink. Hosts register any number of
scrapers and run them uniformly; see ScraperRegistry.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from openshift_audit_exporter.collector.emitter import MetricSink
from openshift_audit_exporter.collector.orchestrator import CycleOutcome, ScrapeOrchestrator
from openshift_audit_exporter.collector.patterns import DEFAULT_PATTERNS, LoginPattern
from openshift_audit_exporter.collector.sources import LogSourceFetcher
from openshift_audit_exporter.models import DEFAULT_NAMESPACE


class BaseScraper(ABC):
    """
    Abstract base class for all scrapers.

    Subclasses describe themselves through `name`, `help` and `version` and
    implement `scrape`, which raises on an error that invalidates the cycle.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the scraper."""
        ...

    @property
    @abstractmethod
    def help(self) -> str:
        """Describes the role of the scraper."""
        ...

    @property
    @abstractmethod
    def version(self) -> float:
        """Minimum producer version from which the scraper is available."""
        ...

    @abstractmethod
    def scrape(self, sink: MetricSink) -> None:
        """Collect data and send it to the sink as observations."""
        ...

    def describe(self) -> dict[str, str]:
        return {"name": self.name, "help": self.help, "version": f"{self.version:.1f}"}


class LoginAttemptsScraper(BaseScraper):
    """Counts successful and failed logins found in authentication pod logs."""

    def __init__(
        self,
        fetcher: LogSourceFetcher,
        patterns: Iterable[LoginPattern] = DEFAULT_PATTERNS,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        self.orchestrator = ScrapeOrchestrator(fetcher, patterns, namespace)
        self.last_outcome: Optional[CycleOutcome] = None

    @property
    def name(self) -> str:
        return "login_attempts"

    @property
    def help(self) -> str:
        return "Collect from OpenShift authentication pod's logs"

    @property
    def version(self) -> float:
        return 1.0

    def scrape(self, sink: MetricSink) -> None:
        self.last_outcome = None
        self.last_outcome = self.orchestrator.run_cycle(sink)
