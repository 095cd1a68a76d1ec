# src/openshift_audit_exporter/exporter.py
# Prometheus exposition of scraper observations.

"""
Bridges the scraper registry to prometheus_client.

ScraperCollector is a custom collector: every time the endpoint is scraped it
runs all registered scrapers, turns their observations into counter families
and adds per-scraper health gauges. Nothing is cached between scrapes.
"""

import logging
import time
from typing import Iterator, Optional

from prometheus_client import CollectorRegistry, start_http_server
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from openshift_audit_exporter.collector.registry import ScraperRegistry, create_scraper_registry
from openshift_audit_exporter.core.config import ExporterConfig
from openshift_audit_exporter.models import DEFAULT_NAMESPACE, MetricObservation

logger = logging.getLogger(__name__)


class PrometheusSink:
    """Sink that groups observations into one counter family per metric."""

    def __init__(self) -> None:
        self._families: dict[str, CounterMetricFamily] = {}

    def send(self, observation: MetricObservation) -> None:
        descriptor = observation.descriptor
        family = self._families.get(descriptor.fq_name)
        if family is None:
            family = CounterMetricFamily(
                descriptor.fq_name,
                descriptor.help,
                labels=list(descriptor.label_names),
            )
            self._families[descriptor.fq_name] = family
        family.add_metric([observation.subject, observation.provider], observation.value)

    def families(self) -> list[CounterMetricFamily]:
        return list(self._families.values())


class ScraperCollector(Collector):
    """prometheus_client collector that runs every scraper on collect()."""

    def __init__(self, registry: ScraperRegistry, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.registry = registry
        self.namespace = namespace

    def describe(self) -> list[Metric]:
        # Empty so registration does not trigger a scrape.
        return []

    def collect(self) -> Iterator[Metric]:
        sink = PrometheusSink()
        success = GaugeMetricFamily(
            f"{self.namespace}_exporter_collector_success",
            "Whether a collector succeeded.",
            labels=["collector"],
        )
        duration = GaugeMetricFamily(
            f"{self.namespace}_exporter_collector_duration_seconds",
            "Collector time duration.",
            labels=["collector"],
        )

        for result in self.registry.run_all(sink):
            success.add_metric([result.scraper], 1.0 if result.succeeded else 0.0)
            duration.add_metric([result.scraper], result.duration_seconds)

        yield from sink.families()
        yield success
        yield duration


def build_prometheus_registry(
    config: ExporterConfig, scrapers: Optional[ScraperRegistry] = None
) -> CollectorRegistry:
    """A dedicated prometheus registry exposing the configured scrapers."""
    registry = CollectorRegistry()
    registry.register(
        ScraperCollector(scrapers or create_scraper_registry(config), config.metrics_namespace)
    )
    return registry


def serve(
    config: ExporterConfig,
    scrapers: Optional[ScraperRegistry] = None,
    poll_interval: float = 1.0,
) -> None:
    """Expose metrics over HTTP until interrupted."""
    registry = build_prometheus_registry(config, scrapers)
    start_http_server(
        config.server.port,
        addr=config.server.listen_address,
        registry=registry,
    )
    logger.info(
        "Serving metrics on http://%s:%d/metrics",
        config.server.listen_address,
        config.server.port,
    )
    while True:
        time.sleep(poll_interval)
