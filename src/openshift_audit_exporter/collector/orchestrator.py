# src/openshift_audit_exporter/collector/orchestrator.py
# Fan-out/fan-in scrape cycle over all discovered log sources.

"""
ScrapeOrchestrator runs one scrape cycle:

    idle -> discovering -> dispatching -> collecting -> merging -> emitting -> idle

One thread is started per source. Each thread fetches the source once, runs
every pattern over its lines and puts one partial aggregate per pattern on
the channel of the pattern's outcome class. Channels are bounded to the
number of partials they will receive, and all threads are joined before the
channels are drained and merged.

Cycles are serialized: a second caller waits for the running cycle to finish.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from openshift_audit_exporter.collector.attempts import LoginAttempts
from openshift_audit_exporter.collector.emitter import MetricSink, build_descriptors, emit
from openshift_audit_exporter.collector.patterns import (
    DEFAULT_PATTERNS,
    LoginPattern,
    extract_attempts,
    patterns_by_outcome,
)
from openshift_audit_exporter.collector.sources import LogSourceFetcher
from openshift_audit_exporter.exceptions import DiscoveryError, FetchError
from openshift_audit_exporter.models import (
    DEFAULT_NAMESPACE,
    LogSource,
    MetricDescriptor,
    OutcomeClass,
)

logger = logging.getLogger(__name__)

Channels = dict[OutcomeClass, "queue.Queue[LoginAttempts]"]


class CyclePhase(str, Enum):
    """Current phase of the orchestrator."""

    IDLE = "idle"
    DISCOVERING = "discovering"
    DISPATCHING = "dispatching"
    COLLECTING = "collecting"
    MERGING = "merging"
    EMITTING = "emitting"


@dataclass
class CycleOutcome:
    """Merged results of a completed cycle."""

    attempts: dict[OutcomeClass, LoginAttempts]
    sources: list[LogSource] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)
    observations: int = 0
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> LoginAttempts:
        return self.attempts[OutcomeClass.SUCCEEDED]

    @property
    def failed(self) -> LoginAttempts:
        return self.attempts[OutcomeClass.FAILED]


class ScrapeOrchestrator:
    """Runs scrape cycles against a log source fetcher."""

    def __init__(
        self,
        fetcher: LogSourceFetcher,
        patterns: Iterable[LoginPattern] = DEFAULT_PATTERNS,
        namespace: str = DEFAULT_NAMESPACE,
        descriptors: Optional[dict[OutcomeClass, MetricDescriptor]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.patterns = patterns_by_outcome(patterns)
        self.descriptors = descriptors or build_descriptors(namespace)
        self.phase = CyclePhase.IDLE
        self._cycle_lock = threading.Lock()

    def run_cycle(self, sink: MetricSink) -> CycleOutcome:
        """
        Run one full cycle and emit its observations into `sink`.

        Raises:
            DiscoveryError: the sources could not be listed; nothing is emitted.
        """
        with self._cycle_lock:
            try:
                return self._run_cycle(sink)
            finally:
                self.phase = CyclePhase.IDLE

    def _run_cycle(self, sink: MetricSink) -> CycleOutcome:
        start = time.perf_counter()

        self.phase = CyclePhase.DISCOVERING
        try:
            sources = self.fetcher.list_sources()
        except DiscoveryError as e:
            logger.error("Failed to obtain the list of log sources: %s", e)
            raise

        self.phase = CyclePhase.DISPATCHING
        channels: Channels = {
            outcome: queue.Queue(maxsize=max(1, len(sources) * len(patterns)))
            for outcome, patterns in self.patterns.items()
        }
        workers = [_SourceWorker(self, source, channels) for source in sources]
        for worker in workers:
            logger.info("Scraping logs from source %s", worker.source)
            worker.start()

        self.phase = CyclePhase.COLLECTING
        for worker in workers:
            worker.join()

        self.phase = CyclePhase.MERGING
        merged = {outcome: _drain(channel) for outcome, channel in channels.items()}
        logger.info(
            "Login attempts collected from %d sources: %d succeeded, %d failed",
            len(sources),
            merged[OutcomeClass.SUCCEEDED].total,
            merged[OutcomeClass.FAILED].total,
        )

        self.phase = CyclePhase.EMITTING
        observations = 0
        for outcome, attempts in merged.items():
            observations += emit(sink, attempts, self.descriptors[outcome])

        return CycleOutcome(
            attempts=merged,
            sources=sources,
            failed_sources=sorted(w.source.name for w in workers if w.failed),
            observations=observations,
            duration_ms=(time.perf_counter() - start) * 1000,
        )


class _SourceWorker(threading.Thread):
    """
    Scrapes one source: fetch once, extract per pattern, publish partials.

    The channels are the only state shared with sibling workers. Whether the
    source failed is kept on the worker and read after the join.
    """

    def __init__(
        self,
        orchestrator: ScrapeOrchestrator,
        source: LogSource,
        channels: Channels,
    ) -> None:
        super().__init__(name=f"scrape-{source.name}", daemon=True)
        self.fetcher = orchestrator.fetcher
        self.patterns = orchestrator.patterns
        self.source = source
        self.channels = channels
        self.failed = False

    def run(self) -> None:
        try:
            lines = self.fetcher.fetch_lines(self.source)
        except FetchError as e:
            logger.warning("%s; counting it as empty", e)
            self.failed = True
            lines = []
        except Exception:
            logger.exception("Unexpected error while fetching logs of %s", self.source)
            self.failed = True
            lines = []

        try:
            for outcome, patterns in self.patterns.items():
                for pattern in patterns:
                    self.channels[outcome].put(extract_attempts(pattern, lines))
        except Exception:
            logger.exception("Unexpected error while parsing logs of %s", self.source)
            self.failed = True


def _drain(channel: "queue.Queue[LoginAttempts]") -> LoginAttempts:
    """Merge every partial aggregate left in a closed channel."""
    merged = LoginAttempts()
    while True:
        try:
            merged.merge(channel.get_nowait())
        except queue.Empty:
            return merged
