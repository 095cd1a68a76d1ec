# src/openshift_audit_exporter/collector/emitter.py
# Projection of a merged aggregate onto metric observations.

"""
The emitter walks the final aggregate of a cycle and sends one observation
per (subject, provider) to a sink. Subjects and providers are cross-joined,
so a provider seen for any subject is reported for every subject, with a
zero value where the pair never occurred.
"""

from typing import Protocol, runtime_checkable

from openshift_audit_exporter.collector.attempts import LoginAttempts
from openshift_audit_exporter.models import (
    DEFAULT_NAMESPACE,
    LOGIN_ATTEMPTS_SUBSYSTEM,
    MetricDescriptor,
    MetricObservation,
    OutcomeClass,
)


@runtime_checkable
class MetricSink(Protocol):
    """Receives observations produced by a scrape."""

    def send(self, observation: MetricObservation) -> None:
        ...


class ListSink:
    """Sink that keeps observations in memory."""

    def __init__(self) -> None:
        self.observations: list[MetricObservation] = []

    def send(self, observation: MetricObservation) -> None:
        self.observations.append(observation)

    def forward(self, sink: MetricSink) -> None:
        """Replay buffered observations into another sink."""
        for observation in self.observations:
            sink.send(observation)

    def non_zero(self) -> list[MetricObservation]:
        return [o for o in self.observations if o.value > 0]

    def by_outcome(self, outcome: OutcomeClass) -> list[MetricObservation]:
        return [o for o in self.observations if o.outcome == outcome]

    def __len__(self) -> int:
        return len(self.observations)


def build_descriptors(namespace: str = DEFAULT_NAMESPACE) -> dict[OutcomeClass, MetricDescriptor]:
    """Descriptors for the successful and failed login counters."""
    return {
        OutcomeClass.SUCCEEDED: MetricDescriptor(
            namespace=namespace,
            subsystem=LOGIN_ATTEMPTS_SUBSYSTEM,
            name="successful",
            help="The amount of succeeded login actions",
            outcome=OutcomeClass.SUCCEEDED,
        ),
        OutcomeClass.FAILED: MetricDescriptor(
            namespace=namespace,
            subsystem=LOGIN_ATTEMPTS_SUBSYSTEM,
            name="failed",
            help="The amount of failed login actions",
            outcome=OutcomeClass.FAILED,
        ),
    }


def emit(sink: MetricSink, aggregate: LoginAttempts, descriptor: MetricDescriptor) -> int:
    """Send one observation per subject x provider; returns how many were sent."""
    providers = aggregate.providers()
    sent = 0
    for subject in aggregate.subjects():
        for provider in providers:
            sink.send(
                MetricObservation(
                    descriptor=descriptor,
                    subject=subject,
                    provider=provider,
                    value=float(aggregate.count(subject, provider)),
                )
            )
            sent += 1
    return sent
