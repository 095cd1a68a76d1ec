# src/openshift_audit_exporter/models.py
# Core Pydantic models shared by the collector, the exporter and the CLI.

"""
Defines the data structures that flow through a scrape cycle:
- LogSource: one authentication pod (or log file) discovered for a cycle
- MetricDescriptor: identity and help text of an emitted counter
- MetricObservation: one labelled counter value sent to a sink
- ScrapeResult: outcome of running one scraper, as seen by the host
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_NAMESPACE = "openshift_audit"
LOGIN_ATTEMPTS_SUBSYSTEM = "login_attempts"
AUTHENTICATION_NAMESPACE = "openshift-authentication"


class OutcomeClass(str, Enum):
    """Whether a login attempt succeeded or failed."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Mechanism(str, Enum):
    """Authentication mechanism family a pattern recognises."""

    BASIC = "basic"  # htpasswd and other username/password providers
    EXTERNAL = "external"  # OAuth/OIDC identity providers


class ScrapeStatus(str, Enum):
    """Final status of a scraper run."""

    SUCCESS = "success"
    ERROR = "error"


class LogSource(BaseModel):
    """A unit whose log text can be fetched, e.g. an oauth-openshift pod."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


class MetricDescriptor(BaseModel):
    """Identity of a login-attempt counter."""

    model_config = ConfigDict(frozen=True)

    namespace: str = DEFAULT_NAMESPACE
    subsystem: str = LOGIN_ATTEMPTS_SUBSYSTEM
    name: str
    help: str
    outcome: OutcomeClass
    label_names: tuple[str, ...] = ("subject", "provider")

    @property
    def fq_name(self) -> str:
        """Fully qualified metric name, joined with underscores."""
        return "_".join(part for part in (self.namespace, self.subsystem, self.name) if part)


class MetricObservation(BaseModel):
    """A single counter value for one (subject, provider) pair."""

    model_config = ConfigDict(frozen=True)

    descriptor: MetricDescriptor
    subject: str
    provider: str
    value: float = Field(..., ge=0)

    @property
    def outcome(self) -> OutcomeClass:
        return self.descriptor.outcome

    @property
    def labels(self) -> dict[str, str]:
        return dict(zip(self.descriptor.label_names, (self.subject, self.provider)))


class ScrapeResult(BaseModel):
    """Result from a scraper run."""

    scraper: str
    status: ScrapeStatus
    started_at: datetime
    ended_at: datetime
    observations: int = 0
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == ScrapeStatus.SUCCESS

    @property
    def duration_seconds(self) -> float:
        return (self.ended_at - self.started_at).total_seconds()
