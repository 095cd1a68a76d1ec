# tests/helpers.py
# Log line builders and an in-memory fetcher shared by the tests.

from openshift_audit_exporter.exceptions import DiscoveryError, FetchError
from openshift_audit_exporter.models import LogSource

NAMESPACE = "openshift-authentication"


def basic_line(provider: str, user: str, outcome: str = "succeeded") -> str:
    return (
        "I1019 10:15:02.123456       1 basicauth.go:52] "
        f'Login with provider "{provider}" {outcome} for "{user}"'
    )


def external_line(provider: str, user: str, outcome: str = "succeeded") -> str:
    return (
        "I1019 10:16:44.654321       1 callbacks.go:38] "
        f'{provider} authentication {outcome}: &{{User:{{Name:"{user}", UID:"42"}} Groups:[]}}'
    )


class StaticLogFetcher:
    """In-memory fetcher keyed by source name."""

    def __init__(
        self,
        logs: dict[str, list[str]],
        failing: set[str] | None = None,
        discovery_error: str | None = None,
    ) -> None:
        self.logs = logs
        self.failing = failing or set()
        self.discovery_error = discovery_error
        self.fetched: list[str] = []

    def list_sources(self) -> list[LogSource]:
        if self.discovery_error:
            raise DiscoveryError(self.discovery_error)
        return [LogSource(name=name, namespace=NAMESPACE) for name in self.logs]

    def fetch_lines(self, source: LogSource) -> list[str]:
        self.fetched.append(source.name)
        if source.name in self.failing:
            raise FetchError(source.name, "connection refused")
        return list(self.logs[source.name])
