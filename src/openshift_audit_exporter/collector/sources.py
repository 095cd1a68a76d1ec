# src/openshift_audit_exporter/collector/sources.py
# Log source discovery and retrieval backends.

"""
Fetchers resolve the current set of log sources and read their text.

Two backends are provided:
- KubectlLogFetcher: oauth-openshift pods, read through the kubectl/oc binary
- DirectoryLogFetcher: one source per log file, for offline analysis

Contract shared by every backend:
- list_sources() raises DiscoveryError when the sources cannot be resolved
- fetch_lines() raises FetchError when one source cannot be read
"""

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from openshift_audit_exporter.exceptions import DiscoveryError, FetchError
from openshift_audit_exporter.models import AUTHENTICATION_NAMESPACE, LogSource

if TYPE_CHECKING:
    from openshift_audit_exporter.core.config import SourceConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class LogSourceFetcher(Protocol):
    """Collaborator that discovers log sources and returns their lines."""

    def list_sources(self) -> list[LogSource]:
        ...

    def fetch_lines(self, source: LogSource) -> list[str]:
        ...


class KubectlLogFetcher:
    """
    Reads pod logs with the Kubernetes command line client.

    The client is invoked as a subprocess so the usual kubeconfig lookup
    (KUBECONFIG, ~/.kube/config, in-cluster service account) applies.
    """

    def __init__(
        self,
        namespace: str = AUTHENTICATION_NAMESPACE,
        kubectl_path: str = "kubectl",
        kubeconfig: Optional[Path] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.namespace = namespace
        self.kubectl_path = kubectl_path
        self.kubeconfig = kubeconfig
        self.timeout_seconds = timeout_seconds

    def _command(self, *args: str) -> list[str]:
        cmd = [self.kubectl_path]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", str(self.kubeconfig)])
        cmd.extend(["--namespace", self.namespace])
        cmd.extend(args)
        return cmd

    def _run(self, *args: str) -> str:
        result = subprocess.run(
            self._command(*args),
            capture_output=True,
            text=True,
            timeout=self.timeout_seconds,
            check=True,
        )
        return result.stdout

    def list_sources(self) -> list[LogSource]:
        try:
            output = self._run(
                "get", "pods", "--output", "jsonpath={.items[*].metadata.name}"
            )
        except subprocess.CalledProcessError as e:
            raise DiscoveryError(
                f"Failed to list pods in '{self.namespace}': {e.stderr.strip() or e}"
            ) from e
        except (subprocess.TimeoutExpired, OSError) as e:
            raise DiscoveryError(f"Failed to list pods in '{self.namespace}': {e}") from e

        return [LogSource(name=name, namespace=self.namespace) for name in output.split()]

    def fetch_lines(self, source: LogSource) -> list[str]:
        try:
            output = self._run("logs", source.name)
        except subprocess.CalledProcessError as e:
            raise FetchError(str(source), e.stderr.strip() or str(e)) from e
        except (subprocess.TimeoutExpired, OSError) as e:
            raise FetchError(str(source), str(e)) from e
        return output.splitlines()


class DirectoryLogFetcher:
    """
    Treats every file matching `pattern` in `directory` as a log source.

    Source names are paths relative to `directory`, so recursive patterns
    such as `**/*.log` keep same-named files in different folders apart.
    """

    def __init__(self, directory: Path, pattern: str = "*.log") -> None:
        self.directory = Path(directory)
        self.pattern = pattern

    def list_sources(self) -> list[LogSource]:
        if not self.directory.is_dir():
            raise DiscoveryError(f"Log directory not found: {self.directory}")
        return [
            LogSource(
                name=path.relative_to(self.directory).as_posix(),
                namespace=str(self.directory),
            )
            for path in sorted(self.directory.glob(self.pattern))
            if path.is_file()
        ]

    def fetch_lines(self, source: LogSource) -> list[str]:
        path = self.directory / source.name
        try:
            return path.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as e:
            raise FetchError(str(source), str(e)) from e


def create_fetcher(config: "SourceConfig") -> LogSourceFetcher:
    """Build the fetcher selected by the source configuration."""
    from openshift_audit_exporter.core.config import SourceBackend

    if config.backend == SourceBackend.DIRECTORY:
        logger.debug("Reading logs from directory %s", config.log_dir)
        return DirectoryLogFetcher(config.log_dir, config.glob)

    logger.debug("Reading logs from pods in namespace %s", config.namespace)
    return KubectlLogFetcher(
        namespace=config.namespace,
        kubectl_path=config.kubectl_path,
        kubeconfig=config.kubeconfig,
        timeout_seconds=config.fetch_timeout_seconds,
    )
