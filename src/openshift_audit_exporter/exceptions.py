# src/openshift_audit_exporter/exceptions.py
# Error taxonomy for the exporter.

"""
Exceptions raised by the collector core.

- DiscoveryError: listing log sources failed; the whole cycle is aborted
- FetchError: reading one source failed; that source contributes nothing
- PatternConstructionError: a login pattern is malformed; raised at startup
"""


class AuditExporterError(Exception):
    """Base class for all exporter errors."""


class DiscoveryError(AuditExporterError):
    """The set of log sources could not be resolved."""


class FetchError(AuditExporterError):
    """The log text of a single source could not be retrieved."""

    def __init__(self, source_name: str, reason: str) -> None:
        super().__init__(f"Failed to fetch logs from '{source_name}': {reason}")
        self.source_name = source_name
        self.reason = reason


class PatternConstructionError(AuditExporterError):
    """A login pattern template is invalid."""
