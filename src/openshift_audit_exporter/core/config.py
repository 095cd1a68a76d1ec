# src/openshift_audit_exporter/core/config.py
# Configuration management for the exporter.
"""
Configuration models and loading utilities.

The config file (.audit-exporter.yaml) stores:
- Where log sources come from (kubectl or a local directory)
- Metrics namespace and HTTP listen address
- Extra login patterns compiled after the built-in ones
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from openshift_audit_exporter.collector.patterns import DEFAULT_PATTERNS, LoginPattern
from openshift_audit_exporter.models import (
    AUTHENTICATION_NAMESPACE,
    DEFAULT_NAMESPACE,
    Mechanism,
    OutcomeClass,
)

CONFIG_FILENAME = ".audit-exporter.yaml"


class SourceBackend(str, Enum):
    """Where log sources are discovered."""

    KUBECTL = "kubectl"
    DIRECTORY = "directory"


class SourceConfig(BaseModel):
    """Log source settings."""

    backend: SourceBackend = Field(default=SourceBackend.KUBECTL)
    namespace: str = Field(
        default=AUTHENTICATION_NAMESPACE,
        description="Namespace holding the authentication pods",
    )
    kubectl_path: str = Field(default="kubectl", description="kubectl or oc binary")
    kubeconfig: Optional[Path] = Field(
        default=None, description="Explicit kubeconfig; the client default is used otherwise"
    )
    log_dir: Path = Field(default=Path("logs"), description="Directory backend root")
    glob: str = Field(default="*.log", description="Directory backend file pattern")
    fetch_timeout_seconds: float = Field(default=30.0, gt=0)


class ServerConfig(BaseModel):
    """Metrics endpoint settings."""

    listen_address: str = Field(default="0.0.0.0")
    port: int = Field(default=9199, ge=1, le=65535)


class PatternConfig(BaseModel):
    """A user-supplied login pattern."""

    name: str
    template: str = Field(..., description="Regex with (subject) and (provider) groups")
    outcome: OutcomeClass
    mechanism: Mechanism = Field(default=Mechanism.EXTERNAL)


class ExporterConfig(BaseModel):
    """Exporter configuration model."""

    version: str = Field(default="1.0", description="Config version")
    metrics_namespace: str = Field(default=DEFAULT_NAMESPACE)
    log_level: str = Field(default="INFO")
    source: SourceConfig = Field(default_factory=SourceConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    extra_patterns: list[PatternConfig] = Field(default_factory=list)


# Global config cache
_cached_config: Optional[ExporterConfig] = None
_config_path: Optional[Path] = None


def load_config(path: Optional[Path] = None) -> Optional[ExporterConfig]:
    """
    Load exporter configuration from file.

    Searches for config in order:
    1. Specified path
    2. Current directory (.audit-exporter.yaml)
    3. Home directory (~/.audit-exporter.yaml)

    Returns None if no config found.
    """
    global _cached_config, _config_path

    if _cached_config and (path is None or path == _config_path):
        return _cached_config

    search_paths = []
    if path:
        search_paths.append(path)
    search_paths.extend([
        Path(CONFIG_FILENAME),
        Path.home() / CONFIG_FILENAME,
    ])

    config_file = None
    for p in search_paths:
        if p.exists():
            config_file = p
            break

    if not config_file:
        return None

    with open(config_file) as f:
        data = yaml.safe_load(f) or {}

    config = ExporterConfig.model_validate(data)

    _cached_config = config
    _config_path = config_file

    return config


def clear_config_cache() -> None:
    """Clear the cached configuration."""
    global _cached_config, _config_path
    _cached_config = None
    _config_path = None


def compile_patterns(config: ExporterConfig) -> tuple[LoginPattern, ...]:
    """
    Built-in patterns followed by the configured extras.

    Raises PatternConstructionError for a malformed extra pattern.
    """
    extras = tuple(
        LoginPattern(p.name, p.template, p.outcome, p.mechanism)
        for p in config.extra_patterns
    )
    return DEFAULT_PATTERNS + extras
