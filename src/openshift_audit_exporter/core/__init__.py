# src/openshift_audit_exporter/core/__init__.py
# Core modules for the exporter.
"""
Core functionality for the exporter:
- config: Configuration management
- logs: Logging setup
"""

from openshift_audit_exporter.core.config import ExporterConfig, load_config
from openshift_audit_exporter.core.logs import configure_logging

__all__ = ["ExporterConfig", "configure_logging", "load_config"]
