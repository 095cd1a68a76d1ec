# src/openshift_audit_exporter/cli/__init__.py
# CLI package for the exporter.
"""
CLI module providing the `audit-exporter` command-line interface.

Commands:
- audit-exporter init: Create a local config file
- audit-exporter scrape: Run one scrape cycle and print the counters
- audit-exporter serve: Expose the counters on a Prometheus endpoint
- audit-exporter scrapers: List registered scrapers
"""

from openshift_audit_exporter.cli.main import app

__all__ = ["app"]
