# src/openshift_audit_exporter/cli/commands/__init__.py
# CLI command implementations.
