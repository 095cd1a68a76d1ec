# src/openshift_audit_exporter/core/logs.py
# Logging setup shared by the CLI commands.

"""
Routes the standard library loggers of the package through rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "openshift_audit_exporter"


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger and set its level."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
