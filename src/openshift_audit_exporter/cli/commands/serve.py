# src/openshift_audit_exporter/cli/commands/serve.py
# Implementation of `audit-exporter serve` command.
"""
Starts the HTTP endpoint that Prometheus scrapes. Each request to /metrics
runs a fresh scrape cycle.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from openshift_audit_exporter.cli.commands.scrape import resolve_config
from openshift_audit_exporter.collector.registry import create_scraper_registry
from openshift_audit_exporter.core.logs import configure_logging
from openshift_audit_exporter.exceptions import PatternConstructionError
from openshift_audit_exporter.exporter import serve

console = Console()


def serve_command(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path"
    ),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", "-d", help="Read *.log files from this directory instead of pods"
    ),
    listen_address: Optional[str] = typer.Option(
        None, "--listen-address", "-l", help="Address to bind"
    ),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind"),
) -> None:
    """Expose login attempt counters on a Prometheus endpoint."""
    config = resolve_config(config_path, log_dir)
    overrides = {}
    if listen_address is not None:
        overrides["listen_address"] = listen_address
    if port is not None:
        overrides["port"] = port
    if overrides:
        config = config.model_copy(
            update={"server": config.server.model_copy(update=overrides)}
        )
    configure_logging(config.log_level)

    try:
        scrapers = create_scraper_registry(config)
    except PatternConstructionError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    try:
        serve(config, scrapers)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")
