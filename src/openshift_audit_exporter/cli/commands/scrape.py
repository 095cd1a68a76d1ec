# src/openshift_audit_exporter/cli/commands/scrape.py
# Implementation of `audit-exporter scrape` command.
"""
Runs a single scrape cycle and prints the resulting observations.

Useful to check patterns against real logs before deploying the exporter:
    audit-exporter scrape --log-dir ./must-gather/oauth-logs
"""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from openshift_audit_exporter.collector.emitter import ListSink
from openshift_audit_exporter.collector.registry import create_scraper_registry
from openshift_audit_exporter.core.config import ExporterConfig, SourceBackend, load_config
from openshift_audit_exporter.core.logs import configure_logging
from openshift_audit_exporter.exceptions import PatternConstructionError

console = Console()


def resolve_config(config_path: Optional[Path], log_dir: Optional[Path]) -> ExporterConfig:
    """Load the config file (or defaults) and apply command line overrides."""
    try:
        config = load_config(config_path) or ExporterConfig()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red]\n{e}")
        raise typer.Exit(2)

    if log_dir is not None:
        source = config.source.model_copy(
            update={"backend": SourceBackend.DIRECTORY, "log_dir": log_dir}
        )
        config = config.model_copy(update={"source": source})
    return config


def scrape_command(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path"
    ),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", "-d", help="Read *.log files from this directory instead of pods"
    ),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Include zero-valued subject/provider combinations"
    ),
) -> None:
    """Run one scrape cycle and print the login attempt counters."""
    config = resolve_config(config_path, log_dir)
    configure_logging(config.log_level)

    try:
        registry = create_scraper_registry(config)
    except PatternConstructionError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    sink = ListSink()
    results = registry.run_all(sink)

    table = Table(title="Login Attempts")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Subject", style="green")
    table.add_column("Provider")
    table.add_column("Count", justify="right")

    observations = sink.observations if show_all else sink.non_zero()
    for observation in observations:
        table.add_row(
            observation.descriptor.fq_name,
            observation.subject,
            observation.provider,
            str(int(observation.value)),
        )
    console.print(table)

    failed = [r for r in results if not r.succeeded]
    for result in failed:
        console.print(f"[red]✗ {result.scraper}: {result.error}[/red]")
    if failed:
        raise typer.Exit(1)

    console.print(f"\n[dim]Total: {len(observations)} observations[/dim]")
