# src/openshift_audit_exporter/cli/commands/scrapers.py
# Implementation of `audit-exporter scrapers` command.
"""
Lists the scrapers registered for the current configuration.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from openshift_audit_exporter.cli.commands.scrape import resolve_config
from openshift_audit_exporter.collector.registry import create_scraper_registry
from openshift_audit_exporter.exceptions import PatternConstructionError

console = Console()


def scrapers_command(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path"
    ),
) -> None:
    """List registered scrapers."""
    config = resolve_config(config_path, None)
    try:
        registry = create_scraper_registry(config)
    except PatternConstructionError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    table = Table(title="Scrapers")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version", justify="right")
    table.add_column("Help")

    for scraper in registry:
        info = scraper.describe()
        table.add_row(info["name"], info["version"], info["help"])

    console.print(table)
