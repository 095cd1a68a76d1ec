# src/openshift_audit_exporter/cli/commands/init.py
# Implementation of `audit-exporter init` command.
"""
Creates a local configuration file (.audit-exporter.yaml) with defaults.
"""

from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.panel import Panel

from openshift_audit_exporter.core.config import CONFIG_FILENAME, ExporterConfig

console = Console()


def init_command(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    path: Path = typer.Option(
        Path(CONFIG_FILENAME), "--path", "-p", help="Config file path"
    ),
) -> None:
    """Write a default exporter configuration."""
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    config = ExporterConfig()
    config_dict = config.model_dump(mode="json", exclude_none=True)

    with open(path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    console.print(Panel(
        f"[bold]Source:[/bold] {config.source.backend.value} "
        f"({config.source.namespace})\n"
        f"[bold]Namespace:[/bold] {config.metrics_namespace}\n"
        f"[bold]Endpoint:[/bold] {config.server.listen_address}:{config.server.port}",
        title="Exporter Config",
    ))
    console.print(f"\n[green]✓ Created config at {path}[/green]")

    console.print("\n[bold]Next steps:[/bold]")
    console.print("  1. Run [cyan]audit-exporter scrape[/cyan] to check the counters")
    console.print("  2. Run [cyan]audit-exporter serve[/cyan] to start the endpoint")
