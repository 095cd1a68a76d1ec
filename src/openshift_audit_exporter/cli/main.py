# src/openshift_audit_exporter/cli/main.py
# Main CLI entrypoint for the exporter.
"""
Main Typer application with all sub-commands.

Usage:
    audit-exporter init                       # Write a default config
    audit-exporter scrape                     # Run one cycle and print counters
    audit-exporter scrape --log-dir ./logs    # Scrape local log files instead of pods
    audit-exporter serve                      # Start the /metrics endpoint
    audit-exporter scrapers                   # List registered scrapers
"""

import typer
from rich.console import Console

from openshift_audit_exporter import __version__
from openshift_audit_exporter.cli.commands import init, scrape, scrapers, serve

app = typer.Typer(
    name="audit-exporter",
    help="OpenShift audit exporter: login attempt counters from authentication logs",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

app.command("init")(init.init_command)
app.command("scrape")(scrape.scrape_command)
app.command("serve")(serve.serve_command)
app.command("scrapers")(scrapers.scrapers_command)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
) -> None:
    """OpenShift audit exporter CLI."""
    if version:
        console.print(f"[bold]audit-exporter[/bold] version {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()
