# -*- coding: utf-8 -*-
"""Command line interface for inspecting data source discovery."""

import logging
import sys
from dataclasses import replace
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import get_config
from .discovery import PythonWorkerDiscovery
from .errors import DiscoveryError
from .session import Session

# Console for rich output
console = Console()

app = typer.Typer(
    name="datasource-registry",
    help="Inspect discovered and registered data sources",
    add_completion=False,
)


def _configure_logging(log_level: Optional[str]):
    level = (log_level or get_config().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(None, "-l", "--loglevel", help="Logging level"),
):
    """Data source registry CLI."""
    _configure_logging(log_level)


@app.command()
def version():
    """Show version."""
    from . import __version__
    console.print(f"[bold blue]datasource-registry[/bold blue] version [bold green]{__version__}[/bold green]")


@app.command()
def discover(
    group: Optional[str] = typer.Option(None, "-g", "--group", help="Entry point group to scan"),
):
    """Run the data source lookup worker once and show what it reports."""
    config = replace(get_config(), load_files=False)
    if group:
        config.entry_point_group = group

    try:
        result = PythonWorkerDiscovery(config).lookup_all_data_sources()
    except DiscoveryError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"Data sources in '{config.entry_point_group}'")
    table.add_column("Name", style="cyan")
    table.add_column("Handle", style="green")
    for name, handle in zip(result.names, result.handles):
        table.add_row(name, str(handle))

    console.print(table)
    console.print(f"[dim]{len(result)} data source(s) via {config.python_exec}[/dim]")


@app.command(name="list")
def list_sources():
    """List the data sources a new session can resolve."""
    session = Session()
    names = session.data_source.list()

    if not names:
        console.print("[yellow]No data sources available[/yellow]")
        return

    table = Table(title="Registered data sources")
    table.add_column("Name", style="cyan")
    table.add_column("Handle", style="green")
    for name in names:
        table.add_row(name, repr(session.data_source.lookup(name).handle))
    console.print(table)


def main():
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted by user[/dim]")
        sys.exit(1)


if __name__ == "__main__":
    main()
