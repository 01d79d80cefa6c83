"""``spectra history``: list the snapshot timestamps of an agent."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..client import SpectraClient
from ..exceptions import SpectraError
from ..persistence.store import SnapshotStore
from ..server.api import agent_history
from . import app
from ._common import console, format_timestamp, local_store_missing, resolve_config


@app.command()
def history(
    agent_id: str = typer.Argument(..., help="Agent identity, e.g. agent_web01"),
    server: Optional[str] = typer.Option(
        None, "--server", help="Query a Spectra server instead of the local store"
    ),
    db: Optional[str] = typer.Option(None, "--db", help="Local snapshot database path"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
):
    """
    List the snapshot timestamps recorded for an agent, newest first.

    [bold cyan]Examples:[/bold cyan]

      spectra history agent_web01

      spectra history agent_web01 --server http://brain:3000 --json
    """
    try:
        settings = resolve_config(config=config, server_url=server, db_path=db)
        if settings.server_url:
            with SpectraClient(settings.server_url, timeout=settings.request_timeout_seconds) as client:
                timestamps = client.history(agent_id)
        else:
            if local_store_missing(settings.db_path):
                console.print(
                    "[yellow]No history found.[/yellow] "
                    "Run [bold]spectra serve[/bold] and upload a snapshot first."
                )
                raise typer.Exit(0)
            with SnapshotStore(settings.db_path) as store:
                timestamps = agent_history(store, agent_id)
    except SpectraError as e:
        console.print(f"[red]Error reading history:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps(timestamps))
        return

    if not timestamps:
        console.print(f"[yellow]No snapshots recorded for {agent_id}.[/yellow]")
        return

    _output_rich(agent_id, timestamps)


def _output_rich(agent_id: str, timestamps: list[int]) -> None:
    """Human-readable Rich table output."""
    from rich.table import Table

    table = Table(title=f"Snapshots of {agent_id}", show_lines=False, pad_edge=True)
    table.add_column("#", style="bold", justify="right")
    table.add_column("Timestamp", style="cyan", justify="right")
    table.add_column("UTC", style="green")

    for i, ts in enumerate(timestamps, start=1):
        table.add_row(str(i), str(ts), format_timestamp(ts))

    console.print()
    console.print(table)
