"""``spectra velocity``: storage growth of an agent between two timestamps."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.filesize import decimal
from rich.table import Table

from ..client import SpectraClient
from ..exceptions import SpectraError
from ..persistence.store import SnapshotStore
from ..server.api import agent_velocity
from ..snapshot.models import VelocityReport
from . import app
from ._common import console, format_timestamp, local_store_missing, resolve_config

DELTAS_SHOWN = 10


def _signed_size(n: int) -> str:
    return f"-{decimal(-n)}" if n < 0 else f"+{decimal(n)}"


@app.command()
def velocity(
    agent_id: str = typer.Argument(..., help="Agent identity, e.g. agent_web01"),
    start: int = typer.Option(..., "--start", help="Start of the range (Unix seconds)"),
    end: int = typer.Option(..., "--end", help="End of the range (Unix seconds)"),
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
    Compute how fast an agent's storage grew between two points in time.

    Each boundary resolves to the latest snapshot at or before it.

    [bold cyan]Examples:[/bold cyan]

      spectra velocity agent_web01 --start 1700000000 --end 1700086400
    """
    try:
        settings = resolve_config(config=config, server_url=server, db_path=db)
        if settings.server_url:
            with SpectraClient(settings.server_url, timeout=settings.request_timeout_seconds) as client:
                report = client.velocity(agent_id, start, end)
        elif local_store_missing(settings.db_path):
            report = VelocityReport.zeroed(agent_id)
        else:
            with SnapshotStore(settings.db_path) as store:
                report = agent_velocity(store, agent_id, start, end)
    except SpectraError as e:
        console.print(f"[red]Error computing velocity:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps(report.to_dict(), indent=2))
        return

    _output_rich(report)


def _output_rich(report: VelocityReport) -> None:
    if not report.available:
        console.print(
            f"[yellow]Insufficient data[/yellow] for {report.agent_id}: "
            "no snapshot at or before one of the boundaries."
        )
        return

    console.print()
    console.print(f"[bold]{report.agent_id}[/bold]")
    console.print(
        f"  {format_timestamp(report.t_start)} → {format_timestamp(report.t_end)}"
        f"  ({report.duration_seconds}s)"
    )
    console.print(f"  Growth   : {_signed_size(report.growth_bytes)}, {report.growth_files:+d} files")
    console.print(f"  Velocity : {report.bytes_per_second:.2f} bytes/sec")

    if not report.extension_deltas:
        return

    table = Table(title="Largest Contributors", pad_edge=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Size Δ", justify="right")
    table.add_column("Files Δ", justify="right")
    for d in report.extension_deltas[:DELTAS_SHOWN]:
        style = "red" if d.size_delta > 0 else "green"
        table.add_row(
            f".{d.extension}", f"[{style}]{_signed_size(d.size_delta)}[/{style}]", f"{d.count_delta:+d}"
        )
    console.print(table)
