"""``spectra scan``: profile a directory tree and optionally upload a snapshot."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..analysis import analyze_top_files
from ..client import SpectraClient
from ..config import SpectraConfig
from ..exceptions import SpectraError
from ..logging_config import setup_logging
from ..models import ScanStats
from ..scanning import Scanner
from ..snapshot import build_agent_snapshot
from . import app
from ._common import console, err_console, resolve_config
from ._report import print_human_report, report_dict


@app.command()
def scan(
    path: Path = typer.Argument(
        Path("."),
        help="Root directory to scan",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Number of largest files to track (default: 10)",
        min=0,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output in machine-readable JSON format",
    ),
    analyze: bool = typer.Option(
        False,
        "--analyze",
        help="Annotate the largest files with header entropy and filename risk",
    ),
    server: Optional[str] = typer.Option(
        None,
        "--server",
        help="Spectra server URL to upload the snapshot to",
    ),
    agent_id: Optional[str] = typer.Option(
        None,
        "--agent-id",
        help="Agent identity for the uploaded snapshot (default: agent_<hostname>)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Directory-listing threads (default: auto-detect)",
        min=1,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose logging",
    ),
):
    """
    Profile the storage topology of a directory tree.

    Reports total size, file and folder counts, volume per extension and
    the largest files.

    [bold cyan]Examples:[/bold cyan]

      spectra scan /var/data

      spectra scan . --limit 25 --json

      spectra scan /srv --analyze --server http://brain:3000
    """
    try:
        settings = resolve_config(
            config=config,
            top_limit=limit,
            workers=workers,
            server_url=server,
            agent_id=agent_id,
            verbose=verbose,
        )
    except SpectraError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.verbosity)

    try:
        stats = _run_scan(path, settings, quiet=json_output)
    except SpectraError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    files = analyze_top_files(
        stats.top_files, analyze=analyze, sample_size=settings.entropy_sample_bytes
    )

    if json_output:
        print(json.dumps(report_dict(stats, files), indent=2))
    else:
        print_human_report(stats, files)

    if settings.server_url:
        _upload(stats, settings)


def _run_scan(path: Path, settings: SpectraConfig, quiet: bool) -> ScanStats:
    if quiet:
        return Scanner(path, top_limit=settings.top_limit, workers=settings.resolved_workers).scan()

    console.print(f"[bold]Profiling[/bold] topology of {path}")
    with console.status("[cyan]Scanning...") as status:

        def progress(files: int, folders: int, size: int) -> None:
            status.update(f"[cyan]Scanning...[/cyan] {files} files, {folders} folders")

        return Scanner(
            path,
            top_limit=settings.top_limit,
            workers=settings.resolved_workers,
            progress=progress,
        ).scan()


def _upload(stats: ScanStats, settings: SpectraConfig) -> None:
    """Upload the reduced snapshot; failures are reported but do not fail the scan."""
    assert settings.server_url is not None
    snapshot = build_agent_snapshot(
        stats,
        agent_id=settings.agent_id,
        max_extensions=settings.upload_top_extensions,
    )
    err_console.print(f"Uploading snapshot for [bold]{snapshot.agent_id}[/bold] to {settings.server_url}")
    try:
        with SpectraClient(settings.server_url, timeout=settings.request_timeout_seconds) as client:
            ack = client.upload_snapshot(snapshot)
    except SpectraError as e:
        err_console.print(f"[yellow]Upload failed:[/yellow] {e}")
        return
    err_console.print(f"[green]{ack}[/green]")
