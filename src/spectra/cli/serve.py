"""``spectra serve``: snapshot ingestion and time-travel query server."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import SpectraError
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to listen on (default: 3000)"),
    host: Optional[str] = typer.Option(None, help="Host to bind to (default: 127.0.0.1)"),
    db: Optional[str] = typer.Option(
        None, "--db", help="Snapshot database path (':memory:' for a volatile store)"
    ),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Start the server that agents upload snapshots to."""
    try:
        from ..server import _check_deps

        _check_deps()
    except ImportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    import uvicorn

    from ..persistence.store import SnapshotStore
    from ..server.app import create_app

    try:
        settings = resolve_config(config=config, port=port, host=host, db_path=db, verbose=verbose)
        store = SnapshotStore(settings.db_path)
    except SpectraError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.verbosity, service=True)

    url = f"http://{settings.host}:{settings.port}"
    console.print(f"[bold]Spectra server[/bold] → {url}  (store: {store.db_path})")
    console.print("  POST   /api/v1/ingest")
    console.print("  GET    /api/v1/agents")
    console.print("  GET    /api/v1/history/{agent_id}")
    console.print("  GET    /api/v1/velocity/{agent_id}?start=<ts>&end=<ts>")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        uvicorn.run(
            create_app(store),
            host=settings.host,
            port=settings.port,
            log_level="info" if verbose else "warning",
        )
    except KeyboardInterrupt:
        pass
    finally:
        store.close()
        console.print("\n[dim]Stopped.[/dim]")
