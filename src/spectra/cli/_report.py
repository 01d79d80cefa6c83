"""Human and JSON renderings of a scan."""

from typing import Any, Dict, List

from rich.filesize import decimal
from rich.markup import escape
from rich.table import Table

from ..analysis.enrich import AnalyzedFileRecord
from ..models import ScanStats
from ._common import console

TOP_EXTENSIONS_SHOWN = 5

RISK_STYLES = {
    "Critical": "bold red",
    "High": "dark_orange",
    "Medium": "yellow",
    "Low": "green",
}


def report_dict(stats: ScanStats, files: List[AnalyzedFileRecord]) -> Dict[str, Any]:
    """JSON document for ``spectra scan --json``; top files carry their annotations."""
    data = stats.to_dict()
    data["top_files"] = [f.to_dict() for f in files]
    return data


def print_human_report(stats: ScanStats, files: List[AnalyzedFileRecord]) -> None:
    console.print()
    console.print(f"[green]Scan complete[/green] in {stats.scan_duration_ms / 1000:.2f}s")
    console.print(f"  Location   : [bold]{escape(stats.root_path)}[/bold]")
    console.print(f"  Files      : {stats.total_files}")
    console.print(f"  Folders    : {stats.total_folders}")
    console.print(f"  Total size : {decimal(stats.total_size_bytes)}")
    console.print()

    ext_table = Table(title="Top Extensions by Volume", pad_edge=True)
    ext_table.add_column("Extension", style="cyan")
    ext_table.add_column("Size", justify="right")
    ext_table.add_column("Files", justify="right")
    for ext, stat in stats.extensions_by_size()[:TOP_EXTENSIONS_SHOWN]:
        ext_table.add_row(f".{ext}", decimal(stat.size), str(stat.count))
    console.print(ext_table)

    file_table = Table(title="Top Largest Files", pad_edge=True)
    file_table.add_column("Size", justify="right")
    file_table.add_column("Entropy", justify="right")
    file_table.add_column("Risk")
    file_table.add_column("Path", style="dim")
    for f in files:
        entropy = f"{f.entropy:.1f}" if f.entropy is not None else ""
        risk = ""
        if f.risk_level is not None:
            style = RISK_STYLES.get(f.risk_level, "white")
            risk = f"[{style}]{f.risk_level}[/{style}]"
        if f.semantic_tag:
            risk = f"{risk} {escape('[' + f.semantic_tag + ']')}".strip()
        file_table.add_row(decimal(f.size_bytes), entropy, risk, escape(f.path))
    console.print(file_table)
