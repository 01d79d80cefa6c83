"""Shared CLI helpers."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import SpectraConfig, load_config
from ..persistence.database import MEMORY_DB

console = Console()
err_console = Console(stderr=True)


def resolve_config(config: Optional[Path] = None, **overrides) -> SpectraConfig:
    """Build settings from CLI options; unset (None) options keep file/env values."""
    return load_config(config_file=config, **overrides)


def format_timestamp(ts: int) -> str:
    """Unix seconds as ``YYYY-MM-DD HH:MM:SS`` UTC."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def local_store_missing(db_path: str) -> bool:
    """True when *db_path* names an on-disk store that was never created."""
    return db_path != MEMORY_DB and not Path(db_path).expanduser().exists()
