"""Configuration loading and management for Spectra.

Configuration sources are merged in priority order:
    1. Defaults (defined in SpectraConfig)
    2. Global config (~/.spectra.toml)
    3. Project config (./spectra.toml)
    4. Explicit config file
    5. Environment variables (SPECTRA_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(top_limit=25)
    >>> config.top_limit
    25
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_DB_PATH = str(Path.home() / ".spectra" / "snapshots.db")


@dataclass(frozen=True)
class SpectraConfig:
    """Runtime configuration for scanning, uploading and serving.

    Attributes:
        Scanning:
            top_limit: Number of largest files to track (K)
            workers: Directory-listing threads (None = auto-detect)

        Enrichment:
            entropy_sample_bytes: Header bytes read for entropy sampling

        Federation:
            server_url: Base URL of the Spectra server to upload to
            agent_id: Stable agent identity (None = derived from hostname)
            upload_top_extensions: Extensions kept in an uploaded snapshot
            request_timeout_seconds: HTTP timeout for the uploader client

        Server:
            db_path: SQLite snapshot store (":memory:" for a volatile store)
            host: Interface to bind
            port: Port to listen on

        Output control:
            verbosity: Logging verbosity level
    """

    # Scanning
    top_limit: int = 10
    workers: Optional[int] = None

    # Enrichment
    entropy_sample_bytes: int = 8192

    # Federation
    server_url: Optional[str] = None
    agent_id: Optional[str] = None
    upload_top_extensions: int = 10
    request_timeout_seconds: float = 10.0

    # Server
    db_path: str = DEFAULT_DB_PATH
    host: str = "127.0.0.1"
    port: int = 3000

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.top_limit < 0:
            raise InvalidConfigError("top_limit", self.top_limit, "must be non-negative")
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.entropy_sample_bytes < 1:
            raise InvalidConfigError(
                "entropy_sample_bytes", self.entropy_sample_bytes, "must be at least 1"
            )
        if self.upload_top_extensions < 0:
            raise InvalidConfigError(
                "upload_top_extensions", self.upload_top_extensions, "must be non-negative"
            )
        if self.request_timeout_seconds <= 0:
            raise InvalidConfigError(
                "request_timeout_seconds", self.request_timeout_seconds, "must be positive"
            )
        if not 0 < self.port < 65536:
            raise InvalidConfigError("port", self.port, "must be between 1 and 65535")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be one of quiet, normal, verbose"
            )

    @property
    def resolved_workers(self) -> int:
        """Worker count with auto-detection applied."""
        if self.workers is not None:
            return self.workers
        return min(32, (os.cpu_count() or 1) + 4)


def load_config(config_file: Optional[Path] = None, **overrides) -> SpectraConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options never mask file values.

    Returns:
        Validated SpectraConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".spectra.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "spectra.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return SpectraConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SPECTRA_* environment variables.

    Every SpectraConfig field can be set as ``SPECTRA_<FIELD_NAME>``, e.g.
    ``SPECTRA_TOP_LIMIT=25`` or ``SPECTRA_SERVER_URL=http://brain:3000``.
    """
    type_hints = get_type_hints(SpectraConfig)

    result: dict[str, Any] = {}

    for field_name in SpectraConfig.__dataclass_fields__:
        env_key = f"SPECTRA_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return the ``[spectra]`` table (or the whole file)."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("spectra", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid config file '{path}': [spectra] must be a table")
    return section
