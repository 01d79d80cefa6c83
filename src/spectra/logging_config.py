"""Logging setup shared by the CLI commands and the server.

Everything logs under the ``spectra`` namespace to a rich handler on stderr,
so stdout stays clean for ``--json`` output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "spectra"

_BASE_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def level_for(verbosity: str, service: bool = False) -> int:
    """Log level for a ``SpectraConfig.verbosity`` value.

    A long-running service logs every ingest and velocity query, so its
    ``normal`` level is INFO rather than WARNING.
    """
    if verbosity not in _BASE_LEVELS:
        raise ValueError(f"unknown verbosity: {verbosity!r}")
    if service and verbosity == "normal":
        return logging.INFO
    return _BASE_LEVELS[verbosity]


def setup_logging(
    verbosity: str = "normal", service: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Install the rich stderr handler (plus an optional file log).

    Args:
        verbosity: ``quiet``, ``normal`` or ``verbose``
        service: Use server levels (see :func:`level_for`)
        log_file: Optional file path to append plain-text logs to

    Returns:
        The ``spectra`` logger
    """
    level = level_for(verbosity, service)
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=service or verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    # Third-party libraries stay at WARNING unless debugging
    logging.basicConfig(
        level=logging.DEBUG if verbose else max(level, logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``spectra`` namespace (``spectra.<name>``)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
