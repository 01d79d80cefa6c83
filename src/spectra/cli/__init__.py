"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="spectra",
    help="Spectra - Storage topology profiler and time-travel analytics",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402
from .history import history as _history  # noqa: F401, E402
from .velocity import velocity as _velocity  # noqa: F401, E402


def main() -> None:
    app()
