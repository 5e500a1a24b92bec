"""CLI entry point - registers all subcommands."""

import typer

from .. import __version__

app = typer.Typer(
    name="a11y-insight",
    help=f"a11y-insight {__version__} - WCAG accessibility audit engine",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
from .detectors import detectors as _detectors  # noqa: F401, E402
