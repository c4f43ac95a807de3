"""PhysCalc command-line interface.

Entry point for the ``physcalc`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from physcalc import __app_name__, __version__
from physcalc.core.config import AppSettings, load_settings_json
from physcalc.logging_config import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option(
    "--settings",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings JSON (canvas size, particles, colors).",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write logs here.")
@click.pass_context
def cli(ctx: click.Context, settings: str | None, verbose: int, log_file: str | None) -> None:
    """PhysCalc: engineering calculators with live visualization.

    Fluid formulas (Reynolds, Bernoulli, continuity, hydrostatic) and
    closed-form beam statics, with unit-aware inputs.
    """
    level = max(logging.WARNING - 10 * verbose, logging.DEBUG)
    setup_logging(level, log_file)
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj["settings"] = load_settings_json(settings) if settings else AppSettings()


# Import and register sub-commands
from physcalc.cli.animate_cmd import animate  # noqa: E402
from physcalc.cli.beam_cmd import beam  # noqa: E402
from physcalc.cli.fluid_cmd import fluid  # noqa: E402
from physcalc.cli.gui_cmd import gui  # noqa: E402
from physcalc.cli.units_cmd import units  # noqa: E402

cli.add_command(fluid)
cli.add_command(beam)
cli.add_command(units)
cli.add_command(animate)
cli.add_command(gui)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
