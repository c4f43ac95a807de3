"""CLI command to launch the PhysCalc desktop GUI."""

from __future__ import annotations

import click

from physcalc.cli.common import get_settings


@click.command("gui")
@click.pass_context
def gui(ctx: click.Context) -> None:
    """Launch the PhysCalc desktop application."""
    try:
        from physcalc.ui.app import run

        run(get_settings(ctx))
    except ImportError as e:
        click.echo(
            f"GUI dependencies not installed: {e}\n"
            f"Install with: pip install -e '.[ui]'"
        )
        raise SystemExit(1)
