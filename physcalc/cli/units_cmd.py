"""CLI command listing the unit registry."""

from __future__ import annotations

import click
from rich.table import Table

from physcalc.cli.common import get_console
from physcalc.utils.units import Category, audit_unit_table, factor, si_unit, units_for


@click.command("units")
@click.argument(
    "category",
    required=False,
    type=click.Choice([c.value for c in Category], case_sensitive=False),
)
@click.option("--audit", is_flag=True, help="Cross-check every factor against pint.")
@click.pass_context
def units(ctx: click.Context, category: str | None, audit: bool) -> None:
    """Show unit symbols and their factors to SI."""
    console = get_console(ctx)

    if audit:
        result = audit_unit_table()
        if result.is_valid:
            console.print("[green]All unit factors agree with pint.[/green]")
            return
        for msg in result.errors:
            console.print(f"[red]✗[/red] {msg.parameter}: {msg.message}")
        raise SystemExit(1)

    categories = [Category(category.lower())] if category else list(Category)
    for cat in categories:
        table = Table(title=f"{cat.value.replace('_', ' ').title()} (SI: {si_unit(cat)})")
        table.add_column("Unit", style="cyan")
        table.add_column("Factor to SI", style="green", justify="right")
        for unit in units_for(cat):
            table.add_row(unit, f"{factor(unit):g}")
        console.print(table)
