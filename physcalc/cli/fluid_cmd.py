"""CLI command for the fluid dynamics formulas."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from physcalc.cli.common import check_fields, get_console, get_settings, parse_assignments
from physcalc.core.facade import CalculationFacade
from physcalc.core.formulas import FormulaKey, get_formula
from physcalc.core.history import HistoryLog


def _print_fields(console: Console, key: FormulaKey) -> None:
    formula = get_formula(key)
    table = Table(title=f"{formula.name}: fields")
    table.add_column("Field", style="cyan")
    table.add_column("Label")
    table.add_column("Units (first = default)", style="green")
    table.add_column("Example", style="dim", justify="right")
    for f in formula.fields:
        table.add_row(f.id, f.label, ", ".join(f.allowed_units), f.placeholder)
    console.print(table)


@click.command("fluid")
@click.argument(
    "formula",
    type=click.Choice([k.value for k in FormulaKey], case_sensitive=False),
)
@click.option(
    "--input",
    "-i",
    "assignments",
    multiple=True,
    metavar="FIELD=VALUE[:UNIT]",
    help="Field value with optional unit, e.g. -i v=9:km/h. Repeatable.",
)
@click.option("--show-fields", is_flag=True, help="List the formula's fields and units, then exit.")
@click.pass_context
def fluid(ctx: click.Context, formula: str, assignments: tuple[str, ...], show_fields: bool) -> None:
    """Evaluate a fluid dynamics formula."""
    console = get_console(ctx)
    key = FormulaKey(formula.lower())
    if show_fields:
        _print_fields(console, key)
        return

    definition = get_formula(key)
    inputs, units = parse_assignments(assignments)
    check_fields(definition.fields, inputs, units, console)

    history = HistoryLog(limit=get_settings(ctx).history_limit)
    report = CalculationFacade(history=history).calculate(key, inputs, units)
    if not report.ok:
        console.print(f"[red]Error:[/red] {report.error}")
        raise SystemExit(1)

    console.print(f"\n[bold]{definition.name}[/bold]\n")
    table = Table(title=definition.description)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")
    for f in definition.fields:
        table.add_row(f.label, inputs[f.id], units.get(f.id) or f.default_unit)

    outcome = report.outcome
    table.add_row("[bold]Result[/bold]", f"[bold]{outcome.value_text}[/bold]", outcome.unit or "-")
    console.print(table)
    if outcome.annotation:
        console.print(outcome.annotation)
