"""CLI command for beam statics."""

from __future__ import annotations

import click
from rich.table import Table

from physcalc.cli.common import get_console, get_settings
from physcalc.core.beam import LoadType, SupportType, beam_diagrams
from physcalc.core.facade import BEAM_FIELDS, DEFAULT_BEAM_INPUTS, CalculationFacade
from physcalc.core.history import HistoryLog


def _unit_option(field_id: str, flag: str):
    f = BEAM_FIELDS[field_id]
    return click.option(
        flag,
        type=click.Choice(list(f.allowed_units)),
        default=f.default_unit,
        show_default=True,
        help=f"Unit of {f.label}.",
    )


@click.command("beam")
@click.option(
    "--support",
    type=click.Choice([s.value for s in SupportType]),
    default=SupportType.SIMPLY_SUPPORTED.value,
    show_default=True,
    help="Support condition.",
)
@click.option(
    "--load",
    "load_type",
    type=click.Choice([t.value for t in LoadType]),
    default=LoadType.POINT.value,
    show_default=True,
    help="Point load (mid-span / free end) or uniform load.",
)
@click.option("--length", "-L", default=DEFAULT_BEAM_INPUTS["L"], show_default=True, help="Span L.")
@click.option("--point-load", "-P", default=DEFAULT_BEAM_INPUTS["P"], show_default=True, help="Point load P.")
@click.option(
    "--distributed-load", "-w", default=DEFAULT_BEAM_INPUTS["w"], show_default=True, help="Uniform load w."
)
@click.option("--modulus", "-E", default=DEFAULT_BEAM_INPUTS["E"], show_default=True, help="Young's modulus E.")
@click.option("--inertia", "-I", default=DEFAULT_BEAM_INPUTS["I"], show_default=True, help="Second moment of area I.")
@_unit_option("L", "--length-unit")
@_unit_option("P", "--point-load-unit")
@_unit_option("w", "--distributed-load-unit")
@_unit_option("E", "--modulus-unit")
@_unit_option("I", "--inertia-unit")
@click.option("--plot", type=click.Path(dir_okay=False), default=None, help="Write shear/moment/deflection PNG.")
@click.pass_context
def beam(
    ctx: click.Context,
    support: str,
    load_type: str,
    length: str,
    point_load: str,
    distributed_load: str,
    modulus: str,
    inertia: str,
    length_unit: str,
    point_load_unit: str,
    distributed_load_unit: str,
    modulus_unit: str,
    inertia_unit: str,
    plot: str | None,
) -> None:
    """Solve reactions, peak moment/shear and deflection of a beam."""
    console = get_console(ctx)
    settings = get_settings(ctx)

    inputs = {"L": length, "P": point_load, "w": distributed_load, "E": modulus, "I": inertia}
    units = {
        "L": length_unit,
        "P": point_load_unit,
        "w": distributed_load_unit,
        "E": modulus_unit,
        "I": inertia_unit,
    }

    facade = CalculationFacade(history=HistoryLog(limit=settings.history_limit))
    report = facade.solve_beam(support, load_type, inputs, units)
    if not report.ok:
        console.print(f"[red]Error:[/red] {report.error}")
        raise SystemExit(1)

    title = f"{SupportType(support).value.replace('_', ' ').title()} Beam, {LoadType(load_type).name.lower()} load"
    table = Table(title=title)
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for label, text in report.rows:
        table.add_row(label, text)
    console.print(table)

    for warning in report.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    if plot:
        from physcalc.viz.beam_curve import deflection_curve
        from physcalc.viz.render import save_beam_png

        diagrams = beam_diagrams(report.config)
        if diagrams is None:
            console.print("[yellow]Warning:[/yellow] diagrams overflow, no plot written")
            return
        curve = deflection_curve(support, load_type, report.result, colors=settings.colors)
        save_beam_png(diagrams, plot, curve=curve)
        console.print(f"\n[dim]Saved diagrams to {plot}[/dim]")
