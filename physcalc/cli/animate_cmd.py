"""CLI command that runs the fluid visualization headlessly."""

from __future__ import annotations

import click
import numpy as np
from rich.table import Table

from physcalc.cli.common import check_fields, get_console, get_settings, parse_assignments
from physcalc.core.facade import CalculationFacade, DomainError, ParseError
from physcalc.core.formulas import get_formula
from physcalc.utils.units import UnitCategoryError
from physcalc.viz.engine import VisualizationEngine, VisualMode
from physcalc.viz.loop import AnimationLoop, SchedScheduler


@click.command("animate")
@click.argument(
    "mode",
    type=click.Choice([m.value for m in VisualMode], case_sensitive=False),
)
@click.option(
    "--input",
    "-i",
    "assignments",
    multiple=True,
    metavar="FIELD=VALUE[:UNIT]",
    help="Raw field text driving the animation. Repeatable.",
)
@click.option("--result", default=None, help="Result text to visualize (default: computed from inputs).")
@click.option("--frames", "-n", default=120, show_default=True, type=click.IntRange(min=1), help="Frames to run.")
@click.option("--seed", type=int, default=None, help="Random seed (overrides settings).")
@click.option("--png", type=click.Path(dir_okay=False), default=None, help="Save the last frame as PNG.")
@click.pass_context
def animate(
    ctx: click.Context,
    mode: str,
    assignments: tuple[str, ...],
    result: str | None,
    frames: int,
    seed: int | None,
    png: str | None,
) -> None:
    """Step the particle visualization for a number of frames."""
    console = get_console(ctx)
    settings = get_settings(ctx)
    visual_mode = VisualMode(mode.lower())

    inputs, units = parse_assignments(assignments)
    check_fields(get_formula(visual_mode.value).fields, inputs, units, console)

    if result is None:
        try:
            result = CalculationFacade().evaluate(visual_mode.value, inputs, units).display()
        except (ParseError, DomainError, UnitCategoryError) as exc:
            console.print(f"[yellow]No result ({exc}); animating from raw inputs only[/yellow]")

    engine = VisualizationEngine(
        visual_mode,
        colors=settings.colors,
        width=settings.canvas_width,
        height=settings.canvas_height,
        particle_count=settings.particle_count,
        rng=np.random.default_rng(seed if seed is not None else settings.seed),
    )
    scheduler = SchedScheduler(realtime=False)
    loop = AnimationLoop(
        engine,
        source=lambda: (inputs, result),
        scheduler=scheduler,
        interval=settings.frame_interval,
        max_frames=frames,
    )
    loop.start()
    scheduler.run()

    frame = loop.last_frame
    table = Table(title=f"{visual_mode.value.title()} visualization")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Frames", str(loop.frame_count))
    table.add_row("Result", result or "-")
    table.add_row("Particles", str(len(frame.particles)))
    if frame.particles:
        xs = np.array([p.x for p in frame.particles])
        ys = np.array([p.y for p in frame.particles])
        table.add_row("x range [px]", f"{xs.min():.1f} .. {xs.max():.1f}")
        table.add_row("y range [px]", f"{ys.min():.1f} .. {ys.max():.1f}")
    color = frame.geometry.get("particle_color")
    if color:
        table.add_row("Particle color", color)
    if "regime" in frame.geometry:
        table.add_row("Regime", str(frame.geometry["regime"]))
    console.print(table)

    if png:
        from physcalc.viz.render import save_frame_png

        save_frame_png(frame, png)
        console.print(f"\n[dim]Saved frame to {png}[/dim]")
