"""Matplotlib rendering of visualization frames and beam diagrams.

Drawing functions take an existing axes (or figure) so that the same code
paints the desktop canvas and the PNG files written by the CLI.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from matplotlib.axes import Axes
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import LinearSegmentedColormap, to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Polygon, Rectangle

from physcalc.core.beam import BeamDiagrams, SupportType
from physcalc.viz.beam_curve import BeamCurveFrame
from physcalc.viz.engine import VisualMode, VisualizationFrame

_OUTLINE = (1.0, 1.0, 1.0, 0.08)
_BEAM_COLOR = "#475569"
_SUPPORT_COLOR = "#94a3b8"


def _prepare(ax: Axes, width: float, height: float, background: str) -> None:
    ax.clear()
    ax.set_facecolor(background)
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # canvas coordinates: y grows downward
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])


def _horizontal_gradient(ax: Axes, rect: tuple, left_color: str, right_color: str) -> None:
    x, y, w, h = rect
    cmap = LinearSegmentedColormap.from_list(
        "pipe", [to_rgba(left_color, 0.15), to_rgba(right_color, 0.15)]
    )
    ax.imshow(
        np.linspace(0, 1, 256).reshape(1, -1),
        extent=(x, x + w, y + h, y),
        cmap=cmap,
        zorder=0,
    )


def draw_frame(ax: Axes, frame: VisualizationFrame, background: str = "#020617") -> None:
    """Draw a fluid visualization frame onto *ax*."""
    _prepare(ax, frame.width, frame.height, background)
    g = frame.geometry

    if frame.mode in (VisualMode.REYNOLDS, VisualMode.BERNOULLI):
        if frame.mode == VisualMode.BERNOULLI:
            _horizontal_gradient(ax, g["pipe"], *g["gradient"])
        x, y, w, h = g["pipe"]
        ax.add_patch(Rectangle((x, y), w, h, fill=False, edgecolor=_OUTLINE, linewidth=2))
    elif frame.mode == VisualMode.CONTINUITY:
        wall_x = np.array(g["wall_x"])
        wall_half = np.array(g["wall_half"])
        cy = g["center_y"]
        ax.plot(wall_x, cy - wall_half, color=g["particle_color"], alpha=0.3, linewidth=1)
        ax.plot(wall_x, cy + wall_half, color=g["particle_color"], alpha=0.3, linewidth=1)
    elif frame.mode == VisualMode.HYDROSTATIC:
        x, y, w, h = g["tank"]
        ax.add_patch(Rectangle((x, y), w, h, facecolor=to_rgba("#1e293b", 0.3), edgecolor=_OUTLINE))
        ax.plot(
            [x - 20, x + w + 20],
            [g["marker_y"], g["marker_y"]],
            color=g["marker_color"],
            linestyle=(0, (6, 6)),
            linewidth=1.5,
        )
        ax.text(
            x + w + 25,
            g["marker_y"] + 4,
            g["marker_label"],
            color=g["marker_color"],
            fontsize=8,
            fontweight="bold",
            va="center",
        )

    if frame.particles:
        xs = [p.x for p in frame.particles]
        ys = [p.y for p in frame.particles]
        sizes = [(p.size * 2.0) ** 2 for p in frame.particles]
        alphas = [p.alpha for p in frame.particles]
        if frame.mode == VisualMode.HYDROSTATIC:
            ax.scatter(
                xs, ys, s=sizes, facecolors="none",
                edgecolors=[to_rgba(g["particle_color"], a * 0.4) for a in alphas],
            )
        else:
            colors = [to_rgba(g["particle_color"], a) for a in alphas]
            ax.scatter(xs, ys, s=sizes, c=colors, edgecolors="none")

    # imshow autoscales to its extent
    ax.set_xlim(0, frame.width)
    ax.set_ylim(frame.height, 0)


def draw_beam_curve(ax: Axes, frame: BeamCurveFrame, background: str = "#020617") -> None:
    """Draw the beam preview (beam, supports, loads, elastic curve)."""
    _prepare(ax, frame.width, frame.height, background)
    primary = frame.colors.primary
    y0, x0, x1 = frame.beam_y, frame.beam_start, frame.beam_end

    ax.plot([x0, x1], [y0, y0], color=_BEAM_COLOR, linewidth=4, solid_capstyle="round")

    if frame.support == SupportType.SIMPLY_SUPPORTED:
        ax.add_patch(Polygon([(x0, y0), (x0 - 10, y0 + 15), (x0 + 10, y0 + 15)], color=_SUPPORT_COLOR))
        ax.add_patch(Circle((x1, y0 + 10), 5, fill=False, edgecolor=_SUPPORT_COLOR, linewidth=2))
    else:
        ax.plot([x0, x0], [y0 - 20, y0 + 20], color=_SUPPORT_COLOR, linewidth=8)
        for i in range(-20, 21, 8):
            ax.plot([x0, x0 - 8], [y0 + i, y0 + i + 5], color=_SUPPORT_COLOR, linewidth=1)

    arrow_top = 40 if len(frame.load_arrows) == 1 else 25
    for ax_x in frame.load_arrows:
        ax.annotate(
            "",
            xy=(ax_x, y0 - 2),
            xytext=(ax_x, y0 - arrow_top),
            arrowprops={"arrowstyle": "-|>", "color": primary, "linewidth": 1.5},
        )
    if len(frame.load_arrows) > 1:
        ax.plot([x0, x1], [y0 - 25, y0 - 25], color=primary, linewidth=1.5)
    label_x = frame.load_arrows[0] if len(frame.load_arrows) == 1 else frame.width / 2 - 20
    ax.text(label_x, y0 - arrow_top - 5, frame.load_label, color=primary, fontsize=7)

    cx, cy = zip(*frame.curve)
    ax.plot(cx, cy, color=primary, alpha=0.3, linewidth=2, linestyle=(0, (5, 5)))
    if frame.annotation:
        ax.text(x0, frame.height - 10, frame.annotation, color=frame.colors.accent, fontsize=7)


def draw_beam_diagrams(fig: Figure, diagrams: BeamDiagrams) -> None:
    """Draw shear, moment and deflection diagrams as three stacked axes."""
    fig.clear()
    axes = fig.subplots(3, 1, sharex=True)
    series = [
        (diagrams.shear, "V [N]", "steelblue"),
        (diagrams.moment, "M [N·m]", "coral"),
        (-diagrams.deflection_mm, "δ [mm]", "seagreen"),
    ]
    for ax, (values, label, color) in zip(axes, series):
        ax.plot(diagrams.x, values, color=color, linewidth=1.5)
        ax.fill_between(diagrams.x, values, 0, color=color, alpha=0.15)
        ax.axhline(0, color="gray", linewidth=0.8)
        ax.set_ylabel(label, fontsize=9)
        ax.grid(True, alpha=0.3)
        ax.tick_params(labelsize=8)
    axes[-1].set_xlabel("x [m]", fontsize=9)
    fig.tight_layout()


def save_frame_png(frame: VisualizationFrame, path: str | Path, dpi: int = 100) -> None:
    """Render a visualization frame to a PNG file."""
    fig = Figure(figsize=(frame.width / dpi, frame.height / dpi), dpi=dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_axes((0, 0, 1, 1))
    draw_frame(ax, frame)
    fig.savefig(path)


def save_beam_png(
    diagrams: BeamDiagrams,
    path: str | Path,
    curve: BeamCurveFrame | None = None,
    dpi: int = 100,
) -> None:
    """Render beam diagrams (and optionally the beam preview) to a PNG file."""
    fig = Figure(figsize=(6.0, 7.0), dpi=dpi)
    FigureCanvasAgg(fig)
    draw_beam_diagrams(fig, diagrams)
    if curve is not None:
        fig.subplots_adjust(top=0.72)
        preview = fig.add_axes((0.1, 0.76, 0.8, 0.22))
        draw_beam_curve(preview, curve)
    fig.savefig(path)
