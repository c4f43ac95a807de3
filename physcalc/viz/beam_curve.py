"""Structural preview for the beam solver.

Produces the drawable state of a beam sketch: the beam line, support and
load glyph positions, and an exaggerated elastic curve.  The curve's shape
is the closed-form deflection of the selected case normalised to a fixed
amplitude, so it reads the same for any stiffness.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from physcalc.core.beam import (
    BeamConfiguration,
    BeamResult,
    LoadType,
    SupportType,
    deflection_at,
)
from physcalc.core.config import ColorConfig

MARGIN = 50.0
CURVE_AMPLITUDE = {SupportType.SIMPLY_SUPPORTED: 30.0, SupportType.CANTILEVER: 40.0}
UDL_ARROW_SPACING = 20.0


@dataclass(frozen=True)
class BeamCurveFrame:
    """Drawable state of the beam preview."""

    support: SupportType
    load: LoadType
    width: float
    height: float
    beam_y: float
    beam_start: float
    beam_end: float
    curve: tuple[tuple[float, float], ...]
    load_arrows: tuple[float, ...]
    load_label: str
    colors: ColorConfig
    annotation: str = ""


def _unit_shape(support: SupportType, load: LoadType, t: np.ndarray) -> np.ndarray:
    """Deflection along a unit beam, normalised to a peak of 1."""
    unit = BeamConfiguration(
        support=support,
        load=load,
        length=1.0,
        modulus=1.0,
        moment_of_inertia=1.0,
        point_load=1.0,
        distributed_load=1.0,
    )
    v = deflection_at(unit, t)
    return v / np.max(v)


def deflection_curve(
    support: SupportType | str,
    load: LoadType | str,
    result: BeamResult | None = None,
    colors: ColorConfig | None = None,
    width: float = 500.0,
    height: float = 200.0,
    num_points: int = 60,
) -> BeamCurveFrame:
    """Build the beam preview for a support/load combination.

    Args:
        support: Support condition.
        load: Load type.
        result: Latest solver result; adds a peak-deflection annotation.
        colors: Explicit color configuration.
        width: Canvas width [px].
        height: Canvas height [px].
        num_points: Samples along the elastic curve.
    """
    support = SupportType(support)
    load = LoadType(load)
    start, end = MARGIN, width - MARGIN
    beam_y = height / 2.0 + 20.0

    t = np.linspace(0.0, 1.0, max(num_points, 2))
    shape = _unit_shape(support, load, t)
    xs = start + t * (end - start)
    ys = beam_y + CURVE_AMPLITUDE[support] * shape
    curve = tuple((float(x), float(y)) for x, y in zip(xs, ys))

    if load == LoadType.POINT:
        arrow_x = width / 2.0 if support == SupportType.SIMPLY_SUPPORTED else end
        arrows: tuple[float, ...] = (arrow_x,)
        label = "P"
    else:
        arrows = tuple(float(x) for x in np.arange(start, end + 1e-9, UDL_ARROW_SPACING))
        label = "w (UDL)"

    annotation = ""
    if result is not None:
        annotation = f"δmax = {result.max_deflection_mm:.4f} mm"

    return BeamCurveFrame(
        support=support,
        load=load,
        width=float(width),
        height=float(height),
        beam_y=beam_y,
        beam_start=start,
        beam_end=end,
        curve=curve,
        load_arrows=arrows,
        load_label=label,
        colors=colors or ColorConfig(),
        annotation=annotation,
    )
