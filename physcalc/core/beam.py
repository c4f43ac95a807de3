"""Beam statics module for PhysCalc.

Closed-form Euler–Bernoulli results for a prismatic beam with one of two
support conditions and one of two load types:

- simply supported, point load at mid-span or uniform load (UDL)
- cantilever fixed at x = 0, point load at the free end or UDL

All inputs and outputs are SI except the deflection summary, which is
reported in millimetres.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from physcalc.utils.constants import M_TO_MM

logger = logging.getLogger(__name__)


class SupportType(str, Enum):
    SIMPLY_SUPPORTED = "simply_supported"
    CANTILEVER = "cantilever"


class LoadType(str, Enum):
    POINT = "point"
    UNIFORM = "udl"


@dataclass(frozen=True)
class BeamConfiguration:
    """Beam definition for one solve.

    All values in SI.
    """

    support: SupportType
    load: LoadType
    length: float  # m
    modulus: float  # Pa, Young's modulus E
    moment_of_inertia: float  # m⁴
    point_load: float | None = None  # N
    distributed_load: float | None = None  # N/m

    @property
    def flexural_rigidity(self) -> float:
        """EI [N·m²]."""
        return self.modulus * self.moment_of_inertia

    @property
    def active_load(self) -> float | None:
        """P for point loads, w for uniform loads."""
        return self.point_load if self.load == LoadType.POINT else self.distributed_load

    def is_valid(self) -> bool:
        load = self.active_load
        return (
            all(
                math.isfinite(v) and v > 0
                for v in (self.length, self.modulus, self.moment_of_inertia, self.flexural_rigidity)
            )
            and load is not None
            and math.isfinite(load)
        )


@dataclass(frozen=True)
class BeamResult:
    """Statics summary for a solved beam."""

    reaction_a: float  # N
    max_moment: float  # N·m
    max_shear: float  # N
    max_deflection_mm: float  # mm
    reaction_b: float | None = None  # N, None for cantilevers


@dataclass
class BeamDiagrams:
    """Sampled internal force and deflection diagrams along the span."""

    x: np.ndarray = field(default_factory=lambda: np.array([]))  # m
    shear: np.ndarray = field(default_factory=lambda: np.array([]))  # N
    moment: np.ndarray = field(default_factory=lambda: np.array([]))  # N·m
    deflection_mm: np.ndarray = field(default_factory=lambda: np.array([]))  # mm, positive down


def solve_beam(config: BeamConfiguration) -> BeamResult | None:
    """Solve reactions, peak internal forces and peak deflection.

    Args:
        config: Beam configuration in SI.

    Returns:
        BeamResult, or None if L, E, I or EI is not strictly positive, the
        active load is missing or non-finite, or a result overflows.
    """
    if not config.is_valid():
        return None

    L = config.length
    EI = config.flexural_rigidity
    q = config.active_load

    if config.support == SupportType.SIMPLY_SUPPORTED:
        if config.load == LoadType.POINT:
            reaction = q / 2.0
            moment = q * L / 4.0
            deflection = q * L * L * L / (48.0 * EI)
        else:
            reaction = q * L / 2.0
            moment = q * L * L / 8.0
            deflection = 5.0 * q * L * L * L * L / (384.0 * EI)
        reaction_b = reaction
    else:
        if config.load == LoadType.POINT:
            reaction = q
            moment = q * L
            deflection = q * L * L * L / (3.0 * EI)
        else:
            reaction = q * L
            moment = q * L * L / 2.0
            deflection = q * L * L * L * L / (8.0 * EI)
        reaction_b = None

    deflection_mm = deflection * M_TO_MM
    if not all(math.isfinite(v) for v in (reaction, moment, deflection_mm)):
        logger.debug("Beam result overflowed for %s", config)
        return None
    return BeamResult(
        reaction_a=reaction,
        reaction_b=reaction_b,
        max_moment=moment,
        max_shear=reaction,
        max_deflection_mm=deflection_mm,
    )


def deflection_at(config: BeamConfiguration, x: float | np.ndarray) -> float | np.ndarray:
    """Elastic curve v(x) [m], positive downward.

    For cantilevers x is measured from the fixed end.  Positions outside
    [0, L] are clamped to the span.
    """
    L = config.length
    EI = config.flexural_rigidity
    q = config.active_load or 0.0
    xs = np.clip(np.asarray(x, dtype=float), 0.0, L)

    if config.support == SupportType.SIMPLY_SUPPORTED:
        if config.load == LoadType.POINT:
            # Symmetric about mid-span
            a = np.minimum(xs, L - xs)
            v = q * a * (3.0 * L * L - 4.0 * a * a) / (48.0 * EI)
        else:
            v = q * xs * (L * L * L - 2.0 * L * xs * xs + xs * xs * xs) / (24.0 * EI)
    elif config.load == LoadType.POINT:
        v = q * xs * xs * (3.0 * L - xs) / (6.0 * EI)
    else:
        v = q * xs * xs * (6.0 * L * L - 4.0 * L * xs + xs * xs) / (24.0 * EI)

    return float(v) if np.isscalar(x) else v


def shear_moment_at(
    config: BeamConfiguration, x: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """Shear force V(x) [N] and bending moment M(x) [N·m].

    Sagging moments are positive; cantilever moments are hogging
    (negative).
    """
    L = config.length
    q = config.active_load or 0.0
    xs = np.clip(np.asarray(x, dtype=float), 0.0, L)

    if config.support == SupportType.SIMPLY_SUPPORTED:
        if config.load == LoadType.POINT:
            shear = np.where(xs <= L / 2.0, q / 2.0, -q / 2.0)
            moment = q * np.minimum(xs, L - xs) / 2.0
        else:
            shear = q * (L / 2.0 - xs)
            moment = q * xs * (L - xs) / 2.0
    elif config.load == LoadType.POINT:
        shear = np.full_like(xs, q)
        moment = -q * (L - xs)
    else:
        shear = q * (L - xs)
        moment = -q * (L - xs) ** 2 / 2.0
    return shear, moment


def beam_diagrams(config: BeamConfiguration, num_points: int = 101) -> BeamDiagrams | None:
    """Sample shear, moment and deflection along the span.

    Returns:
        BeamDiagrams, or None for an invalid configuration or one whose
        diagrams overflow.
    """
    if not config.is_valid():
        return None
    x = np.linspace(0.0, config.length, max(num_points, 2))
    with np.errstate(over="ignore", invalid="ignore"):
        shear, moment = shear_moment_at(config, x)
        deflection = deflection_at(config, x) * M_TO_MM
    if not all(np.all(np.isfinite(a)) for a in (shear, moment, deflection)):
        return None
    return BeamDiagrams(x=x, shear=shear, moment=moment, deflection_mm=deflection)
