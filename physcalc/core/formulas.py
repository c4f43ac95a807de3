"""Fluid dynamics formula catalog for PhysCalc.

Each formula is a declarative definition: the fields it reads (with the
units each field offers) and a pure compute rule over SI-normalised inputs.
Unit conversion happens before the compute rule is called.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping

from physcalc.utils.constants import G_0, RE_LAMINAR_LIMIT, RE_TURBULENT_LIMIT
from physcalc.utils.units import Category, units_for


class FormulaKey(str, Enum):
    """Identifiers of the available fluid formulas."""

    REYNOLDS = "reynolds"
    BERNOULLI = "bernoulli"
    CONTINUITY = "continuity"
    HYDROSTATIC = "hydrostatic"


class FlowRegime(Enum):
    """Pipe-flow regime derived from the Reynolds number."""

    LAMINAR = "Laminar"
    TRANSITIONAL = "Transitional"
    TURBULENT = "Turbulent"


@dataclass(frozen=True)
class FieldDescriptor:
    """One input of a formula.

    ``allowed_units`` is ordered; the first entry is the default.
    """

    id: str
    label: str
    category: Category
    allowed_units: tuple[str, ...]
    placeholder: str = ""

    @property
    def default_unit(self) -> str:
        return self.allowed_units[0]


@dataclass(frozen=True)
class CalculationOutcome:
    """Formatted result of a formula evaluation."""

    value: float
    value_text: str
    unit: str = ""
    annotation: str | None = None

    def display(self) -> str:
        """Single-line display string, value first."""
        parts = [self.value_text, self.unit, self.annotation or ""]
        return " ".join(p for p in parts if p)


ComputeRule = Callable[[Mapping[str, float]], "CalculationOutcome | None"]


@dataclass(frozen=True)
class FormulaDefinition:
    """A formula: its fields and its compute rule."""

    key: FormulaKey
    name: str
    description: str
    fields: tuple[FieldDescriptor, ...]
    compute: ComputeRule

    def field(self, field_id: str) -> FieldDescriptor:
        for f in self.fields:
            if f.id == field_id:
                return f
        raise KeyError(f"Formula '{self.key.value}' has no field '{field_id}'")

    def default_units(self) -> dict[str, str]:
        return {f.id: f.default_unit for f in self.fields}


def _field(field_id: str, label: str, category: Category, placeholder: str) -> FieldDescriptor:
    return FieldDescriptor(field_id, label, category, units_for(category), placeholder)


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _all_positive(*values: float) -> bool:
    return all(math.isfinite(v) and v > 0 for v in values)


# --- Compute rules ---


def classify_regime(reynolds: float) -> FlowRegime:
    """Classify a Reynolds number into laminar/transitional/turbulent."""
    if reynolds < RE_LAMINAR_LIMIT:
        return FlowRegime.LAMINAR
    if reynolds < RE_TURBULENT_LIMIT:
        return FlowRegime.TRANSITIONAL
    return FlowRegime.TURBULENT


def reynolds_number(rho: float, v: float, L: float, mu: float) -> float:
    """Re = ρ·v·L / μ (dimensionless)."""
    return rho * v * L / mu


def bernoulli_p2(p1: float, v1: float, v2: float, rho: float) -> float:
    """Downstream pressure [Pa] for a horizontal streamline."""
    return p1 + 0.5 * rho * (v1 * v1 - v2 * v2)


def continuity_v2(a1: float, v1: float, a2: float) -> float:
    """Exit velocity [m/s] from A1·v1 = A2·v2."""
    return a1 * v1 / a2


def hydrostatic_pressure(rho: float, h: float) -> float:
    """Gauge pressure [Pa] at depth h: P = ρ·g·h."""
    return rho * G_0 * h


def _compute_reynolds(vals: Mapping[str, float]) -> CalculationOutcome | None:
    rho, v, L, mu = vals["rho"], vals["v"], vals["L"], vals["mu"]
    if not _all_positive(rho, v, L, mu):
        return None
    re = reynolds_number(rho, v, L, mu)
    if not math.isfinite(re):
        return None
    regime = classify_regime(re)
    return CalculationOutcome(re, f"{re:.2f}", "", f"Regime: {regime.value}")


def _compute_bernoulli(vals: Mapping[str, float]) -> CalculationOutcome | None:
    p1, v1, v2, rho = vals["p1"], vals["v1"], vals["v2"], vals["rho"]
    if not _all_finite(p1, v1, v2, rho):
        return None
    p2 = bernoulli_p2(p1, v1, v2, rho)
    if not math.isfinite(p2):
        return None
    return CalculationOutcome(p2, f"{p2:.2f}", "Pa")


def _compute_continuity(vals: Mapping[str, float]) -> CalculationOutcome | None:
    a1, v1, a2 = vals["a1"], vals["v1"], vals["a2"]
    if not _all_positive(a1, a2) or not _all_finite(v1) or v1 == 0:
        return None
    v2 = continuity_v2(a1, v1, a2)
    if not math.isfinite(v2):
        return None
    return CalculationOutcome(v2, f"{v2:.3f}", "m/s")


def _compute_hydrostatic(vals: Mapping[str, float]) -> CalculationOutcome | None:
    rho, h = vals["rho"], vals["h"]
    if not _all_positive(rho, h):
        return None
    p = hydrostatic_pressure(rho, h)
    if not math.isfinite(p):
        return None
    return CalculationOutcome(p, f"{p:.2f}", "Pa")


# --- Catalog ---

_DENSITY = _field("rho", "Density (ρ)", Category.DENSITY, "1000")

FORMULAS: dict[FormulaKey, FormulaDefinition] = {
    FormulaKey.REYNOLDS: FormulaDefinition(
        key=FormulaKey.REYNOLDS,
        name="Reynolds Number",
        description="Predict flow patterns (Laminar vs Turbulent)",
        fields=(
            _DENSITY,
            _field("v", "Velocity (v)", Category.VELOCITY, "2.5"),
            _field("L", "Length (L)", Category.LENGTH, "0.05"),
            _field("mu", "Dynamic Viscosity (μ)", Category.VISCOSITY, "0.001"),
        ),
        compute=_compute_reynolds,
    ),
    FormulaKey.BERNOULLI: FormulaDefinition(
        key=FormulaKey.BERNOULLI,
        name="Bernoulli Pressure Change",
        description="Calculate pressure drop between two points",
        fields=(
            _field("p1", "Initial Pressure (P1)", Category.PRESSURE, "101325"),
            _field("v1", "Initial Velocity (v1)", Category.VELOCITY, "1.0"),
            _field("v2", "Final Velocity (v2)", Category.VELOCITY, "2.0"),
            _DENSITY,
        ),
        compute=_compute_bernoulli,
    ),
    FormulaKey.CONTINUITY: FormulaDefinition(
        key=FormulaKey.CONTINUITY,
        name="Continuity Equation",
        description="Calculate exit velocity (A1*v1 = A2*v2)",
        fields=(
            _field("a1", "Area 1 (A1)", Category.AREA, "0.1"),
            _field("v1", "Velocity 1 (v1)", Category.VELOCITY, "2"),
            _field("a2", "Area 2 (A2)", Category.AREA, "0.05"),
        ),
        compute=_compute_continuity,
    ),
    FormulaKey.HYDROSTATIC: FormulaDefinition(
        key=FormulaKey.HYDROSTATIC,
        name="Hydrostatic Pressure",
        description="Pressure at depth (P = ρgh)",
        fields=(
            _DENSITY,
            _field("h", "Depth (h)", Category.LENGTH, "10"),
        ),
        compute=_compute_hydrostatic,
    ),
}


def get_formula(key: FormulaKey | str) -> FormulaDefinition:
    """Look up a formula by key.

    Raises:
        ValueError: If *key* is not a known formula identifier.
    """
    return FORMULAS[FormulaKey(key)]


def list_formulas() -> list[FormulaKey]:
    return list(FORMULAS)
