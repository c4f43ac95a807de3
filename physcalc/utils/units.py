"""Unit conversion registry for PhysCalc.

Every calculator input is normalised to SI with a fixed, table-driven
multiplier per unit symbol.  The tables are the single source of truth for
which units a field may offer; pint is only used to audit them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import pint

from physcalc.utils.validation import ValidationResult

logger = logging.getLogger(__name__)


class Category(Enum):
    """Physical quantity categories known to the registry."""

    DENSITY = "density"
    VELOCITY = "velocity"
    LENGTH = "length"
    VISCOSITY = "viscosity"
    PRESSURE = "pressure"
    AREA = "area"
    FORCE = "force"
    DISTRIBUTED_LOAD = "distributed_load"
    MODULUS = "modulus"
    MOMENT_OF_INERTIA = "moment_of_inertia"


class UnitCategoryError(ValueError):
    """Raised when a unit is used with a category it does not belong to."""


# Ordered: the first unit of each category is its SI base unit.
_UNIT_TABLE: dict[Category, dict[str, float]] = {
    Category.DENSITY: {"kg/m³": 1.0, "g/cm³": 1000.0, "lb/ft³": 16.0185},
    Category.VELOCITY: {"m/s": 1.0, "km/h": 0.277778, "ft/s": 0.3048, "mph": 0.44704},
    Category.LENGTH: {"m": 1.0, "cm": 0.01, "mm": 0.001, "in": 0.0254, "ft": 0.3048},
    Category.VISCOSITY: {"Pa·s": 1.0, "cP": 0.001, "lb/(ft·s)": 1.48816},
    Category.PRESSURE: {
        "Pa": 1.0,
        "kPa": 1000.0,
        "psi": 6894.76,
        "bar": 100000.0,
        "atm": 101325.0,
    },
    Category.AREA: {"m²": 1.0, "cm²": 0.0001, "in²": 0.00064516, "ft²": 0.092903},
    Category.FORCE: {"N": 1.0, "kN": 1000.0, "lbf": 4.44822},
    Category.DISTRIBUTED_LOAD: {"N/m": 1.0, "kN/m": 1000.0, "lbf/ft": 14.5939},
    Category.MODULUS: {"Pa": 1.0, "kPa": 1000.0, "MPa": 1e6, "GPa": 1e9, "psi": 6894.76},
    Category.MOMENT_OF_INERTIA: {"m⁴": 1.0, "cm⁴": 1e-8, "mm⁴": 1e-12, "in⁴": 4.162314e-7},
}

# Flat symbol -> factor lookup.  Symbols shared between categories
# (Pa, kPa, psi) carry identical factors.
_FACTORS: dict[str, float] = {}
for _units in _UNIT_TABLE.values():
    _FACTORS.update(_units)


def units_for(category: Category) -> tuple[str, ...]:
    """Return the ordered unit symbols of *category* (first is SI)."""
    return tuple(_UNIT_TABLE[category])


def si_unit(category: Category) -> str:
    """Return the SI base unit symbol of *category*."""
    return units_for(category)[0]


def categories_of(unit: str) -> tuple[Category, ...]:
    """Return every category that lists *unit* (empty if unknown)."""
    return tuple(cat for cat, units in _UNIT_TABLE.items() if unit in units)


def is_known_unit(unit: str) -> bool:
    return unit in _FACTORS


def factor(unit: str) -> float:
    """Multiplier from *unit* to SI.

    Unknown symbols map to 1.0 so that conversion degrades to identity.
    """
    try:
        return _FACTORS[unit]
    except KeyError:
        logger.debug("Unknown unit %r, using identity multiplier", unit)
        return 1.0


def to_si(value: float, unit: str, category: Category | None = None) -> float:
    """Convert *value* expressed in *unit* to the SI base unit.

    Args:
        value: Numeric value in *unit*.
        unit: Unit symbol as offered by a field (e.g. "km/h", "cP").
        category: Optional category the value is expected to belong to.

    Returns:
        Value in SI.  Unknown units are passed through unchanged.

    Raises:
        UnitCategoryError: If *category* is given and *unit* is a known
            symbol of a different category.
    """
    if category is not None and unit not in _UNIT_TABLE[category] and is_known_unit(unit):
        raise UnitCategoryError(
            f"Unit '{unit}' is not a {category.value} unit. "
            f"Available: {list(units_for(category))}"
        )
    return value * factor(unit)


@dataclass(frozen=True)
class Quantity:
    """A value tagged with its unit and physical category."""

    value: float
    unit: str
    category: Category

    def __post_init__(self) -> None:
        if self.unit not in _UNIT_TABLE[self.category]:
            raise UnitCategoryError(
                f"Unit '{self.unit}' does not belong to category {self.category.value}"
            )

    def to_si(self) -> float:
        return self.value * _UNIT_TABLE[self.category][self.unit]

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit}"


# --- Audit against pint ---

# Table symbols that pint cannot parse verbatim.
_PINT_EXPRESSIONS: dict[str, str] = {
    "kg/m³": "kg/m**3",
    "g/cm³": "g/cm**3",
    "lb/ft³": "lb/ft**3",
    "km/h": "km/hour",
    "mph": "mile/hour",
    "in": "inch",
    "Pa·s": "Pa*s",
    "cP": "centipoise",
    "lb/(ft·s)": "lb/(ft*s)",
    "m²": "m**2",
    "cm²": "cm**2",
    "in²": "inch**2",
    "ft²": "ft**2",
    "m⁴": "m**4",
    "cm⁴": "cm**4",
    "mm⁴": "mm**4",
    "in⁴": "inch**4",
}

_ureg = pint.UnitRegistry()


def pint_expression(unit: str) -> str:
    """Return the pint-parseable spelling of a table unit symbol."""
    return _PINT_EXPRESSIONS.get(unit, unit)


@lru_cache(maxsize=128)
def reference_factor(unit: str, category: Category) -> float:
    """Multiplier from *unit* to SI as computed by pint."""
    base = pint_expression(si_unit(category))
    return _ureg.Quantity(1.0, pint_expression(unit)).to(base).magnitude


def audit_unit_table(rel_tol: float = 1e-4) -> ValidationResult:
    """Cross-check every fixed factor against pint.

    Args:
        rel_tol: Relative tolerance before a factor is reported.

    Returns:
        ValidationResult with an error per mismatched or unparseable unit.
    """
    result = ValidationResult()
    for category, units in _UNIT_TABLE.items():
        for unit, table_factor in units.items():
            name = f"{category.value}:{unit}"
            try:
                ref = reference_factor(unit, category)
            except (pint.errors.PintError, AttributeError) as exc:
                result.error(name, f"pint cannot convert '{unit}': {exc}")
                continue
            if abs(table_factor - ref) > rel_tol * abs(ref):
                result.error(
                    name,
                    f"factor {table_factor:g} differs from pint reference {ref:g}",
                    value=table_factor,
                    limit=ref,
                )
    logger.debug("Unit table audit finished with %d findings", len(result.messages))
    return result
