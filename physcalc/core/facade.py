"""Calculation orchestration for PhysCalc.

The facade is the only entry point the user interface needs: it takes the
raw text of each field and the unit selected for it, parses and converts
the values to SI, dispatches to the formula catalog or the beam solver,
formats the outcome and hands finished calculations to the history sink.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from physcalc.core.beam import (
    BeamConfiguration,
    BeamResult,
    LoadType,
    SupportType,
    solve_beam,
)
from physcalc.core.formulas import (
    CalculationOutcome,
    FieldDescriptor,
    FormulaKey,
    get_formula,
)
from physcalc.core.history import HistoryRecorder
from physcalc.utils.units import Category, UnitCategoryError, to_si, units_for
from physcalc.utils.validation import validate_beam_design

logger = logging.getLogger(__name__)

CHECK_INPUTS = "Check inputs"


class ParseError(ValueError):
    """Raised when a field's text is not a finite number."""

    def __init__(self, field_id: str, label: str, text: str | None) -> None:
        super().__init__(f"Invalid value for {label}")
        self.field_id = field_id
        self.label = label
        self.text = text


class DomainError(ValueError):
    """Raised when parsed inputs are outside a calculation's domain."""


# --- Beam fields ---

BEAM_FIELDS: dict[str, FieldDescriptor] = {
    "L": FieldDescriptor("L", "Beam Length (L)", Category.LENGTH, units_for(Category.LENGTH), "5"),
    "P": FieldDescriptor("P", "Point Load (P)", Category.FORCE, units_for(Category.FORCE), "1000"),
    "w": FieldDescriptor(
        "w", "Uniform Load (w)", Category.DISTRIBUTED_LOAD, units_for(Category.DISTRIBUTED_LOAD), "200"
    ),
    "E": FieldDescriptor("E", "Young's Modulus (E)", Category.MODULUS, ("GPa", "MPa", "Pa", "psi"), "200"),
    "I": FieldDescriptor(
        "I", "Moment of Inertia (I)", Category.MOMENT_OF_INERTIA, units_for(Category.MOMENT_OF_INERTIA), "0.0001"
    ),
}

DEFAULT_BEAM_INPUTS: dict[str, str] = {"L": "5", "P": "1000", "w": "200", "E": "200", "I": "0.0001"}
DEFAULT_BEAM_UNITS: dict[str, str] = {fid: f.default_unit for fid, f in BEAM_FIELDS.items()}

_SUPPORT_LABELS = {
    SupportType.SIMPLY_SUPPORTED: "Simply supported",
    SupportType.CANTILEVER: "Cantilever",
}


def beam_fields(load: LoadType) -> tuple[FieldDescriptor, ...]:
    """Fields read for a given load type, in display order."""
    load_field = "P" if load == LoadType.POINT else "w"
    return tuple(BEAM_FIELDS[fid] for fid in ("L", load_field, "E", "I"))


def parse_number(text: str | None) -> float | None:
    """Parse user-typed text as a finite float, or return None."""
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


# --- Reports ---


@dataclass
class CalculationReport:
    """Display-ready result of a fluid calculation."""

    display: str
    outcome: CalculationOutcome | None = None
    error: str | None = None
    field_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BeamReport:
    """Display-ready result of a beam solve."""

    result: BeamResult | None = None
    config: BeamConfiguration | None = None
    rows: list[tuple[str, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None
    field_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def format_beam_rows(result: BeamResult) -> list[tuple[str, str]]:
    """Format a BeamResult as (label, text) rows."""
    reaction_b = f"{result.reaction_b:.2f} N" if result.reaction_b is not None else "N/A"
    return [
        ("Reaction A", f"{result.reaction_a:.2f} N"),
        ("Reaction B", reaction_b),
        ("Max Moment", f"{result.max_moment:.2f} Nm"),
        ("Max Shear", f"{result.max_shear:.2f} N"),
        ("Max Deflection", f"{result.max_deflection_mm:.4f} mm"),
    ]


class CalculationFacade:
    """Parse, convert, compute, format and record calculations.

    Args:
        history: Optional sink receiving ``(expression, result)`` for every
            successful calculation.
    """

    def __init__(self, history: HistoryRecorder | None = None) -> None:
        self.history = history

    # --- Parsing and conversion ---

    @staticmethod
    def parse_inputs(
        fields: Iterable[FieldDescriptor],
        raw_inputs: Mapping[str, str],
        units: Mapping[str, str],
    ) -> dict[str, float]:
        """Parse and convert every field to SI.

        Raises:
            ParseError: On the first field whose text is not a finite number.
            UnitCategoryError: If a field is given a unit of another category.
        """
        si_values: dict[str, float] = {}
        for f in fields:
            text = raw_inputs.get(f.id)
            value = parse_number(text)
            if value is None:
                raise ParseError(f.id, f.label, text)
            unit = units.get(f.id) or f.default_unit
            si_values[f.id] = to_si(value, unit, f.category)
        return si_values

    # --- Fluid formulas ---

    def evaluate(
        self,
        key: FormulaKey | str,
        raw_inputs: Mapping[str, str],
        units: Mapping[str, str],
    ) -> CalculationOutcome:
        """Compute a formula without recording it.

        Raises:
            ParseError: If a field cannot be parsed.
            DomainError: If the inputs are outside the formula's domain.
        """
        formula = get_formula(key)
        si_values = self.parse_inputs(formula.fields, raw_inputs, units)
        outcome = formula.compute(si_values)
        if outcome is None:
            raise DomainError(f"{formula.name}: inputs outside the valid domain")
        return outcome

    def calculate(
        self,
        key: FormulaKey | str,
        raw_inputs: Mapping[str, str],
        units: Mapping[str, str],
    ) -> CalculationReport:
        """Run a fluid formula and record it on success."""
        formula = get_formula(key)
        try:
            outcome = self.evaluate(formula.key, raw_inputs, units)
        except ParseError as exc:
            logger.debug("Parse error in %s: %s", exc.field_id, exc)
            return CalculationReport(display=str(exc), error=str(exc), field_id=exc.field_id)
        except UnitCategoryError as exc:
            return CalculationReport(display=str(exc), error=str(exc))
        except DomainError as exc:
            logger.debug("%s", exc)
            return CalculationReport(display=CHECK_INPUTS, error=CHECK_INPUTS)

        display = outcome.display()
        details = ", ".join(
            f"{f.label}: {raw_inputs.get(f.id)} {units.get(f.id) or f.default_unit}"
            for f in formula.fields
        )
        self._emit(f"{formula.name} ({details})", display)
        return CalculationReport(display=display, outcome=outcome)

    # --- Beam statics ---

    def build_beam(
        self,
        support: SupportType | str,
        load: LoadType | str,
        raw_inputs: Mapping[str, str],
        units: Mapping[str, str],
    ) -> BeamConfiguration:
        """Parse the active beam fields into an SI configuration.

        Raises:
            ParseError: If an active field cannot be parsed.
        """
        support = SupportType(support)
        load = LoadType(load)
        si = self.parse_inputs(beam_fields(load), raw_inputs, units)
        return BeamConfiguration(
            support=support,
            load=load,
            length=si["L"],
            modulus=si["E"],
            moment_of_inertia=si["I"],
            point_load=si.get("P"),
            distributed_load=si.get("w"),
        )

    def solve_beam(
        self,
        support: SupportType | str,
        load: LoadType | str,
        raw_inputs: Mapping[str, str],
        units: Mapping[str, str],
    ) -> BeamReport:
        """Solve a beam and record the peak moment on success."""
        try:
            config = self.build_beam(support, load, raw_inputs, units)
        except ParseError as exc:
            return BeamReport(error=str(exc), field_id=exc.field_id)
        except UnitCategoryError as exc:
            return BeamReport(error=str(exc))

        result = solve_beam(config)
        if result is None:
            return BeamReport(config=config, error=CHECK_INPUTS)

        checks = validate_beam_design(
            {
                "length": config.length,
                "modulus": config.modulus,
                "moment_of_inertia": config.moment_of_inertia,
                "max_deflection_mm": result.max_deflection_mm,
            }
        )
        length_unit = units.get("L") or BEAM_FIELDS["L"].default_unit
        expression = f"{_SUPPORT_LABELS[config.support]} Beam (L={raw_inputs.get('L')}{length_unit})"
        self._emit(expression, f"M_max={result.max_moment:.2f}Nm")
        return BeamReport(
            result=result,
            config=config,
            rows=format_beam_rows(result),
            warnings=[m.message for m in checks.warnings],
        )

    # --- History ---

    def _emit(self, expression: str, result: str) -> None:
        if self.history is None:
            return
        try:
            self.history.record(expression, result)
        except Exception as exc:
            logger.warning("History sink failed for %r: %s", expression, exc)
