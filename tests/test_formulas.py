"""Tests for the fluid dynamics formula catalog."""

import math

import pytest

from physcalc.core.formulas import (
    FORMULAS,
    CalculationOutcome,
    FlowRegime,
    FormulaKey,
    bernoulli_p2,
    classify_regime,
    continuity_v2,
    get_formula,
    hydrostatic_pressure,
    list_formulas,
    reynolds_number,
)
from physcalc.utils.units import Category


def compute(key, **values):
    return get_formula(key).compute(values)


class TestRegime:
    @pytest.mark.parametrize(
        "re, regime",
        [
            (0.0, FlowRegime.LAMINAR),
            (2299.99, FlowRegime.LAMINAR),
            (2300.0, FlowRegime.TRANSITIONAL),
            (3999.99, FlowRegime.TRANSITIONAL),
            (4000.0, FlowRegime.TURBULENT),
            (1e7, FlowRegime.TURBULENT),
        ],
    )
    def test_boundaries(self, re, regime):
        assert classify_regime(re) == regime


class TestEquations:
    def test_reynolds(self):
        assert reynolds_number(1000.0, 2.5, 0.05, 0.001) == pytest.approx(125000.0)

    def test_bernoulli(self):
        assert bernoulli_p2(101325.0, 1.0, 2.0, 1000.0) == pytest.approx(99825.0)

    def test_continuity(self):
        assert continuity_v2(0.1, 2.0, 0.05) == pytest.approx(4.0)

    def test_hydrostatic(self):
        assert hydrostatic_pressure(1000.0, 10.0) == pytest.approx(98066.5)


class TestReynoldsRule:
    def test_turbulent(self):
        out = compute("reynolds", rho=1000.0, v=2.5, L=0.05, mu=0.001)
        assert out.value_text == "125000.00"
        assert out.unit == ""
        assert out.annotation == "Regime: Turbulent"
        assert out.display() == "125000.00 Regime: Turbulent"

    def test_laminar(self):
        out = compute("reynolds", rho=1000.0, v=0.01, L=0.1, mu=0.001)
        assert out.annotation == "Regime: Laminar"

    @pytest.mark.parametrize("bad", ["rho", "v", "L", "mu"])
    def test_non_positive_input(self, bad):
        values = {"rho": 1000.0, "v": 2.5, "L": 0.05, "mu": 0.001}
        values[bad] = 0.0
        assert get_formula("reynolds").compute(values) is None

    def test_overflow(self):
        assert compute("reynolds", rho=1e300, v=1e300, L=1.0, mu=1.0) is None


class TestBernoulliRule:
    def test_example(self):
        out = compute("bernoulli", p1=101325.0, v1=1.0, v2=2.0, rho=1000.0)
        assert out.display() == "99825.00 Pa"

    def test_negative_velocities_allowed(self):
        out = compute("bernoulli", p1=0.0, v1=-1.0, v2=1.0, rho=1000.0)
        assert out.value == pytest.approx(0.0)

    def test_non_finite(self):
        assert compute("bernoulli", p1=math.inf, v1=1.0, v2=2.0, rho=1000.0) is None

    def test_overflow(self):
        assert compute("bernoulli", p1=0.0, v1=1e200, v2=1.0, rho=1.0) is None
        assert compute("bernoulli", p1=0.0, v1=1.0, v2=1e200, rho=1e200) is None

    def test_overflow_helper_returns_inf(self):
        assert bernoulli_p2(0.0, 1e200, 1.0, 1.0) == math.inf


class TestContinuityRule:
    def test_example(self):
        out = compute("continuity", a1=0.1, v1=2.0, a2=0.05)
        assert out.display() == "4.000 m/s"

    def test_zero_exit_area(self):
        assert compute("continuity", a1=0.1, v1=2.0, a2=0.0) is None

    def test_zero_velocity(self):
        assert compute("continuity", a1=0.1, v1=0.0, a2=0.05) is None

    def test_negative_velocity(self):
        out = compute("continuity", a1=0.1, v1=-2.0, a2=0.05)
        assert out.value == pytest.approx(-4.0)


class TestHydrostaticRule:
    def test_example(self):
        out = compute("hydrostatic", rho=1000.0, h=10.0)
        assert out.display() == "98066.50 Pa"

    def test_zero_depth(self):
        assert compute("hydrostatic", rho=1000.0, h=0.0) is None


class TestCatalog:
    def test_all_keys_registered(self):
        assert set(list_formulas()) == set(FormulaKey)
        assert set(FORMULAS) == set(FormulaKey)

    def test_field_ids(self):
        assert [f.id for f in get_formula(FormulaKey.REYNOLDS).fields] == ["rho", "v", "L", "mu"]
        assert [f.id for f in get_formula("bernoulli").fields] == ["p1", "v1", "v2", "rho"]
        assert [f.id for f in get_formula("continuity").fields] == ["a1", "v1", "a2"]
        assert [f.id for f in get_formula("hydrostatic").fields] == ["rho", "h"]

    def test_field_units_follow_category(self):
        reynolds = get_formula("reynolds")
        assert reynolds.field("mu").category == Category.VISCOSITY
        assert reynolds.field("mu").default_unit == "Pa·s"
        assert reynolds.default_units() == {"rho": "kg/m³", "v": "m/s", "L": "m", "mu": "Pa·s"}

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            get_formula("hydrostatic").field("v")

    def test_unknown_formula(self):
        with pytest.raises(ValueError):
            get_formula("navier_stokes")


class TestOutcomeDisplay:
    def test_parts_joined_with_spaces(self):
        assert CalculationOutcome(1.0, "1.00", "Pa").display() == "1.00 Pa"
        assert CalculationOutcome(1.0, "1.00").display() == "1.00"
        assert CalculationOutcome(1.0, "1.00", "", "note").display() == "1.00 note"
