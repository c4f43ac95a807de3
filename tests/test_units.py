"""Tests for the unit conversion registry."""

import pytest

from physcalc.utils.units import (
    Category,
    Quantity,
    UnitCategoryError,
    audit_unit_table,
    categories_of,
    factor,
    is_known_unit,
    pint_expression,
    si_unit,
    to_si,
    units_for,
)

EXPECTED_FACTORS = {
    Category.DENSITY: {"kg/m³": 1.0, "g/cm³": 1000.0, "lb/ft³": 16.0185},
    Category.VELOCITY: {"m/s": 1.0, "km/h": 0.277778, "ft/s": 0.3048, "mph": 0.44704},
    Category.LENGTH: {"m": 1.0, "cm": 0.01, "mm": 0.001, "in": 0.0254, "ft": 0.3048},
    Category.VISCOSITY: {"Pa·s": 1.0, "cP": 0.001, "lb/(ft·s)": 1.48816},
    Category.PRESSURE: {"Pa": 1.0, "kPa": 1000.0, "psi": 6894.76, "bar": 100000.0, "atm": 101325.0},
    Category.AREA: {"m²": 1.0, "cm²": 0.0001, "in²": 0.00064516, "ft²": 0.092903},
    Category.FORCE: {"N": 1.0, "kN": 1000.0, "lbf": 4.44822},
    Category.DISTRIBUTED_LOAD: {"N/m": 1.0, "kN/m": 1000.0, "lbf/ft": 14.5939},
    Category.MODULUS: {"Pa": 1.0, "kPa": 1000.0, "MPa": 1e6, "GPa": 1e9, "psi": 6894.76},
    Category.MOMENT_OF_INERTIA: {"m⁴": 1.0, "cm⁴": 1e-8, "mm⁴": 1e-12, "in⁴": 4.162314e-7},
}


class TestUnitTable:
    @pytest.mark.parametrize("category", list(Category))
    def test_factors_are_exact(self, category):
        for unit, expected in EXPECTED_FACTORS[category].items():
            # Table-driven: equality, not approx
            assert to_si(1.0, unit, category) == expected

    @pytest.mark.parametrize("category", list(Category))
    def test_unit_order(self, category):
        assert units_for(category) == tuple(EXPECTED_FACTORS[category])

    def test_si_unit_is_first(self):
        assert si_unit(Category.PRESSURE) == "Pa"
        assert si_unit(Category.VISCOSITY) == "Pa·s"
        assert si_unit(Category.MOMENT_OF_INERTIA) == "m⁴"

    def test_shared_symbols(self):
        assert set(categories_of("psi")) == {Category.PRESSURE, Category.MODULUS}
        assert categories_of("furlong") == ()

    def test_is_known_unit(self):
        assert is_known_unit("km/h")
        assert not is_known_unit("km/hr")


class TestConversion:
    def test_scales_value(self):
        assert to_si(36.0, "km/h") == pytest.approx(10.0, rel=1e-5)
        assert to_si(2.5, "bar", Category.PRESSURE) == 250000.0

    def test_unknown_unit_is_identity(self):
        assert factor("parsec") == 1.0
        assert to_si(42.5, "parsec") == 42.5
        assert to_si(42.5, "parsec", Category.LENGTH) == 42.5

    def test_cross_category_unit_rejected(self):
        with pytest.raises(UnitCategoryError):
            to_si(1.0, "kg/m³", Category.LENGTH)

    def test_category_error_is_value_error(self):
        assert issubclass(UnitCategoryError, ValueError)


class TestQuantity:
    def test_to_si(self):
        q = Quantity(3.0, "kN", Category.FORCE)
        assert q.to_si() == 3000.0
        assert str(q) == "3 kN"

    def test_wrong_category(self):
        with pytest.raises(UnitCategoryError):
            Quantity(1.0, "m/s", Category.PRESSURE)

    def test_unknown_unit_rejected(self):
        with pytest.raises(UnitCategoryError):
            Quantity(1.0, "parsec", Category.LENGTH)


class TestPintAudit:
    def test_expression_mapping(self):
        assert pint_expression("m²") == "m**2"
        assert pint_expression("kPa") == "kPa"

    def test_table_agrees_with_pint(self):
        result = audit_unit_table()
        assert result.is_valid, [m.message for m in result.errors]

    def test_tight_tolerance_flags_rounded_factors(self):
        # km/h is stored rounded to six digits
        result = audit_unit_table(rel_tol=1e-9)
        assert any(m.parameter == "velocity:km/h" for m in result.errors)
