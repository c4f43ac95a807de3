"""Utility modules for PhysCalc."""

from physcalc.utils.constants import G_0, P_ATM
from physcalc.utils.units import Category, to_si, units_for

__all__ = ["G_0", "P_ATM", "Category", "to_si", "units_for"]
