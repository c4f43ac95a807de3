"""PhysCalc: unit-aware engineering calculators with live visualization."""

__app_name__ = "PhysCalc"
__version__ = "0.3.0"
