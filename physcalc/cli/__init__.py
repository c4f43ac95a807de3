"""PhysCalc command-line interface package.

Supports ``python -m physcalc.cli`` as an alternative to the ``physcalc`` entry point.
"""

from physcalc.cli.main import cli, main

__all__ = ["cli", "main"]
