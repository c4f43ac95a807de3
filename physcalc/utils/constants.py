"""Physical constants used throughout PhysCalc.

All values in SI units unless otherwise noted.
"""

import math

# Gravitational
G_0 = 9.80665  # m/s², standard gravitational acceleration

# Atmospheric
P_ATM = 101325.0  # Pa, standard atmospheric pressure

# Flow regime thresholds (pipe flow, Reynolds number)
RE_LAMINAR_LIMIT = 2300.0
RE_TURBULENT_LIMIT = 4000.0

# Mathematical
TWO_PI = 2.0 * math.pi

# Conversion factors
M_TO_MM = 1.0e3
