"""
Default numerical constants for ltspec.

These are the defaults of the public solver signatures and of the
configuration dataclasses in ``ltspec.io.config``.
"""

import numpy as np

# Fermi surface search
FERMI_ENERGY_DEFAULT = 0.0
EPSILON_DEFAULT = 1e-10
EPSILON_K_DEFAULT = 1e-10
SLOWDOWN_FACTOR_DEFAULT = 0.75
MAX_NEWTON_STEPS_DEFAULT = 100
ATTEMPTS_PER_POINT_DEFAULT = 1000
BOUNDS_LOWER_DEFAULT = (-2 * np.pi, -2 * np.pi)
BOUNDS_UPPER_DEFAULT = (2 * np.pi, 2 * np.pi)

# Newton step guards on the squared gradient norm
GRADIENT_FLAT_THRESHOLD = 1e-20
GRADIENT_DIVERGENT_THRESHOLD = 1e20

# Luttinger-Tisza
EPSILON_DEGENERATE_DEFAULT = 1e-6
LT_CONSTRAINT_DEFAULT = 1e-6

# Hermiticity check
TOLERANCE_DEFAULT = 1e-10
