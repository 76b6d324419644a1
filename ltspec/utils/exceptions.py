"""Exception hierarchy for ltspec."""

from typing import Optional

import numpy as np


class LTSpecError(Exception):
    """Base class for all ltspec errors."""


class NumericalError(LTSpecError, ArithmeticError):
    """Eigen-decomposition failed or the input matrix is not finite."""


class FermiSurfaceSearchError(LTSpecError, RuntimeError):
    """
    The Fermi surface search ran out of attempts.

    Attributes
    ----------
    points_found : np.ndarray, shape (M, 2)
        Points accepted before the attempt budget was exhausted (M < N).
    """

    def __init__(self, message: str, points_found: Optional[np.ndarray] = None):
        super().__init__(message)
        self.points_found = points_found if points_found is not None else np.zeros((0, 2))


class ConfigurationError(LTSpecError, ValueError):
    """A configuration value or file is invalid."""
