import logging

import numpy as np
from typing import Tuple

from ltspec.utils.constants import TOLERANCE_DEFAULT
from ltspec.utils.exceptions import NumericalError

logger = logging.getLogger(__name__)


class DIAG:
    @staticmethod
    def check_hermiticity(matrix: np.ndarray, tolerance: float = TOLERANCE_DEFAULT) -> bool:
        diff = matrix - matrix.conj().T
        return np.allclose(diff, 0, atol=tolerance)

    @staticmethod
    def check_finite(matrix: np.ndarray) -> None:
        if not np.all(np.isfinite(matrix)):
            raise NumericalError(f"Matrix of shape {matrix.shape} contains non-finite entries")

    @classmethod
    def eigh(cls, matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Hermitian eigen-decomposition.

        Returns ascending eigenvalues and the matching eigenvectors as
        columns. Non-finite input or a LAPACK failure raises NumericalError.
        """
        cls.check_finite(matrix)
        if not cls.check_hermiticity(matrix):
            logger.warning("Matrix is not Hermitian within %g; only its lower triangle is used. "
                           "Consider enforce_hermitian=True.", TOLERANCE_DEFAULT)
        try:
            evals, evecs = np.linalg.eigh(matrix)
        except np.linalg.LinAlgError as e:
            raise NumericalError(f"Eigen-decomposition failed: {e}") from e
        return evals, evecs

    @classmethod
    def eigvalsh(cls, matrix: np.ndarray) -> np.ndarray:
        """Ascending eigenvalues of a Hermitian matrix (see ``eigh``)."""
        cls.check_finite(matrix)
        try:
            return np.linalg.eigvalsh(matrix)
        except np.linalg.LinAlgError as e:
            raise NumericalError(f"Eigenvalue computation failed: {e}") from e
