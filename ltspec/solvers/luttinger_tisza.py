"""
Luttinger-Tisza band structures of classical spin models.

The Luttinger-Tisza (LT) method relaxes the fixed spin length of every
site to a single global constraint. Diagonalizing the momentum-space
spin interaction matrix then gives LT "bands"; an eigenstate is a valid
classical ground state candidate only if some combination of the
(degenerate) eigenvectors has equal spin length on every site. The
constraint value attached to every band measures how badly that fails.
"""

import copy
import logging
from dataclasses import dataclass

import numpy as np
from typing import List, Sequence, Tuple, Union
from scipy.optimize import minimize
from tqdm import tqdm

from ltspec.core.lattice import Unitcell
from ltspec.core.path import Path
from ltspec.interactions.bond_matrices import BondMatrixFn, heisenberg_bond_matrix
from ltspec.interactions.kspace import interaction_matrix_kspace, spin_dimension
from ltspec.solvers.diagonalization import DIAG
from ltspec.utils.constants import EPSILON_DEGENERATE_DEFAULT, LT_CONSTRAINT_DEFAULT

logger = logging.getLogger(__name__)


# ==========================================================
# LT band structure result
# ==========================================================

@dataclass(frozen=True, eq=False)
class LTBandstructure:
    """
    Luttinger-Tisza band structure along a path.

    Attributes
    ----------
    path : Path
        The path along which the band structure was computed
    bands : Tuple[np.ndarray, ...]
        ``bands[s]`` has shape (num_bands, segment_resolution[s]);
        ``bands[s][b][i]`` is the energy of band b at sample i of segment s.
        Energies are ascending in b at every sample.
    constraint_values : Tuple[np.ndarray, ...]
        Same layout as ``bands``. The minimal constraint violation of the
        (possibly degenerate) eigenspace band b belongs to.

    Notes
    -----
    All arrays are read-only.
    """
    path: Path
    bands: Tuple[np.ndarray, ...]
    constraint_values: Tuple[np.ndarray, ...]

    @property
    def num_segments(self) -> int:
        return len(self.bands)

    @property
    def num_bands(self) -> int:
        return self.bands[0].shape[0] if self.bands else 0

    def constraint_fraction(self, constraint: float = LT_CONSTRAINT_DEFAULT) -> np.ndarray:
        """
        Fraction of samples satisfying the LT constraint.

        Returns
        -------
        fraction : np.ndarray, shape (num_bands, num_segments)
            Share of samples of band b in segment s with
            constraint value <= ``constraint``
        """
        return np.array([[np.mean(values[b] <= constraint) for values in self.constraint_values]
                         for b in range(self.num_bands)])

    def summary(self, constraint: float = LT_CONSTRAINT_DEFAULT) -> str:
        """Table of constraint-satisfying percentages per band and segment."""
        fraction = self.constraint_fraction(constraint)
        lines = [
            f"Bandstructure (LT), constraint satisfied for deviation <= {constraint}",
            "\t" + "\t->-\t".join(self.path.point_names),
        ]
        for b in range(self.num_bands):
            cells = "".join(f"\t{100.0 * fraction[b, s]:.2f}%\t|" for s in range(self.num_segments))
            lines.append(f"{b + 1})\t|{cells}")
        return "\n".join(lines)

    def print_info(self, constraint: float = LT_CONSTRAINT_DEFAULT) -> None:
        print(self.summary(constraint))

    def __repr__(self) -> str:
        return (f"LTBandstructure(path={self.path.path_string()}, "
                f"bands={self.num_bands}, segments={self.num_segments})")


# ==========================================================
# Degenerate eigenspaces and the LT constraint
# ==========================================================

def group_degenerate_bands(eigenvalues: Sequence[float],
                           epsilon_degenerate: float = EPSILON_DEGENERATE_DEFAULT) -> List[List[int]]:
    """
    Partition ascending eigenvalues into degenerate clusters.

    Eigenvalue i joins the cluster of i-1 iff
        eigenvalues[i] - epsilon_degenerate <= eigenvalues[i-1].
    Clusters are contiguous runs; a chain of small gaps merges into one
    cluster even if its ends differ by more than ``epsilon_degenerate``.

    Examples
    --------
    >>> group_degenerate_bands([0.0, 0.0, 1.0])
    [[0, 1], [2]]
    """
    clusters: List[List[int]] = []
    for b, value in enumerate(eigenvalues):
        if b > 0 and value - epsilon_degenerate <= eigenvalues[b - 1]:
            clusters[-1].append(b)
        else:
            clusters.append([b])
    return clusters


def _as_vector_list(eigenvectors: Union[np.ndarray, Sequence[np.ndarray]]) -> np.ndarray:
    """Stack eigenvectors as the columns of a 2D array."""
    if isinstance(eigenvectors, np.ndarray):
        if eigenvectors.ndim == 1:
            return eigenvectors.reshape(-1, 1)
        return eigenvectors
    return np.column_stack([np.asarray(v) for v in eigenvectors])


def site_spin_lengths(spin_vector: np.ndarray, spin_dimension: int) -> np.ndarray:
    """Squared norm of every per-site block of length ``spin_dimension``."""
    if spin_vector.shape[0] % spin_dimension != 0:
        raise ValueError(f"Vector length {spin_vector.shape[0]} is not a multiple "
                         f"of the spin dimension {spin_dimension}")
    return np.sum(np.abs(spin_vector.reshape(-1, spin_dimension)) ** 2, axis=1)


def lt_deviation(eigenvectors: np.ndarray, spin_dimension: int, alpha: np.ndarray) -> float:
    """
    Deviation from unit spin length of a real mixture of eigenvectors.

    sum_sites | |sum_s alpha_s v_s|^2_site - 1 |
    """
    spin_vector = eigenvectors @ np.asarray(alpha, dtype=float)
    spin_lengths = site_spin_lengths(spin_vector, spin_dimension)
    return float(np.sum(np.abs(spin_lengths - 1.0)))


def lt_constraint(eigenvectors: Union[np.ndarray, Sequence[np.ndarray]], spin_dimension: int) -> float:
    """
    Minimal LT constraint violation of a (degenerate) eigenspace.

    Parameters
    ----------
    eigenvectors : np.ndarray or Sequence[np.ndarray]
        The eigenvectors of the cluster, as columns of a 2D array or as a
        list of 1D arrays
    spin_dimension : int
        Number of spin components per site

    Returns
    -------
    value : float >= 0

    Notes
    -----
    For a single eigenvector the value is the spread of site lengths
    around their mean, sum_i |l_i - mean(l)|. For several eigenvectors
    the real mixing coefficients are optimized (Nelder-Mead from all ones)
    to bring every site length to exactly 1, and the minimal
    ``lt_deviation`` is returned. A non-converged minimization still
    returns its best value.
    """
    vectors = _as_vector_list(eigenvectors)

    if vectors.shape[1] == 1:
        spin_lengths = site_spin_lengths(vectors[:, 0], spin_dimension)
        return float(np.sum(np.abs(spin_lengths - np.mean(spin_lengths))))

    num_vectors = vectors.shape[1]
    result = minimize(lambda alpha: lt_deviation(vectors, spin_dimension, alpha),
                      np.ones(num_vectors),
                      method='Nelder-Mead',
                      options={'xatol': 1e-8, 'fatol': 1e-10, 'maxiter': 1000 * num_vectors})
    if not result.success:
        logger.debug("LT constraint minimization did not converge (%s), best value %.3e",
                     result.message, result.fun)
    return float(result.fun)


# ==========================================================
# Band structure calculation
# ==========================================================

def get_lt_bandstructure(unitcell: Unitcell,
                         path: Path,
                         bond_matrix: BondMatrixFn = heisenberg_bond_matrix,
                         resolution: int = -1,
                         enforce_hermitian: bool = False,
                         epsilon_degenerate: float = EPSILON_DEGENERATE_DEFAULT,
                         progress: bool = False) -> LTBandstructure:
    """
    Luttinger-Tisza band structure of a unit cell along a path.

    Parameters
    ----------
    unitcell : Unitcell
        Spin model
    path : Path
        Path through momentum space; not modified
    bond_matrix : BondMatrixFn, optional
        Bond interaction matrix function, sets the spin dimension.
        Default: ``heisenberg_bond_matrix``
    resolution : int, optional
        If positive, redistribute this total number of samples over the
        segments proportionally to their lengths
    enforce_hermitian : bool, optional
        Hermitize every interaction matrix before diagonalization
    epsilon_degenerate : float, optional
        Gap below which neighboring eigenvalues count as degenerate
    progress : bool, optional
        Show a tqdm progress bar over the segments

    Returns
    -------
    bandstructure : LTBandstructure

    Raises
    ------
    NumericalError
        If an interaction matrix cannot be diagonalized

    Examples
    --------
    >>> cell = square_unitcell()
    >>> bandstructure = get_lt_bandstructure(cell, get_default_path('square'), resolution=300)
    >>> bandstructure.num_bands
    1
    """
    path = copy.deepcopy(path)
    if resolution > 0:
        path.set_total_resolution(resolution)

    if path.num_segments == 0:
        raise ValueError("Path needs at least two points")
    if path.dimension != unitcell.dimension:
        raise ValueError(f"Path has dimension {path.dimension}, unit cell has dimension {unitcell.dimension}")

    dim = spin_dimension(unitcell, bond_matrix)
    num_bands = dim * unitcell.num_sites

    bands = [np.zeros((num_bands, r)) for r in path.segment_resolution]
    constraints = [np.zeros((num_bands, r)) for r in path.segment_resolution]

    logger.info("LT band structure along %s: %d bands, %d samples",
                path.path_string(), num_bands, path.total_resolution)

    for s in tqdm(range(path.num_segments), desc="LT band structure", disable=not progress):
        k1 = path.points[s]
        k2 = path.points[s + 1]
        multipliers = np.linspace(0, 1, path.segment_resolution[s])

        for i, t in enumerate(multipliers):
            k = (1 - t) * k1 + t * k2
            matrix = interaction_matrix_kspace(unitcell, k, bond_matrix, enforce_hermitian=enforce_hermitian)
            evals, evecs = DIAG.eigh(matrix)
            bands[s][:, i] = evals

            for cluster in group_degenerate_bands(evals, epsilon_degenerate):
                constraints[s][cluster, i] = lt_constraint(evecs[:, cluster], dim)

    for array in bands + constraints:
        array.setflags(write=False)

    return LTBandstructure(path, tuple(bands), tuple(constraints))
