"""
Momentum-space interaction matrices.

The matrix of a unit cell at momentum k is an (sN x sN) complex matrix,
N being the number of basis sites and s the spin dimension given by the
bond matrix function. Entry (s*i + a, s*j + b) couples spin component a
of site i with spin component b of site j, including the Bloch phase of
every bond connecting them.
"""

import numpy as np

from ltspec.core.lattice import Unitcell
from .bond_matrices import BondMatrixFn, heisenberg_bond_matrix


def spin_dimension(unitcell: Unitcell, bond_matrix: BondMatrixFn = heisenberg_bond_matrix) -> int:
    """
    Spin dimension implied by a bond matrix function.

    Determined from the matrix of the first bond of the unit cell.
    """
    if not unitcell.bonds:
        raise ValueError("Unitcell has no bonds, cannot determine the spin dimension")
    return np.atleast_2d(bond_matrix(unitcell.bonds[0])).shape[0]


def hermitize(matrix: np.ndarray) -> np.ndarray:
    """Average a matrix with its conjugate transpose."""
    return 0.5 * (matrix + matrix.conj().T)


def interaction_matrix_kspace(unitcell: Unitcell,
                              k_vector,
                              bond_matrix: BondMatrixFn = heisenberg_bond_matrix,
                              enforce_hermitian: bool = False) -> np.ndarray:
    """
    Interaction matrix of a unit cell at momentum ``k_vector``.

    Parameters
    ----------
    unitcell : Unitcell
        Lattice model
    k_vector : array-like, shape (D,)
        Momentum
    bond_matrix : BondMatrixFn, optional
        Maps a bond to its (s x s) interaction matrix.
        Default: ``heisenberg_bond_matrix`` (s = 1)
    enforce_hermitian : bool, optional
        Replace the result by (H + H^dagger) / 2

    Returns
    -------
    matrix : np.ndarray, shape (sN, sN), complex

    Notes
    -----
    Every bond (i -> j, displacement δ, matrix M) contributes
        H[(i,a), (j,b)] += 0.5 * M[a,b] * exp(-i k·δ)
        H[(j,b), (i,a)] += 0.5 * M[a,b] * exp(+i k·δ)
    so the result is Hermitian for real bond matrices. Complex bond
    matrices are added as returned; pass ``enforce_hermitian=True`` if the
    bond list does not make the sum Hermitian. On-site bonds
    (i == j, δ = 0) land both halves on the same diagonal block.

    Examples
    --------
    >>> cell = square_unitcell()
    >>> interaction_matrix_kspace(cell, [0.0, 0.0])
    array([[4.+0.j]])
    """
    k_vector = np.asarray(k_vector, dtype=float).reshape(-1)
    if k_vector.shape[0] != unitcell.dimension:
        raise ValueError(f"k_vector has dimension {k_vector.shape[0]}, "
                         f"unit cell has dimension {unitcell.dimension}")

    dim = spin_dimension(unitcell, bond_matrix)
    size = dim * unitcell.num_sites
    matrix = np.zeros((size, size), dtype=complex)

    for bond in unitcell.bonds:
        i, j = bond.from_index, bond.to_index
        delta = unitcell.bond_displacement(bond)
        block = np.atleast_2d(np.asarray(bond_matrix(bond), dtype=complex))
        if block.shape != (dim, dim):
            raise ValueError(f"Bond matrix of {bond} has shape {block.shape}, expected ({dim}, {dim})")

        phase = np.exp(-1j * np.dot(k_vector, delta))
        matrix[i * dim:(i + 1) * dim, j * dim:(j + 1) * dim] += 0.5 * block * phase
        matrix[j * dim:(j + 1) * dim, i * dim:(i + 1) * dim] += 0.5 * block.T * np.conj(phase)

    if enforce_hermitian:
        matrix = hermitize(matrix)

    return matrix


def hopping_matrix_kspace(unitcell: Unitcell,
                          k_vector,
                          enforce_hermitian: bool = False) -> np.ndarray:
    """
    Single-particle tight-binding Hamiltonian at momentum ``k_vector``.

    Scalar (1x1) hopping specialization of ``interaction_matrix_kspace``:
    numeric bond strengths are hopping amplitudes, "J1"/"J2" mean 1.0.
    """
    return interaction_matrix_kspace(unitcell, k_vector,
                                     bond_matrix=heisenberg_bond_matrix,
                                     enforce_hermitian=enforce_hermitian)
