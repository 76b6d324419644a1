"""
Interaction matrices.

- bond_matrices: bond -> small interaction matrix policies
- kspace: assembly of the full momentum-space matrix of a unit cell
"""

from .bond_matrices import (
    BondMatrixFn,
    HEISENBERG_LABELS,
    heisenberg_bond_matrix,
    heisenberg_kitaev_bond_matrix,
    BOND_MATRIX_REGISTRY,
    get_bond_matrix_function,
)
from .kspace import (
    spin_dimension,
    hermitize,
    interaction_matrix_kspace,
    hopping_matrix_kspace,
)

__all__ = [
    'BondMatrixFn',
    'HEISENBERG_LABELS',
    'heisenberg_bond_matrix',
    'heisenberg_kitaev_bond_matrix',
    'BOND_MATRIX_REGISTRY',
    'get_bond_matrix_function',
    'spin_dimension',
    'hermitize',
    'interaction_matrix_kspace',
    'hopping_matrix_kspace',
]
