"""
Bond interaction matrices.

A bond matrix function maps a single bond to a small real matrix whose
size is the spin dimension (1 for scalar hopping / Heisenberg, 3 for
vector spins). Any callable with the contract ``bond -> matrix`` of a
fixed size can be passed to the assemblers.

Unrecognized string labels are NOT errors: they contribute zero, so
callers can encode custom couplings freely.
"""

import numpy as np
from typing import Callable, Dict

from ltspec.core.lattice import Bond, is_strength_label

BondMatrixFn = Callable[[Bond], np.ndarray]

HEISENBERG_LABELS = ["J1", "J2"]
KITAEV_X_LABELS = ["Jx", "tx"]
KITAEV_Y_LABELS = ["Jy", "ty"]
KITAEV_Z_LABELS = ["Jz", "tz"]


def heisenberg_bond_matrix(bond: Bond) -> np.ndarray:
    """
    1x1 interaction matrix of a bond.

    Labels "J1", "J2" give strength 1.0, numeric strengths are used
    verbatim, any other label gives 0.0.

    Examples
    --------
    >>> heisenberg_bond_matrix(Bond(0, 1, "J1", (0, 0)))
    array([[1.]])
    >>> heisenberg_bond_matrix(Bond(0, 1, 3.0, (0, 0)))
    array([[3.]])
    """
    bond_matrix = np.zeros((1, 1))
    strength = bond.strength

    if is_strength_label(strength):
        if strength in HEISENBERG_LABELS:
            bond_matrix[0, 0] = 1.0
    else:
        bond_matrix[0, 0] = strength

    return bond_matrix


def heisenberg_kitaev_bond_matrix(bond: Bond) -> np.ndarray:
    """
    3x3 diagonal interaction matrix of a bond.

    - "J1", "J2"   -> identity (Heisenberg)
    - "Jx" / "tx"  -> only the xx entry is 1.0 (Kitaev)
    - "Jy" / "ty"  -> only the yy entry is 1.0
    - "Jz" / "tz"  -> only the zz entry is 1.0
    - numeric s    -> s * identity
    - other labels -> zero matrix

    Examples
    --------
    >>> heisenberg_kitaev_bond_matrix(Bond(0, 1, "tx", (0, 0)))
    array([[1., 0., 0.],
           [0., 0., 0.],
           [0., 0., 0.]])
    """
    bond_matrix = np.zeros((3, 3))
    strength = bond.strength

    if is_strength_label(strength):
        if strength in HEISENBERG_LABELS:
            bond_matrix[0, 0] = 1.0
            bond_matrix[1, 1] = 1.0
            bond_matrix[2, 2] = 1.0
        elif strength in KITAEV_X_LABELS:
            bond_matrix[0, 0] = 1.0
        elif strength in KITAEV_Y_LABELS:
            bond_matrix[1, 1] = 1.0
        elif strength in KITAEV_Z_LABELS:
            bond_matrix[2, 2] = 1.0
    else:
        bond_matrix[0, 0] = strength
        bond_matrix[1, 1] = strength
        bond_matrix[2, 2] = strength

    return bond_matrix


# Bond matrix registry for config-based construction
BOND_MATRIX_REGISTRY: Dict[str, BondMatrixFn] = {
    'heisenberg': heisenberg_bond_matrix,
    'heisenberg_kitaev': heisenberg_kitaev_bond_matrix,
}


def get_bond_matrix_function(name: str) -> BondMatrixFn:
    """
    Look up a bond matrix function by name.

    Raises
    ------
    ValueError
        If name is not recognized
    """
    if name not in BOND_MATRIX_REGISTRY:
        available = ', '.join(BOND_MATRIX_REGISTRY.keys())
        raise ValueError(f"Unknown bond matrix function '{name}'. "
                         f"Available: {available}")
    return BOND_MATRIX_REGISTRY[name]
