"""
Preset unit cells for common lattices.

This module provides ready-made ``Unitcell`` objects for:
- Linear chain (1D)
- Square lattice
- Honeycomb lattice (optionally with Kitaev bond labels)
- Kagome lattice

Every physical nearest-neighbor coupling is listed in both directions, so
the assembled momentum-space matrices are Hermitian.
"""

import numpy as np
from typing import Dict, List

from .base import Unitcell, Bond, BondStrength, bonds_both_directions


def chain_unitcell(strength: BondStrength = 1.0) -> Unitcell:
    """
    Linear chain with lattice constant 1.

    One site per cell, bonds to the left and right neighbor.
    """
    return Unitcell(
        basis=[[0.0]],
        lattice_vectors=[[1.0]],
        bonds=bonds_both_directions(0, 0, strength, (1,)),
    )


def square_unitcell(strength: BondStrength = 1.0, version: int = 1) -> Unitcell:
    """
    Square lattice with lattice constant 1.

    Geometry
    --------
    Primitive vectors:
        a1 = [1, 0]
        a2 = [0, 1]

    Single site at the origin with four nearest-neighbor bonds (+x, -x, +y, -y).

    Parameters
    ----------
    strength : float or str, optional
        Strength (or label) of every nearest-neighbor bond. Default 1.0.
    version : int, optional
        Only version 1 exists.

    Examples
    --------
    >>> cell = square_unitcell()
    >>> len(cell.bonds)
    4

    Notes
    -----
    With unit hopping the single band is
        E(k) = 2 cos(kx) + 2 cos(ky),
    whose Fermi surface at E_F = 0 is the square |kx| + |ky| = π.
    """
    if version != 1:
        raise ValueError(f"Version {version} of the square unit cell is not implemented. "
                         f"Supported versions: 1")

    return Unitcell(
        basis=[[0.0, 0.0]],
        lattice_vectors=[[1.0, 0.0], [0.0, 1.0]],
        bonds=[
            Bond(0, 0, strength, (+1, 0)),
            Bond(0, 0, strength, (-1, 0)),
            Bond(0, 0, strength, (0, +1)),
            Bond(0, 0, strength, (0, -1)),
        ],
    )


def honeycomb_unitcell(strength: BondStrength = 1.0, kitaev: bool = False) -> Unitcell:
    """
    Honeycomb lattice with nearest-neighbor distance 1.

    Geometry
    --------
    Primitive vectors:
        a1 = [√3/2, 3/2]
        a2 = [-√3/2, 3/2]
    Basis:
        A = [0, 0], B = [0, 1]

    Parameters
    ----------
    strength : float or str, optional
        Strength of every bond (ignored if ``kitaev`` is True)
    kitaev : bool, optional
        Label the three bond directions "tx", "ty", "tz" instead, for use
        with ``heisenberg_kitaev_bond_matrix``.
    """
    sqrt3 = np.sqrt(3)
    x_label, y_label, z_label = ("tx", "ty", "tz") if kitaev else (strength,) * 3

    bonds: List[Bond] = []
    bonds += bonds_both_directions(0, 1, z_label, (0, 0))
    bonds += bonds_both_directions(0, 1, x_label, (-1, 0))
    bonds += bonds_both_directions(0, 1, y_label, (0, -1))

    return Unitcell(
        basis=[[0.0, 0.0], [0.0, 1.0]],
        lattice_vectors=[[sqrt3 / 2, 1.5], [-sqrt3 / 2, 1.5]],
        bonds=bonds,
    )


def kagome_unitcell(strength: BondStrength = 1.0) -> Unitcell:
    """
    Kagome lattice with nearest-neighbor distance 1.

    Geometry
    --------
    Primitive vectors:
        a1 = [2, 0]
        a2 = [1, √3]
    Basis:
        A = [0, 0], B = a1/2, C = a2/2

    Each site has four nearest neighbors (two triangles per site).
    """
    sqrt3 = np.sqrt(3)

    bonds: List[Bond] = []
    # up triangle inside the cell
    bonds += bonds_both_directions(0, 1, strength, (0, 0))
    bonds += bonds_both_directions(0, 2, strength, (0, 0))
    bonds += bonds_both_directions(1, 2, strength, (0, 0))
    # down triangle across the cell boundaries
    bonds += bonds_both_directions(0, 1, strength, (-1, 0))
    bonds += bonds_both_directions(0, 2, strength, (0, -1))
    bonds += bonds_both_directions(1, 2, strength, (1, -1))

    return Unitcell(
        basis=[[0.0, 0.0], [1.0, 0.0], [0.5, sqrt3 / 2]],
        lattice_vectors=[[2.0, 0.0], [1.0, sqrt3]],
        bonds=bonds,
    )


def _hexagonal_points(unitcell: Unitcell) -> Dict[str, np.ndarray]:
    """Γ, K, M of a hexagonal Bravais lattice (reciprocal vectors at 120°)."""
    b1, b2 = unitcell.reciprocal_vectors()
    return {
        'Γ': np.array([0.0, 0.0]),
        'K': (2 * b1 + b2) / 3,
        'M': b1 / 2,
    }


def get_high_symmetry_points(name: str) -> Dict[str, np.ndarray]:
    """
    High-symmetry points in the Brillouin zone of a preset lattice.

    Parameters
    ----------
    name : str
        Key of ``UNITCELL_REGISTRY``

    Returns
    -------
    points : Dict[str, np.ndarray]
        Mapping label -> k-vector (Cartesian reciprocal-space units)
    """
    if name == 'chain':
        return {'Γ': np.array([0.0]), 'X': np.array([np.pi])}
    elif name == 'square':
        return {
            'Γ': np.array([0.0, 0.0]),
            'X': np.array([np.pi, 0.0]),
            'M': np.array([np.pi, np.pi]),
        }
    elif name in ('honeycomb', 'kagome'):
        return _hexagonal_points(create_unitcell(name))
    else:
        available = ', '.join(UNITCELL_REGISTRY.keys())
        raise ValueError(f"Unknown unit cell '{name}'. Available types: {available}")


# Unit cell registry for config-based construction
UNITCELL_REGISTRY = {
    'chain': chain_unitcell,
    'square': square_unitcell,
    'honeycomb': honeycomb_unitcell,
    'kagome': kagome_unitcell,
}


def create_unitcell(name: str, **kwargs) -> Unitcell:
    """
    Factory function to create unit cells from string names.

    Parameters
    ----------
    name : str
        Type of lattice ('chain', 'square', 'honeycomb', 'kagome')
    **kwargs
        Additional arguments passed to the preset function
        (e.g., strength="J1")

    Returns
    -------
    unitcell : Unitcell

    Raises
    ------
    ValueError
        If name is not recognized
    """
    if name not in UNITCELL_REGISTRY:
        available = ', '.join(UNITCELL_REGISTRY.keys())
        raise ValueError(f"Unknown unit cell '{name}'. "
                         f"Available types: {available}")

    return UNITCELL_REGISTRY[name](**kwargs)
