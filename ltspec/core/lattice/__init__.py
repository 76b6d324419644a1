"""
Lattice data module.

This module provides the unit cell data model and a small library of
preset unit cells:
- chain_unitcell: 1D chain
- square_unitcell: single-site square lattice
- honeycomb_unitcell: two-site honeycomb lattice (Heisenberg or Kitaev labels)
- kagome_unitcell: three-site kagome lattice
"""

from .base import Bond, BondStrength, Unitcell, is_strength_label, bonds_both_directions
from .presets import (
    chain_unitcell,
    square_unitcell,
    honeycomb_unitcell,
    kagome_unitcell,
    get_high_symmetry_points,
    UNITCELL_REGISTRY,
    create_unitcell
)

__all__ = [
    'Bond',
    'BondStrength',
    'Unitcell',
    'is_strength_label',
    'bonds_both_directions',
    'chain_unitcell',
    'square_unitcell',
    'honeycomb_unitcell',
    'kagome_unitcell',
    'get_high_symmetry_points',
    'UNITCELL_REGISTRY',
    'create_unitcell',
]
