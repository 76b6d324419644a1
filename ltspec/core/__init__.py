"""
Core data models for ltspec.

This module contains the data consumed by the solvers:
- Unitcell / Bond: lattice geometry and couplings
- Path: breakpoints and resolutions in momentum space

These are pure data providers; all numerical work lives in
``ltspec.interactions`` and ``ltspec.solvers``.
"""

from .lattice import (
    Bond,
    BondStrength,
    Unitcell,
    is_strength_label,
    bonds_both_directions,
    chain_unitcell,
    square_unitcell,
    honeycomb_unitcell,
    kagome_unitcell,
    get_high_symmetry_points,
    UNITCELL_REGISTRY,
    create_unitcell
)

from .path import Path, get_default_path

__all__ = [
    # Lattice
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

    # Path
    'Path',
    'get_default_path',
]
