"""
Numerical solvers.

- fermi_surface: Newton-search sampling of 2D Fermi surfaces
- luttinger_tisza: LT band structures with spin-length constraint diagnostic
- diagonalization: Hermitian eigen-solver wrapper
"""

from .diagonalization import DIAG
from .fermi_surface import (
    band_energy_residual,
    newton_search,
    reduce_basis_2d,
    refold_to_first_bz,
    get_fermi_surface_2d,
)
from .luttinger_tisza import (
    LTBandstructure,
    group_degenerate_bands,
    site_spin_lengths,
    lt_deviation,
    lt_constraint,
    get_lt_bandstructure,
)

__all__ = [
    'DIAG',
    'band_energy_residual',
    'newton_search',
    'reduce_basis_2d',
    'refold_to_first_bz',
    'get_fermi_surface_2d',
    'LTBandstructure',
    'group_degenerate_bands',
    'site_spin_lengths',
    'lt_deviation',
    'lt_constraint',
    'get_lt_bandstructure',
]
