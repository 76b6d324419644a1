"""
ltspec: Momentum-space spectra of lattice models

A Python package for sampling Fermi surfaces of tight-binding models and
computing Luttinger-Tisza band structures of classical spin models.

Main Components
---------------
core : Unit cells, bonds and momentum-space paths
interactions : Bond interaction matrices and momentum-space assembly
solvers : Fermi surface search, Luttinger-Tisza band structures
visualization : Plotting of band structures and Fermi surfaces
io : YAML configuration loading
utils : Constants, exceptions, logging

Quick Start
-----------
>>> from ltspec import square_unitcell, get_default_path, get_lt_bandstructure, get_fermi_surface_2d
>>>
>>> cell = square_unitcell()
>>>
>>> # Fermi surface of the nearest-neighbor square lattice at half filling
>>> points = get_fermi_surface_2d(cell, 200, fermi_energy=0.0, seed=0)
>>>
>>> # Luttinger-Tisza band structure along Γ -> X -> M -> Γ
>>> bandstructure = get_lt_bandstructure(cell, get_default_path('square'), resolution=300)
>>> bandstructure.print_info()
"""

import logging

__version__ = "0.1.0"

# High-level API exports
from .core import (
    # Lattice
    Bond,
    Unitcell,
    square_unitcell,
    honeycomb_unitcell,
    create_unitcell,

    # Path
    Path,
    get_default_path,
)

from .interactions import (
    heisenberg_bond_matrix,
    heisenberg_kitaev_bond_matrix,
    interaction_matrix_kspace,
)

from .solvers import (
    LTBandstructure,
    get_lt_bandstructure,
    get_fermi_surface_2d,
)

from .utils import (
    NumericalError,
    FermiSurfaceSearchError,
    ConfigurationError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    '__version__',

    # Core data
    'Bond',
    'Unitcell',
    'square_unitcell',
    'honeycomb_unitcell',
    'create_unitcell',
    'Path',
    'get_default_path',

    # Interactions
    'heisenberg_bond_matrix',
    'heisenberg_kitaev_bond_matrix',
    'interaction_matrix_kspace',

    # Solvers
    'LTBandstructure',
    'get_lt_bandstructure',
    'get_fermi_surface_2d',

    # Errors
    'NumericalError',
    'FermiSurfaceSearchError',
    'ConfigurationError',
]
