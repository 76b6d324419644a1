"""
Square and Honeycomb Lattice Demo

This example walks through the two solvers:
- Fermi surface of the nearest-neighbor square lattice
- Luttinger-Tisza band structure of the square lattice
- Kitaev honeycomb model with 3-component spins

Figures are written to ./figures.
"""

import numpy as np
import sys
from pathlib import Path

# Add ltspec to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ltspec.core import square_unitcell, honeycomb_unitcell, get_default_path
from ltspec.interactions import heisenberg_kitaev_bond_matrix
from ltspec.solvers import get_fermi_surface_2d, get_lt_bandstructure
from ltspec.utils import configure_logging
from ltspec.visualization import plot_fermi_surface, plot_lt_bandstructure

FIGURE_DIR = Path(__file__).parent / "figures"


def example_fermi_surface():
    """Example 1: Fermi surface at half filling."""
    print("="*60)
    print("Example 1: Fermi surface of the square lattice")
    print("="*60)

    cell = square_unitcell()
    print(f"\nUnit cell: {cell}")

    points = get_fermi_surface_2d(cell, 400, fermi_energy=0.0,
                                  refold_to_first_BZ=True, seed=0, progress=True)

    # E(k) = 2 cos kx + 2 cos ky vanishes on |kx| + |ky| = π
    deviation = np.abs(np.abs(points).sum(axis=1) - np.pi)
    print(f"Sampled {len(points)} points, max ||k||_1 - π| = {deviation.max():.2e}")

    corners = np.array([[-np.pi, -np.pi], [np.pi, -np.pi], [np.pi, np.pi], [-np.pi, np.pi]])
    plot_fermi_surface(points, bz_corners=corners,
                       config={'title': 'Square lattice, $E_F = 0$'},
                       save_filename=FIGURE_DIR / "fermi_surface_square.png")


def example_square_lt():
    """Example 2: LT band structure of the square lattice."""
    print("\n" + "="*60)
    print("Example 2: Luttinger-Tisza bands of the square lattice")
    print("="*60)

    cell = square_unitcell(strength="J1")
    path = get_default_path('square')
    bandstructure = get_lt_bandstructure(cell, path, resolution=300, progress=True)

    print(f"\n{bandstructure}")
    bandstructure.print_info()

    plot_lt_bandstructure(bandstructure, config={'title': 'AUTO'},
                          save_filename=FIGURE_DIR / "lt_square.png")


def example_kitaev_honeycomb():
    """Example 3: Kitaev honeycomb model, 3 spin components per site."""
    print("\n" + "="*60)
    print("Example 3: Kitaev honeycomb model")
    print("="*60)

    cell = honeycomb_unitcell(kitaev=True)
    path = get_default_path('honeycomb')
    bandstructure = get_lt_bandstructure(cell, path, bond_matrix=heisenberg_kitaev_bond_matrix,
                                         resolution=200, progress=True)

    print(f"\n{bandstructure}")
    bandstructure.print_info(constraint=1e-4)

    plot_lt_bandstructure(bandstructure, constraint=1e-4, config={'title': 'AUTO'},
                          save_filename=FIGURE_DIR / "lt_kitaev_honeycomb.png")


if __name__ == '__main__':
    configure_logging()

    example_fermi_surface()
    example_square_lt()
    example_kitaev_honeycomb()

    print("\n" + "="*60)
    print(f"Figures saved to {FIGURE_DIR}")
    print("="*60)
