"""Shared fixtures for the ltspec test suite."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from ltspec.core.lattice import Bond, Unitcell, square_unitcell, honeycomb_unitcell
from ltspec.core.path import Path


@pytest.fixture
def square_cell():
    return square_unitcell()


@pytest.fixture
def honeycomb_cell():
    return honeycomb_unitcell()


@pytest.fixture
def dimer_cell():
    """Two sites on a square lattice, coupled inside and across the cell."""
    bonds = []
    for wrap in [(0, 0), (-1, 0)]:
        bonds.append(Bond(0, 1, 1.0, wrap))
        bonds.append(Bond(1, 0, 1.0, tuple(-n for n in wrap)))
    bonds.append(Bond(0, 0, 0.5, (0, 1)))
    bonds.append(Bond(0, 0, 0.5, (0, -1)))
    bonds.append(Bond(1, 1, 0.5, (0, 1)))
    bonds.append(Bond(1, 1, 0.5, (0, -1)))
    return Unitcell(
        basis=[[0.0, 0.0], [0.5, 0.0]],
        lattice_vectors=[[1.0, 0.0], [0.0, 1.0]],
        bonds=bonds,
    )


@pytest.fixture
def three_point_path():
    return Path(
        points=[[0.0, 0.0], [np.pi, 0.0], [np.pi, np.pi]],
        point_names=['Γ', 'X', 'M'],
        segment_resolution=[10, 10],
    )
