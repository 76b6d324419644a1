"""
Unit tests for Fermi surface sampling.

Tests:
- Accepted points satisfy the residual threshold
- Reproducibility with a seed
- Exhausted attempt budget
- Refolding into the first Brillouin zone
- Input validation
"""

import logging

import numpy as np
import pytest
from ltspec.core.lattice import Bond, Unitcell, chain_unitcell, honeycomb_unitcell
from ltspec.solvers import (
    band_energy_residual,
    newton_search,
    reduce_basis_2d,
    refold_to_first_bz,
    get_fermi_surface_2d,
)
from ltspec.utils import FermiSurfaceSearchError


class TestBandEnergyResidual:
    """Test the squared band distance."""

    def test_square_on_and_off_surface(self, square_cell):
        assert band_energy_residual(square_cell, [np.pi / 2, np.pi / 2]) == pytest.approx(0.0, abs=1e-28)
        assert band_energy_residual(square_cell, [0.0, 0.0]) == pytest.approx(16.0)

    def test_fermi_energy_shift(self, square_cell):
        assert band_energy_residual(square_cell, [0.0, 0.0], fermi_energy=4.0) == pytest.approx(0.0, abs=1e-24)

    def test_closest_band_wins(self, honeycomb_cell):
        """At Γ the bands are ±3, so E_F = 2 is 1 away from the upper band."""
        assert band_energy_residual(honeycomb_cell, [0.0, 0.0], fermi_energy=2.0) == pytest.approx(1.0)


class TestNewtonSearch:
    """Test the damped Newton iteration on a plain function."""

    def test_converges_on_circle(self):
        def residual(k):
            return (k @ k - 1.0) ** 2

        k = newton_search(residual, np.array([0.3, 0.4]), epsilon=1e-12, epsilon_k=1e-9)

        assert k is not None
        assert residual(k) < 1e-12

    def test_accepts_start_point(self):
        k_start = np.array([1.0, 0.0])
        k = newton_search(lambda k: 0.0, k_start)

        assert np.array_equal(k, k_start)

    def test_flat_residual_fails(self):
        assert newton_search(lambda k: 1.0, np.array([0.0, 0.0])) is None

    def test_step_limit_fails(self):
        def residual(k):
            return (k @ k - 1.0) ** 2

        assert newton_search(residual, np.array([3.0, 4.0]), epsilon=1e-12,
                             epsilon_k=1e-9, max_newton_steps=1) is None


class TestGetFermiSurface:
    """Test the sampling loop."""

    def test_points_on_square_fermi_surface(self, square_cell):
        """cos kx + cos ky = 0 for every returned point."""
        points = get_fermi_surface_2d(square_cell, 5, fermi_energy=0.0, seed=0)

        assert points.shape == (5, 2)
        for k in points:
            assert band_energy_residual(square_cell, k, 0.0) < 1e-10
            assert abs(2 * np.cos(k[0]) + 2 * np.cos(k[1])) < 1e-5

    def test_nonzero_fermi_energy(self, square_cell):
        points = get_fermi_surface_2d(square_cell, 5, fermi_energy=1.0, seed=2)

        for k in points:
            assert band_energy_residual(square_cell, k, 1.0) < 1e-10

    def test_seed_reproducible(self, square_cell):
        first = get_fermi_surface_2d(square_cell, 4, seed=42)
        second = get_fermi_surface_2d(square_cell, 4, seed=42)

        assert np.array_equal(first, second)

    def test_rng_argument(self, square_cell):
        first = get_fermi_surface_2d(square_cell, 3, rng=np.random.default_rng(5))
        second = get_fermi_surface_2d(square_cell, 3, seed=5)

        assert np.array_equal(first, second)

    def test_undamped_search(self, honeycomb_cell):
        points = get_fermi_surface_2d(honeycomb_cell, 5, fermi_energy=0.5, slowdown_factor=1.0, seed=3)

        for k in points:
            assert band_energy_residual(honeycomb_cell, k, 0.5) < 1e-10

    def test_fermi_energy_outside_bands_raises(self, square_cell):
        """Bands of the square lattice lie in [-4, 4]."""
        with pytest.raises(FermiSurfaceSearchError) as excinfo:
            get_fermi_surface_2d(square_cell, 3, fermi_energy=10.0, max_attempts=20, seed=0)

        assert excinfo.value.points_found.shape == (0, 2)
        assert "3" in str(excinfo.value)

    def test_progress_bar(self, square_cell):
        points = get_fermi_surface_2d(square_cell, 2, seed=0, progress=True)

        assert points.shape == (2, 2)


class TestRefold:
    """Test mapping into the first Brillouin zone."""

    def test_square_refold(self, square_cell):
        b = square_cell.reciprocal_vectors()
        k = refold_to_first_bz([5.0, -4.0], b)

        assert np.allclose(k, [5.0 - 2 * np.pi, -4.0 + 2 * np.pi])

    def test_inside_stays(self, square_cell):
        b = square_cell.reciprocal_vectors()

        assert np.allclose(refold_to_first_bz([0.5, -1.0], b), [0.5, -1.0])

    def test_skewed_basis_refold(self):
        """Lattice vectors (1, 0) and (5, 1) span the unit square lattice."""
        cell = Unitcell(basis=[[0.0, 0.0]], lattice_vectors=[[1.0, 0.0], [5.0, 1.0]],
                        bonds=[Bond(0, 0, 1.0, (1, 0)), Bond(0, 0, 1.0, (-1, 0))])
        b = cell.reciprocal_vectors()

        assert np.allclose(refold_to_first_bz([4.0, 0.0], b), [4.0 - 2 * np.pi, 0.0])

        rng = np.random.default_rng(13)
        for _ in range(20):
            k = refold_to_first_bz(rng.uniform(-20, 20, size=2), b)
            assert np.all(np.abs(k) <= np.pi + 1e-9)

    def test_reduce_basis(self):
        """Reduction keeps the lattice and yields short, nearly orthogonal vectors."""
        b1, b2 = reduce_basis_2d(np.array([1.0, -5.0]), np.array([0.0, 1.0]))

        assert np.isclose(abs(np.linalg.det([b1, b2])), 1.0)
        assert np.isclose(np.linalg.norm(b1), 1.0)
        assert np.isclose(np.linalg.norm(b2), 1.0)
        assert abs(np.dot(b1, b2)) <= 0.5 * np.dot(b1, b1)

    def test_hexagonal_refold_is_shortest_image(self, honeycomb_cell):
        b1, b2 = honeycomb_cell.reciprocal_vectors()
        rng = np.random.default_rng(9)

        for _ in range(20):
            k = refold_to_first_bz(rng.uniform(-10, 10, size=2), np.array([b1, b2]))
            images = [k - n1 * b1 - n2 * b2 for n1 in range(-2, 3) for n2 in range(-2, 3)]
            assert np.linalg.norm(k) <= min(np.linalg.norm(image) for image in images) + 1e-9

    def test_search_with_refold(self, square_cell):
        points = get_fermi_surface_2d(square_cell, 8, refold_to_first_BZ=True, seed=4)

        assert np.all(np.abs(points) <= np.pi + 1e-9)
        for k in points:
            assert band_energy_residual(square_cell, k) < 1e-10

    def test_refold_without_lattice_vectors_warns(self, caplog):
        """Finite dimer: bands at ±1 everywhere."""
        cell = Unitcell(basis=[[0.0, 0.0], [1.0, 0.0]],
                        bonds=[Bond(0, 1, 1.0), Bond(1, 0, 1.0)])

        with caplog.at_level(logging.WARNING, logger="ltspec"):
            points = get_fermi_surface_2d(cell, 3, fermi_energy=1.0, refold_to_first_BZ=True, seed=0)

        assert points.shape == (3, 2)
        assert "Cannot refold" in caplog.text


class TestValidation:
    """Test input validation."""

    def test_not_two_dimensional_raises(self):
        with pytest.raises(ValueError, match="2D"):
            get_fermi_surface_2d(chain_unitcell(), 5)

    @pytest.mark.parametrize("kwargs", [
        {'n_points': 0},
        {'n_points': 5, 'epsilon': 0.0},
        {'n_points': 5, 'epsilon_k': -1.0},
        {'n_points': 5, 'slowdown_factor': 0.0},
        {'n_points': 5, 'max_newton_steps': 0},
        {'n_points': 5, 'bounds_lower': (0.0, 0.0, 0.0)},
    ])
    def test_invalid_arguments_raise(self, square_cell, kwargs):
        with pytest.raises(ValueError):
            get_fermi_surface_2d(square_cell, **kwargs)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
