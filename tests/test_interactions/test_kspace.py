"""
Unit tests for momentum-space interaction matrix assembly.

Tests:
- Known dispersions (square, honeycomb)
- Hermiticity for arbitrary momenta
- Block layout for vector spins
- Input validation
"""

import numpy as np
import pytest
from ltspec.core.lattice import Bond, Unitcell, kagome_unitcell, honeycomb_unitcell
from ltspec.interactions import (
    heisenberg_kitaev_bond_matrix,
    interaction_matrix_kspace,
    hopping_matrix_kspace,
    hermitize,
    spin_dimension,
)


class TestKnownDispersions:
    """Compare against analytic results."""

    def test_square_at_gamma(self, square_cell):
        matrix = interaction_matrix_kspace(square_cell, [0.0, 0.0])

        assert matrix.shape == (1, 1)
        assert np.isclose(matrix[0, 0], 4.0)

    @pytest.mark.parametrize("k", [[0.3, -1.2], [np.pi, 0.0], [2.0, 2.0]])
    def test_square_dispersion(self, square_cell, k):
        """E(k) = 2 cos kx + 2 cos ky."""
        matrix = hopping_matrix_kspace(square_cell, k)

        assert np.isclose(matrix[0, 0], 2 * np.cos(k[0]) + 2 * np.cos(k[1]))

    def test_honeycomb_spectrum(self, honeycomb_cell):
        """Eigenvalues ±|1 + e^{ik·a1} + e^{ik·a2}|."""
        k = np.array([0.4, 0.9])
        a1, a2 = honeycomb_cell.lattice_vectors
        f = abs(1 + np.exp(1j * k @ a1) + np.exp(1j * k @ a2))

        evals = np.linalg.eigvalsh(interaction_matrix_kspace(honeycomb_cell, k))

        assert np.allclose(evals, [-f, f])

    def test_honeycomb_dirac_point(self, honeycomb_cell):
        """Bands touch at K."""
        b1, b2 = honeycomb_cell.reciprocal_vectors()
        K = (2 * b1 + b2) / 3

        evals = np.linalg.eigvalsh(interaction_matrix_kspace(honeycomb_cell, K))

        assert np.allclose(evals, 0.0, atol=1e-12)


class TestHermiticity:
    """Assembled matrices are Hermitian."""

    def test_random_momenta(self):
        rng = np.random.default_rng(7)
        cell = kagome_unitcell()

        for _ in range(20):
            k = rng.uniform(-2 * np.pi, 2 * np.pi, size=2)
            matrix = interaction_matrix_kspace(cell, k)
            assert np.allclose(matrix, matrix.conj().T, atol=1e-9)

    def test_single_direction_bonds(self):
        """Bonds listed once still give a Hermitian matrix."""
        cell = Unitcell(
            basis=[[0.0, 0.0], [0.3, 0.1]],
            lattice_vectors=[[1.0, 0.0], [0.2, 1.0]],
            bonds=[Bond(0, 1, 1.3, (0, 0)), Bond(1, 0, -0.7, (1, 1)), Bond(0, 0, 0.4, (1, 0))],
        )
        matrix = interaction_matrix_kspace(cell, [0.7, -2.1])

        assert np.allclose(matrix, matrix.conj().T, atol=1e-9)

    def test_onsite_bond_is_real(self):
        """An on-site bond adds its full strength to the diagonal at k = 0."""
        cell = Unitcell(basis=[[0.0, 0.0]], lattice_vectors=[[1, 0], [0, 1]],
                        bonds=[Bond(0, 0, 2.5, (0, 0))])
        matrix = interaction_matrix_kspace(cell, [0.0, 0.0])

        assert np.isclose(matrix[0, 0].real, 2.5)
        assert matrix[0, 0].imag == 0.0

    def test_enforce_hermitian(self):
        m = np.array([[1.0, 2.0], [0.0, 3.0]], dtype=complex)

        assert np.allclose(hermitize(m), [[1.0, 1.0], [1.0, 3.0]])


class TestVectorSpins:
    """Test the (sN x sN) block layout."""

    def test_kitaev_shape(self):
        cell = honeycomb_unitcell(kitaev=True)
        matrix = interaction_matrix_kspace(cell, [0.1, 0.2], heisenberg_kitaev_bond_matrix)

        assert spin_dimension(cell, heisenberg_kitaev_bond_matrix) == 3
        assert matrix.shape == (6, 6)
        assert np.allclose(matrix, matrix.conj().T)

    def test_complex_bond_matrix_kept(self):
        """Imaginary entries of a custom bond matrix reach the assembled matrix."""
        coupling = np.array([[0.0, 1j], [-1j, 0.0]])
        cell = Unitcell(basis=[[0.0, 0.0], [0.5, 0.0]], lattice_vectors=[[1, 0], [0, 1]],
                        bonds=[Bond(0, 1, 1.0, (0, 0))])
        matrix = interaction_matrix_kspace(cell, [0.0, 0.0], lambda bond: coupling)

        assert np.abs(matrix).max() > 0
        assert np.allclose(matrix[0:2, 2:4], 0.5 * coupling)
        assert np.allclose(matrix[2:4, 0:2], 0.5 * coupling.T)

    def test_complex_bond_matrix_phase(self):
        """The Bloch phase multiplies the complex block."""
        coupling = np.array([[1.0, 2j], [-2j, 1.0]])
        cell = Unitcell(basis=[[0.0, 0.0], [0.5, 0.0]], lattice_vectors=[[1, 0], [0, 1]],
                        bonds=[Bond(0, 1, 1.0, (0, 0))])
        k = np.array([0.8, 0.0])
        matrix = interaction_matrix_kspace(cell, k, lambda bond: coupling, enforce_hermitian=True)

        phase = np.exp(-0.4j)
        expected_block = 0.5 * (0.5 * coupling * phase + (0.5 * coupling.T * np.conj(phase)).conj().T)
        assert np.allclose(matrix[0:2, 2:4], expected_block)
        assert np.allclose(matrix, matrix.conj().T)

    def test_kitaev_z_bond_only_couples_z(self):
        """At k = 0 the z bond gives 1 in the (A_z, B_z) entry."""
        cell = Unitcell(basis=[[0.0, 0.0], [0.0, 1.0]], lattice_vectors=[[1, 0], [0, 2]],
                        bonds=[Bond(0, 1, "tz", (0, 0)), Bond(1, 0, "tz", (0, 0))])
        matrix = interaction_matrix_kspace(cell, [0.0, 0.0], heisenberg_kitaev_bond_matrix)

        expected = np.zeros((6, 6))
        expected[2, 5] = expected[5, 2] = 1.0
        assert np.allclose(matrix, expected)


class TestValidation:
    """Test input validation."""

    def test_wrong_k_dimension_raises(self, square_cell):
        with pytest.raises(ValueError, match="k_vector has dimension"):
            interaction_matrix_kspace(square_cell, [0.0, 0.0, 0.0])

    def test_no_bonds_raises(self):
        cell = Unitcell(basis=[[0.0, 0.0]], lattice_vectors=[[1, 0], [0, 1]])

        with pytest.raises(ValueError, match="no bonds"):
            interaction_matrix_kspace(cell, [0.0, 0.0])

    def test_inconsistent_bond_matrix_raises(self, square_cell):
        def bad_matrix(bond):
            return np.eye(2) if bond.wrap == (1, 0) else np.eye(1)

        with pytest.raises(ValueError, match="has shape"):
            interaction_matrix_kspace(square_cell, [0.0, 0.0], bad_matrix)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
