"""
Unit tests for degeneracy grouping and the Luttinger-Tisza constraint.
"""

import logging

import numpy as np
import pytest
from scipy.optimize import OptimizeResult

import ltspec.solvers.luttinger_tisza as luttinger_tisza
from ltspec.solvers import (
    group_degenerate_bands,
    site_spin_lengths,
    lt_deviation,
    lt_constraint,
)


class TestGroupDegenerateBands:
    """Test partitioning of ascending eigenvalues."""

    def test_pair_and_singlet(self):
        assert group_degenerate_bands([0.0, 0.0, 1.0]) == [[0, 1], [2]]

    def test_all_distinct(self):
        assert group_degenerate_bands([-1.0, 0.0, 1.0]) == [[0], [1], [2]]

    def test_all_degenerate(self):
        assert group_degenerate_bands([2.0, 2.0, 2.0, 2.0]) == [[0, 1, 2, 3]]

    def test_chained_gaps_merge(self):
        """Each gap is below epsilon, the total spread is not."""
        clusters = group_degenerate_bands([0.0, 0.6e-6, 1.2e-6], epsilon_degenerate=1e-6)

        assert clusters == [[0, 1, 2]]

    def test_custom_epsilon(self):
        assert group_degenerate_bands([0.0, 0.1, 0.5], epsilon_degenerate=0.2) == [[0, 1], [2]]

    def test_empty(self):
        assert group_degenerate_bands([]) == []

    def test_clusters_partition_indices(self):
        values = np.sort(np.random.default_rng(3).normal(size=12).round(1))
        clusters = group_degenerate_bands(values, epsilon_degenerate=0.05)

        assert [b for cluster in clusters for b in cluster] == list(range(12))


class TestSiteSpinLengths:
    """Test the per-site squared norms."""

    def test_scalar_spins(self):
        assert np.allclose(site_spin_lengths(np.array([1.0, 1j, 0.5]), 1), [1.0, 1.0, 0.25])

    def test_vector_spins(self):
        v = np.array([1.0, 0.0, 0.0, 0.6, 0.8, 0.0])

        assert np.allclose(site_spin_lengths(v, 3), [1.0, 1.0])

    def test_length_not_multiple_raises(self):
        with pytest.raises(ValueError, match="not a multiple"):
            site_spin_lengths(np.ones(5), 3)


class TestLTConstraint:
    """Test the constraint value of single and degenerate eigenvectors."""

    def test_single_equal_lengths(self):
        v = np.array([1.0, -1.0]) / np.sqrt(2)

        assert lt_constraint(v, 1) == pytest.approx(0.0, abs=1e-14)

    def test_single_unequal_lengths(self):
        """Lengths 1 and 0 around their mean 0.5."""
        assert lt_constraint(np.array([1.0, 0.0]), 1) == pytest.approx(1.0)

    def test_single_vector_spins(self):
        v = np.array([1.0, 0.0, 0.0, 0.0, 0.0, 0.0])

        assert lt_constraint(v, 3) == pytest.approx(1.0)

    def test_single_complex_phases(self):
        """Only the magnitudes matter."""
        v = np.array([1.0, np.exp(0.7j), -1j]) / np.sqrt(3)

        assert lt_constraint(v, 1) == pytest.approx(0.0, abs=1e-14)

    def test_orthogonal_pair_mixes_to_unit_lengths(self):
        """e1 + e2 has unit length on both sites."""
        vectors = [np.array([1.0, 0.0]), np.array([0.0, 1.0])]

        assert lt_constraint(vectors, 1) == pytest.approx(0.0, abs=1e-12)

    def test_pair_needs_optimization(self):
        """The optimal mixture is sqrt(2) * (v1 + v2), away from the start."""
        v1 = np.array([1.0, 1.0, 0.0, 0.0]) / np.sqrt(2)
        v2 = np.array([0.0, 0.0, 1.0, 1.0]) / np.sqrt(2)

        assert lt_deviation(np.column_stack([v1, v2]), 1, [1.0, 1.0]) == pytest.approx(2.0)
        assert lt_constraint([v1, v2], 1) < 1e-6

    def test_list_and_array_inputs_agree(self):
        v1 = np.array([0.6, 0.8, 0.0])
        v2 = np.array([0.0, 0.0, 1.0])

        assert lt_constraint([v1, v2], 1) == pytest.approx(lt_constraint(np.column_stack([v1, v2]), 1))

    def test_non_negative(self):
        rng = np.random.default_rng(11)
        q, _ = np.linalg.qr(rng.normal(size=(4, 4)))

        assert lt_constraint(q[:, :1], 1) >= 0.0
        assert lt_constraint(q[:, :2], 1) >= 0.0

    def test_non_converged_minimization_returns_best_value(self, monkeypatch, caplog):
        """A failed minimization still reports its best value and logs it."""
        calls = []

        def stopped_minimize(fun, x0, **kwargs):
            calls.append(kwargs['method'])
            return OptimizeResult(x=np.asarray(x0), fun=0.25, success=False,
                                  message="Maximum number of iterations has been exceeded.")

        monkeypatch.setattr(luttinger_tisza, 'minimize', stopped_minimize)
        vectors = [np.array([1.0, 0.0]), np.array([0.0, 1.0])]

        with caplog.at_level(logging.DEBUG, logger="ltspec"):
            value = lt_constraint(vectors, 1)

        assert value == 0.25
        assert calls == ['Nelder-Mead']
        assert "did not converge" in caplog.text
        assert any(record.levelno == logging.DEBUG for record in caplog.records)

    def test_single_vector_skips_minimization(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("minimize must not be called for a single vector")

        monkeypatch.setattr(luttinger_tisza, 'minimize', fail)

        assert lt_constraint(np.array([0.6, 0.8]), 1) == pytest.approx(0.28)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
