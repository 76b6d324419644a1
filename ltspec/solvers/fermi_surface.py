"""
Fermi surface sampling in 2D momentum space.

Points on the Fermi surface are found one at a time by a damped Newton
search on the band-energy residual

    E(k) = min_n (ε_n(k) - E_F)^2

starting from uniformly random momenta. Every point is found independently,
so the result has no ordering and may contain duplicates.
"""

import logging

import numpy as np
from typing import Callable, Optional, Sequence, Tuple
from tqdm import tqdm

from ltspec.core.lattice import Unitcell
from ltspec.interactions.kspace import hopping_matrix_kspace
from ltspec.solvers.diagonalization import DIAG
from ltspec.utils.constants import (
    FERMI_ENERGY_DEFAULT,
    EPSILON_DEFAULT,
    EPSILON_K_DEFAULT,
    SLOWDOWN_FACTOR_DEFAULT,
    MAX_NEWTON_STEPS_DEFAULT,
    ATTEMPTS_PER_POINT_DEFAULT,
    BOUNDS_LOWER_DEFAULT,
    BOUNDS_UPPER_DEFAULT,
    GRADIENT_FLAT_THRESHOLD,
    GRADIENT_DIVERGENT_THRESHOLD,
)
from ltspec.utils.exceptions import FermiSurfaceSearchError

logger = logging.getLogger(__name__)


def band_energy_residual(unitcell: Unitcell,
                         k_vector,
                         fermi_energy: float = FERMI_ENERGY_DEFAULT,
                         enforce_hermitian: bool = False) -> float:
    """
    Squared distance of the closest band to the Fermi energy at ``k_vector``.

    Returns
    -------
    residual : float
        min_n (ε_n(k) - fermi_energy)^2, zero exactly on the Fermi surface
    """
    hamiltonian = hopping_matrix_kspace(unitcell, k_vector, enforce_hermitian=enforce_hermitian)
    energies = DIAG.eigvalsh(hamiltonian) - fermi_energy
    return float(np.min(energies * energies))


def newton_search(residual: Callable[[np.ndarray], float],
                  k_start: np.ndarray,
                  epsilon: float = EPSILON_DEFAULT,
                  epsilon_k: float = EPSILON_K_DEFAULT,
                  slowdown_factor: float = SLOWDOWN_FACTOR_DEFAULT,
                  max_newton_steps: int = MAX_NEWTON_STEPS_DEFAULT) -> Optional[np.ndarray]:
    """
    Drive ``residual`` below ``epsilon`` from ``k_start``.

    Each step moves along the forward-difference gradient g by
        dk = slowdown_factor * g * E / |g|^2,
    a one-dimensional Newton step on the residual along g.

    Returns
    -------
    k : np.ndarray or None
        The converged momentum, or None if the gradient became flat
        (|g|^2 < 1e-20), diverged (|g|^2 > 1e20) or ``max_newton_steps``
        ran out.
    """
    k = np.array(k_start, dtype=float)
    e0 = residual(k)
    if e0 < epsilon:
        return k

    unit_steps = epsilon_k * np.eye(k.shape[0])
    for step in range(max_newton_steps):
        gradient = np.array([(residual(k + dk) - e0) / epsilon_k for dk in unit_steps])
        grad_sq = float(np.dot(gradient, gradient))

        if grad_sq < GRADIENT_FLAT_THRESHOLD or grad_sq > GRADIENT_DIVERGENT_THRESHOLD:
            logger.debug("Newton search abandoned at step %d, |g|^2 = %.3e", step, grad_sq)
            return None

        k = k - slowdown_factor * gradient * (e0 / grad_sq)
        e0 = residual(k)
        if e0 < epsilon:
            return k

    logger.debug("Newton search not converged after %d steps, residual %.3e", max_newton_steps, e0)
    return None


def reduce_basis_2d(b1: np.ndarray, b2: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Lagrange-Gauss reduction of a 2D lattice basis.

    Returns a basis of the same lattice with |b1| <= |b2| and
    |b1·b2| <= |b1|^2 / 2. The Voronoi-relevant vectors of the lattice
    are then among ±b1, ±b2, ±(b1 + b2), ±(b1 - b2).
    """
    b1 = np.array(b1, dtype=float)
    b2 = np.array(b2, dtype=float)
    if np.dot(b1, b1) > np.dot(b2, b2):
        b1, b2 = b2, b1

    while True:
        mu = np.round(np.dot(b1, b2) / np.dot(b1, b1))
        b2 = b2 - mu * b1
        if np.dot(b2, b2) >= np.dot(b1, b1):
            return b1, b2
        b1, b2 = b2, b1


def refold_to_first_bz(k_vector, reciprocal_vectors: np.ndarray) -> np.ndarray:
    """
    Map a momentum into the first Brillouin zone (Wigner-Seitz cell).

    The reciprocal basis is reduced first, then the reciprocal lattice
    vector G that minimizes |k - G| among the nearest translations is
    subtracted until no shorter image exists.
    """
    k = np.array(k_vector, dtype=float)
    b1, b2 = reduce_basis_2d(*reciprocal_vectors)
    shifts = [n1 * b1 + n2 * b2 for n1 in (-1, 0, 1) for n2 in (-1, 0, 1) if (n1, n2) != (0, 0)]

    while True:
        candidates = [k - G for G in shifts]
        norms = [np.linalg.norm(c) for c in candidates]
        best = int(np.argmin(norms))
        # strict decrease with a relative margin, so points on the zone boundary stay put
        if norms[best] < np.linalg.norm(k) * (1 - 1e-12):
            k = candidates[best]
        else:
            return k


def _validate_search(unitcell: Unitcell,
                     n_points: int,
                     epsilon: float,
                     epsilon_k: float,
                     slowdown_factor: float,
                     max_newton_steps: int,
                     bounds_lower: np.ndarray,
                     bounds_upper: np.ndarray) -> None:
    if unitcell.dimension != 2:
        raise ValueError(f"Fermi surface search is implemented for 2D unit cells only, "
                         f"got dimension {unitcell.dimension}")
    if n_points < 1:
        raise ValueError(f"n_points must be at least 1, got {n_points}")
    if epsilon <= 0 or epsilon_k <= 0:
        raise ValueError(f"epsilon and epsilon_k must be positive, got {epsilon}, {epsilon_k}")
    if slowdown_factor <= 0:
        raise ValueError(f"slowdown_factor must be positive, got {slowdown_factor}")
    if max_newton_steps < 1:
        raise ValueError(f"max_newton_steps must be at least 1, got {max_newton_steps}")
    if bounds_lower.shape != (2,) or bounds_upper.shape != (2,):
        raise ValueError(f"bounds must have length 2, got {bounds_lower.shape} and {bounds_upper.shape}")


def get_fermi_surface_2d(unitcell: Unitcell,
                         n_points: int,
                         fermi_energy: float = FERMI_ENERGY_DEFAULT,
                         enforce_hermitian: bool = False,
                         epsilon: float = EPSILON_DEFAULT,
                         epsilon_k: float = EPSILON_K_DEFAULT,
                         slowdown_factor: float = SLOWDOWN_FACTOR_DEFAULT,
                         bounds_lower: Sequence[float] = BOUNDS_LOWER_DEFAULT,
                         bounds_upper: Sequence[float] = BOUNDS_UPPER_DEFAULT,
                         refold_to_first_BZ: bool = False,
                         max_newton_steps: int = MAX_NEWTON_STEPS_DEFAULT,
                         max_attempts: Optional[int] = None,
                         seed: Optional[int] = None,
                         rng: Optional[np.random.Generator] = None,
                         progress: bool = False) -> np.ndarray:
    """
    Sample points on the Fermi surface of a 2D tight-binding model.

    Parameters
    ----------
    unitcell : Unitcell
        2D lattice model; bond strengths are hopping amplitudes
    n_points : int
        Number of points to return
    fermi_energy : float
        Reference energy E_F (default 0.0)
    enforce_hermitian : bool
        Hermitize the Hamiltonian before diagonalization
    epsilon : float
        Acceptance threshold on the residual min_n (ε_n - E_F)^2
    epsilon_k : float
        Forward finite-difference step of the gradient
    slowdown_factor : float
        Damping of every Newton step (1.0 = undamped)
    bounds_lower, bounds_upper : Sequence[float], length 2
        Box from which random starting momenta are drawn (default ±2π)
    refold_to_first_BZ : bool
        Map every accepted point into the first Brillouin zone
    max_newton_steps : int
        Newton iterations per attempt
    max_attempts : int, optional
        Cap on the number of random starts (default 1000 * n_points)
    seed : int, optional
        Seed for a fresh ``numpy.random.default_rng`` (ignored if ``rng`` given)
    rng : np.random.Generator, optional
        Random generator to draw the starting momenta from
    progress : bool
        Show a tqdm progress bar

    Returns
    -------
    points : np.ndarray, shape (n_points, 2)

    Raises
    ------
    FermiSurfaceSearchError
        If ``max_attempts`` random starts did not yield ``n_points`` points,
        e.g. because the Fermi energy lies outside every band.

    Examples
    --------
    >>> points = get_fermi_surface_2d(square_unitcell(), 5, seed=1)
    >>> points.shape
    (5, 2)
    """
    bounds_lower = np.asarray(bounds_lower, dtype=float)
    bounds_upper = np.asarray(bounds_upper, dtype=float)
    _validate_search(unitcell, n_points, epsilon, epsilon_k, slowdown_factor,
                     max_newton_steps, bounds_lower, bounds_upper)

    if max_attempts is None:
        max_attempts = ATTEMPTS_PER_POINT_DEFAULT * n_points
    if rng is None:
        rng = np.random.default_rng(seed)

    reciprocal_vectors = None
    if refold_to_first_BZ:
        if len(unitcell.lattice_vectors) == 2:
            reciprocal_vectors = unitcell.reciprocal_vectors()
        else:
            logger.warning("Cannot refold to the first Brillouin zone: unit cell has %d lattice vectors",
                           len(unitcell.lattice_vectors))

    def residual(k):
        return band_energy_residual(unitcell, k, fermi_energy, enforce_hermitian)

    logger.info("Fermi surface search: %d points at E_F = %g", n_points, fermi_energy)

    k_values = np.zeros((n_points, 2))
    index = 0
    attempts = 0
    with tqdm(total=n_points, desc="Sampling Fermi surface", disable=not progress) as pbar:
        while index < n_points:
            if attempts >= max_attempts:
                raise FermiSurfaceSearchError(
                    f"Found only {index} of {n_points} Fermi surface points in {attempts} attempts "
                    f"(E_F = {fermi_energy}, epsilon = {epsilon}). "
                    f"The Fermi energy may lie outside all bands.",
                    points_found=k_values[:index].copy()
                )
            attempts += 1

            k_start = rng.uniform(bounds_lower, bounds_upper)
            k = newton_search(residual, k_start,
                              epsilon=epsilon,
                              epsilon_k=epsilon_k,
                              slowdown_factor=slowdown_factor,
                              max_newton_steps=max_newton_steps)
            if k is None:
                continue

            if reciprocal_vectors is not None:
                k = refold_to_first_bz(k, reciprocal_vectors)

            k_values[index] = k
            index += 1
            pbar.update(1)

    logger.info("Fermi surface search finished: %d points in %d attempts", n_points, attempts)
    return k_values
