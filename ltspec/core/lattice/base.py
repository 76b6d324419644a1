"""
Unit cell data model.

A unit cell is a purely geometric and coupling-level description of a
lattice model: basis sites, lattice vectors and bonds. It carries NO
information about how bond strengths turn into interaction matrices; that
is decided by a bond matrix function (see ``ltspec.interactions``).
"""

import numpy as np
from typing import List, Sequence, Tuple, Union
from dataclasses import dataclass, field


BondStrength = Union[float, str]


def is_strength_label(strength: BondStrength) -> bool:
    """
    Resolve the bond strength union.

    Returns True if ``strength`` is a symbolic label (e.g. ``"J1"``, ``"tx"``)
    and False if it is a numeric coupling value.
    """
    return isinstance(strength, str)


@dataclass(frozen=True)
class Bond:
    """
    A directed pairwise coupling between two basis sites.

    Attributes
    ----------
    from_index : int
        Index of the source site in the basis (0-based)
    to_index : int
        Index of the target site in the basis (0-based)
    strength : float or str
        Numeric coupling or a label resolved by a bond matrix function
    wrap : Tuple[int, ...]
        Number of lattice-vector translations crossed by the bond,
        one entry per lattice vector
    """
    from_index: int
    to_index: int
    strength: BondStrength
    wrap: Tuple[int, ...] = ()

    @property
    def is_onsite(self) -> bool:
        """True for a bond from a site onto itself in the same unit cell."""
        return self.from_index == self.to_index and not any(self.wrap)


@dataclass
class Unitcell:
    """
    Unit cell of a lattice model.

    Parameters
    ----------
    basis : Sequence of array-like
        Real-space positions of the basis sites, each of length D
    lattice_vectors : Sequence of array-like
        Primitive lattice vectors, each of length D. May be empty for
        finite (non-periodic) systems.
    bonds : Sequence[Bond]
        All bonds of the unit cell. For a Hermitian model each physical
        coupling is usually listed in both directions.

    Notes
    -----
    Positions are stored in real-space (Cartesian) coordinates, so the
    displacement of a bond is simply
        basis[to] - basis[from] + sum_i wrap[i] * lattice_vectors[i]

    Examples
    --------
    >>> cell = Unitcell(
    ...     basis=[[0.0, 0.0]],
    ...     lattice_vectors=[[1.0, 0.0], [0.0, 1.0]],
    ...     bonds=[Bond(0, 0, 1.0, (1, 0)), Bond(0, 0, 1.0, (-1, 0))]
    ... )
    >>> cell.num_sites
    1
    """
    basis: List[np.ndarray]
    lattice_vectors: List[np.ndarray] = field(default_factory=list)
    bonds: List[Bond] = field(default_factory=list)

    def __post_init__(self):
        self.basis = [np.asarray(position, dtype=float) for position in self.basis]
        self.lattice_vectors = [np.asarray(vector, dtype=float) for vector in self.lattice_vectors]
        self.bonds = list(self.bonds)

        if len(self.basis) == 0:
            raise ValueError("Unitcell needs at least one basis site")

        dim = self.basis[0].shape[0]
        for position in self.basis:
            if position.shape != (dim,):
                raise ValueError(f"All basis positions must have dimension {dim}, got {position.shape}")
        for vector in self.lattice_vectors:
            if vector.shape != (dim,):
                raise ValueError(f"All lattice vectors must have dimension {dim}, got {vector.shape}")

        for bond in self.bonds:
            for index in (bond.from_index, bond.to_index):
                if not 0 <= index < len(self.basis):
                    raise ValueError(f"Bond {bond} refers to site {index}, "
                                     f"but the basis only has {len(self.basis)} sites")
            if self.lattice_vectors and len(bond.wrap) != len(self.lattice_vectors):
                raise ValueError(f"Bond {bond} has wrap of length {len(bond.wrap)}, "
                                 f"expected {len(self.lattice_vectors)}")

    @property
    def dimension(self) -> int:
        """Spatial dimension D of the positions."""
        return self.basis[0].shape[0]

    @property
    def num_sites(self) -> int:
        """Number of basis sites."""
        return len(self.basis)

    @property
    def is_periodic(self) -> bool:
        """True if the cell has lattice vectors."""
        return len(self.lattice_vectors) > 0

    def bond_displacement(self, bond: Bond) -> np.ndarray:
        """
        Real-space displacement vector of a bond.

        Includes the periodic image offset ``sum_i wrap[i] * a_i``. The wrap
        is ignored for cells without lattice vectors.
        """
        delta = self.basis[bond.to_index] - self.basis[bond.from_index]
        if self.is_periodic:
            for n, vector in zip(bond.wrap, self.lattice_vectors):
                delta = delta + n * vector
        return delta

    def reciprocal_vectors(self) -> np.ndarray:
        """
        Reciprocal lattice vectors.

        Returns
        -------
        vectors : np.ndarray, shape (D, D)
            Rows b_j with a_i · b_j = 2π δ_ij

        Raises
        ------
        ValueError
            If the cell does not have exactly D lattice vectors
        """
        if len(self.lattice_vectors) != self.dimension:
            raise ValueError(f"Reciprocal vectors need {self.dimension} lattice vectors, "
                             f"got {len(self.lattice_vectors)}")
        A = np.array(self.lattice_vectors)
        return 2 * np.pi * np.linalg.inv(A).T

    def __repr__(self) -> str:
        """String representation of the unit cell."""
        return (f"Unitcell(dim={self.dimension}, sites={self.num_sites}, "
                f"lattice_vectors={len(self.lattice_vectors)}, bonds={len(self.bonds)})")


def bonds_both_directions(from_index: int,
                          to_index: int,
                          strength: BondStrength,
                          wrap: Sequence[int]) -> List[Bond]:
    """
    Create a bond together with its reverse partner.

    The reverse bond has swapped site indices and negated wrap.
    """
    wrap = tuple(int(n) for n in wrap)
    return [
        Bond(from_index, to_index, strength, wrap),
        Bond(to_index, from_index, strength, tuple(-n for n in wrap)),
    ]
