"""
Paths through momentum space.

A ``Path`` is an ordered list of labelled breakpoints with one sample
resolution per segment between consecutive breakpoints. Band structure
solvers walk the path segment by segment.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence, Union

from .lattice.presets import get_high_symmetry_points


DEFAULT_SEGMENT_RESOLUTION = 100

DEFAULT_PATHS = {
    'chain': ['Γ', 'X'],
    'square': ['Γ', 'X', 'M', 'Γ'],
    'honeycomb': ['Γ', 'K', 'M', 'Γ'],
    'kagome': ['Γ', 'K', 'M', 'Γ'],
}


class Path:
    """
    Ordered breakpoints in momentum space with per-segment resolutions.

    Parameters
    ----------
    points : Sequence of array-like, optional
        Breakpoints, each of length D
    point_names : Sequence[str], optional
        One label per breakpoint
    segment_resolution : Sequence[int], optional
        Number of samples for each of the ``len(points) - 1`` segments

    Examples
    --------
    >>> path = Path()
    >>> path.add_point([0.0, 0.0], 'Γ')
    >>> path.add_point([np.pi, 0.0], 'X', resolution=50)
    >>> path.total_resolution
    50
    """

    def __init__(self,
                 points: Optional[Sequence] = None,
                 point_names: Optional[Sequence[str]] = None,
                 segment_resolution: Optional[Sequence[int]] = None):
        self.points: List[np.ndarray] = []
        self.point_names: List[str] = []
        self.segment_resolution: List[int] = []

        points = [] if points is None else list(points)
        point_names = [str(i) for i in range(len(points))] if point_names is None else list(point_names)
        if segment_resolution is None:
            segment_resolution = [DEFAULT_SEGMENT_RESOLUTION] * max(len(points) - 1, 0)
        else:
            segment_resolution = list(segment_resolution)

        if len(point_names) != len(points):
            raise ValueError(f"Got {len(points)} points but {len(point_names)} point names")
        if len(segment_resolution) != max(len(points) - 1, 0):
            raise ValueError(f"Got {len(points)} points, expected {max(len(points) - 1, 0)} "
                             f"segment resolutions, got {len(segment_resolution)}")

        for i, (point, name) in enumerate(zip(points, point_names)):
            resolution = segment_resolution[i - 1] if i > 0 else DEFAULT_SEGMENT_RESOLUTION
            self.add_point(point, name, resolution=resolution)

    @classmethod
    def from_points(cls,
                    points: Union[Dict[str, np.ndarray], Sequence],
                    labels: Sequence[str],
                    resolution: Union[int, Sequence[int]] = DEFAULT_SEGMENT_RESOLUTION) -> 'Path':
        """
        Build a path from labelled points.

        Parameters
        ----------
        points : dict or sequence
            Either a mapping label -> k-vector (then ``labels`` selects and
            orders them, repeats allowed) or a sequence of k-vectors
            aligned with ``labels``
        labels : Sequence[str]
            Labels of the breakpoints in path order
        resolution : int or Sequence[int]
            Resolution of every segment, or one per segment
        """
        if isinstance(points, dict):
            missing = [label for label in labels if label not in points]
            if missing:
                raise ValueError(f"Unknown path points {missing}. Available: {list(points.keys())}")
            breakpoints = [points[label] for label in labels]
        else:
            breakpoints = list(points)

        num_segments = max(len(breakpoints) - 1, 0)
        if np.isscalar(resolution):
            resolution = [int(resolution)] * num_segments

        return cls(breakpoints, labels, resolution)

    def add_point(self, point, name: str, resolution: int = DEFAULT_SEGMENT_RESOLUTION) -> None:
        """
        Append a breakpoint.

        ``resolution`` is the number of samples of the segment that ends at
        this point; it is ignored for the very first point.
        """
        point = np.asarray(point, dtype=float).reshape(-1)
        if self.points and point.shape != self.points[0].shape:
            raise ValueError(f"Point {name} has dimension {point.shape[0]}, "
                             f"expected {self.points[0].shape[0]}")

        if self.points:
            resolution = int(resolution)
            if resolution < 1:
                raise ValueError(f"Segment resolution must be a positive integer, got {resolution}")
            self.segment_resolution.append(resolution)

        self.points.append(point)
        self.point_names.append(str(name))

    @property
    def dimension(self) -> int:
        """Dimension D of the breakpoints."""
        if not self.points:
            raise ValueError("Path has no points")
        return self.points[0].shape[0]

    @property
    def num_segments(self) -> int:
        return len(self.segment_resolution)

    @property
    def total_resolution(self) -> int:
        """Total number of samples along the path."""
        return int(sum(self.segment_resolution))

    def segment_lengths(self) -> np.ndarray:
        """Euclidean length of every segment."""
        return np.array([np.linalg.norm(self.points[i + 1] - self.points[i])
                         for i in range(self.num_segments)])

    def set_total_resolution(self, resolution: int) -> None:
        """
        Distribute a total number of samples over the segments.

        Each segment receives a share proportional to its length; rounding
        remainders go to the segments with the largest fractional shares,
        so the total equals ``resolution``. A segment whose share rounds to
        zero still gets one sample, which is the only case where the total
        exceeds ``resolution``. Segments of a path with zero total length
        share equally.
        """
        resolution = int(resolution)
        if resolution < 1:
            raise ValueError(f"Total resolution must be a positive integer, got {resolution}")
        if self.num_segments == 0:
            raise ValueError("Path has no segments")

        lengths = self.segment_lengths()
        total_length = lengths.sum()
        if total_length > 0:
            weights = lengths / total_length
        else:
            weights = np.full(self.num_segments, 1.0 / self.num_segments)

        shares = resolution * weights
        counts = np.floor(shares).astype(int)
        remainder = resolution - int(counts.sum())
        # stable sort keeps earlier segments first among equal fractions
        order = np.argsort(-(shares - counts), kind='stable')
        counts[order[:remainder]] += 1

        self.segment_resolution = [max(1, int(c)) for c in counts]

    def path_string(self) -> str:
        """Human readable sequence of point labels, e.g. 'Γ -> X -> M'."""
        return " -> ".join(self.point_names)

    def __repr__(self) -> str:
        return (f"Path({self.path_string()}, "
                f"segments={self.num_segments}, resolution={self.total_resolution})")


def get_default_path(name: str, resolution: int = DEFAULT_SEGMENT_RESOLUTION) -> Path:
    """
    Standard high-symmetry path of a preset lattice.

    Parameters
    ----------
    name : str
        Preset unit cell name ('chain', 'square', 'honeycomb', 'kagome')
    resolution : int
        Resolution of every segment

    Examples
    --------
    >>> get_default_path('square').path_string()
    'Γ -> X -> M -> Γ'
    """
    if name not in DEFAULT_PATHS:
        available = ', '.join(DEFAULT_PATHS.keys())
        raise ValueError(f"No default path for '{name}'. Available: {available}")

    return Path.from_points(get_high_symmetry_points(name), DEFAULT_PATHS[name], resolution)
