"""
Configuration loading.

A calculation is described by a YAML file:

    lattice:
      name: square
      parameters:
        strength: 1.0

    path:
      labels: [Γ, X, M, Γ]
      resolution: 100

    fermi_surface:
      n_points: 200
      fermi_energy: 0.0
      epsilon: 1.0e-10

    luttinger_tisza:
      bond_matrix: heisenberg
      epsilon_degenerate: 1.0e-6

Every section is optional and every key has the default of the matching
solver argument. Unknown keys raise ConfigurationError.
"""

from dataclasses import dataclass, field, fields, asdict
from pathlib import Path as FilePath

import yaml
from typing import Any, Dict, List, Optional, Tuple, Union

from ltspec.core.lattice import Unitcell, create_unitcell, get_high_symmetry_points, UNITCELL_REGISTRY
from ltspec.core.path import Path, get_default_path, DEFAULT_SEGMENT_RESOLUTION
from ltspec.interactions.bond_matrices import BOND_MATRIX_REGISTRY, get_bond_matrix_function
from ltspec.utils.constants import (
    FERMI_ENERGY_DEFAULT,
    EPSILON_DEFAULT,
    EPSILON_K_DEFAULT,
    SLOWDOWN_FACTOR_DEFAULT,
    MAX_NEWTON_STEPS_DEFAULT,
    BOUNDS_LOWER_DEFAULT,
    BOUNDS_UPPER_DEFAULT,
    EPSILON_DEGENERATE_DEFAULT,
)
from ltspec.utils.exceptions import ConfigurationError


def _from_section(cls, data: Optional[Dict[str, Any]], section: str):
    """Instantiate a settings dataclass from a config section."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Section '{section}' must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown keys in section '{section}': {unknown}. "
                                 f"Allowed: {sorted(known)}")

    settings = cls(**data)
    settings.validate()
    return settings


@dataclass
class LatticeSettings:
    name: str = 'square'
    parameters: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        if self.name not in UNITCELL_REGISTRY:
            raise ConfigurationError(f"Unknown lattice '{self.name}'. "
                                     f"Available: {', '.join(UNITCELL_REGISTRY.keys())}")

    def build(self) -> Unitcell:
        try:
            return create_unitcell(self.name, **self.parameters)
        except TypeError as e:
            raise ConfigurationError(f"Invalid parameters for lattice '{self.name}': {e}") from e


@dataclass
class PathSettings:
    """
    Path through momentum space.

    ``labels`` alone selects high-symmetry points of the lattice; together
    with ``points`` it labels explicit coordinates. Without both the
    default path of the lattice is used.
    """
    labels: Optional[List[str]] = None
    points: Optional[List[List[float]]] = None
    resolution: Union[int, List[int]] = DEFAULT_SEGMENT_RESOLUTION

    def validate(self) -> None:
        if self.points is not None:
            if self.labels is None or len(self.labels) != len(self.points):
                raise ConfigurationError("Explicit path points need one label each")
        if self.labels is not None and len(self.labels) < 2:
            raise ConfigurationError("A path needs at least two points")
        resolutions = [self.resolution] if isinstance(self.resolution, int) else self.resolution
        if any(int(r) < 1 for r in resolutions):
            raise ConfigurationError(f"Path resolution must be positive, got {self.resolution}")

    def build(self, lattice_name: str) -> Path:
        try:
            if self.points is not None:
                return Path.from_points(self.points, self.labels, self.resolution)
            if self.labels is not None:
                return Path.from_points(get_high_symmetry_points(lattice_name), self.labels, self.resolution)
            if not isinstance(self.resolution, int):
                raise ConfigurationError("Default paths take a single integer resolution")
            return get_default_path(lattice_name, self.resolution)
        except ValueError as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Invalid path: {e}") from e


@dataclass
class FermiSurfaceSettings:
    n_points: int = 100
    fermi_energy: float = FERMI_ENERGY_DEFAULT
    enforce_hermitian: bool = False
    epsilon: float = EPSILON_DEFAULT
    epsilon_k: float = EPSILON_K_DEFAULT
    slowdown_factor: float = SLOWDOWN_FACTOR_DEFAULT
    bounds_lower: Tuple[float, float] = BOUNDS_LOWER_DEFAULT
    bounds_upper: Tuple[float, float] = BOUNDS_UPPER_DEFAULT
    refold_to_first_BZ: bool = False
    max_newton_steps: int = MAX_NEWTON_STEPS_DEFAULT
    max_attempts: Optional[int] = None
    seed: Optional[int] = None

    def validate(self) -> None:
        if self.n_points < 1:
            raise ConfigurationError(f"n_points must be at least 1, got {self.n_points}")
        if self.epsilon <= 0 or self.epsilon_k <= 0:
            raise ConfigurationError("epsilon and epsilon_k must be positive")
        if self.slowdown_factor <= 0:
            raise ConfigurationError(f"slowdown_factor must be positive, got {self.slowdown_factor}")
        if self.max_newton_steps < 1:
            raise ConfigurationError(f"max_newton_steps must be at least 1, got {self.max_newton_steps}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if len(self.bounds_lower) != 2 or len(self.bounds_upper) != 2:
            raise ConfigurationError("bounds_lower and bounds_upper must have two entries")
        if any(lo >= hi for lo, hi in zip(self.bounds_lower, self.bounds_upper)):
            raise ConfigurationError(f"bounds_lower {self.bounds_lower} must be below "
                                     f"bounds_upper {self.bounds_upper}")

    def as_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``get_fermi_surface_2d``."""
        return asdict(self)


@dataclass
class LTSettings:
    bond_matrix: str = 'heisenberg'
    resolution: int = -1
    enforce_hermitian: bool = False
    epsilon_degenerate: float = EPSILON_DEGENERATE_DEFAULT

    def validate(self) -> None:
        if self.bond_matrix not in BOND_MATRIX_REGISTRY:
            raise ConfigurationError(f"Unknown bond matrix '{self.bond_matrix}'. "
                                     f"Available: {', '.join(BOND_MATRIX_REGISTRY.keys())}")
        if self.epsilon_degenerate < 0:
            raise ConfigurationError(f"epsilon_degenerate must be non-negative, got {self.epsilon_degenerate}")

    def as_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``get_lt_bandstructure`` (bond matrix resolved)."""
        kwargs = asdict(self)
        kwargs['bond_matrix'] = get_bond_matrix_function(self.bond_matrix)
        return kwargs


@dataclass
class CalculationConfig:
    lattice: LatticeSettings = field(default_factory=LatticeSettings)
    path: PathSettings = field(default_factory=PathSettings)
    fermi_surface: FermiSurfaceSettings = field(default_factory=FermiSurfaceSettings)
    luttinger_tisza: LTSettings = field(default_factory=LTSettings)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'CalculationConfig':
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")

        sections = {
            'lattice': LatticeSettings,
            'path': PathSettings,
            'fermi_surface': FermiSurfaceSettings,
            'luttinger_tisza': LTSettings,
        }
        unknown = sorted(set(data) - set(sections))
        if unknown:
            raise ConfigurationError(f"Unknown configuration sections: {unknown}. "
                                     f"Allowed: {sorted(sections)}")

        return cls(**{name: _from_section(settings_cls, data.get(name), name)
                      for name, settings_cls in sections.items()})

    def build_unitcell(self) -> Unitcell:
        return self.lattice.build()

    def build_path(self) -> Path:
        return self.path.build(self.lattice.name)


def load_config(config_path: Union[str, FilePath]) -> CalculationConfig:
    """
    Load a calculation configuration from a YAML file.

    Raises
    ------
    ConfigurationError
        If the file is missing, is not valid YAML or has invalid content
    """
    config_path = FilePath(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {config_path}: {e}") from e

    return CalculationConfig.from_dict(data)
