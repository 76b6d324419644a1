"""
Configuration loading.
"""

from .config import (
    LatticeSettings,
    PathSettings,
    FermiSurfaceSettings,
    LTSettings,
    CalculationConfig,
    load_config,
)

__all__ = [
    'LatticeSettings',
    'PathSettings',
    'FermiSurfaceSettings',
    'LTSettings',
    'CalculationConfig',
    'load_config',
]
