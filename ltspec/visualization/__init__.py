"""
Plotting of solver results with matplotlib.

Solvers never import this module; it only consumes their return values.
"""

from .band_plotter import (
    DEFAULT_BAND_CONFIG,
    DEFAULT_FERMI_CONFIG,
    plot_lt_bandstructure,
    plot_lt_bandstructure_of,
    plot_fermi_surface,
)

__all__ = [
    'DEFAULT_BAND_CONFIG',
    'DEFAULT_FERMI_CONFIG',
    'plot_lt_bandstructure',
    'plot_lt_bandstructure_of',
    'plot_fermi_surface',
]
