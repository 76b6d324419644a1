import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path as FilePath
from typing import Any, Dict, Optional, Tuple, Union

from ltspec.core.lattice import Unitcell
from ltspec.core.path import Path
from ltspec.interactions.bond_matrices import BondMatrixFn, heisenberg_bond_matrix
from ltspec.solvers.luttinger_tisza import LTBandstructure, get_lt_bandstructure
from ltspec.utils.constants import EPSILON_DEGENERATE_DEFAULT, LT_CONSTRAINT_DEFAULT

# Default plot configuration
DEFAULT_BAND_CONFIG = {
    'figsize': (6, 4),
    'title': None,
    'title_fontsize': 12,
    'xlabel': 'momentum',
    'ylabel': 'energy',
    'label_fontsize': 12,
    'color_valid': 'b',
    'color_invalid': 'r',
    'marker': '.',
    'markersize': 3,
    'separator_color': (0.6, 0.6, 0.6),
    'ylim': None,
    'dpi': 300,
}

DEFAULT_FERMI_CONFIG = {
    'figsize': (5, 5),
    'title': None,
    'title_fontsize': 12,
    'xlabel': '$k_x$',
    'ylabel': '$k_y$',
    'label_fontsize': 12,
    'color': 'k',
    'marker': '.',
    'markersize': 2,
    'bz_linewidth': 1,
    'dpi': 300,
}


def _merge_config(defaults: Dict[str, Any], config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    cfg = defaults.copy()
    if config:
        unknown = set(config) - set(defaults)
        if unknown:
            raise ValueError(f"Unknown plot options: {sorted(unknown)}")
        cfg.update(config)
    return cfg


def _save(fig, save_filename: Union[str, FilePath], dpi: int) -> None:
    save_filename = FilePath(save_filename)
    save_filename.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(save_filename, bbox_inches='tight', dpi=dpi)


def plot_lt_bandstructure(bandstructure: LTBandstructure,
                          constraint: float = LT_CONSTRAINT_DEFAULT,
                          ax: Optional[plt.Axes] = None,
                          config: Optional[Dict[str, Any]] = None,
                          save_filename: Optional[Union[str, FilePath]] = None) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot a Luttinger-Tisza band structure.

    Samples whose constraint value is at most ``constraint`` are drawn in
    ``color_valid``, all others in ``color_invalid``. Path breakpoints get
    x-ticks with their labels and dashed vertical separators.

    Returns
    -------
    fig, ax : matplotlib Figure and Axes
    """
    cfg = _merge_config(DEFAULT_BAND_CONFIG, config)
    path = bandstructure.path

    if ax is None:
        fig, ax = plt.subplots(figsize=cfg['figsize'])
    else:
        fig = ax.figure

    offsets = np.cumsum([0] + list(path.segment_resolution))

    # invalid first so valid points are drawn on top
    for valid, color in ((False, cfg['color_invalid']), (True, cfg['color_valid'])):
        for s in range(bandstructure.num_segments):
            x = np.arange(1, path.segment_resolution[s] + 1) + offsets[s]
            for b in range(bandstructure.num_bands):
                mask = bandstructure.constraint_values[s][b] <= constraint
                if not valid:
                    mask = ~mask
                if not np.any(mask):
                    continue
                ax.plot(x[mask], bandstructure.bands[s][b][mask],
                        linestyle='none', marker=cfg['marker'],
                        markersize=cfg['markersize'], color=color)

    tick_positions = [1] + list(offsets[1:])
    ax.set_xticks(tick_positions)
    ax.set_xticklabels(path.point_names)
    for position in tick_positions:
        ax.axvline(position, color=cfg['separator_color'], linestyle='--', linewidth=0.8)
    ax.tick_params(axis='both', which='both', direction='out')

    ax.set_xlabel(cfg['xlabel'], fontsize=cfg['label_fontsize'])
    ax.set_ylabel(cfg['ylabel'], fontsize=cfg['label_fontsize'])
    ax.set_xlim(0, tick_positions[-1] + 1)
    if cfg['ylim'] is not None:
        ax.set_ylim(*cfg['ylim'])

    title = cfg['title']
    if title == "AUTO":
        title = f"Luttinger Tisza spectrum along {path.path_string()}, constraint {constraint}"
    if title:
        ax.set_title(title, fontsize=cfg['title_fontsize'])

    fig.tight_layout()
    if save_filename is not None:
        _save(fig, save_filename, cfg['dpi'])

    return fig, ax


def plot_lt_bandstructure_of(unitcell: Unitcell,
                             path: Path,
                             bond_matrix: BondMatrixFn = heisenberg_bond_matrix,
                             resolution: int = -1,
                             enforce_hermitian: bool = False,
                             epsilon_degenerate: float = EPSILON_DEGENERATE_DEFAULT,
                             constraint: float = LT_CONSTRAINT_DEFAULT,
                             ax: Optional[plt.Axes] = None,
                             config: Optional[Dict[str, Any]] = None,
                             save_filename: Optional[Union[str, FilePath]] = None
                             ) -> Tuple[LTBandstructure, plt.Figure, plt.Axes]:
    """
    Compute the LT band structure of a unit cell and plot it.

    Arguments are forwarded to ``get_lt_bandstructure`` and
    ``plot_lt_bandstructure``.

    Returns
    -------
    bandstructure : LTBandstructure
    fig, ax : matplotlib Figure and Axes
    """
    bandstructure = get_lt_bandstructure(unitcell, path,
                                         bond_matrix=bond_matrix,
                                         resolution=resolution,
                                         enforce_hermitian=enforce_hermitian,
                                         epsilon_degenerate=epsilon_degenerate)
    fig, ax = plot_lt_bandstructure(bandstructure, constraint=constraint, ax=ax,
                                    config=config, save_filename=save_filename)
    return bandstructure, fig, ax


def plot_fermi_surface(points: np.ndarray,
                       ax: Optional[plt.Axes] = None,
                       bz_corners: Optional[np.ndarray] = None,
                       config: Optional[Dict[str, Any]] = None,
                       save_filename: Optional[Union[str, FilePath]] = None) -> Tuple[plt.Figure, plt.Axes]:
    """
    Scatter plot of sampled Fermi surface points.

    Parameters
    ----------
    points : np.ndarray, shape (N, 2)
    bz_corners : np.ndarray, shape (M, 2), optional
        Corners of a Brillouin zone polygon drawn as a closed outline
    """
    cfg = _merge_config(DEFAULT_FERMI_CONFIG, config)
    points = np.asarray(points, dtype=float).reshape(-1, 2)

    if ax is None:
        fig, ax = plt.subplots(figsize=cfg['figsize'])
    else:
        fig = ax.figure

    if bz_corners is not None:
        corners = np.vstack([bz_corners, bz_corners[:1]])
        ax.plot(corners[:, 0], corners[:, 1], 'k-', linewidth=cfg['bz_linewidth'])

    ax.plot(points[:, 0], points[:, 1], linestyle='none', marker=cfg['marker'],
            markersize=cfg['markersize'], color=cfg['color'])

    ax.set_xlabel(cfg['xlabel'], fontsize=cfg['label_fontsize'])
    ax.set_ylabel(cfg['ylabel'], fontsize=cfg['label_fontsize'])
    ax.set_aspect('equal')
    if cfg['title']:
        ax.set_title(cfg['title'], fontsize=cfg['title_fontsize'])

    fig.tight_layout()
    if save_filename is not None:
        _save(fig, save_filename, cfg['dpi'])

    return fig, ax
