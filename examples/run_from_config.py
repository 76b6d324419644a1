"""
Run both solvers from a YAML configuration.

Usage:
    python examples/run_from_config.py [config.yaml] [--debug]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add ltspec to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ltspec.io import load_config
from ltspec.solvers import get_fermi_surface_2d, get_lt_bandstructure
from ltspec.utils import configure_logging
from ltspec.visualization import plot_fermi_surface, plot_lt_bandstructure

logger = logging.getLogger("ltspec.examples")


def main():
    parser = argparse.ArgumentParser(description="Fermi surface and LT band structure from a config file")
    parser.add_argument("config", nargs="?", default=str(Path(__file__).parent / "config_square.yaml"))
    parser.add_argument("--output", default=str(Path(__file__).parent / "figures"))
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    configure_logging(logging.DEBUG if args.debug else logging.INFO)

    config = load_config(args.config)
    cell = config.build_unitcell()
    logger.info("Loaded %s: %s", args.config, cell)

    output = Path(args.output)

    if cell.dimension == 2:
        points = get_fermi_surface_2d(cell, progress=True, **config.fermi_surface.as_kwargs())
        plot_fermi_surface(points, save_filename=output / f"fermi_surface_{config.lattice.name}.png")
    else:
        logger.warning("Skipping Fermi surface search for a %dD lattice", cell.dimension)

    bandstructure = get_lt_bandstructure(cell, config.build_path(), progress=True,
                                         **config.luttinger_tisza.as_kwargs())
    bandstructure.print_info()
    plot_lt_bandstructure(bandstructure, config={'title': 'AUTO'},
                          save_filename=output / f"lt_{config.lattice.name}.png")


if __name__ == '__main__':
    main()
