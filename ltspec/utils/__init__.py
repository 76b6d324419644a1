"""
Shared utilities: constants, exceptions and logging setup.
"""

from .exceptions import (
    LTSpecError,
    NumericalError,
    FermiSurfaceSearchError,
    ConfigurationError,
)
from .logging import configure_logging

__all__ = [
    'LTSpecError',
    'NumericalError',
    'FermiSurfaceSearchError',
    'ConfigurationError',
    'configure_logging',
]
