# -*- coding: utf-8 -*-
# simplexfactory/__init__.py

"""
Project: simplexfactory
Date: 10/18/2026

Modules:
--------
- geometry:        incremental domain description (points, facets, markers) and shape helpers.
- mesh:            backends, option/flag handling and the unified SimplexGrid output.
- errors:          typed exceptions shared by all layers.
- logging_config:  root logger setup for scripts.
"""

from .errors import (
    SimplexFactoryError,
    DimensionMismatch,
    ConfigurationError,
    OptionError,
    MarshallingError,
)
from .geometry import SimplexGridBuilder, maybe_watertight
from .mesh import Backend, SimplexGrid, simplexgrid, make_flags, default_options
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    "SimplexGridBuilder",
    "SimplexGrid",
    "Backend",
    "simplexgrid",
    "make_flags",
    "default_options",
    "maybe_watertight",
    "setup_logging",
    "SimplexFactoryError",
    "DimensionMismatch",
    "ConfigurationError",
    "OptionError",
    "MarshallingError",
]
