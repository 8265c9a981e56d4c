# -*- coding: utf-8 -*-
# simplexfactory/mesh/__init__.py

"""
Project: simplexfactory
Date: 10/18/2026

Mesh Subpackage:
----------------
Everything between a packed geometry description and the finished mesh.

Modules:
--------
- base:        Backend variants, BackendSpec record, engine loading.
- registry:    dispatch table Backend -> BackendSpec.
- options:     option defaults, validation and flag synthesis.
- generators:  pack/run/unpack array protocols for Triangle and TetGen.
- runner:      generator orchestration (`run_generator`, `simplexgrid`).
- grid:        SimplexGrid, the unified mesh output.
"""

from .base import Backend, BackendSpec
from .grid import SimplexGrid
from .options import default_options, blend_options, make_flags
from .registry import get_backend_spec
from .runner import run_generator, simplexgrid

__all__ = [
    "Backend",
    "BackendSpec",
    "SimplexGrid",
    "default_options",
    "blend_options",
    "make_flags",
    "get_backend_spec",
    "run_generator",
    "simplexgrid",
]
