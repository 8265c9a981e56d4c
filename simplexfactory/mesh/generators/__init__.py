# -*- coding: utf-8 -*-
# simplexfactory/mesh/generators/__init__.py

"""
Project: simplexfactory
Date: 10/18/2026

Generators Subpackage:
----------------------
Array protocols (pack / run / unpack) of the supported external engines.

Modules:
--------
- triangle_generator: 2D Delaunay triangulation via the `triangle` package.
- tetgen_generator:   3D tetrahedralization via the `tetgen` package.

Notes:
------
- Every backend exposes the same three-function protocol so that
  `mesh.registry` can dispatch on the `Backend` tag alone.
"""

from .triangle_generator import triangulateio, run_triangle, unpack_triangle
from .tetgen_generator import TetGenIO, tetgenio, run_tetgen, unpack_tetgen

__all__ = [
    "triangulateio",
    "run_triangle",
    "unpack_triangle",
    "TetGenIO",
    "tetgenio",
    "run_tetgen",
    "unpack_tetgen",
]
