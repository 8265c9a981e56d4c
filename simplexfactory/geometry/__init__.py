# -*- coding: utf-8 -*-
# simplexfactory/geometry/__init__.py

"""
Project: simplexfactory
Date: 10/18/2026

Geometry Subpackage:
--------------------
Incremental description of a domain to be meshed.

Modules:
--------
- points:      tolerance-based point registry with stable 1-based indices.
- builder:     SimplexGridBuilder (points, facets, region/hole markers, options).
- watertight:  heuristic check for dangling facets.
- primitives:  polylines, circles, boxes, spheres and boundary re-use.
"""

from .points import BinnedPointList
from .builder import SimplexGridBuilder
from .watertight import maybe_watertight, dangling_facets
from .primitives import moveto, lineto, circle, rect2d, rect3d, sphere, bregions

__all__ = [
    "BinnedPointList",
    "SimplexGridBuilder",
    "maybe_watertight",
    "dangling_facets",
    "moveto",
    "lineto",
    "circle",
    "rect2d",
    "rect3d",
    "sphere",
    "bregions",
]
