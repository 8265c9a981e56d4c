# -*- coding: utf-8 -*-
# simplexfactory/mesh/registry.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Central dispatch table mapping each `Backend` variant to its `BackendSpec`
(dimension, engine module, capability entry point, pack/run/unpack
functions). Adding a backend means adding one `_add(...)` line here.

Notes:
------
   - Duplicates are disallowed: registering a backend twice raises ValueError.
"""

from typing import Any, Dict

from .base import Backend, BackendSpec, resolve_backend
from .generators import (
    triangulateio, run_triangle, unpack_triangle,
    tetgenio, run_tetgen, unpack_tetgen,
)

REGISTRY: Dict[Backend, BackendSpec] = {}


def _add(spec: BackendSpec) -> None:
    if spec.backend in REGISTRY:
        raise ValueError(f"Duplicate backend in registry: {spec.backend}")
    REGISTRY[spec.backend] = spec


_add(BackendSpec(Backend.TRIANGLE, 2, "triangle", "triangulate",
                 triangulateio, run_triangle, unpack_triangle, supports_unsuitable=True))
_add(BackendSpec(Backend.TETGEN, 3, "tetgen", "TetGen",
                 tetgenio, run_tetgen, unpack_tetgen, supports_unsuitable=False))


def get_backend_spec(generator: Any) -> BackendSpec:
    """Resolve `generator` (Backend or name) to its registered BackendSpec."""
    return REGISTRY[resolve_backend(generator)]
