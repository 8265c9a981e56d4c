# -*- coding: utf-8 -*-
# simplexfactory/mesh/base.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Backend abstraction for mesh generation. A backend is a tagged variant
(`Backend` enum) bound to a `BackendSpec` that bundles everything needed to
talk to one external engine: space dimension, the engine module and its
capability entry point, the pack/run/unpack functions of its array protocol,
and whether it can honour an unsuitable-element callback.

Main Tasks:
-----------
    1. Define the `Backend` variants (Triangle for 2D, TetGen for 3D).
    2. Define the immutable `BackendSpec` record used by the dispatch table.
    3. Resolve user input ("triangle", Backend.TETGEN, ...) to a Backend.
    4. Load / validate the engine module for a backend.

Notes:
------
- The dispatch table itself lives in `mesh.registry`.
- Engines are imported lazily so geometry can be described without them.
"""

import enum
import importlib
from dataclasses import dataclass
from typing import Any, Callable

from ..errors import ConfigurationError


class Backend(enum.Enum):
    """Supported mesh generator backends."""

    TRIANGLE = "triangle"
    TETGEN = "tetgen"


@dataclass(frozen=True)
class BackendSpec:
    backend: Backend
    dim: int
    module_name: str   # importable engine package
    capability: str    # attribute the engine module must expose
    pack: Callable     # fn(points=..., bfaces=..., ...) -> native input
    run: Callable      # fn(engine, flags, native_input, unsuitable) -> native output
    unpack: Callable   # fn(native_output, native_input) -> SimplexGrid
    supports_unsuitable: bool = False


def resolve_backend(generator: Any) -> Backend:
    """
    Map a Backend member or its (case-insensitive) name to a Backend.

    Raises
    ------
    ConfigurationError
        If `generator` is None or does not name a supported backend.
    """
    if generator is None:
        raise ConfigurationError(
            "Missing generator: pass generator='triangle' (2D) or generator='tetgen' (3D)."
        )
    if isinstance(generator, Backend):
        return generator
    if isinstance(generator, str):
        try:
            return Backend(generator.strip().lower())
        except ValueError:
            pass
    raise ConfigurationError(
        "Unknown generator; expected one of {}.".format([b.value for b in Backend]),
        {"generator": generator},
    )


def check_engine(spec: BackendSpec, engine: Any) -> Any:
    """Return `engine` if it exposes the backend's capability, else raise."""
    if not callable(getattr(engine, spec.capability, None)):
        raise ConfigurationError(
            "Engine does not provide '{}' required by the {} backend.".format(
                spec.capability, spec.backend.value
            ),
            {"engine": getattr(engine, "__name__", type(engine).__name__)},
        )
    return engine


def load_engine(spec: BackendSpec, engine: Any = None) -> Any:
    """
    Return the engine module for `spec`, importing it on first use.

    Raises
    ------
    ConfigurationError
        If the engine package is not installed or lacks the capability.
    """
    if engine is None:
        try:
            engine = importlib.import_module(spec.module_name)
        except ImportError as e:
            raise ConfigurationError(
                "Mesh generator package '{}' is not installed.".format(spec.module_name)
            ) from e
    return check_engine(spec, engine)
