# -*- coding: utf-8 -*-
# simplexfactory/mesh/runner.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Mesh generation orchestration that works with any registered backend.
Blends options, synthesizes the flag string, invokes the engine through the
backend's run function and unpacks the result.

Main Tasks:
-----------
    1. `run_generator`: packed input + complete options -> SimplexGrid.
    2. `simplexgrid`: direct array entry point (no builder), packing the
       arrays itself when no pre-packed input is given.

Notes:
------
- Engine failures are logged with a hint about incomplete geometry
  descriptions and re-raised unchanged. Nothing is retried.
"""

import logging
from typing import Any, Dict, Mapping

from ..errors import ConfigurationError
from .base import BackendSpec, load_engine
from .grid import SimplexGrid
from .options import blend_options, default_options, make_flags
from .registry import get_backend_spec

logger = logging.getLogger(__name__)


def run_generator(spec: BackendSpec, native_input: Any, options: Mapping[str, Any],
                  engine: Any = None) -> SimplexGrid:
    """
    Run the backend engine on already packed input.

    Parameters
    ----------
    spec : BackendSpec
        Backend to use.
    native_input : Any
        Output of `spec.pack`.
    options : Mapping[str, Any]
        Complete option set (defaults already blended in).
    engine : module, optional
        Engine module; imported from `spec.module_name` if None.

    Returns
    -------
    SimplexGrid

    Raises
    ------
    ConfigurationError
        If the engine is missing or `unsuitable` is set for a backend without support.
    Exception
        Whatever the engine raises, unmodified.
    """
    unsuitable = options.get("unsuitable")
    if unsuitable is not None and not spec.supports_unsuitable:
        raise ConfigurationError(
            "The {} backend does not support an unsuitable callback.".format(spec.backend.value)
        )
    eng = load_engine(spec, engine)
    flags = make_flags(options, spec.backend)
    logger.info("[simplexgrid] %s flags: %s", spec.backend.value, flags)

    try:
        out = spec.run(eng, flags, native_input, unsuitable)
    except Exception:
        logger.error(
            "[simplexgrid] %s failed, possibly due to an incomplete geometry description "
            "(non-watertight facets, self-intersections or region points on facets). "
            "Check the description with maybe_watertight().",
            spec.backend.value,
        )
        raise

    grid = spec.unpack(out, native_input)
    logger.info(
        "[simplexgrid] %d nodes, %d cells, %d boundary faces",
        grid.num_nodes, grid.num_cells, grid.num_bfaces,
    )
    return grid


def simplexgrid(
    generator,
    native_input: Any = None,
    *,
    engine: Any = None,
    points=None,
    bfaces=None,
    bfaceregions=None,
    regionpoints=None,
    regionnumbers=None,
    regionvolumes=None,
    **options: Any,
) -> SimplexGrid:
    """
    Create a simplex grid directly from input arrays (or pre-packed input).

    Parameters
    ----------
    generator : Backend or str
        "triangle" (2D) or "tetgen" (3D).
    native_input : optional
        Result of `triangulateio` / `tetgenio`; if None the array keywords
        are packed first.
    engine : module, optional
        Engine override (must expose the backend capability).
    points, bfaces, bfaceregions, regionpoints, regionnumbers, regionvolumes :
        Input arrays, see the backend pack functions.
    **options :
        Mesh options laid over the backend defaults.
    """
    spec = get_backend_spec(generator)
    if native_input is None:
        native_input = spec.pack(
            points=points,
            bfaces=bfaces,
            bfaceregions=bfaceregions,
            regionpoints=regionpoints,
            regionnumbers=regionnumbers,
            regionvolumes=regionvolumes,
        )
    opts: Dict[str, Any] = blend_options(default_options(spec.backend), **options)
    return run_generator(spec, native_input, opts, engine)
