# -*- coding: utf-8 -*-
# simplexfactory/geometry/builder.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose
-------
    Incremental description of a 2D/3D domain (points, boundary facets,
    region markers and holes) and conversion into a simplex grid by the
    backend selected at construction (Triangle in 2D, TetGen in 3D).

Main Tasks
----------
    1. Deduplicate points within `tol` and hand out stable 1-based indices.
    2. Accumulate facets tagged with the current facet region.
    3. Accumulate region/hole markers with the current cell region and
       max volume registers.
    4. Persist mesh options, render the flag string and run the generator.

Notes
-----
    - A builder is single-owner state; nothing here is module-level.
    - All arity checks happen before anything is stored, so a rejected call
      leaves the builder unchanged.
"""

import logging
import numbers
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import DimensionMismatch
from ..mesh.base import Backend, check_engine
from ..mesh.grid import SimplexGrid
from ..mesh.options import blend_options, default_options, make_flags
from ..mesh.registry import get_backend_spec
from ..mesh.runner import run_generator
from .points import BinnedPointList, ElasticColumns
from .watertight import maybe_watertight as _maybe_watertight

logger = logging.getLogger(__name__)


def _is_sequence(x: Any) -> bool:
    return isinstance(x, (list, tuple, np.ndarray))


def _readonly(a: np.ndarray) -> np.ndarray:
    a.flags.writeable = False
    return a


class SimplexGridBuilder:
    """
    Geometry accumulator for a simplex mesh generator.

    Parameters
    ----------
    generator : Backend or str
        "triangle" (2D) or "tetgen" (3D).
    tol : float
        Points closer than `tol` are merged (default 1e-12).
    checkexisting : bool
        If False, every `point()` call appends a new point.
    engine : module, optional
        Engine module to use instead of importing `triangle` / `tetgen` at
        build time. Must expose `triangulate` (Triangle) or `TetGen` (TetGen).

    Example
    -------
        b = SimplexGridBuilder("triangle")
        p1 = b.point(0, 0); p2 = b.point(1, 0); p3 = b.point(1, 1); p4 = b.point(0, 1)
        b.facetregion(1); b.facet(p1, p2)
        b.facetregion(2); b.facet(p2, p3)
        b.facetregion(3); b.facet(p3, p4)
        b.facetregion(4); b.facet(p4, p1)
        b.cellregion(1); b.maxvolume(0.01); b.regionpoint(0.5, 0.5)
        grid = b.build()
    """

    def __init__(self, generator, tol: float = 1.0e-12, checkexisting: bool = True,
                 engine: Any = None):
        self._spec = get_backend_spec(generator)
        self._engine = check_engine(self._spec, engine) if engine is not None else None
        self._dim = self._spec.dim
        self.checkexisting = bool(checkexisting)

        self._pointlist = BinnedPointList(self._dim, tol=tol)
        self._facets: List[Tuple[int, ...]] = []
        self._facetregions: List[int] = []
        self._regionpoints = ElasticColumns(self._dim)
        self._regionnumbers: List[int] = []
        self._regionvolumes: List[float] = []
        self._options = default_options(self._spec.backend)

        self._current_facetregion = 1
        self._current_cellregion = 1
        self._current_maxvolume = 1.0
        self.cursor: Optional[int] = None

        logger.debug("[SimplexGridBuilder] new %s builder (dim=%d, tol=%g)",
                     self._spec.backend.value, self._dim, tol)

    def __repr__(self) -> str:
        return "SimplexGridBuilder({}, npoints={}, nfacets={}, nregions={})".format(
            self._spec.backend.value, len(self._pointlist), len(self._facets),
            len(self._regionnumbers),
        )

    # --------------------
    # Read-only views
    # --------------------
    @property
    def dim_space(self) -> int:
        return self._dim

    @property
    def is_triangle(self) -> bool:
        return self._spec.backend is Backend.TRIANGLE

    @property
    def is_tetgen(self) -> bool:
        return self._spec.backend is Backend.TETGEN

    @property
    def points(self) -> np.ndarray:
        """(dim, N) coordinates of all points, read-only."""
        return self._pointlist.points

    @property
    def facets(self) -> Tuple[Tuple[int, ...], ...]:
        """1-based point indices per facet, in insertion order."""
        return tuple(self._facets)

    @property
    def facetregions(self) -> np.ndarray:
        return _readonly(np.asarray(self._facetregions, dtype=np.int32))

    @property
    def regionpoints(self) -> np.ndarray:
        """(dim, R) region and hole marker locations, read-only."""
        return self._regionpoints.view

    @property
    def regionnumbers(self) -> np.ndarray:
        return _readonly(np.asarray(self._regionnumbers, dtype=np.int32))

    @property
    def regionvolumes(self) -> np.ndarray:
        return _readonly(np.asarray(self._regionvolumes, dtype=np.float64))

    # --------------------
    # Points and facets
    # --------------------
    def _coords(self, coords: Sequence[Any]) -> Sequence[Any]:
        # point(x, y) and point((x, y)) are both accepted
        if len(coords) == 1 and _is_sequence(coords[0]):
            coords = coords[0]
        if len(coords) != self._dim:
            raise DimensionMismatch(
                "Point has wrong number of coordinates.",
                {"dim": self._dim, "got": len(coords)},
            )
        return coords

    def point(self, *coords) -> int:
        """Insert a point (or find one within `tol`) and return its 1-based index."""
        return self._pointlist.insert(self._coords(coords), check=self.checkexisting)

    def _check_arity(self, n: int) -> None:
        ok = n >= 3 if self._dim == 3 else n == self._dim
        if not ok:
            raise DimensionMismatch(
                "Wrong number of points for a facet.",
                {"dim": self._dim, "got": n, "expected": ">=3" if self._dim == 3 else self._dim},
            )

    def _check_indices(self, indices: Sequence[Any]) -> Tuple[int, ...]:
        npoints = len(self._pointlist)
        out = []
        for i in indices:
            if isinstance(i, bool) or not isinstance(i, numbers.Integral):
                raise ValueError(f"Facet point index must be an integer (got {i!r}).")
            if not 1 <= i <= npoints:
                raise ValueError(f"Facet point index {i} out of range 1..{npoints}.")
            out.append(int(i))
        return tuple(out)

    def _append_facet(self, indices: Tuple[int, ...]) -> int:
        self._facets.append(indices)
        self._facetregions.append(self._current_facetregion)
        return len(self._facets)

    def facet(self, *args) -> int:
        """
        Add a facet tagged with the current facet region; return its 1-based id.

        Accepted forms
        --------------
            facet(i, j[, k, ...])          point indices
            facet([i, j, ...])             point indices as one sequence
            facet((x1, y1), (x2, y2), ...) coordinates, inserted via point()

        Raises
        ------
        DimensionMismatch
            On a wrong number of points for the space dimension or a
            coordinate tuple of the wrong length.
        ValueError
            If an index does not reference an existing point.
        """
        if len(args) == 1 and _is_sequence(args[0]):
            args = tuple(args[0])

        if len(args) > 1 and all(_is_sequence(a) for a in args):
            self._check_arity(len(args))
            coords = [self._coords((a,)) for a in args]
            indices = tuple(self.point(c) for c in coords)
        else:
            self._check_arity(len(args))
            indices = self._check_indices(args)
        return self._append_facet(indices)

    def polyfacet(self, indices: Iterable[int]) -> int:
        """Add a facet from an arbitrary-length index list (no arity check)."""
        return self._append_facet(self._check_indices(list(indices)))

    # --------------------
    # Registers and markers
    # --------------------
    def facetregion(self, m: int) -> None:
        self._current_facetregion = int(m)

    def cellregion(self, m: int) -> None:
        self._current_cellregion = int(m)

    def maxvolume(self, v: float) -> None:
        self._current_maxvolume = float(v)

    def current_facetregion(self) -> int:
        return self._current_facetregion

    def _add_marker(self, coords, number: int, volume: float) -> None:
        x = np.asarray(self._coords(coords), dtype=np.float64)
        self._regionpoints.append(x)
        self._regionnumbers.append(number)
        self._regionvolumes.append(volume)

    def regionpoint(self, *coords) -> None:
        """Mark a subdomain with the current cell region and max volume."""
        self._add_marker(coords, self._current_cellregion, self._current_maxvolume)

    def holepoint(self, *coords) -> None:
        """Mark a hole (region number 0, no volume constraint)."""
        self._add_marker(coords, 0, 0.0)

    # --------------------
    # Options and build
    # --------------------
    def options(self, **kwargs) -> None:
        """Persist mesh options for subsequent builds (validated)."""
        self._options = blend_options(self._options, **kwargs)

    def flags(self) -> str:
        """Flag string generated from the persisted options."""
        return make_flags(self._options, self._spec.backend)

    def generator_input(self):
        """Pack the current description into the backend's engine input."""
        if self._dim == 3:
            bfaces = [list(f) for f in self._facets]
        else:
            bfaces = np.asarray(self._facets, dtype=np.int32).reshape(-1, self._dim).T
        return self._spec.pack(
            points=self.points,
            bfaces=bfaces,
            bfaceregions=self.facetregions,
            regionpoints=self.regionpoints,
            regionnumbers=self.regionnumbers,
            regionvolumes=self.regionvolumes,
        )

    def build(self, **overrides) -> SimplexGrid:
        """
        Run the mesh generator on the current description.

        Keyword arguments override the persisted options for this call only.
        Engine exceptions are logged with a hint and re-raised unchanged.
        """
        options = blend_options(self._options, **overrides)
        logger.info(
            "[SimplexGridBuilder] building from %d points, %d facets, %d region markers",
            len(self._pointlist), len(self._facets), len(self._regionnumbers),
        )
        return run_generator(self._spec, self.generator_input(), options, self._engine)

    def maybe_watertight(self, bregions: Optional[Iterable[int]] = None) -> bool:
        """See `simplexfactory.geometry.watertight.maybe_watertight`."""
        return _maybe_watertight(self.points, self._facets, self._facetregions, bregions)
