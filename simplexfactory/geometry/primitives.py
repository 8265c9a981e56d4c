# -*- coding: utf-8 -*-
# simplexfactory/geometry/primitives.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Convenience shapes written purely against the public SimplexGridBuilder API:
polyline drawing with a cursor, circles, axis-aligned boxes, spheres, and
re-use of the boundary of an existing grid.

Main Tasks:
-----------
   - moveto / lineto: cursor-based polyline in 2D.
   - circle, rect2d: closed 2D loops.
   - rect3d, sphere: closed 3D surfaces.
   - bregions: copy selected boundary faces of a SimplexGrid into a builder.

Notes:
------
   - Functions taking `facetregions` restore the builder's facet-region
     register afterwards; all others tag with the current register.
   - Shapes only add points and facets; region and hole markers stay with
     the caller.
"""

import logging
import math
import numbers
from typing import Optional, Sequence

import numpy as np

from ..errors import DimensionMismatch
from ..mesh.grid import SimplexGrid

logger = logging.getLogger(__name__)


def _require_dim(b, dim: int, what: str) -> None:
    if b.dim_space != dim:
        raise DimensionMismatch(
            f"{what} needs a {dim}D builder.", {"dim": b.dim_space}
        )


def _index_or_point(b, x) -> int:
    if isinstance(x, numbers.Integral) and not isinstance(x, bool):
        npoints = b.points.shape[1]
        if not 1 <= x <= npoints:
            raise ValueError(f"Point index {x} out of range 1..{npoints}.")
        return int(x)
    return b.point(x)


def _check_regions(facetregions: Optional[Sequence[int]], n: int, what: str):
    if facetregions is not None and len(facetregions) != n:
        raise ValueError(f"{what} needs {n} facet regions (got {len(facetregions)}).")


def moveto(b, x) -> int:
    """Set the builder cursor to point index `x` or to the point at coordinates `x`."""
    b.cursor = _index_or_point(b, x)
    return b.cursor


def lineto(b, x) -> int:
    """Add the facet cursor -> x and move the cursor to x."""
    if b.cursor is None:
        raise ValueError("No cursor point; call moveto() first.")
    idx = _index_or_point(b, x)
    b.facet(b.cursor, idx)
    b.cursor = idx
    return idx


def circle(b, center: Sequence[float], radius: float, n: int = 20) -> None:
    """
    Add a closed polygon of `n` equidistant points on a circle.

    Parameters
    ----------
    b : SimplexGridBuilder
        2D builder.
    center : (x, y)
    radius : float
    n : int
        Number of points (and segments), at least 3.
    """
    _require_dim(b, 2, "circle")
    if n < 3:
        raise ValueError(f"circle needs n >= 3 (got {n}).")
    cx, cy = float(center[0]), float(center[1])
    ids = []
    for k in range(n):
        phi = 2.0 * math.pi * k / n
        ids.append(b.point(cx + radius * math.cos(phi), cy + radius * math.sin(phi)))
    for k in range(n):
        b.facet(ids[k], ids[(k + 1) % n])


def rect2d(b, sw: Sequence[float], ne: Sequence[float],
           facetregions: Optional[Sequence[int]] = None) -> None:
    """
    Add the four sides of the rectangle spanned by `sw` and `ne`.

    `facetregions`, if given, holds the markers for the south, east, north
    and west sides.
    """
    _require_dim(b, 2, "rect2d")
    _check_regions(facetregions, 4, "rect2d")
    p1 = b.point(sw[0], sw[1])
    p2 = b.point(ne[0], sw[1])
    p3 = b.point(ne[0], ne[1])
    p4 = b.point(sw[0], ne[1])

    saved = b.current_facetregion()
    for side, (i, j) in enumerate(((p1, p2), (p2, p3), (p3, p4), (p4, p1))):
        if facetregions is not None:
            b.facetregion(facetregions[side])
        b.facet(i, j)
    b.facetregion(saved)


def rect3d(b, bbmin: Sequence[float], bbmax: Sequence[float],
           facetregions: Optional[Sequence[int]] = None) -> None:
    """
    Add the six quadrilateral faces of the box spanned by `bbmin` and `bbmax`.

    `facetregions` order: x-min, x-max, y-min, y-max, z-min, z-max.
    """
    _require_dim(b, 3, "rect3d")
    _check_regions(facetregions, 6, "rect3d")
    x0, y0, z0 = (float(c) for c in bbmin)
    x1, y1, z1 = (float(c) for c in bbmax)

    p = [
        b.point(x0, y0, z0), b.point(x1, y0, z0), b.point(x1, y1, z0), b.point(x0, y1, z0),
        b.point(x0, y0, z1), b.point(x1, y0, z1), b.point(x1, y1, z1), b.point(x0, y1, z1),
    ]
    faces = (
        (p[0], p[3], p[7], p[4]),  # x-min
        (p[1], p[2], p[6], p[5]),  # x-max
        (p[0], p[1], p[5], p[4]),  # y-min
        (p[3], p[2], p[6], p[7]),  # y-max
        (p[0], p[1], p[2], p[3]),  # z-min
        (p[4], p[5], p[6], p[7]),  # z-max
    )

    saved = b.current_facetregion()
    for side, face in enumerate(faces):
        if facetregions is not None:
            b.facetregion(facetregions[side])
        b.facet(*face)
    b.facetregion(saved)


def sphere(b, center: Sequence[float], radius: float, nref: int = 3) -> None:
    """
    Add a closed latitude/longitude surface approximating a sphere.

    The surface has 4*nref meridians and 2*nref latitude bands; the polar
    bands are triangles, all other bands planar trapezoids.
    """
    _require_dim(b, 3, "sphere")
    if nref < 1:
        raise ValueError(f"sphere needs nref >= 1 (got {nref}).")
    c = np.asarray(center, dtype=np.float64)
    nphi = 4 * nref
    ntheta = 2 * nref

    def on_sphere(theta: float, phi: float) -> int:
        return b.point(c + radius * np.array([
            math.sin(theta) * math.cos(phi),
            math.sin(theta) * math.sin(phi),
            math.cos(theta),
        ]))

    north = b.point(c + np.array([0.0, 0.0, radius]))
    south = b.point(c - np.array([0.0, 0.0, radius]))
    rings = [
        [on_sphere(math.pi * k / ntheta, 2.0 * math.pi * j / nphi) for j in range(nphi)]
        for k in range(1, ntheta)
    ]

    for j in range(nphi):
        jn = (j + 1) % nphi
        b.facet(north, rings[0][j], rings[0][jn])
        for k in range(ntheta - 2):
            b.facet(rings[k][j], rings[k][jn], rings[k + 1][jn], rings[k + 1][j])
        b.facet(south, rings[-1][jn], rings[-1][j])


def bregions(b, grid: SimplexGrid, regions: Optional[Sequence[int]] = None,
             facetregions: Optional[Sequence[int]] = None) -> int:
    """
    Copy boundary faces of `grid` into the builder as facets.

    Parameters
    ----------
    b : SimplexGridBuilder
        Builder of the same space dimension as `grid`.
    grid : SimplexGrid
        Source mesh.
    regions : sequence of int, optional
        Boundary regions to copy (default: all present).
    facetregions : sequence of int, optional
        New marker per entry of `regions`; the original markers are kept
        when None.

    Returns
    -------
    int
        Number of facets added.
    """
    if grid.dim_space != b.dim_space:
        raise DimensionMismatch(
            "Grid and builder space dimensions differ.",
            {"grid": grid.dim_space, "builder": b.dim_space},
        )
    if regions is None:
        regions = sorted(set(int(r) for r in grid.bfaceregions))
    regions = [int(r) for r in regions]
    _check_regions(facetregions, len(regions), "bregions")
    remap = dict(zip(regions, facetregions)) if facetregions is not None else None

    coords = grid.coordinates
    saved = b.current_facetregion()
    added = 0
    for iface in range(grid.num_bfaces):
        region = int(grid.bfaceregions[iface])
        if region not in regions:
            continue
        ids = [b.point(coords[:, ip - 1]) for ip in grid.bfacenodes[:, iface]]
        b.facetregion(remap[region] if remap is not None else region)
        b.facet(*ids)
        added += 1
    b.facetregion(saved)
    logger.info("[bregions] copied %d boundary faces from %r", added, grid)
    return added
