# -*- coding: utf-8 -*-
# simplexfactory/mesh/generators/tetgen_generator.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Array protocol for the 3D backend (Hang Si's TetGen through the `tetgen`
package). Packs builder state into a `TetGenIO` record, runs the engine with
the synthesized switches and unpacks the result into a `SimplexGrid`.

Main Tasks:
-----------
    1. `tetgenio`: normalize shapes/dtypes, validate polygon facets, split
       regions from holes, convert to 0-based row-major arrays.
    2. `run_tetgen`: fan-triangulate the (planar, convex) polygon facets, feed
       them with region/hole markers to `engine.TetGen`, tetrahedralize.
    3. `unpack_tetgen`: recover boundary faces (tet faces lying in an input
       facet) and their markers, then build the SimplexGrid.

Notes:
------
- The `tetgen` binding accepts triangle surfaces only and returns no face
  markers, hence the fan triangulation on the way in and the facet lookup on
  the way out. Non-convex polygon facets must be split by the caller.
- Older `tetgen` releases return (nodes, elem) only; cell regions then fall
  back to 1.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ...errors import MarshallingError
from ..grid import SimplexGrid
from ._arrays import as_columns, as_vector, split_regions

logger = logging.getLogger(__name__)

DIM = 3
_PLANE_TOL = 1.0e-8   # relative to the bounding box diagonal
_BARY_TOL = 1.0e-10


@dataclass
class TetGenIO:
    """Packed TetGen input: 0-based, one entity per row."""
    points: np.ndarray                     # (N, 3) float64
    facets: List[np.ndarray]               # polygons, 0-based int32
    facetmarkers: np.ndarray               # (F,) int32
    regions: np.ndarray = field(default_factory=lambda: np.zeros((0, 5)))  # [x, y, z, number, volume]
    holes: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))

    @property
    def npoints(self) -> int:
        return int(self.points.shape[0])


def _polygons(bfaces, nfacets_hint: Optional[int]) -> List[np.ndarray]:
    if bfaces is None:
        return []
    if isinstance(bfaces, np.ndarray):
        if bfaces.size == 0:
            return []
        if bfaces.ndim != 2:
            raise MarshallingError("bfaces array must be 2-d.", {"shape": bfaces.shape})
        cols = bfaces
        if nfacets_hint is not None and bfaces.shape[1] != nfacets_hint and bfaces.shape[0] == nfacets_hint:
            cols = bfaces.T
        return [np.asarray(cols[:, j]) for j in range(cols.shape[1])]
    return [np.asarray(p).ravel() for p in bfaces]


def tetgenio(
    points=None,
    bfaces=None,
    bfaceregions=None,
    regionpoints=None,
    regionnumbers=None,
    regionvolumes=None,
) -> TetGenIO:
    """
    Create the TetGen input record.

    Parameters
    ----------
    points : array_like
        (3, N) or (N, 3) coordinates; at least 4 points. A (3, 3) or other
        square array is read as one point per column.
    bfaces : sequence of sequences or array_like
        1-based polygon facets. A 2-d array holds one facet per column
        (rows are accepted when that is what matches `bfaceregions`).
    bfaceregions : array_like
        Facet markers, one per facet.
    regionpoints, regionnumbers, regionvolumes :
        Combined region/hole markers; number 0 marks a hole.

    Raises
    ------
    MarshallingError
        On malformed shapes, short polygons, out-of-range indices or
        inconsistent lengths.
    """
    pts = as_columns(points, DIM, np.float64, "points")
    npoints = pts.shape[1]
    if npoints < 4:
        raise MarshallingError("Need at least 4 points.", {"npoints": npoints})

    markers = as_vector(bfaceregions, np.int32, "bfaceregions")
    polys = _polygons(bfaces, markers.shape[0] if bfaceregions is not None else None)
    if markers.shape[0] != len(polys):
        raise MarshallingError(
            "bfaceregions length must equal the number of bfaces.",
            {"nbfaces": len(polys), "nbfaceregions": markers.shape[0]},
        )

    facets = []
    for i, poly in enumerate(polys):
        if poly.shape[0] < 3:
            raise MarshallingError("Facet needs at least 3 points.", {"facet": i + 1})
        if poly.min() < 1 or poly.max() > npoints:
            raise MarshallingError("Point index out of range 1..N.", {"facet": i + 1, "N": npoints})
        facets.append(poly.astype(np.int32) - 1)

    regions, holes = split_regions(regionpoints, regionnumbers, regionvolumes, DIM)
    return TetGenIO(
        points=np.array(pts.T, dtype=np.float64, order="C"),
        facets=facets,
        facetmarkers=np.array(markers, dtype=np.int32),
        regions=regions,
        holes=holes,
    )


def fan_triangles(facets: Sequence[np.ndarray], markers: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Fan-triangulate polygons around their first vertex; returns (T,3) tris and (T,) markers."""
    tris: List[Tuple[int, int, int]] = []
    tri_markers: List[int] = []
    for poly, marker in zip(facets, markers):
        for k in range(1, len(poly) - 1):
            tris.append((poly[0], poly[k], poly[k + 1]))
            tri_markers.append(int(marker))
    return (np.asarray(tris, dtype=np.int32).reshape(-1, 3),
            np.asarray(tri_markers, dtype=np.int32))


def run_tetgen(engine, flags: str, tio: TetGenIO, unsuitable=None) -> Dict[str, np.ndarray]:
    """
    Tetrahedralize `tio` with `engine.TetGen` using `flags` as switches.

    Returns a dict with keys "points" (N,3), "tetrahedra" (M,4) 0-based and
    "tetrahedron_attributes" (M,) or None.
    """
    tris, _ = fan_triangles(tio.facets, tio.facetmarkers)
    tet = engine.TetGen(tio.points, tris)
    for row in tio.regions:
        tet.add_region(int(row[3]), tuple(row[:3]), float(row[4]))
    for hole in tio.holes:
        tet.add_hole(tuple(hole))

    result = tet.tetrahedralize(switches=flags)
    nodes, elem = result[0], result[1]
    attributes = result[2] if len(result) > 2 else None
    return {"points": nodes, "tetrahedra": elem, "tetrahedron_attributes": attributes}


def _in_triangle(p: np.ndarray, a: np.ndarray, b: np.ndarray, c: np.ndarray, plane_tol: float) -> np.ndarray:
    """Mask of points p (K,3) lying in triangle abc (within tolerance)."""
    v0 = b - a
    v1 = c - a
    n = np.cross(v0, v1)
    nn = np.linalg.norm(n)
    if nn == 0.0:
        return np.zeros(p.shape[0], dtype=bool)
    v2 = p - a
    on_plane = np.abs(v2 @ n) / nn <= plane_tol

    d00 = v0 @ v0
    d01 = v0 @ v1
    d11 = v1 @ v1
    d20 = v2 @ v0
    d21 = v2 @ v1
    denom = d00 * d11 - d01 * d01
    v = (d11 * d20 - d01 * d21) / denom
    w = (d00 * d21 - d01 * d20) / denom
    u = 1.0 - v - w
    return on_plane & (u >= -_BARY_TOL) & (v >= -_BARY_TOL) & (w >= -_BARY_TOL)


def boundary_faces(nodes: np.ndarray, elem: np.ndarray, tio: TetGenIO) -> Tuple[np.ndarray, np.ndarray]:
    """
    Tet faces lying inside an input facet, with that facet's marker.

    Returns (B,3) 0-based faces and (B,) markers; the first facet (in input
    order) containing a face decides its marker.
    """
    if elem.shape[0] == 0 or not tio.facets:
        return np.zeros((0, 3), dtype=np.int32), np.zeros(0, dtype=np.int32)

    faces = np.concatenate([elem[:, [1, 2, 3]], elem[:, [0, 2, 3]],
                            elem[:, [0, 1, 3]], elem[:, [0, 1, 2]]])
    faces = np.unique(np.sort(faces, axis=1), axis=0)
    centroids = nodes[faces].mean(axis=1)

    extent = nodes.max(axis=0) - nodes.min(axis=0)
    plane_tol = _PLANE_TOL * max(float(np.linalg.norm(extent)), 1.0e-300)

    tris, tri_markers = fan_triangles(tio.facets, tio.facetmarkers)
    markers = np.zeros(faces.shape[0], dtype=np.int32)
    found = np.zeros(faces.shape[0], dtype=bool)
    for (ia, ib, ic), marker in zip(tris, tri_markers):
        hit = ~found & _in_triangle(centroids, tio.points[ia], tio.points[ib], tio.points[ic], plane_tol)
        markers[hit] = marker
        found |= hit

    if not found.any():
        logger.warning("[unpack_tetgen] no tetrahedron face matched an input facet")
    return faces[found], markers[found]


def unpack_tetgen(out: Dict[str, np.ndarray], tio: TetGenIO) -> SimplexGrid:
    """Convert `run_tetgen` output into a SimplexGrid (1-based, one entity per column)."""
    nodes = np.asarray(out["points"], dtype=np.float64).reshape(-1, 3)
    elem = np.asarray(out["tetrahedra"])
    elem = elem.reshape(elem.shape[0], -1)[:, :4].astype(np.int64)
    ntet = elem.shape[0]

    attrs = out.get("tetrahedron_attributes")
    if attrs is not None and np.size(attrs) >= ntet and ntet > 0:
        cellregions = np.rint(np.asarray(attrs).reshape(ntet, -1)[:, 0])
    else:
        cellregions = np.ones(ntet)

    faces, markers = boundary_faces(nodes, elem, tio)
    return SimplexGrid.from_arrays(
        coordinates=nodes.T,
        cellnodes=elem.T + 1,
        cellregions=cellregions,
        bfacenodes=faces.T + 1,
        bfaceregions=markers,
    )
