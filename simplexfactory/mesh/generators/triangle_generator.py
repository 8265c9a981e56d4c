# -*- coding: utf-8 -*-
# simplexfactory/mesh/generators/triangle_generator.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Array protocol for the 2D backend (Shewchuk's Triangle through the `triangle`
package). Packs builder state into the engine's input dict, runs the engine
(optionally inside a local-refinement loop driven by an unsuitable-element
predicate) and unpacks the engine output into a `SimplexGrid`.

Main Tasks:
-----------
    1. `triangulateio`: normalize shapes/dtypes, split regions from holes,
       convert 1-based indices to the engine's 0-based row-major layout.
    2. `run_triangle`: call `engine.triangulate(tri, flags)`; with an
       unsuitable predicate, re-run in refine mode with per-triangle area
       bounds until no triangle is flagged.
    3. `unpack_triangle`: engine output dict -> SimplexGrid.

Notes:
------
- Engine dict keys: vertices (N,2), segments (M,2), segment_markers (M,1),
  regions (R,4) = [x, y, number, maxarea], holes (H,2), triangles (T,3),
  triangle_attributes (T,1), triangle_max_area (T,).
- Optional keys are attached only when non-empty.
"""

import logging
from typing import Callable, Dict, Optional

import numpy as np

from ...errors import MarshallingError
from ..grid import SimplexGrid
from ._arrays import as_columns, as_vector, split_regions, zero_based

logger = logging.getLogger(__name__)

DIM = 2
MAX_REFINE_ITERATIONS = 20


def triangulateio(
    points=None,
    bfaces=None,
    bfaceregions=None,
    regionpoints=None,
    regionnumbers=None,
    regionvolumes=None,
) -> Dict[str, np.ndarray]:
    """
    Create the Triangle input dict from (dim, N) / (N, dim) arrays.

    Square inputs are ambiguous; they are always read as one entity per
    column, e.g. a (2, 2) `regionpoints` array holds two points as columns.

    Parameters
    ----------
    points : array_like
        Point coordinates, (2, N) or (N, 2); at least 3 points.
    bfaces : array_like, optional
        1-based segment connectivity, (2, M) or (M, 2).
    bfaceregions : array_like, optional
        Segment markers, length M.
    regionpoints : array_like, optional
        Region/hole marker locations, (2, R) or (R, 2).
    regionnumbers, regionvolumes : array_like, optional
        Length R each; number 0 marks a hole.

    Returns
    -------
    dict
        Input dict for `triangle.triangulate`.

    Raises
    ------
    MarshallingError
        On wrong array rank, leading dimension or inconsistent lengths.
    """
    pts = as_columns(points, DIM, np.float64, "points")
    if pts.shape[1] < 3:
        raise MarshallingError("Need at least 3 points.", {"npoints": pts.shape[1]})

    segs = as_columns(bfaces, 2, np.int32, "bfaces")
    markers = as_vector(bfaceregions, np.int32, "bfaceregions")
    if markers.shape[0] != segs.shape[1]:
        raise MarshallingError(
            "bfaceregions length must equal the number of bfaces.",
            {"nbfaces": segs.shape[1], "nbfaceregions": markers.shape[0]},
        )

    regions, holes = split_regions(regionpoints, regionnumbers, regionvolumes, DIM)

    # the engine rejects read-only buffers: every array below is a fresh copy
    tri = {"vertices": np.array(pts.T, dtype=np.float64, order="C")}
    if segs.shape[1] > 0:
        tri["segments"] = np.array(zero_based(segs, pts.shape[1]), dtype=np.int32, order="C")
    if markers.shape[0] > 0:
        tri["segment_markers"] = np.array(markers.reshape(-1, 1), dtype=np.int32, order="C")
    if regions.shape[0] > 0:
        tri["regions"] = np.array(regions, dtype=np.float64, order="C")
    if holes.shape[0] > 0:
        tri["holes"] = np.array(holes, dtype=np.float64, order="C")
    return tri


def _areas(vertices: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    p = vertices[triangles]
    return 0.5 * np.abs(
        (p[:, 1, 0] - p[:, 0, 0]) * (p[:, 2, 1] - p[:, 0, 1])
        - (p[:, 1, 1] - p[:, 0, 1]) * (p[:, 2, 0] - p[:, 0, 0])
    )


def _flag_unsuitable(vertices: np.ndarray, triangles: np.ndarray, unsuitable: Callable) -> np.ndarray:
    areas = _areas(vertices, triangles)
    p = vertices[triangles]
    flagged = np.zeros(len(triangles), dtype=bool)
    for i in range(len(triangles)):
        (x1, y1), (x2, y2), (x3, y3) = p[i]
        flagged[i] = bool(unsuitable(x1, y1, x2, y2, x3, y3, areas[i]))
    return flagged


def run_triangle(engine, flags: str, tri: Dict[str, np.ndarray],
                 unsuitable: Optional[Callable] = None) -> Dict[str, np.ndarray]:
    """
    Run Triangle; with `unsuitable`, refine flagged triangles until none is left.

    The predicate is called as `unsuitable(x1, y1, x2, y2, x3, y3, area)` and
    returns a truthy value when the triangle needs refinement.
    """
    out = engine.triangulate(tri, flags)
    if unsuitable is None:
        return out

    refine_flags = "r" + flags + "a"
    for it in range(MAX_REFINE_ITERATIONS):
        flagged = _flag_unsuitable(out["vertices"], out["triangles"], unsuitable)
        nflagged = int(flagged.sum())
        logger.debug("[run_triangle] refinement pass %d: %d unsuitable triangles", it, nflagged)
        if nflagged == 0:
            break
        areas = _areas(out["vertices"], out["triangles"])
        prev = dict(out)
        prev.pop("regions", None)
        prev["triangle_max_area"] = np.where(flagged, 0.5 * areas, -1.0)
        if "holes" in tri:
            prev["holes"] = tri["holes"]
        out = engine.triangulate(prev, refine_flags)
    else:
        logger.warning(
            "[run_triangle] unsuitable predicate still active after %d refinement passes",
            MAX_REFINE_ITERATIONS,
        )
    return out


def unpack_triangle(out: Dict[str, np.ndarray], tri: Optional[Dict[str, np.ndarray]] = None) -> SimplexGrid:
    """
    Convert a Triangle output dict into a SimplexGrid (1-based, one entity per column).

    Missing segment output yields empty (2, 0) boundary arrays; missing
    triangle attributes put every cell into region 1.
    """
    vertices = np.asarray(out["vertices"], dtype=np.float64)
    triangles = np.asarray(out["triangles"]).reshape(-1, 3)
    ntri = triangles.shape[0]

    attrs = out.get("triangle_attributes")
    if attrs is not None and np.size(attrs) >= ntri and ntri > 0:
        cellregions = np.rint(np.asarray(attrs).reshape(ntri, -1)[:, 0])
    else:
        cellregions = np.ones(ntri)

    segments = np.asarray(out.get("segments", np.zeros((0, 2)))).reshape(-1, 2)
    seg_markers = out.get("segment_markers")
    if seg_markers is None:
        seg_markers = np.zeros(segments.shape[0])
    seg_markers = np.asarray(seg_markers).reshape(-1)

    return SimplexGrid.from_arrays(
        coordinates=vertices.T,
        cellnodes=triangles.T + 1,
        cellregions=cellregions,
        bfacenodes=segments.T + 1,
        bfaceregions=seg_markers,
    )
