# -*- coding: utf-8 -*-
# simplexfactory/geometry/watertight.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Heuristic check for dangling facets before a geometry description is handed
to the mesh generator. Every point referenced by a facet of the selected
boundary regions gets an incidence count; a closed 2D boundary touches each
point at least twice, a closed 3D surface at least three times.

Main Tasks:
-----------
   - Count facet/point incidences for the selected facet regions.
   - Return False on a definite gap, True for "maybe watertight".
   - Log each dangling facet/point pair with coordinates for diagnosis.

Notes:
------
   - Only a negative answer is definitive. Self-intersections and gaps that
     keep every point's count high enough are not detected.
   - A negative answer is a warning, not an error.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def dangling_facets(
    points: np.ndarray,
    facets: Sequence[Sequence[int]],
    facetregions: Sequence[int],
    bregions: Optional[Iterable[int]] = None,
) -> List[Tuple[int, int, int]]:
    """
    List (facet_id, facet_region, point_id) triples where a point is touched
    by fewer than `dim` facets of the selected regions (all ids 1-based).
    """
    dim = points.shape[0]
    selected = set(facetregions) if bregions is None else set(bregions)
    counts = np.zeros(points.shape[1] + 1, dtype=np.int64)

    for facet, region in zip(facets, facetregions):
        if region in selected:
            for ip in facet:
                counts[ip] += 1

    found = []
    for ifacet, (facet, region) in enumerate(zip(facets, facetregions), start=1):
        if region not in selected:
            continue
        for ip in facet:
            if counts[ip] < dim:
                found.append((ifacet, int(region), int(ip)))
    return found


def maybe_watertight(
    points: np.ndarray,
    facets: Sequence[Sequence[int]],
    facetregions: Sequence[int],
    bregions: Optional[Iterable[int]] = None,
) -> bool:
    """
    Check whether the facets of the regions in `bregions` may enclose a volume.

    Parameters
    ----------
    points : np.ndarray
        (dim, N) point coordinates.
    facets : sequence of sequences of int
        1-based point indices per facet.
    facetregions : sequence of int
        Marker per facet.
    bregions : iterable of int, optional
        Facet regions to consider; all regions present by default.

    Returns
    -------
    bool
        False if the description is definitely not watertight, True if it
        may be.
    """
    logger.info("[maybe_watertight] checking for dangling facets")
    dangling = dangling_facets(points, facets, facetregions, bregions)
    if not dangling:
        logger.info("[maybe_watertight] maybe description is watertight, but not sure")
        return True

    logger.warning("[maybe_watertight] description is not watertight")
    for ifacet, region, ip in dangling:
        logger.warning(
            "[maybe_watertight] dangling facet %d (bregion %d, point %d at %s)",
            ifacet, region, ip, np.array2string(points[:, ip - 1]),
        )
    return False
