# -*- coding: utf-8 -*-
# main.py

"""
End-to-end driver:
  1) Describe a square with a circular inclusion and a triangular hole
  2) Check the description for dangling facets
  3) Generate the triangle mesh (plain and locally refined)
  4) Describe and tetrahedralize a unit cube
  5) Write the meshes via meshio
"""

import os
import logging

import numpy as np

from simplexfactory import SimplexGridBuilder, setup_logging
from simplexfactory.geometry import circle, rect2d, rect3d


def describe_domain_2d() -> SimplexGridBuilder:
    b = SimplexGridBuilder("triangle")
    rect2d(b, (0.0, 0.0), (2.0, 1.0), facetregions=[1, 2, 3, 4])

    b.facetregion(5)
    circle(b, (0.5, 0.5), 0.25, n=24)

    b.facetregion(6)
    b.facet((1.3, 0.3), (1.7, 0.3))
    b.facet((1.7, 0.3), (1.5, 0.7))
    b.facet((1.5, 0.7), (1.3, 0.3))
    b.holepoint(1.5, 0.45)

    b.cellregion(1)
    b.maxvolume(0.01)
    b.regionpoint(0.05, 0.05)
    b.cellregion(2)
    b.maxvolume(0.002)
    b.regionpoint(0.5, 0.5)
    return b


def describe_cube() -> SimplexGridBuilder:
    b = SimplexGridBuilder("tetgen")
    rect3d(b, (0.0, 0.0, 0.0), (1.0, 1.0, 1.0), facetregions=[1, 2, 3, 4, 5, 6])
    b.cellregion(1)
    b.maxvolume(0.005)
    b.regionpoint(0.5, 0.5, 0.5)
    return b


if __name__ == "__main__":
    # ------------------------------------------------------------------
    # 0) Logging
    # ------------------------------------------------------------------
    setup_logging(logging.INFO)
    log = logging.getLogger("simplexfactory")

    os.makedirs("mesh", exist_ok=True)

    # ------------------------------------------------------------------
    # 1-2) 2D description + watertightness check
    # ------------------------------------------------------------------
    builder = describe_domain_2d()
    if not builder.maybe_watertight():
        raise SystemExit("2D description has dangling facets.")

    # ------------------------------------------------------------------
    # 3) Triangle mesh, plus local refinement toward the circle center
    # ------------------------------------------------------------------
    grid2d = builder.build(minangle=25)
    log.info("2D grid: %r", grid2d)

    def unsuitable(x1, y1, x2, y2, x3, y3, area):
        bary = np.array([(x1 + x2 + x3) / 3.0, (y1 + y2 + y3) / 3.0])
        return area > 0.002 * np.linalg.norm(bary - (0.5, 0.5))

    grid2d_ref = builder.build(unsuitable=unsuitable)
    log.info("2D refined grid: %r", grid2d_ref)

    # ------------------------------------------------------------------
    # 4) TetGen mesh of the unit cube
    # ------------------------------------------------------------------
    grid3d = describe_cube().build()
    log.info("3D grid: %r", grid3d)

    # ------------------------------------------------------------------
    # 5) Export
    # ------------------------------------------------------------------
    for name, grid in (("square", grid2d), ("square_ref", grid2d_ref), ("cube", grid3d)):
        path = os.path.join("mesh", name + ".vtu")
        grid.to_meshio().write(path)
        log.info("Wrote %s", path)
