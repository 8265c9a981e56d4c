"""
End-to-end 3D meshing through the `tetgen` package.
"""

import numpy as np
import pytest

from simplexfactory import SimplexGridBuilder
from simplexfactory.geometry import rect3d, sphere

pytest.importorskip("tetgen")


def _volumes(grid):
    x = grid.coordinates
    p = [x[:, grid.cellnodes[k] - 1] for k in range(4)]
    return np.abs(np.einsum("ij,ij->j", p[1] - p[0], np.cross(p[2] - p[0], p[3] - p[0], axis=0))) / 6


def _cube_builder():
    b = SimplexGridBuilder("tetgen")
    rect3d(b, (0, 0, 0), (1, 1, 1), facetregions=[1, 2, 3, 4, 5, 6])
    b.cellregion(1)
    b.maxvolume(0.01)
    b.regionpoint(0.5, 0.5, 0.5)
    return b


def test_cube():
    grid = _cube_builder().build()
    assert grid.dim_space == 3
    assert grid.num_cells > 6
    np.testing.assert_allclose(_volumes(grid).sum(), 1.0, rtol=1e-10)
    assert grid.cellnodes.min() >= 1
    assert grid.cellnodes.max() <= grid.num_nodes


def test_cube_boundary_markers():
    grid = _cube_builder().build()
    assert set(grid.bfaceregions.tolist()) <= {1, 2, 3, 4, 5, 6}
    assert grid.num_bfaces >= 12


def test_maxvolume_override_refines():
    b = _cube_builder()
    coarse = b.build(maxvolume=0.1)
    fine = b.build(maxvolume=0.005)
    assert fine.num_cells > coarse.num_cells


def _inside(points, lo, hi):
    return np.all((points > np.reshape(lo, (3, 1))) & (points < np.reshape(hi, (3, 1))), axis=0)


def test_cube_with_box_hole():
    b = SimplexGridBuilder("tetgen")
    rect3d(b, (0, 0, 0), (1, 1, 1), facetregions=[1, 2, 3, 4, 5, 6])
    rect3d(b, (0.3, 0.3, 0.3), (0.7, 0.7, 0.7), facetregions=[7] * 6)
    b.holepoint(0.5, 0.5, 0.5)
    b.cellregion(1)
    b.maxvolume(0.01)
    b.regionpoint(0.1, 0.1, 0.1)
    assert b.maybe_watertight()

    grid = b.build()
    assert grid.num_cells > 0
    assert not _inside(grid.cell_centroids(), (0.3, 0.3, 0.3), (0.7, 0.7, 0.7)).any()
    assert set(grid.bfaceregions.tolist()) == {1, 2, 3, 4, 5, 6, 7}
    np.testing.assert_allclose(_volumes(grid).sum(), 1.0 - 0.4 ** 3, rtol=1e-10)


def test_nested_regions():
    b = SimplexGridBuilder("tetgen")
    rect3d(b, (0, 0, 0), (1, 1, 1), facetregions=[1, 2, 3, 4, 5, 6])
    rect3d(b, (0.3, 0.3, 0.3), (0.7, 0.7, 0.7), facetregions=[7] * 6)
    b.cellregion(1)
    b.maxvolume(0.01)
    b.regionpoint(0.1, 0.1, 0.1)
    b.cellregion(2)
    b.maxvolume(0.001)
    b.regionpoint(0.5, 0.5, 0.5)

    grid = b.build()
    assert set(grid.cellregions.tolist()) == {1, 2}
    inner = _inside(grid.cell_centroids(), (0.3, 0.3, 0.3), (0.7, 0.7, 0.7))
    assert np.all(grid.cellregions[inner] == 2)
    assert np.all(grid.cellregions[~inner] == 1)
    assert 7 in grid.bfaceregions.tolist()


def test_sphere():
    b = SimplexGridBuilder("tetgen")
    sphere(b, (0.0, 0.0, 0.0), 1.0, nref=3)
    b.cellregion(1)
    b.maxvolume(0.05)
    b.regionpoint(0.0, 0.0, 0.0)
    grid = b.build()
    assert grid.num_cells > 0
    r = np.linalg.norm(grid.coordinates, axis=0)
    assert r.max() <= 1.0 + 1e-10
