"""
SimplexGrid value object and its meshio hand-off.
"""

import numpy as np
import pytest

from simplexfactory import SimplexGrid
from simplexfactory.errors import MarshallingError


def _two_triangles():
    return SimplexGrid.from_arrays(
        coordinates=[[0, 1, 1, 0], [0, 0, 1, 1]],
        cellnodes=[[1, 1], [2, 3], [3, 4]],
        cellregions=[1, 2],
        bfacenodes=[[1, 2, 3, 4], [2, 3, 4, 1]],
        bfaceregions=[1, 2, 3, 4],
    )


def test_dtypes_and_sizes():
    g = _two_triangles()
    assert g.coordinates.dtype == np.float64
    assert g.cellnodes.dtype == np.int32
    assert g.bfaceregions.dtype == np.int32
    assert (g.dim_space, g.num_nodes, g.num_cells, g.num_bfaces) == (2, 4, 2, 4)


def test_arrays_are_read_only():
    g = _two_triangles()
    with pytest.raises(ValueError):
        g.coordinates[0, 0] = 5.0
    with pytest.raises(ValueError):
        g.cellnodes[0, 0] = 2


def test_cell_centroids():
    c = _two_triangles().cell_centroids()
    np.testing.assert_allclose(c, [[2 / 3, 1 / 3], [1 / 3, 2 / 3]])


@pytest.mark.parametrize("kwargs", [
    {"cellnodes": [[1, 1], [2, 3]]},
    {"cellnodes": [[1, 1], [2, 3], [3, 5]]},
    {"cellregions": [1]},
    {"bfacenodes": [[1, 2, 3, 4]]},
    {"bfaceregions": [1, 2]},
])
def test_invalid_arrays(kwargs):
    args = dict(
        coordinates=[[0, 1, 1, 0], [0, 0, 1, 1]],
        cellnodes=[[1, 1], [2, 3], [3, 4]],
        cellregions=[1, 2],
        bfacenodes=[[1, 2, 3, 4], [2, 3, 4, 1]],
        bfaceregions=[1, 2, 3, 4],
    )
    args.update(kwargs)
    with pytest.raises(MarshallingError):
        SimplexGrid.from_arrays(**args)


def test_to_meshio():
    pytest.importorskip("meshio")
    m = _two_triangles().to_meshio()
    assert m.points.shape == (4, 2)
    assert m.cells[0].type == "triangle"
    np.testing.assert_array_equal(m.cells[0].data, [[0, 1, 2], [0, 2, 3]])
    assert m.cells[1].type == "line"
    np.testing.assert_array_equal(m.cell_data["region"][0], [1, 2])


def test_from_arrays_leaves_inputs_writable():
    coords = np.array([[0.0, 1.0, 1.0, 0.0], [0.0, 0.0, 1.0, 1.0]])
    cells = np.array([[1, 1], [2, 3], [3, 4]], dtype=np.int32)
    cellregions = np.array([1, 2], dtype=np.int32)
    bfaces = np.array([[1, 2, 3, 4], [2, 3, 4, 1]], dtype=np.int32)
    bfaceregions = np.array([1, 2, 3, 4], dtype=np.int32)
    g = SimplexGrid.from_arrays(coords, cells, cellregions, bfaces, bfaceregions)

    for arr in (coords, cells, cellregions, bfaces, bfaceregions):
        assert arr.flags.writeable
    coords[0, 0] = 9.0
    assert g.coordinates[0, 0] == 0.0
    assert not g.coordinates.flags.writeable
