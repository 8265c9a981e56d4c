"""
SimplexGridBuilder: construction, point/facet bookkeeping, markers,
packing and the build path against stand-in engines.
"""

import logging
import sys
import types

import numpy as np
import pytest

from simplexfactory import SimplexGridBuilder
from simplexfactory.errors import ConfigurationError, DimensionMismatch
from simplexfactory.mesh.base import Backend
from simplexfactory.mesh.generators import TetGenIO

from conftest import FakeTetGenModule, FakeTriangle


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("generator", [None, "quad", 2])
def test_bad_generator(generator):
    with pytest.raises(ConfigurationError):
        SimplexGridBuilder(generator)


def test_generator_name_is_case_insensitive():
    b = SimplexGridBuilder("Triangle")
    assert b.is_triangle and not b.is_tetgen
    assert b.dim_space == 2


def test_tetgen_builder():
    b = SimplexGridBuilder(Backend.TETGEN)
    assert b.is_tetgen
    assert b.dim_space == 3


def test_engine_without_capability():
    with pytest.raises(ConfigurationError):
        SimplexGridBuilder("triangle", engine=types.SimpleNamespace())
    with pytest.raises(ConfigurationError):
        SimplexGridBuilder("tetgen", engine=FakeTriangle())


# ---------------------------------------------------------------------------
# Points and facets
# ---------------------------------------------------------------------------

def test_point_forms_and_dedup():
    b = SimplexGridBuilder("triangle")
    assert b.point(0, 0) == 1
    assert b.point((0, 0)) == 1
    assert b.point(np.array([1.0, 0.0])) == 2
    assert b.points.shape == (2, 2)


def test_checkexisting_false():
    b = SimplexGridBuilder("triangle", checkexisting=False)
    b.point(0, 0)
    assert b.point(0, 0) == 2


def test_tol_merges_close_points():
    b = SimplexGridBuilder("triangle", tol=1.0e-3)
    b.point(0, 0)
    assert b.point(1.0e-4, 0) == 1


def test_point_wrong_arity():
    b = SimplexGridBuilder("triangle")
    with pytest.raises(DimensionMismatch):
        b.point(0, 0, 0)
    assert b.points.shape == (2, 0)


def test_facet_returns_count_and_tags_region(square_builder):
    b = square_builder
    assert b.facets == ((1, 2), (2, 3), (3, 4), (4, 1))
    np.testing.assert_array_equal(b.facetregions, [1, 2, 3, 4])
    b.facetregion(9)
    assert b.facet(1, 3) == 5
    assert b.facetregions[-1] == 9


def test_facet_arity_2d():
    b = SimplexGridBuilder("triangle")
    for xy in ((0, 0), (1, 0), (1, 1)):
        b.point(*xy)
    with pytest.raises(DimensionMismatch):
        b.facet(1, 2, 3)
    with pytest.raises(DimensionMismatch):
        b.facet(1)
    assert b.facets == ()


def test_facet_arity_3d():
    b = SimplexGridBuilder("tetgen")
    for xyz in ((0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)):
        b.point(*xyz)
    with pytest.raises(DimensionMismatch):
        b.facet(1, 2)
    assert b.facet(1, 2, 3) == 1
    assert b.facet([1, 2, 4, 3]) == 2


def test_facet_index_out_of_range():
    b = SimplexGridBuilder("triangle")
    b.point(0, 0)
    b.point(1, 0)
    with pytest.raises(ValueError):
        b.facet(1, 3)
    with pytest.raises(ValueError):
        b.facet(0, 1)
    assert b.facets == ()
    assert len(b.facetregions) == 0


def test_facet_from_coordinates():
    b = SimplexGridBuilder("triangle")
    assert b.facet((0, 0), (1, 0)) == 1
    assert b.facet((1, 0), (1, 1)) == 2
    assert b.points.shape == (2, 3)
    assert b.facets == ((1, 2), (2, 3))


def test_facet_from_bad_coordinates_does_not_mutate():
    b = SimplexGridBuilder("triangle")
    with pytest.raises(DimensionMismatch):
        b.facet((0, 0), (1, 0, 0))
    assert b.points.shape == (2, 0)
    assert b.facets == ()


def test_polyfacet_has_no_arity_check():
    b = SimplexGridBuilder("triangle")
    for xy in ((0, 0), (1, 0), (1, 1)):
        b.point(*xy)
    assert b.polyfacet([1, 2, 3]) == 1
    with pytest.raises(ValueError):
        b.polyfacet([1, 4])


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

def test_region_and_hole_points():
    b = SimplexGridBuilder("triangle")
    b.cellregion(2)
    b.maxvolume(0.05)
    b.regionpoint(0.5, 0.5)
    b.holepoint((0.2, 0.2))
    b.regionpoint(0.8, 0.8)
    np.testing.assert_allclose(b.regionpoints, [[0.5, 0.2, 0.8], [0.5, 0.2, 0.8]])
    np.testing.assert_array_equal(b.regionnumbers, [2, 0, 2])
    np.testing.assert_allclose(b.regionvolumes, [0.05, 0.0, 0.05])


def test_regionpoint_wrong_arity():
    b = SimplexGridBuilder("tetgen")
    with pytest.raises(DimensionMismatch):
        b.regionpoint(0.5, 0.5)
    assert b.regionnumbers.shape == (0,)


def test_views_are_read_only(square_builder):
    with pytest.raises(ValueError):
        square_builder.facetregions[0] = 5
    with pytest.raises(ValueError):
        square_builder.regionvolumes[0] = 5.0


# ---------------------------------------------------------------------------
# Packing and build
# ---------------------------------------------------------------------------

def test_generator_input_triangle(square_builder):
    tri = square_builder.generator_input()
    assert tri["vertices"].shape == (4, 2)
    np.testing.assert_array_equal(tri["segments"], [[0, 1], [1, 2], [2, 3], [3, 0]])
    np.testing.assert_array_equal(tri["segment_markers"].ravel(), [1, 2, 3, 4])
    np.testing.assert_allclose(tri["regions"], [[0.5, 0.5, 1, 0.01]])
    assert "holes" not in tri


def test_generator_input_tetgen():
    b = SimplexGridBuilder("tetgen")
    p = [b.point(*xyz) for xyz in ((0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1))]
    b.facet(p[0], p[1], p[2])
    b.facet(p[0], p[1], p[3])
    b.facet(p[0], p[2], p[3])
    b.facet(p[1], p[2], p[3])
    b.holepoint(0.1, 0.1, 0.1)
    tio = b.generator_input()
    assert isinstance(tio, TetGenIO)
    assert len(tio.facets) == 4
    assert tio.holes.shape == (1, 3)


def test_build_with_injected_engine():
    engine = FakeTriangle()
    b = SimplexGridBuilder("triangle", engine=engine)
    for xy in ((0, 0), (1, 0), (1, 1), (0, 1)):
        b.point(*xy)
    b.facet(1, 2)
    grid = b.build(maxvolume=0.05)
    tri, flags = engine.calls[0]
    assert flags == "pq20a0.05ADQ"
    assert "segments" in tri
    assert grid.num_cells == 2
    assert grid.num_nodes == 4


def test_engine_error_is_logged_and_reraised(caplog):
    engine = FakeTriangle(error=RuntimeError("boom"))
    b = SimplexGridBuilder("triangle", engine=engine)
    for xy in ((0, 0), (1, 0), (1, 1)):
        b.point(*xy)
    with caplog.at_level(logging.ERROR, logger="simplexfactory"):
        with pytest.raises(RuntimeError, match="boom"):
            b.build()
    assert "incomplete geometry description" in caplog.text


def test_unsuitable_not_supported_by_tetgen():
    b = SimplexGridBuilder("tetgen", engine=FakeTetGenModule)
    for xyz in ((0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)):
        b.point(*xyz)
    b.facet(1, 2, 3)
    with pytest.raises(ConfigurationError):
        b.build(unsuitable=lambda *args: False)


def test_missing_engine_package(monkeypatch):
    monkeypatch.setitem(sys.modules, "triangle", None)
    b = SimplexGridBuilder("triangle")
    for xy in ((0, 0), (1, 0), (1, 1)):
        b.point(*xy)
    with pytest.raises(ConfigurationError):
        b.build()
