# -*- coding: utf-8 -*-
# tests/conftest.py

"""
Shared fixtures: stand-in engines that record what the backend hands them,
plus small reference geometries.
"""

import numpy as np
import pytest

from simplexfactory import SimplexGridBuilder


class FakeTriangle:
    """Minimal `triangulate` engine returning two triangles on the unit square."""

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def triangulate(self, tri, flags):
        for key, arr in tri.items():
            assert arr.flags.writeable, f"{key} handed to the engine is read-only"
        self.calls.append((tri, flags))
        if self.error is not None:
            raise self.error
        return {
            "vertices": np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]),
            "triangles": np.array([[0, 1, 2], [0, 2, 3]], dtype=np.int32),
            "triangle_attributes": np.array([[1.0], [1.0]]),
            "segments": np.array([[0, 1], [1, 2], [2, 3], [3, 0]], dtype=np.int32),
            "segment_markers": np.array([[1], [2], [3], [4]], dtype=np.int32),
        }


class FakeTetGenModule:
    """Exposes a `TetGen` class so the TetGen backend accepts it as engine."""

    class TetGen:
        def __init__(self, points, faces):
            self.points = points
            self.faces = faces

        def add_region(self, number, point, max_vol=0.0):
            pass

        def add_hole(self, point):
            pass

        def tetrahedralize(self, switches=""):
            raise AssertionError("not expected to run")


@pytest.fixture
def fake_triangle():
    return FakeTriangle()


@pytest.fixture
def square_builder():
    """Unit square, one facet region per side, region point with volume 0.01."""
    b = SimplexGridBuilder("triangle")
    p1 = b.point(0, 0)
    p2 = b.point(1, 0)
    p3 = b.point(1, 1)
    p4 = b.point(0, 1)
    for region, (i, j) in enumerate(((p1, p2), (p2, p3), (p3, p4), (p4, p1)), start=1):
        b.facetregion(region)
        b.facet(i, j)
    b.cellregion(1)
    b.maxvolume(0.01)
    b.regionpoint(0.5, 0.5)
    return b
