# -*- coding: utf-8 -*-
# simplexfactory/mesh/grid.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Unified simplex mesh produced by every backend. Arrays are column-major in the
sense of "one entity per column" and all connectivity is 1-based:

    coordinates   (dim, N)     float64
    cellnodes     (dim+1, M)   int32
    cellregions   (M,)         int32
    bfacenodes    (dim, B)     int32
    bfaceregions  (B,)         int32

Main Tasks:
-----------
   - Coerce and validate generator output into the layout above.
   - Freeze the arrays (read-only) so a grid is an immutable value.
   - Hand the mesh to meshio's in-memory model for downstream consumers.
"""

from dataclasses import dataclass

import numpy as np

from ..errors import MarshallingError

_CELL_TYPES = {1: "line", 2: "triangle", 3: "tetra"}
_FACE_TYPES = {1: "vertex", 2: "line", 3: "triangle"}


def _as(arr, dtype, ndim: int) -> np.ndarray:
    # private copy; only the copy is frozen
    a = np.array(arr, dtype=dtype, order="C", copy=True)
    if a.ndim != ndim:
        raise MarshallingError(f"Expected a {ndim}-d array, got shape {a.shape}.")
    return a


@dataclass(frozen=True, eq=False)
class SimplexGrid:
    coordinates: np.ndarray
    cellnodes: np.ndarray
    cellregions: np.ndarray
    bfacenodes: np.ndarray
    bfaceregions: np.ndarray

    @classmethod
    def from_arrays(cls, coordinates, cellnodes, cellregions, bfacenodes, bfaceregions) -> "SimplexGrid":
        """
        Build a grid, coercing dtypes (float64 coordinates, int32 indices/markers).
        Every array is copied; the arrays passed in stay writable.
        """
        return cls(
            coordinates=_as(coordinates, np.float64, 2),
            cellnodes=_as(cellnodes, np.int32, 2),
            cellregions=_as(cellregions, np.int32, 1),
            bfacenodes=_as(bfacenodes, np.int32, 2),
            bfaceregions=_as(bfaceregions, np.int32, 1),
        )

    def __post_init__(self):
        dim, n = self.coordinates.shape
        if self.cellnodes.shape[0] != dim + 1:
            raise MarshallingError(
                "cellnodes must have dim+1 rows.", {"dim": dim, "shape": self.cellnodes.shape}
            )
        if self.bfacenodes.shape[0] != dim:
            raise MarshallingError(
                "bfacenodes must have dim rows.", {"dim": dim, "shape": self.bfacenodes.shape}
            )
        if self.cellregions.shape[0] != self.cellnodes.shape[1]:
            raise MarshallingError("cellregions length must equal the number of cells.")
        if self.bfaceregions.shape[0] != self.bfacenodes.shape[1]:
            raise MarshallingError("bfaceregions length must equal the number of boundary faces.")
        for nodes in (self.cellnodes, self.bfacenodes):
            if nodes.size and (nodes.min() < 1 or nodes.max() > n):
                raise MarshallingError("Node index out of range 1..N.", {"N": n})
        for arr in (self.coordinates, self.cellnodes, self.cellregions,
                    self.bfacenodes, self.bfaceregions):
            arr.flags.writeable = False

    # --------------------
    # Sizes
    # --------------------
    @property
    def dim_space(self) -> int:
        return int(self.coordinates.shape[0])

    @property
    def num_nodes(self) -> int:
        return int(self.coordinates.shape[1])

    @property
    def num_cells(self) -> int:
        return int(self.cellnodes.shape[1])

    @property
    def num_bfaces(self) -> int:
        return int(self.bfacenodes.shape[1])

    def cell_centroids(self) -> np.ndarray:
        """(dim, M) array of cell barycenters."""
        return self.coordinates[:, self.cellnodes - 1].mean(axis=1)

    def to_meshio(self):
        """
        Convert to a `meshio.Mesh` (0-based, one entity per row).

        Cells and boundary faces become two cell blocks; region numbers are
        carried in the "region" cell data.
        """
        import meshio

        dim = self.dim_space
        return meshio.Mesh(
            points=self.coordinates.T.copy(),
            cells=[
                (_CELL_TYPES[dim], (self.cellnodes.T - 1).astype(np.int64)),
                (_FACE_TYPES[dim], (self.bfacenodes.T - 1).astype(np.int64)),
            ],
            cell_data={"region": [self.cellregions.copy(), self.bfaceregions.copy()]},
        )

    def __repr__(self) -> str:
        return "SimplexGrid(dim={}, nodes={}, cells={}, bfaces={})".format(
            self.dim_space, self.num_nodes, self.num_cells, self.num_bfaces
        )
