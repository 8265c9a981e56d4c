# -*- coding: utf-8 -*-
# simplexfactory/geometry/points.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Point registry with tolerance-based deduplication. Coordinates are stored
column-wise in a growable (dim, capacity) array; a dict of spatial bins keyed
on quantized coordinates answers "is there already a point within tol?"
without scanning the whole list.

Main Tasks:
-----------
   - Insert a point and return its stable 1-based index.
   - Reuse the index of an existing point closer than `tol`.
   - Expose a read-only (dim, N) view of the stored coordinates.

Notes:
------
   - Bin edge length is 2*tol, so a match can only live in the 3^dim bins
     around the query key.
   - Indices are never reused or renumbered; the list only grows.
"""

import itertools
import math
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..errors import DimensionMismatch

_INITIAL_CAPACITY = 16


class ElasticColumns:
    """
    Column-wise growable float array of fixed height; capacity doubles on overflow.
    """

    def __init__(self, nrows: int, capacity: int = _INITIAL_CAPACITY):
        self._data = np.empty((nrows, max(1, capacity)), dtype=np.float64)
        self._ncols = 0

    def __len__(self) -> int:
        return self._ncols

    def append(self, column: np.ndarray) -> int:
        """Append one column and return the new column count."""
        if self._ncols == self._data.shape[1]:
            grown = np.empty((self._data.shape[0], 2 * self._data.shape[1]), dtype=np.float64)
            grown[:, : self._ncols] = self._data[:, : self._ncols]
            self._data = grown
        self._data[:, self._ncols] = column
        self._ncols += 1
        return self._ncols

    def column(self, i: int) -> np.ndarray:
        return self._data[:, i]

    @property
    def view(self) -> np.ndarray:
        """Read-only view of the filled part."""
        v = self._data[:, : self._ncols]
        v.flags.writeable = False
        return v


class BinnedPointList:
    """
    Growable point list with merge-by-proximity.

    Parameters
    ----------
    dim : int
        Space dimension (1, 2 or 3), fixed for the lifetime of the list.
    tol : float
        Two points closer than `tol` (Euclidean) are considered identical.
    """

    def __init__(self, dim: int, tol: float = 1.0e-12):
        if dim not in (1, 2, 3):
            raise ValueError(f"dim must be 1, 2 or 3 (got {dim}).")
        if not (tol > 0.0):
            raise ValueError(f"tol must be > 0 (got {tol}).")
        self.dim = int(dim)
        self.tol = float(tol)
        self._binsize = 2.0 * self.tol
        self._points = ElasticColumns(self.dim)
        self._bins: Dict[Tuple[int, ...], List[int]] = {}
        self._offsets = list(itertools.product((-1, 0, 1), repeat=self.dim))

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> np.ndarray:
        """Read-only (dim, N) view of the stored coordinates."""
        return self._points.view

    def _key(self, x: np.ndarray) -> Tuple[int, ...]:
        with np.errstate(over="ignore", invalid="ignore"):
            q = x / self._binsize
        if not np.all(np.isfinite(q)):
            raise ValueError(
                f"Point {x.tolist()} cannot be binned with tol={self.tol:g} "
                "(non-finite coordinate or |coordinate| too large for tol)."
            )
        return tuple(math.floor(c) for c in q)

    def find(self, coords: Sequence[float]) -> int:
        """
        Return the 1-based index of a stored point within `tol` of `coords`,
        or 0 if there is none.
        """
        x = self._as_point(coords)
        return self._find(x, self._key(x))

    def _find(self, x: np.ndarray, key: Tuple[int, ...]) -> int:
        for off in self._offsets:
            nb = tuple(k + o for k, o in zip(key, off))
            for idx in self._bins.get(nb, ()):
                if np.linalg.norm(self._points.column(idx - 1) - x) < self.tol:
                    return idx
        return 0

    def insert(self, coords: Sequence[float], check: bool = True) -> int:
        """
        Insert a point and return its 1-based index.

        Parameters
        ----------
        coords : sequence of float
            Point coordinates, length must equal `dim`.
        check : bool
            If True, return the index of an existing point closer than `tol`
            instead of appending a duplicate.

        Raises
        ------
        DimensionMismatch
            If `len(coords) != dim`.
        ValueError
            If a coordinate is NaN/inf or so large that coordinate/(2*tol)
            overflows.
        """
        x = self._as_point(coords)
        key = self._key(x)
        if check:
            found = self._find(x, key)
            if found:
                return found

        idx = self._points.append(x)
        self._bins.setdefault(key, []).append(idx)
        return idx

    def _as_point(self, coords: Sequence[float]) -> np.ndarray:
        x = np.asarray(coords, dtype=np.float64).ravel()
        if x.shape[0] != self.dim:
            raise DimensionMismatch(
                "Point has wrong number of coordinates.",
                {"dim": self.dim, "got": int(x.shape[0])},
            )
        return x
