# -*- coding: utf-8 -*-
# simplexfactory/mesh/generators/_arrays.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
Shape/dtype normalization shared by the pack functions of all backends.
Arrays are accepted in either orientation and turned into "one entity per
column"; dtype conversion is skipped when the input already matches.
"""

from typing import Tuple

import numpy as np

from ...errors import MarshallingError


def as_columns(arr, nrows: int, dtype, name: str) -> np.ndarray:
    """
    Return `arr` as a (nrows, k) array of `dtype`, transposing (k, nrows) input.
    A square (nrows, nrows) input is taken as already one entity per column.

    None or an empty input gives a (nrows, 0) array.
    """
    if arr is None:
        return np.zeros((nrows, 0), dtype=dtype)
    a = np.asarray(arr)
    if a.size == 0:
        return np.zeros((nrows, 0), dtype=dtype)
    if a.ndim != 2:
        raise MarshallingError(f"{name} must be a 2-d array.", {"shape": a.shape})
    if a.shape[0] != nrows and a.shape[1] == nrows:
        a = a.T
    if a.shape[0] != nrows:
        raise MarshallingError(
            f"{name} must have {nrows} rows (or columns).", {"shape": a.shape}
        )
    if a.dtype != dtype:
        if np.issubdtype(dtype, np.integer) and not np.issubdtype(a.dtype, np.integer):
            if not np.all(np.mod(a, 1) == 0):
                raise MarshallingError(f"{name} must contain integers.")
        a = a.astype(dtype)
    return a


def as_vector(arr, dtype, name: str) -> np.ndarray:
    """Return `arr` as a 1-d array of `dtype`; (k, 1) and (1, k) are flattened."""
    if arr is None:
        return np.zeros(0, dtype=dtype)
    a = np.asarray(arr)
    if a.ndim == 2 and 1 in a.shape:
        a = a.reshape(-1)
    if a.ndim != 1:
        raise MarshallingError(f"{name} must be a 1-d array.", {"shape": a.shape})
    if a.dtype != dtype:
        a = a.astype(dtype)
    return a


def zero_based(cols: np.ndarray, npoints: int) -> np.ndarray:
    """
    Turn 1-based (k, M) connectivity into the engines' 0-based (M, k) layout.
    """
    if cols.size and (cols.min() < 1 or cols.max() > npoints):
        raise MarshallingError(
            "Point index out of range 1..N.",
            {"N": npoints, "min": int(cols.min()), "max": int(cols.max())},
        )
    return np.ascontiguousarray(cols.T - 1, dtype=np.int32)


def split_regions(regionpoints, regionnumbers, regionvolumes, dim: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split the combined region-marker sequence by the number == 0 hole convention.

    Returns
    -------
    regions : (R, dim+2) float64
        Rows [x.., number, volume] in input order.
    holes : (H, dim) float64
        Hole locations in input order.
    """
    pts = as_columns(regionpoints, dim, np.float64, "regionpoints")
    numbers = as_vector(regionnumbers, np.int32, "regionnumbers")
    volumes = as_vector(regionvolumes, np.float64, "regionvolumes")
    nreg = pts.shape[1]
    if numbers.shape[0] != nreg or volumes.shape[0] != nreg:
        raise MarshallingError(
            "regionnumbers and regionvolumes must match the number of regionpoints.",
            {"nregionpoints": nreg, "nregionnumbers": numbers.shape[0],
             "nregionvolumes": volumes.shape[0]},
        )

    is_hole = numbers == 0
    regions = np.empty((int((~is_hole).sum()), dim + 2), dtype=np.float64)
    regions[:, :dim] = pts[:, ~is_hole].T
    regions[:, dim] = numbers[~is_hole]
    regions[:, dim + 1] = volumes[~is_hole]
    holes = np.ascontiguousarray(pts[:, is_hole].T)
    return regions, holes
