# -*- coding: utf-8 -*-
# simplexfactory/mesh/options.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose
-------
Mesh generation options and their translation into the control-flag string
understood by Triangle and TetGen. Options are layered: backend defaults, then
options persisted on a builder, then per-call overrides (highest precedence).

Main Tasks
----------
    1. Provide backend-specific defaults via `default_options`.
    2. Reject unknown keys and out-of-range values (`validate`).
    3. Merge option layers with simple overwrite semantics (`blend_options`).
    4. Render a deterministic flag string (`make_flags`).

Notes
-----
- Flag order is fixed: p r q a A D O Y Q V C, then `addflags`.
- `unsuitable` never appears in the flag string; the backend installs it
  as a callback around the engine call.
- `flags`, when not None, replaces the generated string entirely.
"""

import math
from typing import Any, Dict, Mapping

import numpy as np

from ..errors import OptionError
from .base import Backend, resolve_backend

__all__ = ["default_options", "validate", "blend_options", "make_flags", "DEFAULTS", "RANGES"]

# --------------------------
# Defaults
# --------------------------
_COMMON_DEFAULTS = {
    "plc": True,             # piecewise linear complex input (p)
    "refine": False,         # refine a previous mesh (r)
    "quality": True,         # quality mesh generation (q)
    "minangle": 20.0,        # Triangle: min angle in degrees; TetGen: min dihedral angle
    "volumecontrol": True,   # honour regional volume constraints (a)
    "maxvolume": math.inf,   # global max cell area/volume (a<value>)
    "attributes": True,      # propagate region numbers to cells (A)
    "confdelaunay": True,    # conforming Delaunay (D)
    "optlevel": 1,           # TetGen mesh optimization level (O<n>)
    "nosteiner": False,      # no Steiner points on the boundary (Y)
    "quiet": True,           # (Q)
    "verbose": False,        # (V)
    "check": False,          # consistency check of the result (C)
    "unsuitable": None,      # per-element refinement predicate
    "addflags": "",          # appended verbatim
    "flags": None,           # replaces the generated flag string
}

DEFAULTS = {
    Backend.TRIANGLE: dict(_COMMON_DEFAULTS),
    Backend.TETGEN: dict(_COMMON_DEFAULTS, minangle=0.0),
}

# key -> (min, max, inclusive_max)
RANGES = {
    "minangle": (0.0, 60.0, False),
    "optlevel": (0, 10, True),
}


def default_options(backend) -> Dict[str, Any]:
    """Return a fresh copy of the defaults for `backend`."""
    return dict(DEFAULTS[resolve_backend(backend)])


def _check_range(key: str, val: Any) -> None:
    if key not in RANGES:
        return
    lo, hi, inclusive = RANGES[key]
    try:
        fval = float(val)
    except (TypeError, ValueError):
        raise OptionError("Non-numeric value for {k}: {v!r}".format(k=key, v=val))
    ok = (lo <= fval <= hi) if inclusive else (lo <= fval < hi)
    if not ok:
        raise OptionError(
            "Out-of-range {k}: {v} (expected {lo} ≤ ... {ineq} {hi})".format(
                k=key, v=fval, lo=lo, ineq="≤" if inclusive else "<", hi=hi
            )
        )


def validate(options: Mapping[str, Any]) -> None:
    """
    Validate option names and values.

    Raises
    ------
    OptionError
        On unknown keys, out-of-range numbers, a non-positive `maxvolume`,
        a non-callable `unsuitable` or non-string flag options.
    """
    for k, v in options.items():
        if k not in _COMMON_DEFAULTS:
            raise OptionError(
                "Unknown mesh option {!r}.".format(k),
                {"known": sorted(_COMMON_DEFAULTS)},
            )
        _check_range(k, v)

    if "maxvolume" in options:
        try:
            vol = float(options["maxvolume"])
        except (TypeError, ValueError):
            raise OptionError("Non-numeric value for maxvolume: {!r}".format(options["maxvolume"]))
        if not vol > 0.0:
            raise OptionError("maxvolume must be > 0 (got {}).".format(vol))
    if options.get("unsuitable") is not None and not callable(options["unsuitable"]):
        raise OptionError("unsuitable must be callable or None.")
    if "addflags" in options and not isinstance(options["addflags"], str):
        raise OptionError("addflags must be a string.")
    if options.get("flags") is not None and not isinstance(options["flags"], str):
        raise OptionError("flags must be a string or None.")


def blend_options(base: Mapping[str, Any], **kwargs: Any) -> Dict[str, Any]:
    """
    Return a new dict with `kwargs` validated and laid over `base`.
    `base` is not modified.
    """
    validate(kwargs)
    out = dict(base)
    out.update(kwargs)
    return out


def _num(x: float) -> str:
    """Shortest positional decimal for `x` (no exponent, trailing zeros trimmed)."""
    return np.format_float_positional(float(x), trim="-")


def make_flags(options: Mapping[str, Any], backend) -> str:
    """
    Translate an option mapping into the backend's control-flag string.

    Parameters
    ----------
    options : Mapping[str, Any]
        Complete option set (defaults already blended in).
    backend : Backend or str
        Target generator.

    Returns
    -------
    str
        Flag string, e.g. "pq20aADQ" for the Triangle defaults.
    """
    backend = resolve_backend(backend)
    if options.get("flags") is not None:
        return str(options["flags"])

    flags = "p" if options["plc"] else ""
    if options["refine"]:
        flags += "r"

    if options["quality"]:
        minangle = float(options["minangle"])
        if backend is Backend.TETGEN:
            # q[radius-edge ratio]/[min dihedral]; keep TetGen's default ratio
            flags += "q" if minangle == 0.0 else "q/" + _num(minangle)
        else:
            flags += "q" + _num(minangle)

    maxvolume = float(options["maxvolume"])
    if maxvolume < math.inf:
        flags += "a" + _num(maxvolume)
    elif options["volumecontrol"]:
        flags += "a"

    if options["attributes"]:
        flags += "A"
    if options["confdelaunay"]:
        flags += "D"
    if backend is Backend.TETGEN:
        flags += "O%d" % int(options["optlevel"])
    if options["nosteiner"]:
        flags += "Y"
    if options["quiet"]:
        flags += "Q"
    if options["verbose"]:
        flags += "V"
    if options["check"]:
        flags += "C"

    return flags + options["addflags"]
