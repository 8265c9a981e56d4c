# -*- coding: utf-8 -*-
# simplexfactory/errors.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose
-------
Typed exceptions shared by the geometry and mesh layers. Each error carries a
human-readable message plus an optional context dict that is appended in compact
form by `__str__`, so failures deep inside marshalling still point at the
offending input.

Main Tasks
----------
    1. Define SimplexFactoryError(message, context) with a compact context suffix.
    2. Provide typed subclasses: DimensionMismatch, ConfigurationError,
       OptionError, MarshallingError.

Notes
-----
- Context is optional; long values are truncated for readability.
- Errors raised by the external mesh generators are NOT wrapped; they are
  re-raised unmodified after logging (see mesh.runner).
"""

__all__ = [
    "SimplexFactoryError",
    "DimensionMismatch",
    "ConfigurationError",
    "OptionError",
    "MarshallingError",
]


def _format_context(ctx):
    """Return a compact ' | key1=val1, key2=val2' string or '' if no context."""
    if not ctx:
        return ""
    parts = []
    for k in sorted(ctx.keys()):
        sv = repr(ctx[k])
        if len(sv) > 120:
            sv = sv[:117] + "..."
        parts.append("{}={}".format(k, sv))
    return " | " + ", ".join(parts)


class SimplexFactoryError(Exception):
    """
    Base class for all errors raised by simplexfactory itself.

    Parameters
    ----------
    message : str
        Human-readable error.
    context : dict, optional
        Extra fields to append in the string form (e.g., {"dim": 2, "got": 3}).
    """
    def __init__(self, message, context=None):
        self.context = dict(context) if context else None
        super(SimplexFactoryError, self).__init__(message)

    def __str__(self):
        base = super(SimplexFactoryError, self).__str__()
        return base + _format_context(self.context)


class DimensionMismatch(SimplexFactoryError, ValueError):
    """
    Coordinates or facet arity inconsistent with the builder's space dimension.
    Always raised before any state is mutated.
    """


class ConfigurationError(SimplexFactoryError):
    """
    Builder cannot be configured as requested:
      - no generator / unknown generator name
      - engine module lacking the required capability
      - option not supported by the selected backend
    """


class OptionError(ConfigurationError):
    """
    Per-key issues in mesh generation options:
      - unknown option names
      - out-of-range numeric values
    """


class MarshallingError(SimplexFactoryError, ValueError):
    """
    Malformed arrays passed to the low-level pack functions
    (wrong rank, wrong leading dimension, inconsistent lengths).
    """
