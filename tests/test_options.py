"""
Mesh options: defaults, validation, layering and flag synthesis.
"""

import math

import pytest

from simplexfactory import SimplexGridBuilder
from simplexfactory.errors import ConfigurationError, OptionError
from simplexfactory.mesh.base import Backend
from simplexfactory.mesh.options import blend_options, default_options, make_flags


def _flags(backend, **kwargs):
    return make_flags(blend_options(default_options(backend), **kwargs), backend)


def test_triangle_default_flags():
    assert _flags("triangle") == "pq20aADQ"


def test_tetgen_default_flags():
    assert _flags(Backend.TETGEN) == "pqaADO1Q"


def test_flags_are_deterministic():
    assert _flags("triangle", maxvolume=0.05) == _flags("triangle", maxvolume=0.05)


def test_finite_maxvolume_is_rendered():
    assert _flags("triangle", maxvolume=0.05) == "pq20a0.05ADQ"


def test_minangle_changes_only_quality_flag():
    base = _flags("triangle")
    assert _flags("triangle", minangle=30) == base.replace("q20", "q30")
    assert _flags("triangle", minangle=32.5) == base.replace("q20", "q32.5")


def test_tetgen_min_dihedral():
    assert _flags("tetgen", minangle=10) == "pq/10aADO1Q"


def test_switches_off():
    assert _flags("triangle", quality=False) == "paADQ"
    assert _flags("triangle", volumecontrol=False) == "pq20ADQ"
    assert _flags("triangle", attributes=False, confdelaunay=False, quiet=False) == "pq20a"


def test_switches_on():
    assert _flags("triangle", refine=True, nosteiner=True, verbose=True, check=True) == "prq20aADYQVC"
    assert _flags("tetgen", optlevel=3) == "pqaADO3Q"


def test_addflags_appended():
    assert _flags("triangle", addflags="e").endswith("Qe")


def test_flags_replaces_everything():
    assert _flags("triangle", flags="pYQ", maxvolume=0.1) == "pYQ"


def test_default_options_are_copies():
    opts = default_options("triangle")
    opts["minangle"] = 33
    assert default_options("triangle")["minangle"] == 20.0
    assert default_options("tetgen")["minangle"] == 0.0
    assert default_options("triangle")["maxvolume"] == math.inf


def test_blend_does_not_modify_base():
    base = default_options("triangle")
    out = blend_options(base, maxvolume=0.5)
    assert out["maxvolume"] == 0.5
    assert base["maxvolume"] == math.inf


@pytest.mark.parametrize("kwargs", [
    {"nonsense": 1},
    {"minangle": 60},
    {"minangle": -1},
    {"minangle": "steep"},
    {"optlevel": 11},
    {"maxvolume": 0.0},
    {"maxvolume": -1.0},
    {"unsuitable": 5},
    {"addflags": 3},
    {"flags": 3},
])
def test_invalid_options_rejected(kwargs):
    with pytest.raises(OptionError):
        blend_options(default_options("triangle"), **kwargs)


def test_option_error_is_configuration_error():
    with pytest.raises(ConfigurationError):
        blend_options(default_options("triangle"), nonsense=1)


def test_builder_options_persist_and_overrides_do_not(fake_triangle):
    b = SimplexGridBuilder("triangle", engine=fake_triangle)
    b.point(0, 0)
    b.point(1, 0)
    b.point(0, 1)
    b.options(maxvolume=0.1)
    assert b.flags() == "pq20a0.1ADQ"

    b.build(minangle=30)
    assert fake_triangle.calls[-1][1] == "pq30a0.1ADQ"

    b.build()
    assert fake_triangle.calls[-1][1] == "pq20a0.1ADQ"


def test_builder_rejects_unknown_option():
    b = SimplexGridBuilder("triangle")
    with pytest.raises(OptionError):
        b.options(minimumangle=20)
    assert b.flags() == "pq20aADQ"
