# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""Tests for the virtual sources."""

import numpy as np
import pytest
import sfsynth as sf
from pytest_cases import parametrize

GRID = sf.LineGrid(loc=(0, -2, 0), direction=(0, 1, 0), length=1, num_points=11)


def test_plane_wave_field():
    """Test the field of a plane wave with an unnormalised direction."""
    pw = sf.PlaneWave(direction=(0.0, -2.0, 0.0))
    np.testing.assert_allclose(pw.nk, (0.0, -1.0, 0.0))
    np.testing.assert_allclose(pw.xs, pw.nk)
    k = 2 * np.pi * 1000.0 / 343.0
    p = pw.field(GRID, 1000.0)
    assert p.shape == GRID.shape
    np.testing.assert_allclose(p, np.exp(1j * k * GRID.pos[1]))


def test_plane_wave_zero_direction():
    """Test that a plane wave needs a direction."""
    with pytest.raises(sf.ConfigurationError):
        sf.PlaneWave(direction=(0.0, 0.0, 0.0)).nk  # noqa: B018


@parametrize('cls', [sf.PointSource, sf.FocusedSource])
def test_point_like_field(cls):
    """Test that point-like sources radiate with the Green's function of the environment."""
    env = sf.Environment(c=340.0)
    src = cls(loc=(0.0, 1.0, 0.0))
    np.testing.assert_array_equal(src.xs, (0.0, 1.0, 0.0))
    np.testing.assert_allclose(src.field(GRID, 500.0, env), env.transfer(src.loc, GRID.pos, 500.0))


def test_field_shape():
    """Test that fields have the shape of the grid."""
    grid = sf.RectGrid(increment=0.5)
    assert sf.PointSource().field(grid, 200.0).shape == (9, 9)


@parametrize(
    ('src', 'cls'),
    [('pw', sf.PlaneWave), ('ps', sf.PointSource), ('fs', sf.FocusedSource)],
)
def test_virtual_source(src, cls):
    """Test the creation of virtual sources from their short code."""
    source = sf.virtual_source((0.0, -1.0, 0.0), src)
    assert type(source) is cls
    assert source.src == src
    np.testing.assert_allclose(source.xs, (0.0, -1.0, 0.0))


def test_virtual_source_unknown():
    """Test that unknown source codes are rejected."""
    with pytest.raises(sf.ConfigurationError, match='ls'):
        sf.virtual_source((0.0, 0.0, 0.0), 'ls')


def test_digest():
    """Test that the digest follows the defining traits."""
    pw = sf.PlaneWave()
    digest = pw.digest
    pw.direction = (1.0, 0.0, 0.0)
    assert pw.digest != digest
    ps = sf.PointSource()
    digest = ps.digest
    ps.loc = (1.0, 0.0, 0.0)
    assert ps.digest != digest
