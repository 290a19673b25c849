# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""Tests for Grid classes."""

import numpy as np
import sfsynth as sf
from pytest_cases import fixture, parametrize_with_cases

from tests.cases.test_grid_cases import Grids


@parametrize_with_cases('grid', cases=Grids)
def test_grid_size(grid):
    """
    Test if the size of the grid matches the number of grid points.

    Parameters
    ----------
    grid : sfsynth.grids.Grid
        Grid instance to be tested
    """
    assert grid.size == grid.pos.shape[-1], 'Size of grid does not match number of grid points'
    assert np.prod(grid.shape) == grid.size, 'Shape of grid does not match number of grid points'


@parametrize_with_cases('grid', cases=Grids)
def test_grid_bounds(grid):
    """Test that the grid contains the point (0, -1, 0) and stays within the case bounds."""
    assert np.any(np.all(np.isclose(grid.pos.T, (0, -1, 0)), axis=1)), 'Grid does not contain (0, -1, 0)'
    assert np.all(grid.pos.min(axis=1) >= (-1, -2, -1))
    assert np.all(grid.pos.max(axis=1) <= (1, -1, 1))


@fixture(scope='module')
def rect_grid():
    """Fixture for creating a rectangular grid with 5 x 3 points."""
    return sf.RectGrid(x_min=-1, x_max=1, y_min=0, y_max=1, z=0.5, increment=0.5)


def test_rect_grid_layout(rect_grid):
    """Test that the first index of the grid shape runs along x."""
    assert rect_grid.shape == (5, 3)
    x = rect_grid.pos[0].reshape(rect_grid.shape)
    y = rect_grid.pos[1].reshape(rect_grid.shape)
    np.testing.assert_allclose(x[:, 0], np.linspace(-1, 1, 5))
    np.testing.assert_allclose(y[0], np.linspace(0, 1, 3))
    np.testing.assert_array_equal(rect_grid.pos[2], 0.5)


def test_line_grid():
    """Test a line grid along an unnormalised direction."""
    grid = sf.LineGrid(loc=(1, 0, 0), direction=(0, 2, 0), length=2, num_points=3)
    np.testing.assert_allclose(grid.pos, [[1, 1, 1], [0, 1, 2], [0, 0, 0]])


def test_point_grid():
    """Test that a point grid returns the positions it was given."""
    pos = np.array([[0, 1, 0, -1], [1, 0, -1, 0], [0, 0, 0, 0]], dtype=float)
    grid = sf.PointGrid(pos=pos)
    np.testing.assert_array_equal(grid.pos, pos)
    assert grid.shape == (4,)
    digest = grid.digest
    grid.pos = pos[:, :2]
    assert grid.size == 2
    assert grid.digest != digest
