# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""Tests for the spherical sampling grids."""

import numpy as np
import pytest
import sfsynth as sf
from pytest_cases import parametrize


@parametrize('grid', [sf.SpiralSphereGrid(), sf.EquiangularSphereGrid()], ids=['spiral', 'equiangular'])
@parametrize('n', [8, 72, 200])
def test_unit_points(grid, n):
    """Test that all points lie on the unit sphere."""
    points, weights = grid.sample(n)
    assert points.shape == (n, 3)
    assert weights.shape == (n,)
    np.testing.assert_allclose(np.linalg.norm(points, axis=1), 1.0)


def test_spiral_equal_area():
    """Test that the spiral grid has uniform weights on the full sphere."""
    grid = sf.SpiralSphereGrid()
    assert grid.equal_area
    points, weights = grid.sample(500)
    np.testing.assert_allclose(weights, 4 * np.pi / 500)
    # points are spread over the full sphere, from pole to pole
    assert points[0, 2] < -0.99
    assert points[-1, 2] > 0.99
    np.testing.assert_allclose(points[:, 2].mean(), 0.0, atol=1e-12)


def test_equiangular_weights():
    """Test that the equiangular grid needs the area element to integrate the sphere."""
    grid = sf.EquiangularSphereGrid(num_elevation=30)
    assert not grid.equal_area
    points, weights = grid.sample(1800)
    np.testing.assert_allclose(weights.sum(), 2 * np.pi**2)
    cos_elevation = np.sqrt(1 - points[:, 2] ** 2)
    np.testing.assert_allclose((weights * cos_elevation).sum(), 4 * np.pi, rtol=1e-3)


def test_equiangular_rings():
    """Test the automatic number of elevation rings."""
    points, _ = sf.EquiangularSphereGrid().sample(50)
    assert np.unique(np.round(points[:, 2], 12)).size == 5


@parametrize('n', [0, 7])
def test_equiangular_invalid(n):
    """Test that the number of points must be a multiple of the number of rings."""
    with pytest.raises(sf.ConfigurationError):
        sf.EquiangularSphereGrid(num_elevation=2).sample(n)


def test_spiral_invalid():
    """Test that the spiral grid needs at least one point."""
    with pytest.raises(sf.ConfigurationError):
        sf.SpiralSphereGrid().sample(0)
