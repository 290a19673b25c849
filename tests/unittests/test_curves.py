# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""Tests for the parametrisation of the rounded box."""

import numpy as np
import pytest
import sfsynth as sf
from pytest_cases import parametrize


@parametrize('n', [1, 7, 64])
def test_circle(n):
    """Test that ratio 1 gives the unit circle with radial normals and uniform weights."""
    t = np.arange(n) / n
    x0, n0, w0 = sf.rounded_box(t, 1.0)
    expected = np.column_stack((np.cos(2 * np.pi * t), np.sin(2 * np.pi * t), np.zeros(n)))
    np.testing.assert_allclose(x0, expected, atol=1e-12)
    np.testing.assert_allclose(n0, expected, atol=1e-12)
    np.testing.assert_allclose(w0, 2 * np.pi / n)


def test_square_edges():
    """Test that ratio 0 gives the square with half side 1 and flat edges."""
    t = np.arange(32) / 32
    x0, n0, w0 = sf.rounded_box(t, 0.0)
    np.testing.assert_allclose(np.abs(x0[:, :2]).max(axis=1), 1.0)
    # first quarter: right edge up to the corner, then the upper edge
    np.testing.assert_allclose(x0[:5, 0], 1.0)
    np.testing.assert_allclose(x0[:5, 1], np.arange(5) / 4)
    np.testing.assert_allclose(n0[:4], np.tile((1.0, 0.0, 0.0), (4, 1)))
    np.testing.assert_allclose(w0, 8 / 32)


@parametrize('ratio', [0.0, 0.2, 0.5, 0.9, 1.0])
def test_perimeter(ratio):
    """Test that uniform weights add up to the perimeter."""
    n = 40
    _, _, w0 = sf.rounded_box(np.arange(n) / n, ratio)
    np.testing.assert_allclose(w0.sum(), 8 - 8 * ratio + 2 * np.pi * ratio)


@parametrize('ratio', [0.0, 0.3, 1.0])
def test_normals_orthogonal_to_curve(ratio):
    """Test that the normals are unit vectors perpendicular to the curve."""
    n = 400
    x0, n0, _ = sf.rounded_box(np.arange(n) / n, ratio)
    np.testing.assert_allclose(np.linalg.norm(n0, axis=1), 1.0)
    # central differences along the curve, away from the corners of the square
    tangent = np.roll(x0, -1, axis=0) - np.roll(x0, 1, axis=0)
    smooth = np.linalg.norm(np.roll(n0, -1, axis=0) - np.roll(n0, 1, axis=0), axis=1) < 1e-9
    dots = np.einsum('ij,ij->i', tangent, n0)
    np.testing.assert_allclose(dots[smooth], 0.0, atol=1e-12)


def test_periodic_parameter():
    """Test that the parameter is taken modulo 1."""
    t = np.array([0.1, 0.35, 0.6])
    a = sf.rounded_box(t, 0.4)
    b = sf.rounded_box(t + 2.0, 0.4)
    for va, vb in zip(a, b):
        np.testing.assert_allclose(va, vb, atol=1e-12)


def test_unevenly_spaced_weights():
    """Test that weights are half the distance between the neighbours."""
    t = np.array([0.0, 0.1, 0.5])
    _, _, w0 = sf.rounded_box(t, 1.0)
    np.testing.assert_allclose(w0, np.pi * np.array([0.6, 0.5, 0.9]))


@parametrize('ratio', [-0.1, 1.1])
def test_invalid_ratio(ratio):
    """Test that ratios outside [0, 1] are rejected."""
    with pytest.raises(sf.ConfigurationError):
        sf.rounded_box([0.0, 0.5], ratio)
