# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""Tests for the tapering window."""

import numpy as np
import sfsynth as sf
from pytest_cases import parametrize


def test_open_all_active():
    """Test the flanks of an open array where all secondary sources are active."""
    win = sf.TaperingWindow(tapwinlen=0.2).window(np.ones(11), closed=False)
    np.testing.assert_allclose(win, [0.5] + [1.0] * 9 + [0.5])


def test_flank_shape():
    """Test that the flanks rise with half a Hann window and are symmetric."""
    win = sf.TaperingWindow(tapwinlen=0.8).window(np.ones(5))
    np.testing.assert_allclose(win, [0.25, 0.75, 1.0, 0.75, 0.25])


def test_flank_matches_hann_window():
    """Test that each flank is the rising half of a Hann window with zero end points removed."""
    win = sf.TaperingWindow(tapwinlen=0.4).window(np.ones(41))
    flank = np.hanning(19)[1:9]
    np.testing.assert_allclose(win[:8], flank)
    np.testing.assert_allclose(win[-8:], flank[::-1])
    np.testing.assert_array_equal(win[8:-8], 1.0)


def test_closed_all_active():
    """Test that a closed array without inactive secondary sources is not tapered."""
    win = sf.TaperingWindow(tapwinlen=0.5).window(np.ones(16), closed=True)
    np.testing.assert_array_equal(win, 1.0)


def test_closed_wrap_around():
    """Test that a run of active secondary sources wraps around in closed arrays."""
    activity = np.zeros(8)
    activity[[6, 7, 0, 1, 2]] = 1.0
    win = sf.TaperingWindow(tapwinlen=0.8).window(activity, closed=True)
    expected = np.zeros(8)
    expected[[6, 7, 0, 1, 2]] = [0.25, 0.75, 1.0, 0.75, 0.25]
    np.testing.assert_allclose(win, expected)


def test_open_no_wrap_around():
    """Test that runs at both ends of an open array are tapered separately."""
    activity = np.zeros(8)
    activity[[6, 7, 0, 1, 2]] = 1.0
    win = sf.TaperingWindow(tapwinlen=0.8).window(activity, closed=False)
    np.testing.assert_allclose(win[[0, 1, 2]], [0.5, 1.0, 0.5])
    np.testing.assert_allclose(win[[6, 7]], [0.5, 0.5])
    np.testing.assert_array_equal(win[3:6], 0.0)


@parametrize('closed', [False, True])
def test_several_runs(closed):
    """Test that every run gets its own window and inactive sources stay zero."""
    activity = np.array([0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0], dtype=float)
    win = sf.TaperingWindow(tapwinlen=0.8).window(activity, closed=closed)
    np.testing.assert_allclose(win[1:6], [0.25, 0.75, 1.0, 0.75, 0.25])
    np.testing.assert_allclose(win[8:13], [0.25, 0.75, 1.0, 0.75, 0.25])
    np.testing.assert_array_equal(win[activity == 0], 0.0)


def test_no_window():
    """Test that the window equals the binary activity if tapering is switched off."""
    activity = np.array([0.0, 1.0, 1.0, 0.0, 1.0])
    np.testing.assert_array_equal(sf.TaperingWindow(usetapwin=False).window(activity), activity)
    np.testing.assert_array_equal(sf.TaperingWindow(tapwinlen=0.0).window(activity), activity)


def test_all_inactive():
    """Test that an array without active secondary sources gets a zero window."""
    np.testing.assert_array_equal(sf.TaperingWindow().window(np.zeros(6), closed=True), 0.0)
