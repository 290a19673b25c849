# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements tapering windows that reduce truncation artifacts at the ends of active arrays.

.. autosummary::
    :toctree: generated/

    TaperingWindow
"""

from numpy import asarray, diff, flatnonzero, float64, hanning, ones, roll, zeros
from traits.api import Bool, HasStrictTraits, Property, Range, cached_property

from .internal import digest


class TaperingWindow(HasStrictTraits):
    """
    Raised-cosine tapering over the active secondary sources.

    Every run of consecutive active secondary sources gets a window that rises and falls with half
    a Hann window at both ends. The flanks together cover :attr:`tapwinlen` of the run. For closed
    geometries a run may wrap around from the last to the first secondary source; if all
    secondary sources of a closed geometry are active there are no ends and the window is ``1``.
    The first and last source of a run keep a small non-zero gain.
    """

    #: Apply the window. If ``False``, the window equals the activity. Default is ``True``.
    usetapwin = Bool(True, desc='use tapering window')

    #: Fraction of every run covered by the two flanks. Default is ``0.2``.
    tapwinlen = Range(0.0, 1.0, 0.2, desc='relative length of the tapering flanks')

    #: A unique identifier for the window settings. (read-only)
    digest = Property(depends_on=['usetapwin', 'tapwinlen'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _run_window(self, length):
        win = ones(length)
        nflank = int(round(self.tapwinlen * length / 2))
        if nflank > 0:
            flank = hanning(2 * nflank + 3)[1 : nflank + 1]
            win[:nflank] = flank
            win[length - nflank :] = flank[::-1]
        return win

    def window(self, activity, closed=False):
        """
        Return the tapering window for a given activity.

        Parameters
        ----------
        activity : array_like
            Activity of the secondary sources in array order, shape ``(n,)``. Entries greater than
            zero mark active sources.
        closed : :class:`bool`
            ``True`` if the secondary sources form a closed loop. Default is ``False``.

        Returns
        -------
        :class:`numpy.ndarray` of :class:`floats<float>`
            Window values in ``[0, 1]``, shape ``(n,)``. Inactive secondary sources get ``0``.
        """
        active = asarray(activity) > 0
        n = active.size
        if not self.usetapwin:
            return active.astype(float64)
        if not active.any():
            return zeros(n)
        if closed and active.all():
            return ones(n)
        # for closed geometries start the search at an inactive source, so no run wraps around
        shift = int(flatnonzero(~active)[0]) if closed else 0
        rolled = roll(active, -shift)
        edges = diff(rolled.astype(int), prepend=0, append=0)
        starts = flatnonzero(edges == 1)
        stops = flatnonzero(edges == -1)
        rolled_win = zeros(n)
        for start, stop in zip(starts, stops):
            rolled_win[start:stop] = self._run_window(stop - start)
        return roll(rolled_win, shift)
