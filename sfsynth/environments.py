# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements free-field sound propagation models.

.. autosummary::
    :toctree: generated/

    Environment
    LineSourceEnvironment
    dist_mat
"""

import numba as nb
from numpy import array, ascontiguousarray, atleast_2d, complex128, empty, exp, float64, full, isscalar, nan, newaxis, pi, sqrt
from scipy.special import hankel2
from traits.api import Float, HasStrictTraits, Property, cached_property

from .internal import digest

f64ro = nb.types.Array(nb.types.float64, 2, 'C', readonly=True)
f32ro = nb.types.Array(nb.types.float32, 2, 'C', readonly=True)


@nb.njit([(f64ro, f64ro), (f64ro, f32ro), (f32ro, f64ro), (f32ro, f32ro)], cache=True, fastmath=True)
def dist_mat(gpos, mpos):  # pragma: no cover
    """
    Compute distance matrix. (accelerated with numba).

    Given an `(3, N)` array of the locations of observation points and an `(3, M)` array of the
    locations of secondary sources, both in 3D cartesian coordinates, return the `(N, M)` matrix
    of the distances between each secondary source and each observation point.

    Parameters
    ----------
    gpos : :class:`numpy.ndarray` of :class:`floats<float>`
        The locations of `N` observation points, shape `(3, N)`.

    mpos : :class:`numpy.ndarray` of :class:`floats<float>`
        The locations of `M` secondary sources, shape `(3, M)`.

    Returns
    -------
    :class:`numpy.ndarray` of :class:`floats<float>`
        Matrix of the distances, shape `(N, M)`.
    """
    _, M = mpos.shape
    _, N = gpos.shape
    rm = empty((N, M), dtype=gpos.dtype)
    TWO = rm.dtype.type(2.0)  # make sure to have a float32 or float 64 literal
    m0 = mpos[0]
    m1 = mpos[1]
    m2 = mpos[2]
    for n in range(N):
        g0 = gpos[0, n]
        g1 = gpos[1, n]
        g2 = gpos[2, n]
        for m in range(M):
            rm[n, m] = sqrt((g0 - m0[m]) ** TWO + (g1 - m1[m]) ** TWO + (g2 - m2[m]) ** TWO)
    return rm


class Environment(HasStrictTraits):
    """
    Homogeneous free field in which secondary sources radiate as point sources.

    The transfer function from a secondary source at :math:`x_0` to a point :math:`x` is the
    free-field Green's function

    .. math:: G(x - x_0, \\omega) = \\frac{e^{-i k |x - x_0|}}{4 \\pi |x - x_0|},

    with the wave number :math:`k = \\omega / c`.
    """

    #: A unique identifier based on the environment properties. (read-only)
    digest = Property(depends_on=['c'])

    #: The speed of sound in the environment. Default is ``343.0``, which corresponds to the
    #: approximate speed of sound at 20°C in dry air at sea level, if the unit is m/s.
    c = Float(343.0, desc='speed of sound')

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _r(self, gpos, mpos=0.0):
        # Distances of the N points in gpos (3, N) to the M points in mpos (3, M). A scalar mpos
        # stands for the origin. Returns shape (N,) for a single point in mpos, else (N, M).
        if isscalar(mpos):
            mpos = array((0, 0, 0), dtype=float64)[:, newaxis]
        rm = dist_mat(ascontiguousarray(gpos, dtype=float64), ascontiguousarray(mpos, dtype=float64))
        if rm.shape[1] == 1:
            rm = rm[:, 0]
        return rm

    def wavenumber(self, f):
        """Return the wave number for frequency ``f`` in Hz."""
        return 2 * pi * f / self.c

    def _green(self, k, r):
        return exp(-1j * k * r) / (4 * pi * r)

    def transfer(self, x0, gpos, f):
        """
        Calculate the transfer functions from secondary sources to observation points.

        Parameters
        ----------
        x0 : :class:`numpy.ndarray` of :class:`floats<float>`
            Position of one secondary source, shape ``(3,)``, or of ``M`` sources, shape
            ``(3, M)``.
        gpos : :class:`numpy.ndarray` of :class:`floats<float>`
            Observation points, shape ``(3, N)``.
        f : :class:`float`
            Frequency in Hz.

        Returns
        -------
        :class:`numpy.ndarray` of :class:`complex`
            Transfer functions, shape ``(N,)`` for a single source, else ``(N, M)``.
            Observation points that coincide with a source get ``nan``, as the transfer
            function is singular there.
        """
        x0 = array(x0, dtype=float64)
        single = x0.ndim == 1
        r = atleast_2d(self._r(gpos, x0.reshape(3, -1)).T).T
        g = full(r.shape, nan, dtype=complex128)
        valid = r > 0
        g[valid] = self._green(self.wavenumber(f), r[valid])
        return g[:, 0] if single else g


class LineSourceEnvironment(Environment):
    """
    Two-dimensional free field in which secondary sources radiate as line sources.

    The secondary sources are infinitely long lines parallel to the z-axis with the transfer
    function

    .. math:: G(x - x_0, \\omega) = -\\frac{i}{4} H_0^{(2)}(k |x - x_0|).

    Distances are measured in the x-y plane.
    """

    def _r(self, gpos, mpos=0.0):
        gpos = array(gpos, dtype=float64)
        gpos[2] = 0.0
        if not isscalar(mpos):
            mpos = array(mpos, dtype=float64)
            mpos[2] = 0.0
        return super()._r(gpos, mpos)

    def _green(self, k, r):
        return -0.25j * hankel2(0, k * r)
