# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements monochromatic driving functions of wave field synthesis.

.. autosummary::
    :toctree: generated/

    DrivingFunction
"""

from numpy import array, asarray, einsum, exp, float64, newaxis, pi, sqrt
from scipy.linalg import norm
from traits.api import CArray, Dict, Enum, HasStrictTraits, Property, cached_property

from .environments import Environment
from .errors import ConfigurationError
from .internal import digest


def _drive_pw(pos, normals, xs, k):
    # 3D, plane wave in direction xs
    return 2j * k * einsum('i,ij->j', xs, normals) * exp(-1j * k * einsum('i,ij->j', xs, pos))


def _drive_ps(pos, normals, xs, k):
    # 3D, point source at xs
    d = pos - xs[:, newaxis]
    r = norm(d, axis=0)
    return (1 / r + 1j * k) * einsum('ij,ij->j', d, normals) / r**2 * exp(-1j * k * r) / (2 * pi)


def _drive_fs(pos, normals, xs, k):
    # 3D, focused source at xs, time reversed point source
    d = xs[:, newaxis] - pos
    r = norm(d, axis=0)
    return (1j * k - 1 / r) * einsum('ij,ij->j', d, normals) / r**2 * exp(1j * k * r) / (2 * pi)


class DrivingFunction(HasStrictTraits):
    """
    Driving functions of wave field synthesis for plane waves, point sources and focused sources.

    In 3D, the driving function is the doubled directional gradient of the virtual source field
    along the secondary source normal. For 2.5D synthesis with a linear or planar loop of point
    sources it is corrected by

    .. math:: D_{2.5D}(x_0, \\omega) = \\frac{g_0}{\\sqrt{i k}} D_{3D}(x_0, \\omega),

    so that the amplitude is correct at the reference point :attr:`xref`. For plane waves and
    focused sources :math:`g_0 = \\sqrt{2\\pi |x_\\mathrm{ref} - x_0|}`, for point sources at
    distance :math:`r` from the secondary source
    :math:`g_0 = \\sqrt{2\\pi |x_\\mathrm{ref} - x_0| r / (|x_\\mathrm{ref} - x_0| + r)}`.
    """

    #: Synthesis dimension, ``'2.5D'`` (default) or ``'3D'``.
    dimension = Enum('2.5D', '3D', desc='synthesis dimension')

    #: Reference point at which the 2.5D synthesis is amplitude correct. Default is the origin.
    xref = CArray(dtype=float64, shape=(3,), value=array((0.0, 0.0, 0.0)), desc='reference point')

    #: 3D driving functions for the source types ``'pw'``, ``'ps'`` and ``'fs'``.
    _drive_funcs = Dict(
        {'pw': _drive_pw, 'ps': _drive_ps, 'fs': _drive_fs},
        desc='dictionary of driving functions',
    )

    #: A unique identifier for the driving function. (read-only)
    digest = Property(depends_on=['dimension', 'xref'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _amplitude_correction(self, pos, xs, src, k):
        dref = norm(self.xref[:, newaxis] - pos, axis=0)
        if src == 'ps':
            r = norm(pos - xs[:, newaxis], axis=0)
            g0 = sqrt(2 * pi * dref * r / (dref + r))
        else:
            g0 = sqrt(2 * pi * dref)
        return g0 / sqrt(1j * k)

    def driving(self, pos, normals, source, f, env=None):
        """
        Return the driving signals of secondary sources.

        Parameters
        ----------
        pos : :class:`numpy.ndarray` of :class:`floats<float>`
            Positions of the secondary sources, shape ``(3, n)``.
        normals : :class:`numpy.ndarray` of :class:`floats<float>`
            Unit normals pointing into the listening area, shape ``(3, n)``.
        source : :class:`~sfsynth.sources.VirtualSource`
            The virtual source.
        f : :class:`float`
            Frequency in Hz.
        env : :class:`~sfsynth.environments.Environment`, optional
            Provides the speed of sound. Default is a free field with ``c = 343 m/s``.

        Returns
        -------
        :class:`numpy.ndarray` of :class:`complex`
            Driving signals, shape ``(n,)``.
        """
        try:
            func = self._drive_funcs[source.src]
        except KeyError as err:
            msg = f'No driving function for source type {source.src!r}.'
            raise ConfigurationError(msg) from err
        pos = asarray(pos, dtype=float64)
        xs = asarray(source.xs, dtype=float64)
        k = (env or Environment()).wavenumber(f)
        d = func(pos, asarray(normals, dtype=float64), xs, k)
        if self.dimension == '2.5D':
            d = d * self._amplitude_correction(pos, xs, source.src, k)
        return d
