# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements sampling grids with quadrature weights on the unit sphere.

.. autosummary::
    :toctree: generated/

    SphericalGrid
    SpiralSphereGrid
    EquiangularSphereGrid
"""

from abc import abstractmethod

from numpy import (
    arange,
    arccos,
    column_stack,
    cos,
    full,
    pi,
    repeat,
    sin,
    sqrt,
    tile,
    zeros_like,
)
from traits.api import ABCHasStrictTraits, Bool, Constant, Int, Property, cached_property

from .errors import ConfigurationError
from .internal import digest


class SphericalGrid(ABCHasStrictTraits):
    """
    Abstract base class for quadrature grids on the unit sphere.

    A grid maps a requested number of points to unit vectors and quadrature weights. The
    :attr:`equal_area` flag states whether the weights already include the spherical area element;
    :class:`~sfsynth.secondarysources.SphericalArray` applies a ``cos(elevation)`` correction to
    the weights of grids that do not.
    """

    #: ``True`` if the weights are area-correct, i.e. sum to :math:`4\pi`. (read-only)
    equal_area = Bool(True)

    #: A unique identifier for the grid, based on its properties. (read-only)
    digest = Property

    @abstractmethod
    def _get_digest(self):
        """Generate a unique digest for the grid."""

    @abstractmethod
    def sample(self, n):
        """
        Return ``n`` points and their weights.

        Parameters
        ----------
        n : :class:`int`
            Number of points.

        Returns
        -------
        points : :class:`numpy.ndarray` of :class:`floats<float>`
            Unit vectors, shape ``(n, 3)``.
        weights : :class:`numpy.ndarray` of :class:`floats<float>`
            Quadrature weights, shape ``(n,)``.
        """


class SpiralSphereGrid(SphericalGrid):
    """
    Spiral points on the full sphere with uniform weights.

    The points run along a spiral from the south to the north pole. Point ``k`` lies at the center
    of the ``k``-th of ``n`` bands of equal area, so all weights are :math:`4\\pi/n`. The azimuth
    increment follows the spiral rule of Saff and Kuijlaars, which keeps neighbouring points at
    roughly equal distance.
    """

    equal_area = Constant(True)

    digest = Property(depends_on=['equal_area'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def sample(self, n):
        if n < 1:
            msg = f'Spherical grid needs at least one point, got {n}.'
            raise ConfigurationError(msg)
        h = -1.0 + (2 * arange(n) + 1.0) / n
        theta = arccos(h)
        phi = zeros_like(theta)
        for i, hk in enumerate(h[1:]):
            phi[i + 1] = (phi[i] + 3.6 / sqrt(n * (1 - hk * hk))) % (2 * pi)
        points = column_stack((sin(theta) * cos(phi), sin(theta) * sin(phi), cos(theta)))
        return points, full(n, 4 * pi / n)


class EquiangularSphereGrid(SphericalGrid):
    """
    Regular grid in elevation and azimuth.

    Elevations are the midpoints of :attr:`num_elevation` equal intervals of ``[-pi/2, pi/2]``,
    azimuths are evenly spaced in ``[0, 2pi)``. The weights are the angular cell sizes
    :math:`\\Delta\\theta\\,\\Delta\\phi` and do *not* contain the area element, hence
    :attr:`equal_area` is ``False``.
    """

    equal_area = Constant(False)

    #: Number of elevation rings. If ``0`` (default), ``round(sqrt(n / 2))`` rings are used,
    #: which gives about twice as many points per ring as there are rings.
    num_elevation = Int(0, desc='number of elevation rings')

    digest = Property(depends_on=['equal_area', 'num_elevation'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def sample(self, n):
        nel = self.num_elevation or max(int(round(sqrt(n / 2))), 1)
        if n < 1 or n % nel != 0:
            msg = f'Number of points ({n}) must be a positive multiple of the number of elevation rings ({nel}).'
            raise ConfigurationError(msg)
        naz = n // nel
        elevation = repeat(-0.5 * pi + (arange(nel) + 0.5) * pi / nel, naz)
        azimuth = tile(2 * pi * arange(naz) / naz, nel)
        points = column_stack((cos(elevation) * cos(azimuth), cos(elevation) * sin(azimuth), sin(elevation)))
        return points, full(n, (pi / nel) * (2 * pi / naz))
