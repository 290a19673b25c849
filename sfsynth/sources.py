# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements the virtual sources whose sound field is to be synthesized.

.. autosummary::
    :toctree: generated/

    VirtualSource
    PlaneWave
    PointSource
    FocusedSource
    virtual_source
"""

from abc import abstractmethod

from numpy import array, dot, exp, float64
from scipy.linalg import norm
from traits.api import ABCHasStrictTraits, CArray, Constant, Property, cached_property

from .environments import Environment
from .errors import ConfigurationError
from .internal import digest


class VirtualSource(ABCHasStrictTraits):
    """
    Abstract base class for virtual sources.

    Every virtual source has a short code :attr:`src` (``'pw'``, ``'ps'`` or ``'fs'``) and a
    vector :attr:`xs`, which is the propagation direction of a plane wave or the position of a
    point-like source.
    """

    #: Short code of the source type. (read-only)
    src = Constant('')

    #: Direction (plane waves) or position (point-like sources), shape ``(3,)``. (read-only)
    xs = Property

    #: A unique identifier for the source, based on its properties. (read-only)
    digest = Property

    @abstractmethod
    def _get_digest(self):
        """Generate a unique digest for the source."""

    @abstractmethod
    def _get_xs(self):
        """Return the direction or position of the source."""

    @abstractmethod
    def field(self, grid, f, env=None):
        """
        Return the monochromatic sound field of the source itself.

        Parameters
        ----------
        grid : :class:`~sfsynth.grids.Grid`
            Observation points.
        f : :class:`float`
            Frequency in Hz.
        env : :class:`~sfsynth.environments.Environment`, optional
            Propagation model. Default is a free field with ``c = 343 m/s``.

        Returns
        -------
        :class:`numpy.ndarray` of :class:`complex`
            Sound pressure with the shape of the grid.
        """


class PlaneWave(VirtualSource):
    """Plane wave travelling in :attr:`direction` with unit amplitude at the origin."""

    src = Constant('pw')

    #: Propagation direction, need not be normalised. Default is ``(0, -1, 0)``.
    direction = CArray(dtype=float64, shape=(3,), value=array((0.0, -1.0, 0.0)), desc='propagation direction')

    #: Normalised propagation direction. (read-only)
    nk = Property(depends_on=['direction'])

    digest = Property(depends_on=['direction'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    @cached_property
    def _get_nk(self):
        length = norm(self.direction)
        if length == 0:
            msg = 'Plane wave direction must not be the zero vector.'
            raise ConfigurationError(msg)
        return self.direction / length

    def _get_xs(self):
        return self.nk

    def field(self, grid, f, env=None):
        env = env or Environment()
        return exp(-1j * env.wavenumber(f) * dot(self.nk, grid.pos)).reshape(grid.shape)


class PointSource(VirtualSource):
    """Monopole at :attr:`loc`, radiating with the Green's function of the environment."""

    src = Constant('ps')

    #: Coordinates ``(x, y, z)`` of the source. Default is ``(0.0, 2.5, 0.0)``.
    loc = CArray(dtype=float64, shape=(3,), value=array((0.0, 2.5, 0.0)), desc='source location')

    digest = Property(depends_on=['loc'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _get_xs(self):
        return self.loc

    def field(self, grid, f, env=None):
        env = env or Environment()
        return env.transfer(self.loc, grid.pos, f).reshape(grid.shape)


class FocusedSource(PointSource):
    """
    Focused source at :attr:`loc`, i.e. a point source located inside the listening area.

    The secondary sources emit a wave that converges towards :attr:`loc` and diverges behind it.
    Behind the focus the field equals that of a point source at :attr:`loc`, which is what
    :meth:`field` returns.
    """

    src = Constant('fs')

    #: Coordinates ``(x, y, z)`` of the focus. Default is ``(0.0, 0.5, 0.0)``.
    loc = CArray(dtype=float64, shape=(3,), value=array((0.0, 0.5, 0.0)), desc='focus location')


#: Virtual source classes by their short code.
SOURCES = {'pw': PlaneWave, 'ps': PointSource, 'fs': FocusedSource}


def virtual_source(xs, src):
    """
    Create a virtual source from its short code.

    Parameters
    ----------
    xs : array_like
        Propagation direction (``'pw'``) or position (``'ps'``, ``'fs'``), shape ``(3,)``.
    src : :class:`str`
        Short code of the source type, one of ``'pw'``, ``'ps'`` and ``'fs'``.

    Returns
    -------
    :class:`VirtualSource`
        The virtual source.

    Raises
    ------
    ConfigurationError
        If ``src`` is not a known source type.
    """
    try:
        cls = SOURCES[src]
    except KeyError as err:
        msg = f'{src!r} is not a known virtual source type, use one of {", ".join(SOURCES)}.'
        raise ConfigurationError(msg) from err
    if cls is PlaneWave:
        return PlaneWave(direction=xs)
    return cls(loc=xs)
