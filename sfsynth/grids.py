# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements grids of observation points at which sound fields are evaluated.

.. autosummary::
    :toctree: generated/

    Grid
    RectGrid
    LineGrid
    PointGrid
"""

# imports from other packages
from abc import abstractmethod

from numpy import array, float64, full, linspace, meshgrid, newaxis, vstack
from scipy.linalg import norm
from traits.api import (
    ABCHasStrictTraits,
    CArray,
    Float,
    Int,
    Property,
    Tuple,
    cached_property,
    property_depends_on,
)

# sfsynth imports
from .internal import digest


class Grid(ABCHasStrictTraits):
    """
    Abstract base class for grid geometries.

    A grid provides the positions of its points as a ``(3, size)`` array and the :attr:`shape`
    into which values computed at these points are arranged.
    """

    #: The total number of grid points. (read-only)
    size = Property(desc='overall number of grid points')

    #: The shape of the grid, represented as a tuple. (read-only)
    shape = Property(desc='grid shape as tuple')

    #: The grid positions represented as a (3, :attr:`size`) array of :class:`floats<float>`.
    #: (read-only)
    pos = Property(desc='x, y, z positions of grid points')

    #: A unique identifier for the grid, based on its properties. (read-only)
    digest = Property

    @abstractmethod
    def _get_digest(self):
        """Generate a unique digest for the grid."""

    # 'digest' is a placeholder for other properties in derived classes, necessary to trigger the
    # depends on mechanism
    @property_depends_on(['digest'])
    @abstractmethod
    def _get_size(self):
        """Return the number of grid points."""

    @property_depends_on(['digest'])
    @abstractmethod
    def _get_shape(self):
        """Return the shape of the grid as a Tuple."""

    @property_depends_on(['digest'])
    @abstractmethod
    def _get_pos(self):
        """Return the grid positions as array of floats, shape (3, :attr:`size`)."""


class RectGrid(Grid):
    """
    Provides a 2D Cartesian grid in a plane of constant z.

    The grid is defined by the lower and upper x- and y-limits, the z-coordinate and the spacing
    :attr:`increment`. Values on the grid are arranged with shape ``(nxsteps, nysteps)``, i.e. the
    first index runs along x.
    """

    #: The lower x-limit that defines the grid. Default is ``-2``.
    x_min = Float(-2.0, desc='minimum  x-value')

    #: The upper x-limit that defines the grid. Default is ``2``.
    x_max = Float(2.0, desc='maximum  x-value')

    #: The lower y-limit that defines the grid. Default is ``-2``.
    y_min = Float(-2.0, desc='minimum  y-value')

    #: The upper y-limit that defines the grid. Default is ``2``.
    y_max = Float(2.0, desc='maximum  y-value')

    #: The constant z-coordinate of the grid plane. Default is ``0.0``.
    z = Float(0.0, desc='position on z-axis')

    #: The side length of each cell. Default is ``0.05``.
    increment = Float(0.05, desc='step size')

    #: Number of grid points along x-axis. (read-only)
    nxsteps = Property(desc='number of grid points along x-axis')

    #: Number of grid points along y-axis. (read-only)
    nysteps = Property(desc='number of grid points along y-axis')

    #: A unique identifier for the grid, based on its properties. (read-only)
    digest = Property(
        depends_on=['x_min', 'x_max', 'y_min', 'y_max', 'z', 'increment'],
    )

    @property_depends_on(['nxsteps', 'nysteps'])
    def _get_size(self):
        return self.nxsteps * self.nysteps

    @property_depends_on(['nxsteps', 'nysteps'])
    def _get_shape(self):
        return (self.nxsteps, self.nysteps)

    @property_depends_on(['x_min', 'x_max', 'increment'])
    def _get_nxsteps(self):
        i = abs(self.increment)
        if i != 0:
            return int(round((abs(self.x_max - self.x_min) + i) / i))
        return 1

    @property_depends_on(['y_min', 'y_max', 'increment'])
    def _get_nysteps(self):
        i = abs(self.increment)
        if i != 0:
            return int(round((abs(self.y_max - self.y_min) + i) / i))
        return 1

    @cached_property
    def _get_digest(self):
        return digest(self)

    @property_depends_on(['x_min', 'x_max', 'y_min', 'y_max', 'z', 'increment'])
    def _get_pos(self):
        x, y = meshgrid(
            linspace(self.x_min, self.x_max, self.nxsteps),
            linspace(self.y_min, self.y_max, self.nysteps),
            indexing='ij',
        )
        return vstack((x.ravel(), y.ravel(), full(self.size, self.z)))


class LineGrid(Grid):
    """
    Define a grid of evenly spaced points along a straight line.

    The grid starts at :attr:`loc` and runs :attr:`length` in :attr:`direction`.

    Examples
    --------
    >>> from sfsynth import LineGrid
    >>> grid = LineGrid(loc=(0.0, 0.0, 0.0), direction=(1.0, 0.0, 0.0), length=4, num_points=5)
    >>> grid.pos
    array([[0., 1., 2., 3., 4.],
           [0., 0., 0., 0., 0.],
           [0., 0., 0., 0., 0.]])
    """

    #: Starting point of the grid in 3D space. Default is ``(0.0, 0.0, 0.0)``.
    loc = Tuple((0.0, 0.0, 0.0))

    #: A vector defining the orientation of the line in 3D space. Default is ``(1.0, 0.0, 0.0)``.
    direction = Tuple((1.0, 0.0, 0.0), desc='line orientation')

    #: Total length of the line. Default is ``1.0``.
    length = Float(1, desc='length of the line')

    #: Number of grid points along the line. Default is ``1``.
    num_points = Int(1, desc='number of points on the line')

    #: A unique identifier for the grid, based on its properties. (read-only)
    digest = Property(
        depends_on=['loc', 'direction', 'length', 'num_points'],
    )

    @cached_property
    def _get_digest(self):
        return digest(self)

    @property_depends_on(['num_points'])
    def _get_size(self):
        return self.num_points

    @property_depends_on(['num_points'])
    def _get_shape(self):
        return (self.num_points,)

    @property_depends_on(['num_points', 'length', 'direction', 'loc'])
    def _get_pos(self):
        loc = array(self.loc, dtype=float64)[:, newaxis]
        direc_n = array(self.direction, dtype=float64) / norm(self.direction)
        return loc + direc_n[:, newaxis] * linspace(0, self.length, self.num_points)


class PointGrid(Grid):
    """
    Arbitrary set of points.

    The positions are set directly through :attr:`pos`, as a ``(3, n)`` array.
    """

    _gpos = CArray(dtype=float64, shape=(3, None), desc='x, y, z position of all grid points')

    #: A unique identifier for the grid, based on its properties. (read-only)
    digest = Property(depends_on=['_gpos'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    @property_depends_on(['_gpos'])
    def _get_size(self):
        return self.pos.shape[-1]

    @property_depends_on(['_gpos'])
    def _get_shape(self):
        return (self.pos.shape[-1],)

    @property_depends_on(['_gpos'])
    def _get_pos(self):
        return self._gpos

    def _set_pos(self, pos):
        self._gpos = pos
