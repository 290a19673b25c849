# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements secondary source (loudspeaker) array geometries.

Every geometry provides a table of secondary sources with one row ``[x, y, z, nx, ny, nz, w]``
per loudspeaker: its position, its unit normal pointing towards the listening area and its
integration weight. For closed geometries consecutive rows are neighbours along the array, so
that windows can be taken cyclically.

.. autosummary::
    :toctree: generated/

    SecondarySources
    ParametricArray
    LinearArray
    CircularArray
    BoxArray
    RoundedBoxArray
    EdgeArray
    SphericalArray
    CustomArray
    check_secondary_sources
    secondary_sources_from_config
    secondary_source_positions
"""

from abc import abstractmethod
from collections.abc import Mapping
from os import PathLike

from numpy import (
    arange,
    arcsin,
    array,
    asarray,
    atleast_1d,
    clip,
    concatenate,
    cos,
    float64,
    isfinite,
    linspace,
    newaxis,
    pi,
    sin,
    sqrt,
    zeros,
)
from scipy.linalg import norm
from traits.api import (
    ABCHasStrictTraits,
    Bool,
    Callable,
    CArray,
    Constant,
    Dict,
    Enum,
    File,
    Float,
    Instance,
    Int,
    Property,
    Union,
    cached_property,
)
from traits.trait_errors import TraitError

from .curves import rounded_box
from .errors import ConfigurationError, FormatError
from .internal import digest
from .sofa import sofa_secondary_sources
from .sphericalgrids import SphericalGrid, SpiralSphereGrid

#: Column names of a secondary source table.
COLUMNS = ('x', 'y', 'z', 'nx', 'ny', 'nz', 'w')


def check_secondary_sources(x0):
    """
    Validate a secondary source table and return it with normalised normals.

    Parameters
    ----------
    x0 : array_like
        Table ``[x, y, z, nx, ny, nz, w]``, shape ``(n, 7)``.

    Returns
    -------
    :class:`numpy.ndarray` of :class:`floats<float>`
        Validated copy of the table with unit normals, shape ``(n, 7)``.

    Raises
    ------
    FormatError
        If the table is empty, has missing columns or non-finite entries, contains a zero-length
        normal or a negative weight.
    """
    try:
        x0 = array(x0, dtype=float64, ndmin=2)
    except (TypeError, ValueError) as err:
        msg = 'Secondary source table must be a numeric array.'
        raise FormatError(msg) from err
    if x0.ndim != 2 or x0.shape[0] == 0:
        msg = f'Secondary source table must be a non-empty (n, 7) array, got shape {x0.shape}.'
        raise FormatError(msg)
    if x0.shape[1] < len(COLUMNS):
        missing = ', '.join(COLUMNS[x0.shape[1] :])
        msg = f'Secondary source table is missing column(s) {missing}.'
        raise FormatError(msg)
    if x0.shape[1] > len(COLUMNS):
        msg = f'Secondary source table has {x0.shape[1]} columns, expected {len(COLUMNS)}.'
        raise FormatError(msg)
    for i, name in enumerate(COLUMNS):
        if not isfinite(x0[:, i]).all():
            msg = f'Secondary source table contains non-finite values in column {name}.'
            raise FormatError(msg)
    lengths = norm(x0[:, 3:6], axis=1)
    if (lengths == 0).any():
        msg = f'Secondary source table has zero-length normals (nx, ny, nz) in rows {(lengths == 0).nonzero()[0]}.'
        raise FormatError(msg)
    if (x0[:, 6] < 0).any():
        msg = 'Secondary source table contains negative weights in column w.'
        raise FormatError(msg)
    x0[:, 3:6] /= lengths[:, newaxis]
    return x0


class SecondarySources(ABCHasStrictTraits):
    """
    Abstract base class for secondary source geometries.

    The table :attr:`x0` is generated lazily and regenerated whenever a defining trait changes.
    It is read-only; derived views are available as :attr:`pos`, :attr:`normals` and
    :attr:`weights`, using the ``(3, n)`` layout of positions used throughout sfsynth.
    """

    #: ``True`` if the geometry is a closed loop (or surface), so that windows over the secondary
    #: sources wrap around. (read-only for all generated geometries)
    closed = Bool(False, desc='closed geometry')

    #: ``1`` if the normals point into the listening area, ``-1`` if they point away from it, as
    #: for the outward normals of the planar loops. (read-only for all generated geometries)
    orientation = Enum(1, -1, desc='orientation of the normals')

    #: Secondary source table ``[x, y, z, nx, ny, nz, w]``, shape ``(n, 7)``. (read-only)
    x0 = Property(depends_on=['digest'], desc='secondary source table')

    #: Positions, shape ``(3, n)``. (read-only)
    pos = Property(depends_on=['x0'], desc='x, y, z positions of secondary sources')

    #: Unit normals, shape ``(3, n)``. (read-only)
    normals = Property(depends_on=['x0'], desc='orientation of secondary sources')

    #: Unit normals oriented towards the listening area, shape ``(3, n)``. (read-only)
    facing = Property(depends_on=['x0', 'orientation'], desc='normals towards the listening area')

    #: Integration weights, shape ``(n,)``. (read-only)
    weights = Property(depends_on=['x0'], desc='integration weights')

    #: Number of secondary sources. (read-only)
    num_sources = Property(depends_on=['x0'], desc='number of secondary sources')

    #: A unique identifier for the geometry, based on its properties. (read-only)
    digest = Property

    @abstractmethod
    def _get_digest(self):
        """Generate a unique digest for the geometry."""

    @abstractmethod
    def _generate(self):
        """Return a freshly generated table, shape ``(n, 7)``."""

    @cached_property
    def _get_x0(self):
        x0 = self._generate()
        x0.flags.writeable = False
        return x0

    @cached_property
    def _get_pos(self):
        return self.x0[:, :3].T

    @cached_property
    def _get_normals(self):
        return self.x0[:, 3:6].T

    @cached_property
    def _get_facing(self):
        return self.orientation * self.normals

    @cached_property
    def _get_weights(self):
        return self.x0[:, 6]

    @cached_property
    def _get_num_sources(self):
        return self.x0.shape[0]


class ParametricArray(SecondarySources):
    """
    Abstract base class for geometries generated from center, size and number of sources.

    Subclasses implement :meth:`_generate` for one shape.
    """

    #: Center of the array. Default is ``(0, 0, 0)``.
    center = CArray(dtype=float64, shape=(3,), value=array((0.0, 0.0, 0.0)), desc='array center')

    #: Length (linear, edge) or diameter (all other shapes) of the array in m. Default is ``3.0``.
    size = Float(3.0, desc='array length or diameter')

    #: Number of secondary sources. Default is ``64``.
    number = Int(64, desc='number of secondary sources')

    #: Minimum number of secondary sources the shape supports.
    _min_number = 1

    digest = Property(depends_on=['center', 'size', 'number'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _check(self):
        if self.number < self._min_number:
            msg = f'{self.__class__.__name__} needs at least {self._min_number} secondary sources, got {self.number}.'
            raise ConfigurationError(msg)
        if not self.size > 0:
            msg = f'Array size must be positive, got {self.size}.'
            raise ConfigurationError(msg)


class LinearArray(ParametricArray):
    """
    Linear array along the x-axis.

    The secondary sources are evenly spaced over ``[-size/2, size/2]`` around :attr:`center` and
    point in negative y-direction, so the listening area is ``y < center[1]``. Each weight is the
    loudspeaker distance.
    """

    closed = Constant(False)
    orientation = Constant(1)

    _min_number = 2

    def _generate(self):
        self._check()
        n = self.number
        x0 = zeros((n, 7))
        x0[:, 0] = linspace(-self.size / 2, self.size / 2, n)
        x0[:, :3] += self.center
        x0[:, 4] = -1.0
        x0[:, 6] = self.size / (n - 1)
        return x0


class CircularArray(ParametricArray):
    """
    Circular array in the x-y plane with diameter :attr:`size`.

    The first secondary source lies at angle ``0``, the others follow counter-clockwise. Normals
    point outwards.
    """

    closed = Constant(True)
    orientation = Constant(-1)

    def _generate(self):
        self._check()
        t = arange(self.number) / self.number
        pos, n0, w0 = rounded_box(t, 1.0)
        return _assemble(pos * self.size / 2 + self.center, n0, w0 * self.size / 2)


class BoxArray(ParametricArray):
    """
    Square array in the x-y plane with edge length :attr:`size`.

    Every edge holds :attr:`number` ``/ 4`` secondary sources spanning the full edge length. The
    corners of the enclosing box lie one loudspeaker distance further out and carry no
    loudspeaker. The first edge is the one in positive x-direction, traversed upwards; the other
    edges follow counter-clockwise. The weights of the eight loudspeakers next to a corner are
    :math:`(1+\\sqrt{2})/2` times the loudspeaker distance, which accounts for the diagonal gap
    across the corner.
    """

    closed = Constant(True)
    orientation = Constant(-1)

    _min_number = 8

    def _check(self):
        if self.number % 4 != 0:
            msg = f'Number of secondary sources of a box array has to be a multiple of 4, got {self.number}.'
            raise ConfigurationError(msg)
        super()._check()

    def _generate(self):
        self._check()
        nbox = self.number // 4
        # distance between secondary sources
        dx0 = self.size / (nbox - 1)
        # edge length of the box through the skipped corners
        lbound = self.size + 2 * dx0
        t = linspace(-self.size / 2, self.size / 2, nbox) / lbound
        t = concatenate((t, t + 1, t + 2, t + 3)) * 0.25
        pos, n0, w0 = rounded_box(t, 0.0)
        w0 = w0 * lbound / 2
        corners = [0, nbox - 1, nbox, 2 * nbox - 1, 2 * nbox, 3 * nbox - 1, 3 * nbox, 4 * nbox - 1]
        w0[corners] = (1 + sqrt(2)) * dx0 / 2  # instead of 3/2 * dx0
        return _assemble(pos * lbound / 2 + self.center, n0, w0)


class RoundedBoxArray(ParametricArray):
    """
    Square array with rounded corners in the x-y plane.

    The secondary sources are evenly distributed by arc length, starting at the midpoint of the
    edge in positive x-direction. :attr:`corner_radius` ``= 0`` gives a square including the
    corners, :attr:`corner_radius` ``= size/2`` a circle.
    """

    closed = Constant(True)
    orientation = Constant(-1)

    #: Radius of the rounded corners in m. Default is ``0.0``.
    corner_radius = Float(0.0, desc='corner radius')

    digest = Property(depends_on=['center', 'size', 'number', 'corner_radius'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _generate(self):
        self._check()
        t = arange(self.number) / self.number
        pos, n0, w0 = rounded_box(t, 2 * self.corner_radius / self.size)
        return _assemble(pos * self.size / 2 + self.center, n0, w0 * self.size / 2)


class EdgeArray(ParametricArray):
    """
    Two linear arrays of length :attr:`size` meeting at :attr:`center`.

    The two arms point in the directions given by the angles :attr:`alpha` in the x-y plane. A
    single angle places the first arm along the x-axis and the second one at that angle. Both
    arms get :attr:`number` ``// 2`` secondary sources; an odd number adds one loudspeaker at the
    junction whose normal bisects the angle between the arms. The rows run from the free end of
    the first arm over the junction to the free end of the second arm.
    """

    closed = Constant(False)
    orientation = Constant(1)

    #: Angle of the second arm, or the angles of both arms, in rad. Default is ``pi/2``.
    alpha = Union(Float(), CArray(dtype=float64, shape=(None,)), default_value=0.5 * pi, desc='edge angles')

    _min_number = 2

    digest = Property(depends_on=['center', 'size', 'number', 'alpha'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _angles(self):
        return atleast_1d(asarray(self.alpha, dtype=float64))

    def _check(self):
        super()._check()
        alpha = self._angles()
        if alpha.size not in (1, 2):
            msg = f'EdgeArray needs one or two angles, got {alpha.size}.'
            raise ConfigurationError(msg)
        if not ((alpha >= 0) & (alpha <= 2 * pi)).all():
            msg = f'Edge angles must be within [0, 2*pi], got {alpha}.'
            raise ConfigurationError(msg)

    def _generate(self):
        self._check()
        alpha = self._angles()
        a1, a2 = (0.0, alpha[0]) if alpha.size == 1 else alpha
        n = self.number
        nfloor = n // 2
        nceil = n - nfloor
        t = arange(1, nfloor + 1) * self.size / nfloor
        x0 = zeros((n, 7))
        # first arm, from its free end towards the junction
        x0[:nfloor, 0] = t[::-1] * cos(a1)
        x0[:nfloor, 1] = t[::-1] * sin(a1)
        x0[:nfloor, 3] = sin(a1)
        x0[:nfloor, 4] = -cos(a1)
        if nceil != nfloor:
            x0[nfloor, 3] = -cos(0.5 * (a1 + a2))
            x0[nfloor, 4] = -sin(0.5 * (a1 + a2))
        x0[nceil:, 0] = t * cos(a2)
        x0[nceil:, 1] = t * sin(a2)
        x0[nceil:, 3] = -sin(a2)
        x0[nceil:, 4] = cos(a2)
        x0[:, :3] += self.center
        x0[:, 6] = self.size / nfloor
        return x0


class SphericalArray(ParametricArray):
    """
    Spherical array with diameter :attr:`size`.

    Points and quadrature weights come from :attr:`grid`. The secondary sources point towards
    :attr:`center`. Weights are scaled to the sphere surface; if the grid is not area-correct
    (see :attr:`~sfsynth.sphericalgrids.SphericalGrid.equal_area`) they are additionally
    multiplied by the cosine of the elevation.
    """

    closed = Constant(True)
    orientation = Constant(1)

    #: Sampling grid on the unit sphere. Default is :class:`~sfsynth.sphericalgrids.SpiralSphereGrid`.
    grid = Instance(SphericalGrid, factory=SpiralSphereGrid, desc='spherical sampling grid')

    digest = Property(depends_on=['center', 'size', 'number', 'grid.digest'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _generate(self):
        self._check()
        points, weights = self.grid.sample(self.number)
        w0 = weights * self.size**2 / 4
        if not self.grid.equal_area:
            elevation = arcsin(clip(points[:, 2], -1.0, 1.0))
            w0 = w0 * cos(elevation)
        return _assemble(self.size / 2 * points + self.center, -points, w0)


class CustomArray(SecondarySources):
    """
    User supplied geometry.

    The table is taken from :attr:`table` if it is set, otherwise it is imported from :attr:`file`
    or :attr:`record` with :attr:`importer`. In all cases it is validated with
    :func:`check_secondary_sources`.
    """

    #: Secondary source table ``[x, y, z, nx, ny, nz, w]``, shape ``(n, 7)``.
    table = CArray(dtype=float64, desc='secondary source table')

    #: Name of a SOFA file that contains the geometry.
    file = File(filter=['*.sofa'], exists=True, desc='name of the SOFA file to import')

    #: SOFA variables as a dictionary, alternative to :attr:`file`.
    record = Dict(desc='SOFA variables')

    #: Function that turns :attr:`file` or :attr:`record` into a table. Default is
    #: :func:`~sfsynth.sofa.sofa_secondary_sources`.
    importer = Callable(sofa_secondary_sources, desc='geometry import function')

    digest = Property(depends_on=['table', 'file', 'record', 'importer'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _generate(self):
        if self.table.size > 0:
            return check_secondary_sources(self.table)
        if self.file:
            return check_secondary_sources(self.importer(self.file))
        if self.record:
            return check_secondary_sources(self.importer(self.record))
        msg = 'CustomArray needs a table, a file or a record.'
        raise ConfigurationError(msg)


def _assemble(pos, n0, w0):
    return concatenate((pos, n0, asarray(w0)[:, newaxis]), axis=1)


#: Geometry names accepted by :func:`secondary_sources_from_config`.
GEOMETRIES = {
    'linear': LinearArray,
    'line': LinearArray,
    'circular': CircularArray,
    'circle': CircularArray,
    'box': BoxArray,
    'rounded-box': RoundedBoxArray,
    'edge': EdgeArray,
    'spherical': SphericalArray,
    'sphere': SphericalArray,
    'custom': CustomArray,
}


def secondary_sources_from_config(conf):
    """
    Create the secondary source geometry described by a configuration.

    Parameters
    ----------
    conf : :class:`~sfsynth.configuration.Config` or :class:`~sfsynth.configuration.SecondarySourcesConfig`
        Configuration. Only the secondary source part is used.

    Returns
    -------
    :class:`SecondarySources`
        Geometry object of the class registered for the configured geometry name in
        :data:`GEOMETRIES`.

    Raises
    ------
    ConfigurationError
        If the geometry name is unknown or a custom geometry has no data.
    FormatError
        If the SOFA file of a custom geometry does not exist.
    """
    ss = getattr(conf, 'secondary_sources', conf)
    try:
        cls = GEOMETRIES[ss.geometry]
    except KeyError as err:
        msg = f'{ss.geometry!r} is not a valid array geometry.'
        raise ConfigurationError(msg) from err
    if cls is CustomArray:
        if isinstance(ss.x0, (str, PathLike)):
            try:
                return CustomArray(file=str(ss.x0))
            except TraitError as err:
                msg = f'SOFA file {str(ss.x0)!r} does not exist.'
                raise FormatError(msg) from err
        if isinstance(ss.x0, Mapping):
            return CustomArray(record=dict(ss.x0))
        if ss.x0 is None:
            msg = "Geometry 'custom' needs secondary_sources.x0."
            raise ConfigurationError(msg)
        return CustomArray(table=check_secondary_sources(ss.x0))
    kwargs = {'center': ss.center, 'size': ss.size, 'number': ss.number}
    if cls is RoundedBoxArray:
        kwargs['corner_radius'] = ss.corner_radius
    elif cls is EdgeArray:
        kwargs['alpha'] = ss.alpha
    elif cls is SphericalArray and ss.grid is not None:
        kwargs['grid'] = ss.grid
    return cls(**kwargs)


def secondary_source_positions(spec):
    """
    Generate the secondary source table of a geometry.

    Parameters
    ----------
    spec : :class:`SecondarySources` or configuration
        A geometry object, or a configuration understood by :func:`secondary_sources_from_config`.

    Returns
    -------
    :class:`numpy.ndarray` of :class:`floats<float>`
        Table ``[x, y, z, nx, ny, nz, w]``, shape ``(n, 7)``.
    """
    if not isinstance(spec, SecondarySources):
        spec = secondary_sources_from_config(spec)
    return spec.x0
