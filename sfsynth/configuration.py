# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements the configuration record of a synthesis.

The configuration is passed explicitly to the functions that need it. Functions called without
a configuration create a new :class:`Config` with the default values.

.. autosummary::
    :toctree: generated/

    SecondarySourcesConfig
    Config
"""

from numpy import array, float64, pi
from traits.api import Any, Bool, CArray, Enum, Float, HasStrictTraits, Instance, Int, Range, Str, Union

from .sphericalgrids import SphericalGrid


class SecondarySourcesConfig(HasStrictTraits):
    """
    Description of a secondary source array.

    The geometry name is resolved by :func:`~sfsynth.secondarysources.secondary_sources_from_config`,
    which raises a :class:`~sfsynth.errors.ConfigurationError` for unknown names. Parameters that
    the chosen geometry does not use are ignored.

    Examples
    --------
    >>> from sfsynth import Config, secondary_source_positions
    >>> conf = Config()
    >>> conf.secondary_sources.geometry = 'linear'
    >>> conf.secondary_sources.number = 11
    >>> secondary_source_positions(conf).shape
    (11, 7)
    """

    #: Name of the array geometry, e.g. ``'linear'``, ``'circular'``, ``'box'``,
    #: ``'rounded-box'``, ``'edge'``, ``'spherical'`` or ``'custom'``. Default is ``'circular'``.
    geometry = Str('circular', desc='array geometry')

    #: Center of the array. Default is ``(0, 0, 0)``.
    center = CArray(dtype=float64, shape=(3,), value=array((0.0, 0.0, 0.0)), desc='array center')

    #: Length or diameter of the array in m. Default is ``3.0``.
    size = Float(3.0, desc='array length or diameter')

    #: Number of secondary sources. Default is ``64``.
    number = Int(64, desc='number of secondary sources')

    #: Corner radius of ``'rounded-box'`` arrays in m. Default is ``0.3``.
    corner_radius = Float(0.3, desc='corner radius')

    #: Angle of the second arm, or the angles of both arms, of ``'edge'`` arrays in rad. Default is
    #: ``pi/2``.
    alpha = Union(Float(), CArray(dtype=float64, shape=(None,)), default_value=0.5 * pi, desc='edge angles')

    #: Table, SOFA file name or SOFA record of ``'custom'`` arrays. Default is ``None``.
    x0 = Any(None, desc='custom secondary sources')

    #: Sampling grid of ``'spherical'`` arrays. ``None`` (default) uses the default grid.
    grid = Instance(SphericalGrid, allow_none=True, desc='spherical sampling grid')


class Config(HasStrictTraits):
    """
    Configuration of a monochromatic synthesis.

    Example:
        Synthesize with a box array and without tapering:

        >>> from sfsynth import Config
        >>> conf = Config(usetapwin=False)
        >>> conf.secondary_sources.geometry = 'box'
    """

    #: The speed of sound in m/s. Default is ``343.0``.
    c = Float(343.0, desc='speed of sound')

    #: Reference point of 2.5D synthesis. Default is ``(0, 0, 0)``.
    xref = CArray(dtype=float64, shape=(3,), value=array((0.0, 0.0, 0.0)), desc='reference point')

    #: Synthesis dimension. Default is ``'2.5D'``.
    dimension = Enum('2.5D', '3D', desc='synthesis dimension')

    #: Apply a tapering window. Default is ``True``.
    usetapwin = Bool(True, desc='use tapering window')

    #: Relative length of the tapering flanks. Default is ``0.2``.
    tapwinlen = Range(0.0, 1.0, 0.2, desc='relative length of the tapering flanks')

    #: Number of worker threads of the synthesis. Default is ``1``.
    num_workers = Int(1, desc='number of worker threads')

    #: The secondary source array.
    secondary_sources = Instance(SecondarySourcesConfig, factory=SecondarySourcesConfig)
