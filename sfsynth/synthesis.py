# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements the monochromatic synthesis of sound fields with secondary source arrays.

.. autosummary::
    :toctree: generated/

    SoundFieldSynthesis
    synthesis_from_config
    wfs_25d
"""

from concurrent.futures import ThreadPoolExecutor
from math import ceil
from warnings import warn

from numpy import array_split, arange, complex128, flatnonzero, isfinite, zeros
from traits.api import HasStrictTraits, Instance, Int, Property, cached_property

from .configuration import Config
from .driving import DrivingFunction
from .environments import Environment
from .errors import ConfigurationError, NumericDomainError
from .internal import digest
from .secondarysources import SecondarySources, secondary_sources_from_config
from .selection import SecondarySourceSelection
from .sources import virtual_source
from .tapering import TaperingWindow


class SoundFieldSynthesis(HasStrictTraits):
    """
    Synthesizes the sound field of a virtual source with a secondary source array.

    The sound pressure at the observation points :math:`x` is the discretized single layer
    potential

    .. math:: P(x, \\omega) = \\sum_i w_i a_i D(x_{0,i}, \\omega) G(x - x_{0,i}, \\omega),

    with the integration weights :math:`w_i` of the array, the activity :math:`a_i` (selection
    times tapering window), the driving function :math:`D` and the transfer function :math:`G`
    of the environment. Only secondary sources with :math:`a_i > 0` are evaluated.

    The secondary sources are processed in blocks of :attr:`block_size`. With
    :attr:`num_workers` ``> 1`` the blocks are processed in a thread pool; each block gives a
    partial field and the partial fields are summed at the end.
    """

    #: :class:`~sfsynth.secondarysources.SecondarySources`-derived object that provides the
    #: secondary source table.
    secondary_sources = Instance(SecondarySources, desc='secondary source geometry')

    #: Selection of the active secondary sources. Default is
    #: :class:`~sfsynth.selection.SecondarySourceSelection`.
    selection = Instance(SecondarySourceSelection, factory=SecondarySourceSelection, desc='secondary source selection')

    #: Tapering window over the active secondary sources. Default is
    #: :class:`~sfsynth.tapering.TaperingWindow`.
    tapering = Instance(TaperingWindow, factory=TaperingWindow, desc='tapering window')

    #: Driving function. Default is :class:`~sfsynth.driving.DrivingFunction` (2.5D).
    driving = Instance(DrivingFunction, factory=DrivingFunction, desc='driving function')

    #: :class:`~sfsynth.environments.Environment` or derived object, which provides the transfer
    #: functions of the secondary sources and the speed of sound.
    env = Instance(Environment, factory=Environment, desc='propagation model')

    #: Number of worker threads. Default is ``1``, i.e. no thread pool.
    num_workers = Int(1, desc='number of worker threads')

    #: Maximum number of secondary sources evaluated together. Default is ``128``.
    block_size = Int(128, desc='number of secondary sources per block')

    #: A unique identifier for the synthesis, based on its properties. (read-only)
    digest = Property(
        depends_on=[
            'secondary_sources.digest',
            'selection.digest',
            'tapering.digest',
            'driving.digest',
            'env.digest',
        ],
    )

    @cached_property
    def _get_digest(self):
        return digest(self)

    def _check(self):
        if self.secondary_sources is None:
            msg = 'No secondary sources given.'
            raise ConfigurationError(msg)
        if self.num_workers < 1:
            msg = f'Number of workers must be at least 1, got {self.num_workers}.'
            raise ConfigurationError(msg)
        if self.block_size < 1:
            msg = f'Block size must be at least 1, got {self.block_size}.'
            raise ConfigurationError(msg)

    def activity(self, source):
        """
        Return the activity of all secondary sources for a virtual source.

        The reference point of the selection is :attr:`driving.xref`.

        Parameters
        ----------
        source : :class:`~sfsynth.sources.VirtualSource`
            The virtual source.

        Returns
        -------
        :class:`numpy.ndarray` of :class:`floats<float>`
            Selection times tapering window, shape ``(n,)``, in array order.
        """
        self._check()
        ss = self.secondary_sources
        act = self.selection.activity(ss.pos, ss.facing, source, self.driving.xref)
        return act * self.tapering.window(act, ss.closed)

    def synthesize(self, grid, source, f):
        """
        Synthesize the sound field of a virtual source at one frequency.

        Parameters
        ----------
        grid : :class:`~sfsynth.grids.Grid`
            Observation points.
        source : :class:`~sfsynth.sources.VirtualSource`
            The virtual source.
        f : :class:`float`
            Frequency in Hz.

        Returns
        -------
        p : :class:`numpy.ndarray` of :class:`complex`
            Sound pressure with the shape of the grid.
            Observation points at the position of an active secondary source get ``nan``.
        activity : :class:`numpy.ndarray` of :class:`floats<float>`
            Activity of every secondary source, including the inactive ones, shape ``(n,)``.

        Raises
        ------
        NumericDomainError
            If ``f`` is not a positive finite number or the grid is empty.
        ConfigurationError
            If no secondary sources are set or the worker settings are invalid.
        """
        if not (isfinite(f) and f > 0):
            msg = f'Frequency must be positive and finite, got {f}.'
            raise NumericDomainError(msg)
        if grid.size == 0:
            msg = 'Observation grid contains no points.'
            raise NumericDomainError(msg)
        act = self.activity(source)
        ss = self.secondary_sources
        active = flatnonzero(act > 0)
        if active.size == 0:
            warn('No secondary source is active, the synthesized sound field is zero.', UserWarning, stacklevel=2)
            return zeros(grid.shape, dtype=complex128), act

        pos = ss.pos[:, active]
        gain = ss.weights[active] * act[active]
        gain = gain * self.driving.driving(pos, ss.facing[:, active], source, f, self.env)
        gpos = grid.pos

        def partial_field(block):
            return self.env.transfer(pos[:, block], gpos, f) @ gain[block]

        nblocks = max(ceil(active.size / self.block_size), min(self.num_workers, active.size))
        blocks = array_split(arange(active.size), nblocks)
        if self.num_workers > 1 and nblocks > 1:
            with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
                parts = list(executor.map(partial_field, blocks))
        else:
            parts = [partial_field(block) for block in blocks]
        p = sum(parts[1:], parts[0])
        return p.reshape(grid.shape), act


def synthesis_from_config(conf=None):
    """
    Create a :class:`SoundFieldSynthesis` from a configuration.

    Parameters
    ----------
    conf : :class:`~sfsynth.configuration.Config`
        Configuration. ``None`` (default) uses a new :class:`~sfsynth.configuration.Config`.

    Returns
    -------
    :class:`SoundFieldSynthesis`
        Synthesis with free-field point sources as secondary sources.
    """
    if conf is None:
        conf = Config()
    return SoundFieldSynthesis(
        secondary_sources=secondary_sources_from_config(conf),
        tapering=TaperingWindow(usetapwin=conf.usetapwin, tapwinlen=conf.tapwinlen),
        driving=DrivingFunction(dimension=conf.dimension, xref=conf.xref),
        env=Environment(c=conf.c),
        num_workers=conf.num_workers,
    )


def wfs_25d(grid, xs, src, f, conf=None):
    """
    Synthesize a virtual source with 2.5D wave field synthesis.

    Parameters
    ----------
    grid : :class:`~sfsynth.grids.Grid`
        Observation points.
    xs : array_like
        Propagation direction of a plane wave or position of a point or focused source.
    src : :class:`str`
        Source type, ``'pw'``, ``'ps'`` or ``'fs'``.
    f : :class:`float`
        Frequency in Hz.
    conf : :class:`~sfsynth.configuration.Config`
        Configuration. ``None`` (default) uses a new :class:`~sfsynth.configuration.Config`.
        Its ``dimension`` is ignored.

    Returns
    -------
    p : :class:`numpy.ndarray` of :class:`complex`
        Sound pressure with the shape of the grid.
    activity : :class:`numpy.ndarray` of :class:`floats<float>`
        Activity of every secondary source.

    Examples
    --------
    >>> from sfsynth import Config, RectGrid, wfs_25d
    >>> conf = Config()
    >>> p, activity = wfs_25d(RectGrid(increment=0.5), (0, -1, 0), 'pw', 500.0, conf)
    >>> p.shape, activity.shape
    ((9, 9), (64,))
    """
    synth = synthesis_from_config(conf)
    synth.driving.dimension = '2.5D'
    return synth.synthesize(grid, virtual_source(xs, src), f)
