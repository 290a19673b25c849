# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------

"""sfsynth: monochromatic sound field synthesis with secondary source arrays."""

from .configuration import Config, SecondarySourcesConfig
from .curves import rounded_box
from .driving import DrivingFunction
from .environments import Environment, LineSourceEnvironment, dist_mat
from .errors import ConfigurationError, FormatError, NumericDomainError, SFSError
from .grids import Grid, LineGrid, PointGrid, RectGrid
from .secondarysources import (
    BoxArray,
    CircularArray,
    CustomArray,
    EdgeArray,
    LinearArray,
    ParametricArray,
    RoundedBoxArray,
    SecondarySources,
    SphericalArray,
    check_secondary_sources,
    secondary_source_positions,
    secondary_sources_from_config,
)
from .selection import SecondarySourceSelection
from .sofa import sofa_secondary_sources
from .sources import FocusedSource, PlaneWave, PointSource, VirtualSource, virtual_source
from .sphericalgrids import EquiangularSphereGrid, SphericalGrid, SpiralSphereGrid
from .synthesis import SoundFieldSynthesis, synthesis_from_config, wfs_25d
from .tapering import TaperingWindow
from .version import __author__, __date__, __version__
