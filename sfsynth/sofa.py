# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Import of secondary source geometries from SOFA files.

SOFA files are netCDF-4 files, i.e. HDF5 files, and are read with PyTables. Only the variables
needed to describe the loudspeaker positions and orientations are read.

.. autosummary::
    :toctree: generated/

    sofa_secondary_sources
"""

from collections.abc import Mapping

import tables
from numpy import asarray, atleast_2d, broadcast_to, column_stack, cos, deg2rad, float64, ones, sin, zeros

from .errors import FormatError

#: SOFA variables read by :func:`sofa_secondary_sources`.
SOFA_VARIABLES = ('SourcePosition', 'SourceView', 'ListenerPosition')


def _decode(value):
    if isinstance(value, bytes):
        return value.decode('UTF-8')
    return str(value)


def _read_sofa_file(filename):
    nodes = {}
    with tables.open_file(str(filename), mode='r') as h5:
        for name in SOFA_VARIABLES:
            if name not in h5.root:
                continue
            node = h5.get_node(h5.root, name)
            nodes[name] = node.read()
            if 'Type' in node.attrs:
                nodes[f'{name}_Type'] = _decode(node.attrs['Type'])
    return nodes


def _cartesian(nodes, name):
    # returns the variable as (M, 3) array of cartesian coordinates
    values = atleast_2d(asarray(nodes[name], dtype=float64))
    if values.shape[-1] != 3:
        msg = f'SOFA variable {name} must have 3 columns, got shape {values.shape}.'
        raise FormatError(msg)
    kind = nodes.get(f'{name}_Type', 'cartesian').lower()
    if kind == 'cartesian':
        return values
    if kind == 'spherical':
        azimuth = deg2rad(values[:, 0])
        elevation = deg2rad(values[:, 1])
        radius = values[:, 2]
        return column_stack(
            (radius * cos(elevation) * cos(azimuth), radius * cos(elevation) * sin(azimuth), radius * sin(elevation))
        )
    msg = f'Unsupported coordinate type {kind!r} of SOFA variable {name}.'
    raise FormatError(msg)


def sofa_secondary_sources(sofa):
    """
    Extract secondary source positions and directions from SOFA data.

    The loudspeaker positions are taken from ``SourcePosition``. The directions are taken from
    ``SourceView`` if present; otherwise every loudspeaker is oriented towards
    ``ListenerPosition``, or towards the origin if no listener is given. Cartesian and spherical
    (degree) coordinate types are supported. SOFA has no notion of integration weights, so all
    weights are ``1``.

    Parameters
    ----------
    sofa : :class:`str`, :class:`pathlib.Path` or mapping
        Name of a SOFA file, or a mapping from SOFA variable names to arrays. In a mapping the
        coordinate type of variable ``X`` is given by the key ``X_Type``.

    Returns
    -------
    :class:`numpy.ndarray` of :class:`floats<float>`
        Secondary source table ``[x, y, z, nx, ny, nz, w]``, shape ``(n, 7)``. Normals are not
        normalised here.

    Raises
    ------
    FormatError
        If ``SourcePosition`` is missing or a variable has an unsupported shape or type.
    """
    nodes = sofa if isinstance(sofa, Mapping) else _read_sofa_file(sofa)
    if 'SourcePosition' not in nodes:
        msg = 'SOFA data contains no SourcePosition variable.'
        raise FormatError(msg)
    pos = _cartesian(nodes, 'SourcePosition')
    n = pos.shape[0]
    if 'SourceView' in nodes:
        view = broadcast_to(_cartesian(nodes, 'SourceView'), (n, 3))
    elif 'ListenerPosition' in nodes:
        view = broadcast_to(_cartesian(nodes, 'ListenerPosition'), (n, 3)) - pos
    else:
        view = zeros((n, 3)) - pos
    return column_stack((pos, view, ones(n)))
