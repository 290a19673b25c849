# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements the selection of the secondary sources that contribute to a virtual source.

.. autosummary::
    :toctree: generated/

    SecondarySourceSelection
"""

from numpy import asarray, einsum, float64, newaxis
from traits.api import Dict, HasStrictTraits, Property, cached_property

from .errors import ConfigurationError
from .internal import digest


def _select_pw(pos, normals, xs, xref):
    return einsum('i,ij->j', xs, normals) > 0


def _select_ps(pos, normals, xs, xref):
    return einsum('ij,ij->j', pos - xs[:, newaxis], normals) > 0


def _select_fs(pos, normals, xs, xref):
    # only sources behind the focus as seen from the reference point
    diff = xs[:, newaxis] - pos
    return (einsum('ij,ij->j', diff, normals) > 0) & (einsum('ij,i->j', diff, xref - xs) > 0)


class SecondarySourceSelection(HasStrictTraits):
    """
    Selects secondary sources by the visibility criterion of wave field synthesis.

    A secondary source at :math:`x_0` with normal :math:`n_0` (pointing into the listening area)
    is active if

    * plane wave with direction :math:`n_k`: :math:`n_k \\cdot n_0 > 0`,
    * point source at :math:`x_s`: :math:`(x_0 - x_s) \\cdot n_0 > 0`,
    * focused source at :math:`x_s`: :math:`(x_s - x_0) \\cdot n_0 > 0` and
      :math:`(x_s - x_0) \\cdot (x_{ref} - x_s) > 0`, i.e. the focus radiates towards the
      reference point :math:`x_{ref}`.
    """

    #: Selection criteria for the source types ``'pw'``, ``'ps'`` and ``'fs'``.
    _select_funcs = Dict(
        {'pw': _select_pw, 'ps': _select_ps, 'fs': _select_fs},
        desc='dictionary of selection functions',
    )

    #: A unique identifier for the selection. (read-only)
    digest = Property(depends_on=['_select_funcs'])

    @cached_property
    def _get_digest(self):
        return digest(self)

    def activity(self, pos, normals, source, xref):
        """
        Return the binary activity of all secondary sources.

        Parameters
        ----------
        pos : :class:`numpy.ndarray` of :class:`floats<float>`
            Positions of the secondary sources, shape ``(3, n)``.
        normals : :class:`numpy.ndarray` of :class:`floats<float>`
            Unit normals pointing into the listening area, shape ``(3, n)``.
        source : :class:`~sfsynth.sources.VirtualSource`
            The virtual source.
        xref : array_like
            Reference (listening) point, shape ``(3,)``.

        Returns
        -------
        :class:`numpy.ndarray` of :class:`floats<float>`
            ``1.0`` for active and ``0.0`` for inactive secondary sources, shape ``(n,)``.
        """
        try:
            func = self._select_funcs[source.src]
        except KeyError as err:
            msg = f'No secondary source selection for source type {source.src!r}.'
            raise ConfigurationError(msg) from err
        xs = asarray(source.xs, dtype=float64)
        xref = asarray(xref, dtype=float64)
        return func(asarray(pos, dtype=float64), asarray(normals, dtype=float64), xs, xref).astype(float64)
