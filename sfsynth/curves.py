# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Implements the parametrisation of closed planar curves used for secondary source loops.

.. autosummary::
    :toctree: generated/

    rounded_box
"""

from numpy import (
    array,
    asarray,
    column_stack,
    cos,
    float64,
    floor,
    full,
    mod,
    pi,
    roll,
    sin,
    zeros,
    zeros_like,
)

from .errors import ConfigurationError

# cos and sin of the four quarter turns, exact
_QUARTER_COS = array((1.0, 0.0, -1.0, 0.0))
_QUARTER_SIN = array((0.0, 1.0, 0.0, -1.0))


def rounded_box(t, ratio):
    r"""
    Return points, outward normals and weights on a rounded unit box.

    The curve is a square with half side length ``1`` whose corners are replaced by circular arcs
    of radius ``ratio``. It lies in the x-y plane and is traversed counter-clockwise by arc length,
    starting at the midpoint ``(1, 0, 0)`` of the right edge. Each quarter of the parameter range
    covers one edge, centered at its midpoint, plus the halves of the two adjoining corner arcs.
    The limiting cases are the unit circle (``ratio=1``) and the square with side length ``2``
    (``ratio=0``).

    Parameters
    ----------
    t : array_like of :class:`floats<float>`
        Normalised curve parameters, one per sample. Values are taken modulo ``1``. For correct
        weights the samples must be sorted along the curve.
    ratio : :class:`float`
        Roundness, i.e. corner radius divided by half the side length. Must lie in ``[0, 1]``.

    Returns
    -------
    x0 : :class:`numpy.ndarray` of :class:`floats<float>`
        Positions, shape ``(n, 3)``.
    n0 : :class:`numpy.ndarray` of :class:`floats<float>`
        Outward unit normals, shape ``(n, 3)``.
    w0 : :class:`numpy.ndarray` of :class:`floats<float>`
        Integration weights, shape ``(n,)``. Each weight is half the arc length between the
        sample's two neighbours along the closed curve, so evenly spaced samples get the uniform
        weight :math:`P/n` with the perimeter :math:`P = 8 - 8r + 2\pi r`.

    Raises
    ------
    ConfigurationError
        If ``ratio`` is outside ``[0, 1]``.

    Examples
    --------
    >>> from numpy import arange
    >>> from sfsynth.curves import rounded_box
    >>> x0, n0, w0 = rounded_box(arange(16) / 16, 0.5)
    >>> x0.shape, n0.shape, w0.shape
    ((16, 3), (16, 3), (16,))
    """
    ratio = float(ratio)
    if not 0.0 <= ratio <= 1.0:
        msg = f'Roundness ratio must be within [0, 1], got {ratio}.'
        raise ConfigurationError(msg)
    t = mod(asarray(t, dtype=float64).ravel(), 1.0)
    n = t.size

    half = 1.0 - ratio  # half length of the straight part of an edge
    arc = 0.5 * pi * ratio  # length of one corner arc
    quarter = 2 * half + arc
    perimeter = 4 * quarter

    s = t * perimeter
    k = floor(s / quarter)
    u = s - k * quarter
    k = k.astype(int) % 4

    # local coordinates for the quarter starting at (1, 0), rotated afterwards
    x = zeros_like(u)
    y = zeros_like(u)
    nx = zeros_like(u)
    ny = zeros_like(u)

    lower = u < half
    x[lower] = 1.0
    y[lower] = u[lower]
    nx[lower] = 1.0

    corner = (u >= half) & (u < half + arc)
    if ratio > 0:
        phi = (u[corner] - half) / ratio
        nx[corner] = cos(phi)
        ny[corner] = sin(phi)
        x[corner] = half + ratio * nx[corner]
        y[corner] = half + ratio * ny[corner]

    upper = u >= half + arc
    x[upper] = half - (u[upper] - half - arc)
    y[upper] = 1.0
    ny[upper] = 1.0

    c = _QUARTER_COS[k]
    s_ = _QUARTER_SIN[k]
    x0 = column_stack((c * x - s_ * y, s_ * x + c * y, zeros(n)))
    n0 = column_stack((c * nx - s_ * ny, s_ * nx + c * ny, zeros(n)))

    if n == 1:
        w0 = full(1, perimeter)
    else:
        dnext = mod(roll(t, -1) - t, 1.0)
        dprev = mod(t - roll(t, 1), 1.0)
        w0 = 0.5 * (dnext + dprev) * perimeter
    return x0, n0, w0
