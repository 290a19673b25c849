# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------
"""
Exceptions raised by sfsynth.

All errors are fatal configuration or programming mistakes. They derive from :obj:`ValueError`,
so code that only catches the built-in type keeps working.

.. autosummary::
    :toctree: generated/

    SFSError
    ConfigurationError
    FormatError
    NumericDomainError
"""


class SFSError(ValueError):
    """Base class of all sfsynth errors."""


class ConfigurationError(SFSError):
    """
    Invalid array or synthesis configuration.

    Raised for unknown geometry names, a number of secondary sources that is not divisible as the
    geometry requires, and out-of-range shape parameters such as roundness ratios or angles.
    """


class FormatError(SFSError):
    """
    Malformed secondary source table.

    Raised when a custom or imported ``(n, 7)`` table has missing columns, non-finite entries,
    zero-length normals or negative weights. The message names the offending column.
    """


class NumericDomainError(SFSError):
    """Invalid numeric input to a synthesis call, e.g. a non-positive frequency or an empty grid."""
