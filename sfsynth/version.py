# ------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
# ------------------------------------------------------------------------------

# separate file to find out about version without importing the sfsynth lib
__author__ = 'Acoular Development Team'
__date__ = '16 October 2026'
__version__ = '26.10'
