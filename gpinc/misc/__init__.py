# gpinc/misc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Miscellaneous utility modules for gpinc.

plotutils is imported on demand (``import gpinc.misc.plotutils``) so
that matplotlib is only loaded when figures are drawn.
"""
