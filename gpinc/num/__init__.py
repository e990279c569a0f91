# gpinc/num/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Numerical layer for gpinc (NumPy / SciPy)."""

from . import numpy_backend as _backend
from . import shared as _shared

# Re-export backend API.
for _name in dir(_backend):
    if _name.startswith("__"):
        continue
    globals()[_name] = getattr(_backend, _name)

# Re-export array-independent helpers from shared.py.
compute_gammaln = _shared.compute_gammaln
symmetrize = _shared.symmetrize
