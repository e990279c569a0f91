# gpinc/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Shape/type validation and conversion helpers for (xi, zi, xt).
"""
import gpinc.num as gnp
from gpinc.errors import DimensionMismatch


def as_inputs(x, dim=None, name="x"):
    """Convert inputs to a 2D (n, d) array.

    A scalar is one point in dimension 1. A 1D array is read as n points
    in dimension 1, unless ``dim`` is given and larger than 1, in which
    case it must be a single point of length ``dim``.
    """
    x = gnp.asarray(x)
    if x.ndim == 0:
        x = x.reshape(1, 1)
    elif x.ndim == 1:
        if dim is None or dim == 1:
            x = x.reshape(-1, 1)
        else:
            x = x.reshape(1, -1)
    elif x.ndim != 2:
        raise DimensionMismatch(f"{name} should be a 2D array of shape (n, d)")
    if dim is not None and x.shape[1] != dim:
        raise DimensionMismatch(
            f"{name} has dimension {x.shape[1]}, expected {dim}", expected=dim, got=x.shape[1]
        )
    if not gnp.all(gnp.isfinite(x)):
        raise ValueError(f"{name} contains non-finite values")
    return x


def as_outputs(z, n=None, name="zi"):
    """Convert outputs to a 1D (n,) array; (n, 1) columns are flattened."""
    z = gnp.asarray(z)
    if z.ndim == 2:
        if z.shape[1] != 1:
            raise DimensionMismatch(f"{name} should only have one column if it's a 2D array")
        z = z.reshape(-1)
    elif z.ndim == 0:
        z = z.reshape(1)
    elif z.ndim != 1:
        raise DimensionMismatch(f"{name} should be 1D or a 2D column array")
    if n is not None and z.shape[0] != n:
        raise DimensionMismatch(
            f"inputs and {name} must have the same number of rows ({n} and {z.shape[0]})",
            expected=n,
            got=z.shape[0],
        )
    if not gnp.all(gnp.isfinite(z)):
        raise ValueError(f"{name} contains non-finite values")
    return z
