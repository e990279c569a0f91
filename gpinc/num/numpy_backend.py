# gpinc/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical layer for gpinc.

This module defines the NumPy/SciPy implementation of the gpinc.num API.
"""

import builtins
from typing import Any, Optional
from gpinc.config import get_config

ArrayLike = Any

_config = get_config()

_LINALG_ERROR_KEYWORDS = (
    "singular",
    "not positive definite",
    "not positive-definite",
    "leading minor",
    "cholesky",
    "lapack",
    "array must not contain infs or nans",
)


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy

_np_dtype = numpy.float64

from numpy import (
    copy,
    where,
    any,
    isfinite,
    allclose,
    hstack,
    concatenate,
    diag,
    arange,
    abs,
    sqrt,
    exp,
    log,
    sin,
    cos,
    sort,
    sum,
    mean,
    min,
    max,
    maximum,
    matmul,
    dot,
    all,
    tril,
)
from numpy.linalg import lstsq, inv, LinAlgError
from numpy import pi, inf, nan
from numpy import finfo
from scipy.special import gammaln
from scipy.linalg import solve_triangular
from scipy.linalg import cholesky as _scipy_cholesky
from scipy.spatial.distance import cdist

# ..................................................

eps = finfo(_np_dtype).eps
fmax = numpy.finfo(_np_dtype).max

# ..................................................


def is_linalg_exception(exc: Exception) -> bool:
    if isinstance(exc, numpy.linalg.LinAlgError):
        return True
    msg = str(exc).lower()
    return builtins.any(keyword in msg for keyword in _LINALG_ERROR_KEYWORDS)


# ..................................................


def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.integer) or numpy.issubdtype(
        out.dtype, numpy.floating
    ):
        return out.astype(_np_dtype, copy=False)
    return out


def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.floating):
            return x.astype(_np_dtype, copy=False)
        if numpy.issubdtype(x.dtype, numpy.integer):
            return x.astype(_np_dtype)
        return x
    elif isinstance(x, (int, float)):
        return numpy.array([x], dtype=_np_dtype)
    else:
        out = numpy.asarray(x)
        if numpy.issubdtype(out.dtype, numpy.integer) or numpy.issubdtype(
            out.dtype, numpy.floating
        ):
            return out.astype(_np_dtype, copy=False)
        return out


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=_np_dtype if dtype is None else dtype)


def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=_np_dtype if dtype is None else dtype)


def full(shape, fill_value, dtype=None):
    return numpy.full(shape, fill_value, dtype=_np_dtype if dtype is None else dtype)


def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)


def linspace(start, stop, num=50, endpoint=True, dtype=None):
    return numpy.linspace(
        start, stop, num=num, endpoint=endpoint, dtype=_np_dtype if dtype is None else dtype
    )


def readonly(x):
    """Return a read-only copy of x."""
    out = numpy.array(x, dtype=_np_dtype)
    out.flags.writeable = False
    return out


def inftobigf(a, bigf=fmax / 1000.0):
    a = where(numpy.isinf(a), numpy.full_like(a, bigf), a)
    return a


# ..................................................


def scaled_distance(invrho: ArrayLike, x: ArrayLike, y: ArrayLike) -> ArrayLike:
    xs = invrho * x
    ys = invrho * y
    return cdist(xs, ys)


def scaled_distance_elementwise(
    invrho: ArrayLike, x: ArrayLike, y: Optional[ArrayLike]
) -> ArrayLike:
    if x is y or y is None:
        d = zeros((x.shape[0],))
    else:
        d = sqrt(sum((invrho * (x - y)) ** 2, axis=1))
    return d


# ..................................................


def cholesky(A):
    """Lower-triangular Cholesky factor of A.

    Raises numpy.linalg.LinAlgError when a pivot is not positive.
    """
    try:
        return _scipy_cholesky(A, lower=True, check_finite=True)
    except (ValueError, LinAlgError) as exc:
        if is_linalg_exception(exc):
            raise LinAlgError(str(exc)) from exc
        raise


def forward_solve(L, b):
    """Solve L x = b with L lower-triangular."""
    return solve_triangular(L, b, lower=True, check_finite=False)


def backward_solve(L, b):
    """Solve L^T x = b with L lower-triangular."""
    return solve_triangular(L, b, lower=True, trans="T", check_finite=False)


# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=_config.seed)


def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _config.seed = seed
    _np_rng = numpy.random.default_rng(seed=seed)


def default_rng(seed: Optional[int] = None):
    """Return a generator seeded with `seed`, or the global one if seed is None."""
    if seed is None:
        return _np_rng
    return numpy.random.default_rng(seed=seed)

