# gpinc/kernel/base.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernel interface and kernel combinators.

A kernel is an immutable covariance function. Every kernel exposes

- ``k(x, y=None, pairwise=False)``: vectorized evaluation on arrays of
  points, returning an (nx, ny) matrix, or the (n,) vector of
  k(x_i, y_i) when ``pairwise`` is True. ``y=None`` means ``y = x``.
- ``k.evaluate(x, xp)``: covariance between two input vectors.
- ``k.evaluate_diag(x)``: k(x, x) for a vector, or for each row of an
  (n, d) array.
- ``k.parameters``: ordered mapping name -> value.
- ``k.get_parameters()`` / ``k.with_parameters(values)``: flat parameter
  vector, and a new kernel built from such a vector.

Sum and product kernels own private copies of their sub-kernels.
"""
import copy
from collections import OrderedDict

import gpinc.num as gnp
from gpinc.errors import DimensionMismatch


class Kernel:
    """Base class for covariance functions.

    Subclasses implement ``_covariance(x, y, pairwise)``, where ``y``
    is None for the symmetric case, and ``_parameters()`` returning a
    list of (name, value) pairs, and ``_from_parameters(values)``.
    """

    input_dim = None

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def __call__(self, x, y=None, pairwise=False):
        x, y = self._check_inputs(x, y, pairwise)
        return self._covariance(x, y, pairwise)

    def evaluate(self, x, xp):
        """Covariance k(x, xp) between two input vectors."""
        x = gnp.asarray(x).reshape(-1)
        xp = gnp.asarray(xp).reshape(-1)
        if x.shape[0] != xp.shape[0]:
            raise DimensionMismatch(
                f"inputs have different lengths ({x.shape[0]} and {xp.shape[0]})",
                expected=x.shape[0],
                got=xp.shape[0],
            )
        K = self(x.reshape(1, -1), xp.reshape(1, -1))
        return float(K[0, 0])

    def evaluate_diag(self, x):
        """Variance k(x, x).

        Returns a float for a single input vector and an (n,) array for
        an (n, d) array of inputs.
        """
        x = gnp.asarray(x)
        if x.ndim <= 1:
            return float(self(x.reshape(1, -1), None, pairwise=True)[0])
        return self(x, None, pairwise=True)

    def _covariance(self, x, y, pairwise):
        raise NotImplementedError

    def _check_inputs(self, x, y, pairwise):
        x = gnp.asarray(x)
        if x.ndim != 2:
            raise DimensionMismatch("x should be a 2D array of shape (n, d)")
        self._check_dim(x.shape[1])
        if y is None:
            return x, None
        y = gnp.asarray(y)
        if y.ndim != 2:
            raise DimensionMismatch("y should be a 2D array of shape (m, d)")
        if y.shape[1] != x.shape[1]:
            raise DimensionMismatch(
                f"x and y have different dimensions ({x.shape[1]} and {y.shape[1]})",
                expected=x.shape[1],
                got=y.shape[1],
            )
        if pairwise and y.shape[0] != x.shape[0]:
            raise DimensionMismatch(
                "pairwise evaluation needs x and y with the same number of rows",
                expected=x.shape[0],
                got=y.shape[0],
            )
        return x, y

    def _check_dim(self, d):
        if self.input_dim is not None and d != self.input_dim:
            raise DimensionMismatch(
                f"kernel expects inputs of dimension {self.input_dim}, got {d}",
                expected=self.input_dim,
                got=d,
            )

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------
    @property
    def parameters(self):
        """Ordered mapping from parameter names to values."""
        return OrderedDict(self._parameters())

    @property
    def num_parameters(self):
        return self.get_parameters().shape[0]

    def get_parameters(self):
        """Flat vector of parameter values (array-valued entries are expanded)."""
        values = [gnp.asarray(v).reshape(-1) for _, v in self._parameters()]
        if not values:
            return gnp.zeros(0)
        return gnp.concatenate(values)

    def with_parameters(self, values):
        """Return a new kernel of the same kind with the given flat parameters."""
        values = gnp.asarray(values).reshape(-1)
        if values.shape[0] != self.num_parameters:
            raise ValueError(
                f"expected {self.num_parameters} parameter values, got {values.shape[0]}"
            )
        return self._from_parameters(values)

    def _parameters(self):
        raise NotImplementedError

    def _from_parameters(self, values):
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------
    def __add__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        return SumKernel(self, other)

    def __mul__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        return ProductKernel(self, other)

    def __repr__(self):
        params = ", ".join(f"{k}={_fmt(v)}" for k, v in self._parameters())
        return f"{type(self).__name__}({params})"


def _fmt(v):
    v = gnp.asarray(v)
    if v.size == 1:
        return f"{v.item():.4g}"
    return "[" + ", ".join(f"{t:.4g}" for t in v.reshape(-1)) + "]"


def _split_values(values, sizes):
    out = []
    start = 0
    for s in sizes:
        out.append(values[start : start + s])
        start += s
    return out


class _CompositeKernel(Kernel):
    _operation = None

    def __init__(self, k1, k2):
        if not (isinstance(k1, Kernel) and isinstance(k2, Kernel)):
            raise TypeError("composite kernels combine Kernel instances")
        self._k1 = copy.deepcopy(k1)
        self._k2 = copy.deepcopy(k2)
        dims = {k.input_dim for k in (k1, k2) if k.input_dim is not None}
        if len(dims) > 1:
            raise DimensionMismatch(
                f"sub-kernels expect different input dimensions {sorted(dims)}"
            )
        self.input_dim = dims.pop() if dims else None

    @property
    def kernels(self):
        return (self._k1, self._k2)

    def _parameters(self):
        params = []
        for prefix, k in (("k1", self._k1), ("k2", self._k2)):
            params.extend((f"{prefix}.{name}", v) for name, v in k._parameters())
        return params

    def _from_parameters(self, values):
        v1, v2 = _split_values(values, [self._k1.num_parameters, self._k2.num_parameters])
        return type(self)(self._k1.with_parameters(v1), self._k2.with_parameters(v2))

    def __repr__(self):
        return f"({self._k1!r} {self._operation} {self._k2!r})"


class SumKernel(_CompositeKernel):
    """k(x, y) = k1(x, y) + k2(x, y)."""

    _operation = "+"

    def _covariance(self, x, y, pairwise):
        return self._k1._covariance(x, y, pairwise) + self._k2._covariance(x, y, pairwise)


class ProductKernel(_CompositeKernel):
    """k(x, y) = k1(x, y) * k2(x, y)."""

    _operation = "*"

    def _covariance(self, x, y, pairwise):
        return self._k1._covariance(x, y, pairwise) * self._k2._covariance(x, y, pairwise)
