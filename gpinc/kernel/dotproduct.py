# gpinc/kernel/dotproduct.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Non-stationary kernels built on the inner product of the inputs."""
import gpinc.num as gnp

from .base import Kernel


def _inner(x, y, pairwise):
    if pairwise:
        if y is None:
            return gnp.sum(x * x, axis=1)
        return gnp.sum(x * y, axis=1)
    if y is None:
        y = x
    return gnp.matmul(x, y.T)


class Linear(Kernel):
    """Linear kernel, :math:`k(x, y) = \\sigma^2 \\langle x, y \\rangle + c`.

    With a zero offset the covariance matrix of n points in dimension
    d has rank at most d, so a positive noise is usually required.
    """

    def __init__(self, variance=1.0, offset=0.0, input_dim=None):
        variance = float(variance)
        offset = float(offset)
        if not variance > 0.0:
            raise ValueError("variance must be positive")
        if offset < 0.0:
            raise ValueError("offset must be nonnegative")
        self._variance = variance
        self._offset = offset
        self.input_dim = input_dim

    @property
    def variance(self):
        return self._variance

    @property
    def offset(self):
        return self._offset

    def _covariance(self, x, y, pairwise):
        return self._variance * _inner(x, y, pairwise) + self._offset

    def _parameters(self):
        return [("variance", self._variance), ("offset", self._offset)]

    def _from_parameters(self, values):
        return Linear(values[0], values[1], input_dim=self.input_dim)


class Polynomial(Kernel):
    """Polynomial kernel, :math:`k(x, y) = (\\sigma^2 \\langle x, y \\rangle + c)^q`."""

    def __init__(self, degree=2, variance=1.0, offset=1.0, input_dim=None):
        degree = int(degree)
        if degree < 1:
            raise ValueError("degree must be >= 1")
        variance = float(variance)
        offset = float(offset)
        if not variance > 0.0:
            raise ValueError("variance must be positive")
        if offset < 0.0:
            raise ValueError("offset must be nonnegative")
        self._degree = degree
        self._variance = variance
        self._offset = offset
        self.input_dim = input_dim

    @property
    def degree(self):
        return self._degree

    @property
    def variance(self):
        return self._variance

    @property
    def offset(self):
        return self._offset

    def _covariance(self, x, y, pairwise):
        return (self._variance * _inner(x, y, pairwise) + self._offset) ** self._degree

    def _parameters(self):
        return [("variance", self._variance), ("offset", self._offset)]

    def _from_parameters(self, values):
        return Polynomial(self._degree, values[0], values[1], input_dim=self.input_dim)
