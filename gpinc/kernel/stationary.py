# gpinc/kernel/stationary.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Stationary kernels.

A stationary kernel has the form

.. math::
    k(x, y) = \\sigma^2 \\, r(h), \\qquad
    h = \\Big( \\sum_j (x_j - y_j)^2 / \\rho_j^2 \\Big)^{1/2}

where :math:`\\sigma^2` is the variance, :math:`\\rho` the (scalar or
per-dimension) length scale and :math:`r` a correlation function with
:math:`r(0) = 1`.
"""
import gpinc.num as gnp

from .base import Kernel, _fmt


class StationaryKernel(Kernel):
    def __init__(self, lengthscale=1.0, variance=1.0, input_dim=None):
        lengthscale = gnp.asarray(lengthscale).reshape(-1)
        if lengthscale.shape[0] == 0:
            raise ValueError("lengthscale must not be empty")
        if not gnp.all(gnp.isfinite(lengthscale)) or gnp.any(lengthscale <= 0.0):
            raise ValueError("lengthscale must be positive")
        variance = float(variance)
        if not variance > 0.0:
            raise ValueError("variance must be positive")
        if lengthscale.shape[0] > 1:
            if input_dim is not None and input_dim != lengthscale.shape[0]:
                raise ValueError(
                    f"{lengthscale.shape[0]} length scales given for input_dim={input_dim}"
                )
            input_dim = lengthscale.shape[0]
        self._lengthscale = gnp.readonly(lengthscale)
        self._variance = variance
        self.input_dim = input_dim

    @property
    def lengthscale(self):
        if self._lengthscale.shape[0] == 1:
            return float(self._lengthscale[0])
        return self._lengthscale

    @property
    def variance(self):
        return self._variance

    def correlation(self, h):
        raise NotImplementedError

    def scaled_distance(self, x, y, pairwise=False):
        invrho = 1.0 / self._lengthscale
        if pairwise:
            return gnp.scaled_distance_elementwise(invrho, x, y)
        if y is None:
            y = x
        return gnp.scaled_distance(invrho, x, y)

    def _covariance(self, x, y, pairwise):
        if pairwise and y is None:
            return self._variance * gnp.ones((x.shape[0],))
        h = self.scaled_distance(x, y, pairwise)
        return self._variance * self.correlation(h)

    def _parameters(self):
        return [("lengthscale", self.lengthscale), ("variance", self._variance)]

    def _split(self, values):
        n_ls = self._lengthscale.shape[0]
        return values[:n_ls], values[n_ls]

    def _from_parameters(self, values):
        lengthscale, variance = self._split(values)
        return type(self)(lengthscale, variance, input_dim=self.input_dim)

    def _fmt_ls(self):
        return _fmt(self._lengthscale)


class SquaredExponential(StationaryKernel):
    """Squared-exponential (Gaussian, RBF) kernel, :math:`r(h) = \\exp(-h^2/2)`."""

    def correlation(self, h):
        return gnp.exp(-0.5 * h**2)


class Exponential(StationaryKernel):
    """Exponential kernel, :math:`r(h) = \\exp(-h)`."""

    def correlation(self, h):
        return gnp.exp(-h)


class RationalQuadratic(StationaryKernel):
    """Rational quadratic kernel.

    .. math::
        r(h) = \\left(1 + \\frac{h^2}{2\\alpha}\\right)^{-\\alpha}

    Tends to the squared-exponential kernel as alpha grows.
    """

    def __init__(self, lengthscale=1.0, variance=1.0, alpha=1.0, input_dim=None):
        alpha = float(alpha)
        if not alpha > 0.0:
            raise ValueError("alpha must be positive")
        self._alpha = alpha
        super().__init__(lengthscale=lengthscale, variance=variance, input_dim=input_dim)

    @property
    def alpha(self):
        return self._alpha

    def correlation(self, h):
        return (1.0 + h**2 / (2.0 * self._alpha)) ** (-self._alpha)

    def _parameters(self):
        return super()._parameters() + [("alpha", self._alpha)]

    def _from_parameters(self, values):
        lengthscale, variance = self._split(values)
        alpha = values[self._lengthscale.shape[0] + 1]
        return RationalQuadratic(lengthscale, variance, alpha, input_dim=self.input_dim)
