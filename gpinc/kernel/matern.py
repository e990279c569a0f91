# gpinc/kernel/matern.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
from math import sqrt
import gpinc.num as gnp

from .stationary import StationaryKernel


def matern32_correlation(h):
    """Matérn 3/2 correlation.

    .. math::
        r(h) = (1 + \\sqrt{3}\\,h) \\exp(-\\sqrt{3}\\,h)

    Parameters
    ----------
    h : gnp.array
        Distances scaled by the length scales.

    Returns
    -------
    gnp.array
        Correlation values.
    """
    t = sqrt(3.0) * h
    return (1.0 + t) * gnp.exp(-t)


def maternp_correlation(p: int, h):
    """Matérn correlation with half-integer regularity :math:`\\nu = p + 1/2`.

    Using the half-integer simplification (Abramowitz & Stegun), with
    :math:`c = \\sqrt{2\\nu}`:

    .. math::
        r(h) = \\exp(-c\\,h)\\,
               \\frac{\\Gamma(p+1)}{\\Gamma(2p+1)}
               \\sum_{i=0}^{p} \\frac{(p+i)!}{i!(p-i)!}\\,(2ch)^{\\,p-i}

    Parameters
    ----------
    p : int
        Nonnegative integer with :math:`\\nu = p+1/2`.
    h : gnp.array
        Distances scaled by the length scales.

    Returns
    -------
    gnp.array
        Correlation values, equal to 1 at h = 0.
    """
    gln = gnp.compute_gammaln(p)
    h = gnp.inftobigf(h)
    c = sqrt(2.0 * p + 1.0)
    twoch = 2.0 * c * h
    polynomial = gnp.ones(h.shape)
    for i in range(p):
        exp_log_combination = gnp.exp(
            gln[p + 1] - gln[2 * p + 1] + gln[p + i + 1] - gln[i + 1] - gln[p - i + 1]
        )
        polynomial += exp_log_combination * (twoch ** (p - i))
    return gnp.exp(-c * h) * polynomial


class Matern(StationaryKernel):
    """Matérn kernel with regularity :math:`\\nu = p + 1/2`.

    p = 0 gives the exponential kernel, p = 1 the Matérn 3/2 and p = 2
    the Matérn 5/2 kernel.
    """

    def __init__(self, p=2, lengthscale=1.0, variance=1.0, input_dim=None):
        p = int(p)
        if p < 0:
            raise ValueError("Matérn regularity index p must be >= 0")
        self._p = p
        super().__init__(lengthscale=lengthscale, variance=variance, input_dim=input_dim)

    @property
    def p(self):
        return self._p

    @property
    def nu(self):
        return self._p + 0.5

    def correlation(self, h):
        if self._p == 1:
            return matern32_correlation(h)
        return maternp_correlation(self._p, h)

    def _from_parameters(self, values):
        lengthscale, variance = self._split(values)
        return Matern(self._p, lengthscale, variance, input_dim=self.input_dim)

    def __repr__(self):
        return f"Matern(nu={self.nu}, lengthscale={self._fmt_ls()}, variance={self.variance:.4g})"
