# gpinc/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Likelihood and leave-one-out quantities computed from a cached factor.
"""
import gpinc.num as gnp

from .linalg import diag_Kinv_from_chol


def negative_log_likelihood(L, z):
    """Negative log-likelihood of the centered observations.

    With K = L Lᵀ and L z = zi - m(xi):

    .. math::
        -\\log p(z_i) = \\frac{1}{2} z^T z + \\sum_j \\log L_{jj}
                        + \\frac{n}{2} \\log 2\\pi

    Parameters
    ----------
    L : array_like, shape (n, n)
    z : array_like, shape (n,)

    Returns
    -------
    nll : float
    """
    n = z.shape[0]
    ldetK_half = gnp.sum(gnp.log(gnp.diag(L)))
    return float(0.5 * gnp.dot(z, z) + ldetK_half + 0.5 * n * gnp.log(2.0 * gnp.pi))


def loo(L, alpha, zi):
    """Leave-one-out predictions by virtual cross-validation.

    Parameters
    ----------
    L : array_like, shape (n, n)
    alpha : array_like, shape (n,)
        K^{-1} (zi - m(xi)).
    zi : array_like, shape (n,)

    Returns
    -------
    zloo : array_like, shape (n,)
        Prediction of each observation from the others.
    sigma2loo : array_like, shape (n,)
        Variance of the LOO prediction errors.
    eloo : array_like, shape (n,)
        LOO prediction errors zi - zloo.

    Notes
    -----
    eloo_i = alpha_i / (K^{-1})_ii and sigma2loo_i = 1 / (K^{-1})_ii
    (Dubrule 1983).
    """
    Kinvdiag = diag_Kinv_from_chol(L)
    eloo = alpha / Kinvdiag
    sigma2loo = 1.0 / Kinvdiag
    zloo = zi - eloo
    return zloo, sigma2loo, eloo
