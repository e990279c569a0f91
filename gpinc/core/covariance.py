# gpinc/core/covariance.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance matrices and vectors built from a kernel and a dataset.

training_covariance(kernel, xi, noise)
    K(xi, xi) + diag(noise), symmetrized, shape (n, n).
cross_covariance(kernel, xi, xt)
    K(xi, xt), shape (n, m).
point_covariance(kernel, xi, x, noise)
    Covariance vector between a new point and the training inputs, and
    its self-covariance including noise.
prior_covariance(kernel, xt, joint)
    K(xt, xt) if joint, else the (m,) prior variances.
"""
import gpinc.num as gnp


def training_covariance(kernel, xi, noise_variance):
    """Covariance matrix of the observations.

    Parameters
    ----------
    kernel : gpinc.kernel.Kernel
    xi : array_like, shape (n, d)
    noise_variance : array_like, shape (n,)
        Noise variances added to the diagonal.

    Returns
    -------
    K : array_like, shape (n, n)
    """
    K = kernel(xi, None)
    n = K.shape[0]
    K = gnp.symmetrize(K)
    K[gnp.arange(n), gnp.arange(n)] += noise_variance
    return K


def cross_covariance(kernel, xi, xt):
    """K(xi, xt), shape (n, m)."""
    return kernel(xi, xt)


def point_covariance(kernel, xi, x, noise_variance):
    """Covariance between one new point and the training inputs.

    Parameters
    ----------
    kernel : gpinc.kernel.Kernel
    xi : array_like, shape (n, d)
    x : array_like, shape (1, d)
    noise_variance : float
        Noise variance of the new observation.

    Returns
    -------
    b : array_like, shape (n,)
        k(xi_j, x) for j = 1, ..., n.
    c : float
        k(x, x) + noise_variance.
    """
    if xi.shape[0] == 0:
        b = gnp.zeros((0,))
    else:
        b = kernel(xi, x).reshape(-1)
    c = float(kernel(x, None, pairwise=True)[0]) + float(noise_variance)
    return b, c


def prior_covariance(kernel, xt, joint=False):
    """Prior covariance matrix (joint) or prior variances at xt."""
    if joint:
        return gnp.symmetrize(kernel(xt, None))
    return kernel(xt, None, pairwise=True)
