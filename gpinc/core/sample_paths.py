# gpinc/core/sample_paths.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Sampling routines for Gaussian Process models.

This module provides:
- Draws from a Gaussian vector N(mean, cov) using a jittered Cholesky factor.
- Unconditional sample paths of a zero-mean GP on a set of points.
Posterior draws are obtained by `Model.sample`, which passes the joint
posterior mean and covariance to `draw_gaussian`.
"""
import gpinc.num as gnp

from .covariance import prior_covariance
from .linalg import cholesky_with_jitter


def draw_gaussian(mean, cov, n_samples, seed=None, policy=None, scale=None):
    """Draw ``n_samples`` vectors from N(mean, cov).

    Parameters
    ----------
    mean : array_like, shape (m,)
    cov : array_like, shape (m, m)
    n_samples : int
    seed : int, optional
        Seed of a dedicated generator; the global gpinc generator is
        used when None.
    policy : JitterPolicy, optional
        Jitter sequence used if cov is not numerically positive definite.
    scale : float, optional
        Scale of the relative jitter (default: mean diagonal of cov).

    Returns
    -------
    ndarray, shape (n_samples, m)

    Raises
    ------
    NotPositiveDefinite
        If cov cannot be factored.

    Notes
    -----
    With cov = C Cᵀ, a draw is mean + C u with u ~ N(0, I).
    """
    n_samples = int(n_samples)
    if n_samples < 0:
        raise ValueError("n_samples must be nonnegative")
    m = mean.shape[0]
    C, _ = cholesky_with_jitter(cov, policy=policy, scale=scale)
    rng = gnp.default_rng(seed)
    u = rng.standard_normal((m, n_samples))
    zsim = mean.reshape(-1, 1) + gnp.matmul(C, u)
    return zsim.T


def sample_paths(kernel, xt, n_samples, seed=None, policy=None):
    """Generate sample paths on xt from the zero-mean GP with covariance `kernel`.

    Parameters
    ----------
    kernel : gpinc.kernel.Kernel
    xt : ndarray, shape (m, d)
    n_samples : int
    seed : int, optional
    policy : JitterPolicy, optional

    Returns
    -------
    ndarray, shape (n_samples, m)
    """
    xt_ = gnp.asarray(xt)
    if xt_.ndim == 1:
        xt_ = xt_.reshape(-1, 1)
    K = prior_covariance(kernel, xt_, joint=True)
    return draw_gaussian(gnp.zeros((xt_.shape[0],)), K, n_samples, seed=seed, policy=policy)
