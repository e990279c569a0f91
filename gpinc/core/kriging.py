# gpinc/core/kriging.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Posterior mean and variance from a cached Cholesky factor.

Given the lower factor L of the covariance matrix of the observations
and alpha = K^{-1} (zi - m(xi)), the posterior at xt is

    mean(xt)   = m(xt) + K(xi, xt)ᵀ alpha
    W          = L^{-1} K(xi, xt)
    var(xt)    = k(xt, xt) - Σ_i W_i²          (marginal)
    cov(xt)    = K(xt, xt) - Wᵀ W              (joint)

Functions
---------
posterior(kernel, prior, xi, L, alpha, xt, joint=False)
    Raw posterior mean and variance (or covariance), unfloored.
floor_variance(variance, prior_variance, jitter=0.0)
    Clip negative variances to zero and flag the ones too negative to
    be explained by rounding.
predict_marginal_batched(...)
    Marginal posterior over batches of query points, optionally
    dispatched to a thread pool.
"""
import warnings
from concurrent.futures import ThreadPoolExecutor

import gpinc.num as gnp
from gpinc.config import get_config, get_logger
from gpinc.errors import NumericalInstability

from .covariance import cross_covariance, prior_covariance

logger = get_logger()


def posterior(kernel, prior, xi, L, alpha, xt, joint=False):
    """Posterior mean and variance (or covariance if joint) at xt.

    Parameters
    ----------
    kernel : gpinc.kernel.Kernel
    prior : callable
        Prior mean, ``prior(x) -> (m,)``.
    xi : array_like, shape (n, d)
    L : array_like, shape (n, n)
    alpha : array_like, shape (n,)
    xt : array_like, shape (m, d)
    joint : bool
        Return the (m, m) posterior covariance instead of the variances.

    Returns
    -------
    zt_posterior_mean : array_like, shape (m,)
    zt_posterior_variance : array_like, shape (m,) or (m, m)
    zt_prior_variance : array_like, shape (m,)
    """
    Kit = cross_covariance(kernel, xi, xt)
    zt_posterior_mean = prior(xt) + gnp.matmul(Kit.T, alpha)
    W = gnp.forward_solve(L, Kit)
    if joint:
        Ktt = prior_covariance(kernel, xt, joint=True)
        zt_prior_variance = gnp.diag(Ktt)
        zt_posterior_variance = gnp.symmetrize(Ktt - gnp.matmul(W.T, W))
    else:
        zt_prior_variance = prior_covariance(kernel, xt, joint=False)
        zt_posterior_variance = zt_prior_variance - gnp.sum(W * W, axis=0)
    return zt_posterior_mean, zt_posterior_variance, zt_prior_variance


def floor_variance(variance, prior_variance, jitter=0.0, warn=True):
    """Replace negative variances by zero.

    Variances below ``-tol``, with ``tol = max(jitter,
    variance_tolerance * prior_variance)``, are flagged as numerical
    instabilities and a NumericalInstability warning is emitted.

    Parameters
    ----------
    variance : array_like, shape (m,) or (m, m)
        Posterior variances, or a posterior covariance whose diagonal
        is floored.
    prior_variance : array_like, shape (m,)
    jitter : float
        Diagonal jitter used by the factorization.
    warn : bool

    Returns
    -------
    variance : array_like
        Floored copy.
    instability : array_like of bool, shape (m,)
    """
    config = get_config()
    joint = variance.ndim == 2
    v = gnp.diag(variance) if joint else variance
    tol = gnp.maximum(jitter, config.variance_tolerance * gnp.abs(prior_variance))
    instability = v < -tol
    negative = v < 0.0
    if gnp.any(instability):
        if warn:
            warnings.warn(
                f"{int(gnp.sum(instability))} posterior variance(s) significantly "
                f"below zero (min {float(gnp.min(v)):.3e}); the covariance matrix "
                "is nearly singular. Consider adding noise.",
                NumericalInstability,
                stacklevel=3,
            )
    elif gnp.any(negative):
        logger.debug("Flooring %d slightly negative variance(s) to 0", int(gnp.sum(negative)))

    if not gnp.any(negative):
        return variance, instability
    variance = gnp.copy(variance)
    if joint:
        idx = gnp.where(negative)[0]
        variance[idx, idx] = 0.0
    else:
        variance = gnp.maximum(variance, 0.0)
    return variance, instability


def predict_marginal_batched(kernel, prior, xi, L, alpha, xt, batch_size, n_threads=1):
    """Marginal posterior computed over batches of at most batch_size points.

    Batches are independent and only read L and alpha, so they can be
    processed by ``n_threads`` worker threads.
    """
    m = xt.shape[0]
    batch_size = max(int(batch_size), 1)
    starts = list(range(0, m, batch_size))

    def run(start):
        return posterior(kernel, prior, xi, L, alpha, xt[start : start + batch_size], joint=False)

    if n_threads > 1 and len(starts) > 1:
        with ThreadPoolExecutor(max_workers=n_threads) as executor:
            results = list(executor.map(run, starts))
    else:
        results = [run(s) for s in starts]

    if not results:
        empty = gnp.zeros((0,))
        return empty, empty, empty
    zt_posterior_mean = gnp.concatenate([r[0] for r in results])
    zt_posterior_variance = gnp.concatenate([r[1] for r in results])
    zt_prior_variance = gnp.concatenate([r[2] for r in results])
    return zt_posterior_mean, zt_posterior_variance, zt_prior_variance
