# gpinc/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Cholesky factorization engine.

Full factorization with a bounded jitter-retry policy, and the O(n²)
extension of a factor by one row when a point is added:

    [ K   b ]   [ L   0 ] [ Lᵀ  r ]
    [ bᵀ  c ] = [ rᵀ  d ] [ 0   d ],   L r = b,   d = sqrt(c - rᵀr).

The same row extends the forward-solved vector z (L z = y) in O(n):
z_new = (y_new - rᵀz) / d.
"""
from math import sqrt, isfinite

import gpinc.num as gnp
from gpinc.config import get_config, get_logger
from gpinc.errors import NotPositiveDefinite

logger = get_logger()


class JitterPolicy:
    """Diagonal jitter sequence used when a factorization fails.

    The jitters tried are ``initial * scale * factor**k`` for
    k = 0, ..., max_tries - 1, where ``scale`` is the mean diagonal of
    the matrix when ``relative`` is True, and 1 otherwise.

    Parameters
    ----------
    initial : float, optional
        First jitter (default: config.jitter_initial).
    factor : float, optional
        Growth factor between two attempts (default: config.jitter_factor).
    max_tries : int, optional
        Number of jittered attempts after the plain one
        (default: config.jitter_max_tries). 0 disables retries.
    relative : bool, optional
        Scale the jitter by the mean of the diagonal (default True).
    """

    def __init__(self, initial=None, factor=None, max_tries=None, relative=True):
        config = get_config()
        self.initial = float(config.jitter_initial if initial is None else initial)
        self.factor = float(config.jitter_factor if factor is None else factor)
        self.max_tries = int(config.jitter_max_tries if max_tries is None else max_tries)
        self.relative = relative
        if self.initial <= 0.0:
            raise ValueError("initial jitter must be positive")
        if self.factor <= 1.0:
            raise ValueError("jitter factor must be greater than 1")
        if self.max_tries < 0:
            raise ValueError("max_tries must be >= 0")

    def jitters(self, scale=1.0):
        """Generate the successive jitter values."""
        if not self.relative or not (scale > 0.0 and isfinite(scale)):
            scale = 1.0
        jitter = self.initial * scale
        for _ in range(self.max_tries):
            yield jitter
            jitter *= self.factor

    def __repr__(self):
        return (
            f"JitterPolicy(initial={self.initial:g}, factor={self.factor:g}, "
            f"max_tries={self.max_tries}, relative={self.relative})"
        )


def _as_policy(policy):
    return JitterPolicy() if policy is None else policy


def cholesky_with_jitter(K, policy=None, scale=None):
    """Cholesky factorization with bounded jitter retries.

    Parameters
    ----------
    K : array_like, shape (n, n)
        Symmetric matrix.
    policy : JitterPolicy, optional
    scale : float, optional
        Scale of the relative jitter (default: mean of the diagonal of K).

    Returns
    -------
    L : array_like, shape (n, n)
        Lower-triangular factor of K + jitter I.
    jitter : float
        Jitter that was added (0.0 if none was needed).

    Raises
    ------
    NotPositiveDefinite
        If every attempt fails.
    """
    policy = _as_policy(policy)
    n = K.shape[0]
    if n == 0:
        return gnp.zeros((0, 0)), 0.0
    if not gnp.all(gnp.isfinite(K)):
        raise NotPositiveDefinite("matrix has non-finite entries", jitter=0.0, attempts=0)
    try:
        return gnp.cholesky(K), 0.0
    except gnp.LinAlgError:
        pass

    if scale is None:
        scale = float(gnp.mean(gnp.abs(gnp.diag(K))))
    I = gnp.eye(n)
    attempts = 1
    jitter = 0.0
    for jitter in policy.jitters(scale):
        attempts += 1
        logger.debug("Cholesky factorization failed, retrying with jitter %.3e", jitter)
        try:
            L = gnp.cholesky(K + jitter * I)
        except gnp.LinAlgError:
            continue
        logger.info("Cholesky factorization succeeded with jitter %.3e", jitter)
        return L, jitter

    raise NotPositiveDefinite(
        f"matrix of size {n} is not positive definite "
        f"(after {attempts} attempts, last jitter {jitter:.3e})",
        jitter=jitter,
        attempts=attempts,
    )


def cholesky_extend(L, b, c, policy=None, scale=None):
    """Row of the Cholesky factor of the matrix extended by one point.

    Parameters
    ----------
    L : array_like, shape (n, n)
        Lower-triangular factor of K.
    b : array_like, shape (n,)
        Covariance between the new point and the existing points.
    c : float
        Variance of the new point (noise and jitter included).
    policy : JitterPolicy, optional
        Jitter sequence applied to c when the new pivot is not positive.
    scale : float, optional
        Scale of the relative jitter (default: c).

    Returns
    -------
    r : array_like, shape (n,)
        Solution of L r = b.
    d : float
        New diagonal entry.
    jitter : float
        Jitter added to c (0.0 if none was needed).

    Raises
    ------
    NotPositiveDefinite
        If c - rᵀr stays non-positive after the retries.

    Notes
    -----
    The cost is one forward substitution, O(n²).
    """
    policy = _as_policy(policy)
    if L.shape[0] == 0:
        r = gnp.zeros((0,))
        rr = 0.0
    else:
        r = gnp.forward_solve(L, b)
        rr = float(gnp.dot(r, r))

    pivot = c - rr
    # a pivot at the rounding level of c means a numerically singular matrix
    tol = gnp.eps * abs(c)
    if pivot > tol and isfinite(pivot):
        return r, sqrt(pivot), 0.0
    if not isfinite(pivot):
        raise NotPositiveDefinite("non-finite pivot in incremental update", attempts=1)

    if scale is None:
        scale = abs(c)
    attempts = 1
    jitter = 0.0
    for jitter in policy.jitters(scale):
        attempts += 1
        logger.debug("Incremental pivot %.3e not positive, retrying with jitter %.3e", pivot, jitter)
        if pivot + jitter > tol:
            logger.info("Incremental Cholesky update succeeded with jitter %.3e", jitter)
            return r, sqrt(pivot + jitter), jitter

    raise NotPositiveDefinite(
        f"incremental update is not positive definite (pivot {pivot:.3e} "
        f"after {attempts} attempts, last jitter {jitter:.3e})",
        jitter=jitter,
        attempts=attempts,
    )


def extend_forward_solve(z, r, d, y):
    """New last entry of z when L is extended by the row [rᵀ, d], O(n)."""
    if z.shape[0] == 0:
        return y / d
    return (y - float(gnp.dot(r, z))) / d


def forward_solve(L, B):
    """Solve L W = B."""
    return gnp.forward_solve(L, B)


def back_solve(L, z):
    """Solve Lᵀ alpha = z."""
    return gnp.backward_solve(L, z)


def diag_Kinv_from_chol(L):
    """Return diag(K^{-1}) from the lower Cholesky factor L of K.

    With T = L^{-1}, K^{-1} = Tᵀ T and diag(K^{-1}) is the column-wise
    sum of squares of T.
    """
    n = L.shape[0]
    T = gnp.forward_solve(L, gnp.eye(n))
    return gnp.sum(T * T, axis=0)
