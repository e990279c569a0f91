# gpinc/num/shared.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Array-independent helpers for gpinc.num."""

from typing import Any

from gpinc.config import get_config

ArrayLike = Any


def compute_gammaln(up_to_p: int) -> ArrayLike:
    """
    Return gammaln(k) for k = 0, ..., 2*up_to_p + 1 as a 1D array.
    Grows and caches a single table in _config.caches["gammaln"]["table"].
    """
    import gpinc.num as gnp

    n = 2 * up_to_p + 2
    cache = get_config().caches.setdefault("gammaln", {})
    table = cache.get("table")

    if table is None:
        table = gnp.asarray(gnp.gammaln(gnp.arange(n)))
        cache["table"] = table
    elif table.shape[0] < n:
        old_n = table.shape[0]
        tail = gnp.asarray(gnp.gammaln(gnp.arange(old_n, n)))
        table = gnp.concatenate((table, tail))
        cache["table"] = table

    return table[:n]


def symmetrize(A: ArrayLike) -> ArrayLike:
    """Average a square matrix with its transpose."""
    return 0.5 * (A + A.T)
