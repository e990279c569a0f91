# gpinc/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions and warnings raised by gpinc.

GPError
    Base class of all gpinc errors.
DimensionMismatch
    Input vectors whose length disagrees with the data or the kernel.
NotPositiveDefinite
    A Cholesky factorization (full or incremental) failed after the
    bounded jitter-retry sequence.
EmptyTrainingSet
    Prediction or sampling requested on a model without data.
NumericalInstability
    Warning category for posterior variances computed significantly
    below zero.
"""
import numpy


class GPError(Exception):
    """Base class for gpinc errors."""


class DimensionMismatch(GPError, ValueError):
    def __init__(self, message, expected=None, got=None):
        super().__init__(message)
        self.expected = expected
        self.got = got


class NotPositiveDefinite(GPError, numpy.linalg.LinAlgError):
    """Raised when a covariance matrix cannot be factored.

    Attributes
    ----------
    jitter : float
        Last diagonal jitter that was tried (0.0 if no retry was allowed).
    attempts : int
        Number of factorization attempts.
    """

    def __init__(self, message, jitter=0.0, attempts=1):
        super().__init__(message)
        self.jitter = jitter
        self.attempts = attempts


class EmptyTrainingSet(GPError, ValueError):
    pass


class NumericalInstability(RuntimeWarning):
    pass
