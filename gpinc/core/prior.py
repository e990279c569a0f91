# gpinc/core/prior.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Prior mean functions.

The prior mean is the value returned in the absence of data. It is
fitted once, when the model is fitted, and stays frozen while points
are added: the cached solve vector is computed against the residuals
``zi - mean(xi)``.
"""
import gpinc.num as gnp


class ZeroMean:
    def fit(self, xi, zi):
        return self

    def __call__(self, x):
        return gnp.zeros((x.shape[0],))

    def __repr__(self):
        return "ZeroMean()"


class ConstantMean:
    """Constant prior mean.

    If ``c`` is None, ``fit`` returns a copy whose constant is the mean
    of the outputs. An unfitted ConstantMean evaluates to 0.
    """

    def __init__(self, c=None):
        self.c = None if c is None else float(c)
        self._auto = c is None

    def fit(self, xi, zi):
        if not self._auto:
            return self
        fitted = ConstantMean(float(gnp.mean(zi)))
        fitted._auto = True
        return fitted

    def __call__(self, x):
        return gnp.full((x.shape[0],), 0.0 if self.c is None else self.c)

    def __repr__(self):
        return f"ConstantMean({self.c})"


class LinearMean:
    """Linear prior mean ``[1 | x] @ w``.

    If ``w`` is None, ``fit`` solves the least-squares problem on the
    training data. An unfitted LinearMean evaluates to 0.
    """

    def __init__(self, w=None):
        self.w = None if w is None else gnp.readonly(gnp.asarray(w).reshape(-1))
        self._auto = w is None

    def fit(self, xi, zi):
        if not self._auto:
            return self
        P = gnp.hstack((gnp.ones((xi.shape[0], 1)), xi))
        w, _, _, _ = gnp.lstsq(P, zi, rcond=None)
        fitted = LinearMean(w)
        fitted._auto = True
        return fitted

    def __call__(self, x):
        if self.w is None:
            return gnp.zeros((x.shape[0],))
        if self.w.shape[0] != x.shape[1] + 1:
            raise ValueError(
                f"linear prior of dimension {self.w.shape[0] - 1} applied to inputs of dimension {x.shape[1]}"
            )
        return self.w[0] + gnp.matmul(x, self.w[1:])

    def __repr__(self):
        return f"LinearMean({None if self.w is None else list(self.w)})"


_PRIORS = {"zero": ZeroMean, "constant": ConstantMean, "linear": LinearMean}


def as_prior(prior):
    """Return a prior mean object from None, a name or an instance."""
    if prior is None:
        return ZeroMean()
    if isinstance(prior, str):
        try:
            return _PRIORS[prior.lower()]()
        except KeyError:
            raise ValueError(
                f"unknown prior '{prior}'; expected one of {sorted(_PRIORS)}"
            ) from None
    if not (callable(prior) and hasattr(prior, "fit")):
        raise TypeError("prior must provide fit(xi, zi) and __call__(x)")
    return prior
