# gpinc/core/noise.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Observation noise models.

A noise model returns, for an (n, d) array of inputs, the (n,) vector
of noise variances added to the diagonal of the covariance matrix of
the observations. Uncertainty on the inputs can be expressed through
`HeteroscedasticNoise` with an input-dependent variance.
"""
import gpinc.num as gnp


class NoiseModel:
    def variance(self, x):
        raise NotImplementedError

    def __call__(self, x):
        v = gnp.asarray(self.variance(x)).reshape(-1)
        if v.shape[0] != x.shape[0]:
            raise ValueError(
                f"noise model returned {v.shape[0]} variances for {x.shape[0]} points"
            )
        if not gnp.all(gnp.isfinite(v)) or gnp.any(v < 0.0):
            raise ValueError("noise variances must be finite and nonnegative")
        return v

    def new_point_variance(self, x):
        """Noise variance of a point added after the fit."""
        return self(x)


class HomoscedasticNoise(NoiseModel):
    """Constant noise variance."""

    def __init__(self, noise=0.0):
        noise = float(noise)
        if not noise >= 0.0:
            raise ValueError("noise variance must be nonnegative")
        self.noise = noise

    def variance(self, x):
        return gnp.full((x.shape[0],), self.noise)

    def __repr__(self):
        return f"HomoscedasticNoise({self.noise:.4g})"


class HeteroscedasticNoise(NoiseModel):
    """Input-dependent noise variance given by a callable ``func(x) -> (n,)``."""

    def __init__(self, func):
        if not callable(func):
            raise TypeError("func must be callable")
        self.func = func

    def variance(self, x):
        return self.func(x)

    def __repr__(self):
        name = getattr(self.func, "__name__", repr(self.func))
        return f"HeteroscedasticNoise({name})"


class FixedNoise(NoiseModel):
    """Per-point noise variances known for the fitted data only.

    Points added after the fit must come with an explicit noise value.
    """

    def __init__(self, values):
        self.values = gnp.readonly(gnp.asarray(values).reshape(-1))

    def variance(self, x):
        if x.shape[0] != self.values.shape[0]:
            raise ValueError(
                f"{self.values.shape[0]} noise variances given for {x.shape[0]} points; "
                "pass the noise of added points explicitly"
            )
        return self.values

    def new_point_variance(self, x):
        raise ValueError("FixedNoise has no variance for added points; pass noise explicitly")

    def __repr__(self):
        return f"FixedNoise(n={self.values.shape[0]})"


def as_noise_model(noise):
    """Convert a float, an array of per-point variances or a NoiseModel."""
    if isinstance(noise, NoiseModel):
        return noise
    if noise is None:
        return HomoscedasticNoise(0.0)
    if callable(noise):
        return HeteroscedasticNoise(noise)
    noise_ = gnp.asarray(noise)
    if noise_.size == 1 and noise_.ndim <= 1:
        return HomoscedasticNoise(noise_.item())
    return FixedNoise(noise_)
