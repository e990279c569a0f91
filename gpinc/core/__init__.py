# gpinc/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpinc package.

This subpackage contains the numerical routines for Gaussian Process
regression with incremental updates: jittered and extended Cholesky
factorizations, kriging predictors, sampling, likelihood and LOO
computations, noise models and prior means.

Public API
----------
Model : class
    Gaussian Process model combining all core routines.
fit, predict, sample, add_point : functions
    Functional shortcuts for the corresponding Model methods.
JitterPolicy : class
    Retry policy for Cholesky factorizations.
ZeroMean, ConstantMean, LinearMean : classes
    Prior means.
HomoscedasticNoise, HeteroscedasticNoise, FixedNoise : classes
    Observation noise models.
"""

from .model import Model, fit, predict, sample, add_point
from .linalg import JitterPolicy, cholesky_with_jitter, cholesky_extend
from .prior import ZeroMean, ConstantMean, LinearMean
from .noise import NoiseModel, HomoscedasticNoise, HeteroscedasticNoise, FixedNoise
from .sample_paths import sample_paths

__all__ = [
    "Model",
    "fit",
    "predict",
    "sample",
    "add_point",
    "JitterPolicy",
    "cholesky_with_jitter",
    "cholesky_extend",
    "ZeroMean",
    "ConstantMean",
    "LinearMean",
    "NoiseModel",
    "HomoscedasticNoise",
    "HeteroscedasticNoise",
    "FixedNoise",
    "sample_paths",
]
