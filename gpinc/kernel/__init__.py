# gpinc/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process kernels.

This subpackage provides immutable covariance functions and their
combinators.

Modules
-------
base
    Kernel interface, SumKernel and ProductKernel.
stationary
    Squared-exponential, exponential and rational quadratic kernels.
matern
    Matérn family of kernels with half-integer regularity.
dotproduct
    Linear and polynomial kernels.
factory
    Construction from named parameters.

Public API
-----------
- Interface and combinators:
    Kernel, SumKernel, ProductKernel
- Kernels:
    SquaredExponential, Exponential, RationalQuadratic, Matern,
    Linear, Polynomial
- Correlation functions:
    matern32_correlation, maternp_correlation
- Construction:
    make_kernel
"""

from .base import Kernel, SumKernel, ProductKernel
from .stationary import StationaryKernel, SquaredExponential, Exponential, RationalQuadratic
from .matern import Matern, matern32_correlation, maternp_correlation
from .dotproduct import Linear, Polynomial
from .factory import make_kernel

__all__ = [
    # Interface
    "Kernel",
    "StationaryKernel",
    "SumKernel",
    "ProductKernel",
    # Kernels
    "SquaredExponential",
    "Exponential",
    "RationalQuadratic",
    "Matern",
    "Linear",
    "Polynomial",
    # Correlations
    "matern32_correlation",
    "maternp_correlation",
    # Construction
    "make_kernel",
]
