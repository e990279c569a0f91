# gpinc/kernel/factory.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Build kernels from named parameters.

Examples
--------
>>> make_kernel("squared-exponential", lengthscale=1.0, variance=2.0)
SquaredExponential(lengthscale=1, variance=2)
>>> make_kernel({"kind": "composite", "operation": "sum",
...              "kernels": [{"kind": "se", "lengthscale": 0.5},
...                          {"kind": "linear", "variance": 0.1}]})
(SquaredExponential(lengthscale=0.5, variance=1) + Linear(variance=0.1, offset=0))
"""
from functools import reduce

from .base import Kernel, SumKernel, ProductKernel
from .stationary import SquaredExponential, Exponential, RationalQuadratic
from .matern import Matern
from .dotproduct import Linear, Polynomial

_KINDS = {
    "squared-exponential": SquaredExponential,
    "squared_exponential": SquaredExponential,
    "se": SquaredExponential,
    "rbf": SquaredExponential,
    "gaussian": SquaredExponential,
    "exponential": Exponential,
    "matern": Matern,
    "rational-quadratic": RationalQuadratic,
    "rational_quadratic": RationalQuadratic,
    "linear": Linear,
    "polynomial": Polynomial,
}

_OPERATIONS = {"sum": SumKernel, "+": SumKernel, "product": ProductKernel, "*": ProductKernel}


def make_kernel(kind=None, **params):
    """Construct a kernel from its kind and named parameters.

    Parameters
    ----------
    kind : str or dict
        Kernel kind, or a dict holding a "kind" key and the parameters.
        Kinds: 'squared-exponential' (aliases 'se', 'rbf', 'gaussian'),
        'exponential', 'matern', 'rational-quadratic', 'linear',
        'polynomial' and 'composite'.
    **params
        Kernel parameters (lengthscale, variance, p, alpha, offset,
        degree, input_dim). A composite kernel takes 'operation'
        ('sum' or 'product') and 'kernels' (a list of kernels or of
        kernel descriptions, combined left to right).

    A 'noise' entry is accepted and ignored, so that a full model
    description can be passed; the noise belongs to the model.

    Returns
    -------
    Kernel
    """
    if isinstance(kind, dict):
        params = {**kind, **params}
        kind = params.pop("kind", None)
    if kind is None:
        raise ValueError("kernel kind is required")
    params.pop("noise", None)
    kind = str(kind).lower()

    if kind == "composite":
        operation = str(params.pop("operation", "sum")).lower()
        if operation not in _OPERATIONS:
            raise ValueError(f"unknown kernel operation '{operation}'")
        children = params.pop("kernels", None)
        if params:
            raise ValueError(f"unexpected parameters for a composite kernel: {sorted(params)}")
        if not children or len(children) < 2:
            raise ValueError("a composite kernel needs at least two kernels")
        kernels = [c if isinstance(c, Kernel) else make_kernel(c) for c in children]
        return reduce(_OPERATIONS[operation], kernels)

    try:
        cls = _KINDS[kind]
    except KeyError:
        raise ValueError(
            f"unknown kernel kind '{kind}'; expected one of {sorted(set(_KINDS))} or 'composite'"
        ) from None
    try:
        return cls(**params)
    except TypeError as exc:
        raise ValueError(f"invalid parameters for kernel '{kind}': {exc}") from exc
