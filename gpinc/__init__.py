# gpinc/__init__.py

from . import config
from . import num
from . import errors
from . import kernel
from . import core
from . import misc
from .core import Model, fit, predict, sample, add_point
from .kernel import make_kernel
from .errors import (
    GPError,
    DimensionMismatch,
    NotPositiveDefinite,
    EmptyTrainingSet,
    NumericalInstability,
)

__all__ = [
    "num",
    "kernel",
    "core",
    "Model",
    "fit",
    "predict",
    "sample",
    "add_point",
    "make_kernel",
    "GPError",
    "DimensionMismatch",
    "NotPositiveDefinite",
    "EmptyTrainingSet",
    "NumericalInstability",
    "__version__",
]

__version__ = config.get_config().version
