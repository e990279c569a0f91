# gpinc/config.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"


class _GPIncConfig:
    def __init__(self):
        self.version = __version__
        self.dtype = float
        self.seed = 1234
        self.caches = {}
        # jitter policy for Cholesky factorizations
        self.jitter_initial = 1e-10
        self.jitter_factor = 10.0
        self.jitter_max_tries = 5
        # relative tolerance below which a negative posterior variance is
        # reported as a numerical instability
        self.variance_tolerance = 1e-8
        # logger lives in config
        self.logger = logging.getLogger("gpinc")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(os.environ.get("GPINC_LOG_LEVEL", "WARNING").upper())

    def __str__(self):
        return (
            f"GPIncConfig("
            f"version={self.version}, "
            f"dtype={self.dtype}, "
            f"seed={self.seed}, "
            f"jitter=({self.jitter_initial}, x{self.jitter_factor}, "
            f"{self.jitter_max_tries} tries), "
            f"caches={list(self.caches.keys())})"
        )

    def __repr__(self):
        return (
            f"<GPIncConfig "
            f"version={self.version!r}, "
            f"dtype={self.dtype!r}, "
            f"seed={self.seed!r}, "
            f"jitter_initial={self.jitter_initial!r}, "
            f"jitter_factor={self.jitter_factor!r}, "
            f"jitter_max_tries={self.jitter_max_tries!r}, "
            f"variance_tolerance={self.variance_tolerance!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"unknown configuration key '{k}'")
            setattr(self, k, v)
        return self

    def clear_caches(self, name=None):
        if name is None:
            self.caches.clear()
        else:
            self.caches.pop(name, None)


_config = _GPIncConfig()


def get_config():
    return _config


def set_jitter_policy(initial=None, factor=None, max_tries=None):
    """Change the default jitter sequence used by Cholesky factorizations."""
    if initial is not None:
        if initial <= 0.0:
            raise ValueError("initial jitter must be positive")
        _config.jitter_initial = float(initial)
    if factor is not None:
        if factor <= 1.0:
            raise ValueError("jitter factor must be greater than 1")
        _config.jitter_factor = float(factor)
    if max_tries is not None:
        if max_tries < 0:
            raise ValueError("max_tries must be >= 0")
        _config.jitter_max_tries = int(max_tries)


def set_variance_tolerance(tol):
    _config.variance_tolerance = float(tol)


def clear_caches(name=None):
    _config.clear_caches(name)


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)


def set_seed(seed):
    """Reseed the global random generator used by gpinc.num."""
    import gpinc.num as gnp

    gnp.set_seed(seed)
