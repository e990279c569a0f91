## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""
Plotting helpers for one-dimensional GP predictions.
"""
import sys
import numpy as np
import scipy.stats as stats
import matplotlib.pyplot as plt
from matplotlib import interactive

# mean color, fill colors (innermost interval last), fill alpha
_COLORSCHEMES = {
    "default": ("#F2404C", ["#F2F2F2", "#D8D8D8", "#BFBFBF"], 0.8),
    "simple": ("#F2404C", ["#BFBFBF"], 0.8),
    "bw": ("#000000", ["#F2F2F2"], 0.0),
}


def _in_interpreter():
    if hasattr(sys, "ps1"):
        return True
    return bool(sys.flags.interactive)


class Figure:
    """Thin wrapper around a matplotlib figure and its axes.

    Parameters
    ----------
    nrows, ncols : int
        Grid of subplots; the current axes is the first one.
    isinteractive : bool
        Turn matplotlib interactive mode on when running in an interpreter.
    boxoff : bool
        Hide the top and right spines.
    **kargs
        Passed to ``matplotlib.pyplot.figure``.
    """

    def __init__(self, nrows=1, ncols=1, isinteractive=True, boxoff=True, **kargs):
        if isinteractive and _in_interpreter():
            interactive(True)
        self.boxoff = boxoff
        self.fig = plt.figure(**kargs)
        self.axes = [self.fig.add_subplot(nrows, ncols, i + 1) for i in range(nrows * ncols)]
        self.subplot(1)

    def subplot(self, i):
        self.ax = self.axes[i - 1]
        if self.boxoff:
            self.ax.spines["right"].set_visible(False)
            self.ax.spines["top"].set_visible(False)
            self.ax.tick_params(direction="in")

    def show(self, grid=None, legend=None, xlim=None):
        if grid:
            self.grid()
        if legend:
            self.legend()
        if xlim is not None:
            self.xlim(xlim)
        plt.show()

    def close(self):
        plt.close(self.fig)

    def plot(self, x, z, *args, **kargs):
        self.ax.plot(x, z, *args, **kargs)

    def plotdata(self, x, z, label="data"):
        self.ax.plot(
            np.ravel(x), np.ravel(z), "rs", markerfacecolor="none", markersize=6, label=label
        )

    def xylabels(self, sx="", sy=""):
        self.ax.set_xlabel(sx)
        self.ax.set_ylabel(sy)

    def title(self, s):
        self.ax.set_title(s)

    def legend(self, **kwargs):
        self.ax.legend(**kwargs)

    def grid(self, visible=True, linestyle=(0, (1, 5)), linewidth=0.5, **kwargs):
        self.ax.grid(visible, "major", linestyle=linestyle, linewidth=linewidth, **kwargs)

    def xlim(self, new_limits=None):
        if new_limits is None:
            return self.ax.get_xlim()
        self.ax.set_xlim(new_limits)
        return new_limits

    def plotgp(
        self,
        x,
        mean,
        variance,
        colorscheme="default",
        mean_label="posterior mean",
        ci=(0.95, 0.99, 0.999),
    ):
        """Posterior mean with coverage intervals.

        The half-width of the interval at level q is
        ``norm.ppf((1 + q) / 2) * sqrt(variance)``, e.g. 1.96 for 95%.
        Only the first level is drawn with the 'simple' and 'bw' schemes.
        """
        if colorscheme not in _COLORSCHEMES:
            raise ValueError(f"unknown colorscheme {colorscheme!r}")
        mcol, fillcol, alpha = _COLORSCHEMES[colorscheme]
        levels = list(ci)[: len(fillcol)]

        x = np.ravel(x)
        mean = np.ravel(mean)
        sd = np.sqrt(np.maximum(np.ravel(variance), 0.0))

        self.ax.plot(x, mean, mcol, linewidth=2.0, label=mean_label)
        # widest interval first so that narrower ones are drawn on top
        for color, level in zip(fillcol, sorted(levels, reverse=True)):
            delta = stats.norm.ppf((1 + level) / 2)
            upper = mean + delta * sd
            lower = mean - delta * sd
            self.ax.fill(
                np.hstack((x, x[::-1])),
                np.hstack((upper, lower[::-1])),
                color=color,
                alpha=alpha,
                linewidth=0.5,
                label=f"CI {100 * level:g}%",
            )
            if colorscheme == "bw":
                for bound in (upper, lower):
                    self.ax.plot(x, bound, color=mcol, linestyle="dashed", linewidth=0.5)

    def plot_samples(self, x, zsim, color="tab:blue", linewidth=0.5, alpha=0.6):
        """Plot sample paths, zsim of shape (n_samples, m)."""
        x = np.ravel(x)
        for path in np.atleast_2d(zsim):
            self.ax.plot(x, path, color=color, linewidth=linewidth, alpha=alpha)


def plot_loo(zi, zloo, sigma2loo):
    """LOO predictions against the observations, with 95% intervals."""
    fig = Figure()
    fig.ax.errorbar(zi, zloo, 1.96 * np.sqrt(sigma2loo), fmt="ko", ls="None")
    fig.xylabels("true values", "predicted")
    fig.title("LOO predictions with 95% coverage intervals")
    (xmin, xmax), (ymin, ymax) = fig.ax.get_xlim(), fig.ax.get_ylim()
    lo, hi = min(xmin, ymin), max(xmax, ymax)
    fig.ax.plot([lo, hi], [lo, hi], "--")
    fig.grid()
    return fig
