"""
Draw sample paths from the prior and from the posterior of a GP
conditioned on noisy observations

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import gpinc.num as gnp
import gpinc as gp
import gpinc.misc.plotutils as plotutils


def main(n_samples=8, seed=42):
    xt = gnp.linspace(-2.0, 2.0, 150)
    kernel = gp.kernel.Matern(p=1, lengthscale=0.5, variance=1.0)

    zprior = gp.core.sample_paths(kernel, xt, n_samples, seed=seed)

    xi = gnp.asarray([-1.5, -0.7, 0.0, 0.4, 1.2])
    zi = gnp.asarray([0.3, -0.5, 0.8, 1.1, -0.2])
    model = gp.fit(xi, zi, kernel, noise=0.01)
    zpm, zpv = model.predict(xt)
    zpost = model.sample(xt, n_samples, seed=seed)

    fig = plotutils.Figure(1, 2, isinteractive=True)
    fig.plot_samples(xt, zprior)
    fig.xylabels('$x$', '$z$')
    fig.title('Prior sample paths')
    fig.subplot(2)
    fig.plotgp(xt, zpm, zpv, colorscheme='simple')
    fig.plot_samples(xt, zpost)
    fig.plotdata(xi, zi)
    fig.xylabels('$x$', '$z$')
    fig.title('Posterior sample paths')
    fig.show(grid=True)


if __name__ == '__main__':
    main()
