"""
GP interpolation of a 1d function with a Matérn kernel

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import gpinc.num as gnp
import gpinc as gp
import gpinc.misc.plotutils as plotutils


def generate_data():
    """
    Data generation.

    Returns
    -------
    tuple
        (xt, zt): target data
        (xi, zi): input dataset
    """
    xt = gnp.linspace(-1.0, 1.0, 200)
    zt = f(xt)

    xi = gnp.asarray([-0.9, -0.55, -0.1, 0.2, 0.45, 0.8])
    zi = f(xi)

    return xt, zt, xi, zi


def f(x):
    return gnp.sin(6.0 * x) * gnp.exp(-(x**2))


def visualize_results(xt, zt, xi, zi, zpm, zpv):
    fig = plotutils.Figure(isinteractive=True)
    fig.plot(xt, zt, 'k', linewidth=1, linestyle=(0, (5, 5)))
    fig.plotdata(xi, zi)
    fig.plotgp(xt, zpm, zpv, colorscheme='simple')
    fig.xylabels('$x$', '$z$')
    fig.title('Posterior GP, Matérn 5/2 kernel')
    fig.show(grid=True, xlim=[-1.0, 1.0], legend=True)
    return fig


def main():
    xt, zt, xi, zi = generate_data()

    kernel = gp.kernel.Matern(p=2, lengthscale=0.4, variance=1.0)
    model = gp.fit(xi, zi, kernel, prior='constant')
    print(model)

    zpm, zpv = model.predict(xt)

    print('\nLeave-one-out')
    print('-------------')
    zloo, sigma2loo, eloo = model.loo()
    print(f'LOO mean squared error: {float(gnp.mean(eloo**2)):.3e}')
    print(f'Negative log-likelihood: {model.negative_log_likelihood():.3f}')

    visualize_results(xt, zt, xi, zi, zpm, zpv)


if __name__ == '__main__':
    main()
