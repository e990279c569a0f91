"""
Sequential design: observations are added one at a time with O(n²)
updates of the Cholesky factor, and the result is compared with a
model fitted from scratch

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import time
import gpinc.num as gnp
import gpinc as gp
import gpinc.misc.plotutils as plotutils


def f(x):
    return gnp.sin(3.0 * x) + 0.5 * gnp.cos(7.0 * x)


def main(n_steps=20):
    xt = gnp.linspace(0.0, 3.0, 300)
    kernel = gp.kernel.SquaredExponential(lengthscale=0.3, variance=1.0)
    model = gp.core.Model(kernel, noise=1e-4)

    # start from the middle of the domain, then add the point of
    # largest posterior variance at each step
    x_new = 1.5
    tic = time.time()
    for _ in range(n_steps):
        model.add_point(x_new, float(f(gnp.asarray([x_new]))[0]))
        zpm, zpv = model.predict(xt)
        x_new = float(xt[int(gnp.where(zpv == gnp.max(zpv))[0][0])])
    elapsed = time.time() - tic
    print(f'{model.n} points added in {elapsed:.3f}s')

    reference = gp.fit(model.xi, model.zi, kernel, noise=1e-4)
    zpm_ref, zpv_ref = reference.predict(xt)
    print('max |mean - mean_ref| = {:.2e}'.format(float(gnp.max(gnp.abs(zpm - zpm_ref)))))
    print('max |var - var_ref|   = {:.2e}'.format(float(gnp.max(gnp.abs(zpv - zpv_ref)))))

    fig = plotutils.Figure(isinteractive=True)
    fig.plot(xt, f(xt), 'k', linewidth=1, linestyle=(0, (5, 5)))
    fig.plotdata(model.xi, model.zi)
    fig.plotgp(xt, zpm, zpv)
    fig.xylabels('$x$', '$z$')
    fig.title('Incremental GP after {} updates'.format(model.n))
    fig.show(grid=True, legend=True)


if __name__ == '__main__':
    main()
