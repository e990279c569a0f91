"""
Regression of a trend plus a periodic-looking component with a
composite kernel built from a description dict

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import gpinc.num as gnp
import gpinc as gp
import gpinc.misc.plotutils as plotutils


def generate_data(ni=25, seed=0):
    rng = gnp.default_rng(seed)
    xi = gnp.sort(rng.uniform(0.0, 10.0, ni))
    zi = 0.3 * xi + gnp.sin(2.0 * xi) + 0.1 * rng.standard_normal(ni)
    return xi, zi


def main():
    xi, zi = generate_data()
    xt = gnp.linspace(0.0, 12.0, 300)

    description = {
        'kind': 'composite',
        'operation': 'sum',
        'kernels': [
            {'kind': 'linear', 'variance': 0.1},
            {'kind': 'squared-exponential', 'lengthscale': 0.7, 'variance': 1.0},
        ],
    }
    kernel = gp.make_kernel(description)
    print(kernel)

    model = gp.fit(xi, zi, kernel, noise=0.01, prior='linear')
    zpm, zpv, instability = model.predict(xt, return_instability=True, batch_size=64, n_threads=2)
    print(f'{int(gnp.sum(instability))} unstable variance(s)')

    fig = plotutils.Figure(isinteractive=True)
    fig.plotdata(xi, zi)
    fig.plotgp(xt, zpm, zpv)
    fig.xylabels('$x$', '$z$')
    fig.title('Linear + squared-exponential kernel')
    fig.show(grid=True, legend=True)


if __name__ == '__main__':
    main()
