# gpinc/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process model class.
"""
import gpinc.num as gnp
from gpinc.config import get_logger
from gpinc.errors import DimensionMismatch, EmptyTrainingSet
from gpinc.kernel import Kernel

from . import kriging
from . import likelihood
from . import sample_paths
from . import utils
from .buffers import ExtendableArray, ExtendableTriangular
from .covariance import training_covariance, point_covariance
from .linalg import (
    JitterPolicy,
    cholesky_with_jitter,
    cholesky_extend,
    extend_forward_solve,
    forward_solve,
    back_solve,
)
from .locking import ReadWriteLock
from .noise import as_noise_model
from .prior import as_prior

logger = get_logger()


class Model:
    """Gaussian Process (GP) regression model with incremental updates.

    The model owns its training set (xi, zi), the lower Cholesky factor
    L of the covariance matrix of the observations

        K = k(xi, xi) + diag(noise) + jitter I,

    the forward-solved residuals z = L^{-1} (zi - m(xi)) and the solve
    vector alpha = K^{-1} (zi - m(xi)). These quantities always describe
    the current training set: `fit` and `add_point` either complete or
    leave the model unchanged.

    Attributes
    ----------
    kernel : gpinc.kernel.Kernel
        Covariance function, never mutated by the model.
    noise_model : gpinc.core.noise.NoiseModel
        Observation noise variance model.
    prior : object
        Prior mean, fitted on the data at `fit` time.
    jitter_policy : gpinc.core.linalg.JitterPolicy
        Retry policy used when a factorization fails.

    Public API (methods)
    --------------------
    fit
        Fit the model on (xi, zi), O(n³).
    add_point / add_points
        Append observations with an O(n²) update of the factor.
    refit
        Refactor the current training set from scratch.
    predict
        Posterior mean and variance (or joint covariance) at xt.
    predict_mean, predict_variance, predict_covariance
        Shortcuts for predict.
    sample
        Draws from the joint posterior at xt.
    negative_log_likelihood
        Negative log marginal likelihood of the data.
    loo
        Leave-one-out predictions by virtual cross-validation.

    Examples
    --------
    >>> import gpinc as gp
    >>> kernel = gp.kernel.SquaredExponential(lengthscale=1.0, variance=1.0)
    >>> model = gp.core.Model(kernel, noise=1e-6)
    >>> model = model.fit([0.0, 1.0, 2.0], [0.0, 0.84, 0.91])
    >>> model.add_point(3.0, 0.14)
    >>> zpm, zpv = model.predict([1.5, 10.0])
    """

    def __init__(self, kernel, noise=0.0, prior=None, jitter_policy=None):
        """
        Parameters
        ----------
        kernel : gpinc.kernel.Kernel
            Covariance function of the GP.
        noise : float, array_like, callable or NoiseModel, optional
            Noise variance of the observations: a constant, per-point
            variances for the fitted data, a callable of the inputs, or
            a NoiseModel instance. Default 0 (interpolation).
        prior : None, str or prior object, optional
            Prior mean: None or 'zero', 'constant', 'linear', or an
            object with fit(xi, zi) and __call__(x).
        jitter_policy : JitterPolicy, optional
            Retry policy for factorizations (default from gpinc.config).
        """
        if not isinstance(kernel, Kernel):
            raise TypeError("kernel must be a gpinc.kernel.Kernel instance")
        self._kernel = kernel
        self._noise_model = as_noise_model(noise)
        self._prior_template = as_prior(prior)
        self._prior = self._prior_template
        self.jitter_policy = JitterPolicy() if jitter_policy is None else jitter_policy
        self._lock = ReadWriteLock()
        self._reset_state(kernel.input_dim)

    def _reset_state(self, dim):
        self._dim = dim
        d = 0 if dim is None else dim
        self._xi = ExtendableArray.empty((d,))
        self._zi = ExtendableArray.empty()
        self._noise = ExtendableArray.empty()
        self._extra_jitter = ExtendableArray.empty()
        self._L = ExtendableTriangular(gnp.zeros((0, 0)))
        self._z = ExtendableArray.empty()
        self._alpha = gnp.zeros((0,))
        self._jitter = 0.0

    def __repr__(self):
        output = str("<gpinc.core.Model object> " + hex(id(self)))
        return output

    def __str__(self):
        return (
            f"GP Model:\n"
            f"  Kernel: {self._kernel!r}\n"
            f"  Noise: {self._noise_model!r}\n"
            f"  Prior Mean: {self._prior!r}\n"
            f"  Number of Points: {self.n}\n"
            f"  Input Dimension: {self._dim}\n"
            f"  Jitter: {self._jitter:.3e}"
        )

    def __len__(self):
        return self.n

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def n(self):
        """Number of training points."""
        return len(self._zi)

    @property
    def dim(self):
        return self._dim

    @property
    def kernel(self):
        return self._kernel

    @property
    def noise_model(self):
        return self._noise_model

    @property
    def prior(self):
        return self._prior

    @property
    def jitter(self):
        """Diagonal jitter added when the model was fitted."""
        return self._jitter

    @property
    def xi(self):
        with self._lock.read():
            return self._xi.copy()

    @property
    def zi(self):
        with self._lock.read():
            return self._zi.copy()

    @property
    def noise_variance(self):
        """Noise variances of the training observations."""
        with self._lock.read():
            return self._noise.copy()

    @property
    def cholesky_factor(self):
        """Copy of the lower Cholesky factor of the covariance matrix."""
        with self._lock.read():
            return self._L.copy()

    @property
    def alpha(self):
        with self._lock.read():
            return gnp.copy(self._alpha)

    # ------------------------------------------------------------------
    # Fit
    # ------------------------------------------------------------------
    def fit(self, xi, zi):
        """Fit the model on the data (xi, zi).

        Replaces any previous training set. On failure the model is left
        as it was.

        Parameters
        ----------
        xi : array_like, shape (n, d), or (n,) for d = 1
            Observation points.
        zi : array_like, shape (n,) or (n, 1)
            Observed values.

        Returns
        -------
        self

        Raises
        ------
        DimensionMismatch
            If the shapes of xi, zi and the kernel disagree.
        NotPositiveDefinite
            If the covariance matrix cannot be factored.
        """
        xi_ = utils.as_inputs(xi, dim=self._kernel.input_dim, name="xi")
        zi_ = utils.as_outputs(zi, n=xi_.shape[0], name="zi")
        noise = self._noise_model(xi_)
        prior = self._prior_template.fit(xi_, zi_)

        L, jitter, z, alpha = self._factorize(xi_, zi_, noise, gnp.zeros(noise.shape), prior)

        with self._lock.write():
            self._reset_state(xi_.shape[1])
            self._prior = prior
            self._xi.append(xi_)
            self._zi.append(zi_)
            self._noise.append(noise)
            self._extra_jitter.append(gnp.zeros(noise.shape))
            self._L = ExtendableTriangular(L)
            self._z.append(z)
            self._alpha = alpha
            self._jitter = jitter
        logger.debug("Fitted GP on %d points (jitter %.3e)", xi_.shape[0], jitter)
        return self

    def _factorize(self, xi, zi, noise, extra_jitter, prior):
        K = training_covariance(self._kernel, xi, noise + extra_jitter)
        L, jitter = cholesky_with_jitter(K, self.jitter_policy)
        z = forward_solve(L, zi - prior(xi))
        alpha = back_solve(L, z)
        return L, jitter, z, alpha

    def refit(self):
        """Refactor the current training set from scratch, O(n³).

        The prior mean is not refitted. Useful to discard the round-off
        accumulated by many incremental updates.
        """
        with self._lock.write():
            if self.n == 0:
                return self
            L, jitter, z, alpha = self._factorize(
                self._xi.view, self._zi.view, self._noise.view, self._extra_jitter.view, self._prior
            )
            self._L = ExtendableTriangular(L)
            self._z = ExtendableArray(z)
            self._alpha = alpha
            self._jitter = jitter
        logger.debug("Refitted GP on %d points (jitter %.3e)", self.n, jitter)
        return self

    # ------------------------------------------------------------------
    # Incremental updates
    # ------------------------------------------------------------------
    def add_point(self, x, y, noise=None):
        """Add one observation with an O(n²) update.

        Parameters
        ----------
        x : array_like, shape (d,) or (1, d), or a scalar for d = 1
        y : float
        noise : float, optional
            Noise variance of the observation (default: from the noise model).

        Returns
        -------
        self

        Raises
        ------
        DimensionMismatch
            If x does not have the dimension of the training inputs.
        NotPositiveDefinite
            If the extended covariance matrix is not positive definite;
            the model is then unchanged.
        """
        with self._lock.write():
            self._add_point(x, y, noise)
        return self

    def add_points(self, xs, ys, noise=None):
        """Add several observations, one incremental update each.

        All points are added or none: if one update fails, the model is
        restored to its state before the call and the error is raised.

        Parameters
        ----------
        xs : array_like, shape (k, d), or (k,) for d = 1
        ys : array_like, shape (k,)
        noise : array_like, shape (k,), optional
        """
        with self._lock.write():
            xs_ = utils.as_inputs(xs, dim=self._dim, name="xs")
            ys_ = utils.as_outputs(ys, n=xs_.shape[0], name="ys")
            if noise is not None:
                noise = utils.as_outputs(noise, n=xs_.shape[0], name="noise")
            n0 = self.n
            dim0 = self._dim
            alpha0 = self._alpha
            try:
                for j in range(xs_.shape[0]):
                    self._add_point(xs_[j : j + 1], ys_[j], None if noise is None else noise[j])
            except Exception:
                if dim0 is None:
                    self._reset_state(None)
                else:
                    self._truncate(n0, alpha0)
                raise
        return self

    def _add_point(self, x, y, noise):
        x_ = utils.as_inputs(x, dim=self._dim, name="x")
        if x_.shape[0] != 1:
            raise DimensionMismatch(
                f"add_point expects a single point, got {x_.shape[0]}; use add_points"
            )
        y_ = float(utils.as_outputs(y, n=1, name="y")[0])
        first = self._dim is None
        if first:
            # the first point of an empty model fixes the dimension
            self._kernel._check_dim(x_.shape[1])
            xi = gnp.zeros((0, x_.shape[1]))
        else:
            xi = self._xi.view

        if noise is None:
            nv = float(self._noise_model.new_point_variance(x_)[0])
        else:
            nv = float(noise)
        if not nv >= 0.0:
            raise ValueError("noise variance must be nonnegative")

        # Everything is computed before the state is touched.
        L = self._L.view
        b, c = point_covariance(self._kernel, xi, x_, nv)
        r, d, extra = cholesky_extend(L, b, c + self._jitter, self.jitter_policy)
        y_centered = y_ - float(self._prior(x_)[0])
        z_new = extend_forward_solve(self._z.view, r, d, y_centered)
        alpha_last = z_new / d
        if self.n > 0:
            # Lᵀ alpha_head = z - r alpha_last
            alpha_head = back_solve(L, self._z.view - r * alpha_last)
            alpha = gnp.concatenate((alpha_head, [alpha_last]))
        else:
            alpha = gnp.asarray([alpha_last])

        if first:
            self._xi = ExtendableArray.empty((x_.shape[1],))
            self._dim = x_.shape[1]
        self._xi.append(x_)
        self._zi.append([y_])
        self._noise.append([nv])
        self._extra_jitter.append([extra])
        self._L.append_row(r, d)
        self._z.append([z_new])
        self._alpha = alpha
        logger.debug("Added point #%d (pivot %.3e, extra jitter %.3e)", self.n, d, extra)

    def _truncate(self, n, alpha):
        for buf in (self._xi, self._zi, self._noise, self._extra_jitter, self._L, self._z):
            buf.truncate(n)
        self._alpha = alpha

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict(
        self,
        xt,
        joint=False,
        return_instability=False,
        zero_neg_variances=True,
        batch_size=None,
        n_threads=1,
    ):
        """Posterior mean and variance at the target points xt.

        Parameters
        ----------
        xt : array_like, shape (m, d), or (m,) for d = 1
            Target points.
        joint : bool, optional
            Return the (m, m) posterior covariance instead of the
            marginal variances.
        return_instability : bool, optional
            Also return the (m,) boolean flags of variances computed
            significantly below zero.
        zero_neg_variances : bool, optional
            Replace negative variances (diagonal entries in joint mode)
            by zeros, by default True.
        batch_size : int, optional
            Marginal mode only: process the targets by batches.
        n_threads : int, optional
            Marginal mode only: number of threads used for the batches.

        Returns
        -------
        zt_posterior_mean : ndarray, shape (m,)
        zt_posterior_variance : ndarray, shape (m,), or (m, m) if joint
        instability : ndarray of bool, shape (m,), optional

        Raises
        ------
        EmptyTrainingSet
            If the model has no data.
        DimensionMismatch
            If xt does not have the dimension of the training inputs.
        """
        with self._lock.read():
            self._check_not_empty()
            xt_ = utils.as_inputs(xt, dim=self._dim, name="xt")
            args = (self._kernel, self._prior, self._xi.view, self._L.view, self._alpha, xt_)
            if joint or batch_size is None:
                zt_mean, zt_var, zt_prior_var = kriging.posterior(*args, joint=joint)
            else:
                zt_mean, zt_var, zt_prior_var = kriging.predict_marginal_batched(
                    *args, batch_size=batch_size, n_threads=n_threads
                )
            jitter = max(self._jitter, float(gnp.max(self._extra_jitter.view)))

        floored, instability = kriging.floor_variance(zt_var, zt_prior_var, jitter)
        if zero_neg_variances:
            zt_var = floored
        if return_instability:
            return zt_mean, zt_var, instability
        return zt_mean, zt_var

    def predict_mean(self, xt):
        return self.predict(xt)[0]

    def predict_variance(self, xt):
        return self.predict(xt)[1]

    def predict_covariance(self, xt):
        return self.predict(xt, joint=True)[1]

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------
    def sample(self, xt, n_samples, seed=None):
        """Draw samples from the joint posterior distribution at xt.

        Parameters
        ----------
        xt : array_like, shape (m, d), or (m,) for d = 1
        n_samples : int
        seed : int, optional
            Seed for a dedicated generator, so that draws are
            reproducible; the global gpinc generator is used when None.

        Returns
        -------
        ndarray, shape (n_samples, m)

        Raises
        ------
        EmptyTrainingSet
        NotPositiveDefinite
            If the posterior covariance cannot be factored.
        """
        zt_mean, zt_cov = self.predict(xt, joint=True)
        scale = None
        if zt_mean.shape[0] > 0:
            scale = float(gnp.mean(self._kernel.evaluate_diag(utils.as_inputs(xt, dim=self._dim))))
        return sample_paths.draw_gaussian(
            zt_mean, zt_cov, n_samples, seed=seed, policy=self.jitter_policy, scale=scale
        )

    # ------------------------------------------------------------------
    # Likelihood, LOO
    # ------------------------------------------------------------------
    def negative_log_likelihood(self):
        """Negative log marginal likelihood of the training data, O(n)."""
        with self._lock.read():
            self._check_not_empty()
            return likelihood.negative_log_likelihood(self._L.view, self._z.view)

    def loo(self):
        """Leave-one-out predictions (zloo, sigma2loo, eloo), O(n³)."""
        with self._lock.read():
            self._check_not_empty()
            zloo, sigma2loo, eloo = likelihood.loo(self._L.view, self._alpha, self._zi.view)
        return zloo, sigma2loo, eloo

    def _check_not_empty(self):
        if self.n == 0:
            raise EmptyTrainingSet("the model has no training points")


def fit(xi, zi, kernel, noise=0.0, prior=None, jitter_policy=None):
    """Fit a GP model on (xi, zi); see Model.fit."""
    return Model(kernel, noise=noise, prior=prior, jitter_policy=jitter_policy).fit(xi, zi)


def predict(model, xt, joint=False, **kwargs):
    """Posterior mean and variance (or covariance if joint); see Model.predict."""
    return model.predict(xt, joint=joint, **kwargs)


def sample(model, xt, n_samples, seed=None):
    """Posterior draws at xt, shape (n_samples, m); see Model.sample."""
    return model.sample(xt, n_samples, seed=seed)


def add_point(model, x, y, noise=None):
    """Add one observation to the model in place; see Model.add_point."""
    return model.add_point(x, y, noise=noise)
