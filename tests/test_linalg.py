import unittest
import gpinc as gp
import gpinc.num as gnp
from gpinc.core.linalg import (
    JitterPolicy,
    cholesky_with_jitter,
    cholesky_extend,
    extend_forward_solve,
    forward_solve,
    back_solve,
    diag_Kinv_from_chol,
)
from gpinc.kernel import SquaredExponential


def spd_matrix(n, seed=0, noise=1e-3):
    x = gnp.default_rng(seed).uniform(size=(n, 2))
    K = SquaredExponential(lengthscale=0.5)(x)
    return K + noise * gnp.eye(n)


class TestJitterPolicy(unittest.TestCase):
    def test_sequence(self):
        policy = JitterPolicy(initial=1e-10, factor=10.0, max_tries=5)
        jitters = list(policy.jitters(2.0))
        self.assertEqual(len(jitters), 5)
        self.assertTrue(gnp.allclose(jitters, [2e-10, 2e-9, 2e-8, 2e-7, 2e-6], rtol=1e-12))

    def test_absolute(self):
        policy = JitterPolicy(initial=1e-3, factor=2.0, max_tries=2, relative=False)
        self.assertEqual(list(policy.jitters(100.0)), [1e-3, 2e-3])

    def test_invalid(self):
        with self.assertRaises(ValueError):
            JitterPolicy(initial=0.0)
        with self.assertRaises(ValueError):
            JitterPolicy(factor=1.0)
        with self.assertRaises(ValueError):
            JitterPolicy(max_tries=-1)

    def test_defaults_from_config(self):
        config = gp.config.get_config()
        saved = (config.jitter_initial, config.jitter_factor, config.jitter_max_tries)
        try:
            gp.config.set_jitter_policy(initial=1e-8, factor=4.0, max_tries=2)
            policy = JitterPolicy()
            self.assertEqual((policy.initial, policy.factor, policy.max_tries), (1e-8, 4.0, 2))
        finally:
            gp.config.set_jitter_policy(*saved)


class TestCholeskyWithJitter(unittest.TestCase):
    def test_spd_needs_no_jitter(self):
        K = spd_matrix(8)
        L, jitter = cholesky_with_jitter(K)
        self.assertEqual(jitter, 0.0)
        self.assertTrue(gnp.allclose(L @ L.T, K))
        self.assertTrue(gnp.allclose(L, gnp.tril(L)))

    def test_singular_recovered_by_jitter(self):
        K = gnp.ones((2, 2))
        with self.assertLogs("gpinc", level="DEBUG") as logs:
            L, jitter = cholesky_with_jitter(K, JitterPolicy(initial=1e-10))
        self.assertAlmostEqual(jitter, 1e-10)
        self.assertTrue(gnp.allclose(L @ L.T, K + jitter * gnp.eye(2)))
        self.assertTrue(any("INFO" in line for line in logs.output))

    def test_singular_without_retries(self):
        with self.assertRaises(gp.NotPositiveDefinite) as cm:
            cholesky_with_jitter(gnp.ones((2, 2)), JitterPolicy(max_tries=0))
        self.assertEqual(cm.exception.attempts, 1)

    def test_indefinite_exhausts_retries(self):
        K = gnp.asarray([[1.0, 2.0], [2.0, 1.0]])
        with self.assertRaises(gp.NotPositiveDefinite) as cm:
            cholesky_with_jitter(K, JitterPolicy(initial=1e-10, factor=10.0, max_tries=5))
        self.assertEqual(cm.exception.attempts, 6)
        self.assertAlmostEqual(cm.exception.jitter, 1e-6)
        self.assertIsInstance(cm.exception, gnp.LinAlgError)

    def test_empty_and_nonfinite(self):
        L, jitter = cholesky_with_jitter(gnp.zeros((0, 0)))
        self.assertEqual(L.shape, (0, 0))
        K = gnp.eye(2)
        K[0, 1] = gnp.inf
        with self.assertRaises(gp.NotPositiveDefinite):
            cholesky_with_jitter(K)


class TestCholeskyExtend(unittest.TestCase):
    def test_matches_full_factorization(self):
        K = spd_matrix(7, seed=3)
        L_full, _ = cholesky_with_jitter(K)
        L6, _ = cholesky_with_jitter(K[:6, :6])
        r, d, jitter = cholesky_extend(L6, K[:6, 6], K[6, 6])
        self.assertEqual(jitter, 0.0)
        self.assertTrue(gnp.allclose(r, L_full[6, :6]))
        self.assertAlmostEqual(d, L_full[6, 6])

    def test_from_empty_factor(self):
        r, d, jitter = cholesky_extend(gnp.zeros((0, 0)), gnp.zeros((0,)), 4.0)
        self.assertEqual(r.shape, (0,))
        self.assertAlmostEqual(d, 2.0)

    def test_duplicate_point(self):
        L = gnp.eye(1)
        with self.assertRaises(gp.NotPositiveDefinite):
            cholesky_extend(L, gnp.ones(1), 1.0, JitterPolicy(max_tries=0))
        r, d, jitter = cholesky_extend(L, gnp.ones(1), 1.0, JitterPolicy(initial=1e-10))
        self.assertAlmostEqual(jitter, 1e-10)
        self.assertAlmostEqual(d**2, 1e-10)

    def test_forward_vector_extension(self):
        K = spd_matrix(5, seed=4)
        y = gnp.default_rng(5).standard_normal(5)
        L4, _ = cholesky_with_jitter(K[:4, :4])
        z4 = forward_solve(L4, y[:4])
        r, d, _ = cholesky_extend(L4, K[:4, 4], K[4, 4])
        znew = extend_forward_solve(z4, r, d, y[4])
        L5, _ = cholesky_with_jitter(K)
        self.assertTrue(gnp.allclose(gnp.concatenate((z4, [znew])), forward_solve(L5, y)))
        alpha = back_solve(L5, forward_solve(L5, y))
        self.assertTrue(gnp.allclose(K @ alpha, y))

    def test_diag_inverse(self):
        K = spd_matrix(6, seed=6)
        L, _ = cholesky_with_jitter(K)
        self.assertTrue(gnp.allclose(diag_Kinv_from_chol(L), gnp.diag(gnp.inv(K))))


if __name__ == "__main__":
    unittest.main()
