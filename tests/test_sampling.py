import unittest
import warnings
import gpinc as gp
import gpinc.num as gnp
from gpinc.core.sample_paths import draw_gaussian, sample_paths
from gpinc.kernel import SquaredExponential, Matern


class TestPosteriorSampling(unittest.TestCase):
    def setUp(self):
        self.model = gp.fit([0.0, 1.0, 2.0], [0.0, 0.84, 0.91], SquaredExponential(), noise=1e-6)
        self.xt = gnp.asarray([0.5, 1.5, 3.0, 4.0])

    def test_shape(self):
        zsim = gp.sample(self.model, self.xt, 7, seed=0)
        self.assertEqual(zsim.shape, (7, 4))
        self.assertEqual(self.model.sample(self.xt, 0, seed=0).shape, (0, 4))

    def test_empty_query_set(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            zsim = self.model.sample(gnp.zeros((0, 1)), 3, seed=0)
        self.assertEqual(zsim.shape, (3, 0))

    def test_seed_determinism(self):
        z1 = self.model.sample(self.xt, 5, seed=123)
        z2 = self.model.sample(self.xt, 5, seed=123)
        z3 = self.model.sample(self.xt, 5, seed=124)
        self.assertTrue(gnp.all(z1 == z2))
        self.assertFalse(gnp.allclose(z1, z3))

    def test_convergence_to_joint_posterior(self):
        n = 10000
        zpm, zpc = self.model.predict(self.xt, joint=True)
        zsim = self.model.sample(self.xt, n, seed=2024)
        mean = gnp.mean(zsim, axis=0)
        centered = zsim - mean
        cov = centered.T @ centered / (n - 1)
        self.assertTrue(gnp.allclose(mean, zpm, atol=0.05))
        self.assertTrue(gnp.allclose(cov, zpc, atol=0.08))

    def test_samples_at_training_points(self):
        zsim = self.model.sample([0.0, 1.0, 2.0], 50, seed=1)
        self.assertTrue(gnp.allclose(zsim, [0.0, 0.84, 0.91], atol=1e-2))

    def test_global_generator(self):
        gp.config.set_seed(7)
        z1 = self.model.sample(self.xt, 3)
        gp.config.set_seed(7)
        z2 = self.model.sample(self.xt, 3)
        self.assertTrue(gnp.all(z1 == z2))
        self.assertEqual(gp.config.get_config().seed, 7)


class TestDrawGaussian(unittest.TestCase):
    def test_singular_covariance_uses_jitter(self):
        cov = gnp.ones((3, 3))
        zsim = draw_gaussian(gnp.zeros(3), cov, 4, seed=0)
        self.assertEqual(zsim.shape, (4, 3))
        self.assertTrue(gnp.allclose(zsim[:, 0], zsim[:, 1], atol=1e-3))

    def test_indefinite_covariance(self):
        cov = gnp.asarray([[1.0, 2.0], [2.0, 1.0]])
        with self.assertRaises(gp.NotPositiveDefinite):
            draw_gaussian(gnp.zeros(2), cov, 4, seed=0)

    def test_negative_count(self):
        with self.assertRaises(ValueError):
            draw_gaussian(gnp.zeros(2), gnp.eye(2), -1)

    def test_prior_sample_paths(self):
        xt = gnp.linspace(0.0, 1.0, 20)
        zsim = sample_paths(Matern(1, 0.3, 2.0), xt, 2000, seed=3)
        self.assertEqual(zsim.shape, (2000, 20))
        self.assertTrue(gnp.allclose(gnp.mean(zsim, axis=0), 0.0, atol=0.15))
        self.assertTrue(gnp.allclose(gnp.mean(zsim**2, axis=0), 2.0, atol=0.3))


if __name__ == "__main__":
    unittest.main()
