import unittest
import gpinc as gp
import gpinc.num as gnp
from gpinc.kernel import (
    SquaredExponential,
    Exponential,
    RationalQuadratic,
    Matern,
    Linear,
    Polynomial,
    SumKernel,
    ProductKernel,
    make_kernel,
)


class TestStationaryKernels(unittest.TestCase):
    def test_se_values(self):
        k = SquaredExponential(lengthscale=1.0, variance=2.0)
        self.assertAlmostEqual(k.evaluate([0.0], [0.0]), 2.0)
        self.assertAlmostEqual(k.evaluate([0.0], [1.0]), 2.0 * gnp.exp(-0.5))
        self.assertAlmostEqual(k.evaluate([0.0, 0.0], [1.0, 1.0]), 2.0 * gnp.exp(-1.0))

    def test_ard_lengthscale_sets_dimension(self):
        k = SquaredExponential(lengthscale=[1.0, 2.0])
        self.assertEqual(k.input_dim, 2)
        self.assertAlmostEqual(k.evaluate([0.0, 0.0], [0.0, 2.0]), gnp.exp(-0.5))
        with self.assertRaises(gp.DimensionMismatch):
            k(gnp.zeros((3, 3)))

    def test_evaluate_length_mismatch(self):
        k = SquaredExponential()
        with self.assertRaises(gp.DimensionMismatch) as cm:
            k.evaluate([0.0, 1.0], [0.0])
        self.assertEqual(cm.exception.expected, 2)
        self.assertEqual(cm.exception.got, 1)

    def test_evaluate_diag(self):
        k = Matern(p=2, lengthscale=0.5, variance=3.0)
        self.assertIsInstance(k.evaluate_diag([1.0, 2.0]), float)
        self.assertAlmostEqual(k.evaluate_diag([1.0, 2.0]), 3.0)
        d = k.evaluate_diag(gnp.ones((4, 2)))
        self.assertEqual(d.shape, (4,))
        self.assertTrue(gnp.allclose(d, 3.0))

    def test_covariance_matrix_symmetric(self):
        x = gnp.default_rng(0).uniform(size=(10, 3))
        for k in (SquaredExponential(0.3), Exponential(0.5), Matern(1, 0.7), RationalQuadratic(0.4)):
            K = k(x)
            self.assertEqual(K.shape, (10, 10))
            self.assertTrue(gnp.allclose(K, K.T))
            self.assertTrue(gnp.allclose(gnp.diag(K), 1.0))

    def test_pairwise(self):
        k = SquaredExponential(lengthscale=0.5)
        x = gnp.default_rng(1).uniform(size=(5, 2))
        y = gnp.default_rng(2).uniform(size=(5, 2))
        self.assertTrue(gnp.allclose(k(x, y, pairwise=True), gnp.diag(k(x, y))))

    def test_matern_special_cases(self):
        h = gnp.linspace(0.0, 3.0, 7).reshape(-1, 1)
        zero = gnp.zeros((1, 1))
        k0 = Matern(p=0)
        self.assertTrue(gnp.allclose(k0(h, zero).ravel(), Exponential()(h, zero).ravel()))
        k1 = Matern(p=1)
        t = gnp.sqrt(3.0) * h.ravel()
        self.assertTrue(gnp.allclose(k1(h, zero).ravel(), (1 + t) * gnp.exp(-t)))
        k2 = Matern(p=2)
        t = gnp.sqrt(5.0) * h.ravel()
        self.assertTrue(gnp.allclose(k2(h, zero).ravel(), (1 + t + t**2 / 3.0) * gnp.exp(-t)))
        self.assertEqual(k2.nu, 2.5)

    def test_rational_quadratic_tends_to_se(self):
        x = gnp.linspace(0.0, 2.0, 5).reshape(-1, 1)
        krq = RationalQuadratic(lengthscale=0.8, alpha=1e6)
        kse = SquaredExponential(lengthscale=0.8)
        self.assertTrue(gnp.allclose(krq(x), kse(x), atol=1e-5))

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            SquaredExponential(lengthscale=-1.0)
        with self.assertRaises(ValueError):
            SquaredExponential(variance=0.0)
        with self.assertRaises(ValueError):
            Matern(p=-1)
        with self.assertRaises(ValueError):
            RationalQuadratic(alpha=0.0)

    def test_parameters(self):
        k = RationalQuadratic(lengthscale=0.5, variance=2.0, alpha=3.0)
        self.assertEqual(list(k.parameters), ["lengthscale", "variance", "alpha"])
        self.assertTrue(gnp.allclose(k.get_parameters(), [0.5, 2.0, 3.0]))
        k2 = k.with_parameters([1.0, 4.0, 5.0])
        self.assertIsInstance(k2, RationalQuadratic)
        self.assertEqual(k2.alpha, 5.0)
        self.assertEqual(k.alpha, 3.0)
        with self.assertRaises(ValueError):
            k.with_parameters([1.0])


class TestDotProductKernels(unittest.TestCase):
    def test_linear(self):
        k = Linear(variance=2.0, offset=0.5)
        self.assertAlmostEqual(k.evaluate([1.0, 2.0], [3.0, -1.0]), 2.0 * 1.0 + 0.5)
        self.assertAlmostEqual(k.evaluate_diag([1.0, 2.0]), 2.0 * 5.0 + 0.5)

    def test_polynomial(self):
        k = Polynomial(degree=3, variance=1.0, offset=1.0)
        self.assertAlmostEqual(k.evaluate([2.0], [0.5]), 8.0)
        self.assertEqual(list(k.parameters), ["variance", "offset"])
        self.assertEqual(k.with_parameters([1.0, 0.0]).degree, 3)


class TestCompositeKernels(unittest.TestCase):
    def test_sum_and_product(self):
        k1 = SquaredExponential(lengthscale=1.0, variance=2.0)
        k2 = Linear(variance=0.5)
        x = gnp.asarray([[0.0], [1.0], [2.0]])
        self.assertIsInstance(k1 + k2, SumKernel)
        self.assertIsInstance(k1 * k2, ProductKernel)
        self.assertTrue(gnp.allclose((k1 + k2)(x), k1(x) + k2(x)))
        self.assertTrue(gnp.allclose((k1 * k2)(x), k1(x) * k2(x)))
        self.assertTrue(gnp.allclose((k1 + k2).evaluate_diag(x), k1.evaluate_diag(x) + k2.evaluate_diag(x)))

    def test_composite_parameters(self):
        k = SquaredExponential(0.5, 2.0) + Linear(0.1, 0.2)
        self.assertEqual(
            list(k.parameters), ["k1.lengthscale", "k1.variance", "k2.variance", "k2.offset"]
        )
        k2 = k.with_parameters([1.0, 1.0, 1.0, 0.0])
        self.assertEqual(k2.kernels[0].lengthscale, 1.0)
        self.assertEqual(k.kernels[0].lengthscale, 0.5)

    def test_sub_kernels_are_owned(self):
        k1 = SquaredExponential()
        k = k1 + Exponential()
        self.assertIsNot(k.kernels[0], k1)

    def test_dimension_conflict(self):
        with self.assertRaises(gp.DimensionMismatch):
            SquaredExponential([1.0, 1.0]) + SquaredExponential([1.0, 1.0, 1.0])


class TestMakeKernel(unittest.TestCase):
    def test_aliases(self):
        for kind in ("squared-exponential", "se", "rbf", "Gaussian"):
            k = make_kernel(kind, lengthscale=2.0, variance=3.0)
            self.assertIsInstance(k, SquaredExponential)
            self.assertEqual(k.lengthscale, 2.0)
            self.assertEqual(k.variance, 3.0)

    def test_dict_description_ignores_noise(self):
        k = make_kernel({"kind": "matern", "p": 1, "lengthscale": 0.5, "noise": 1e-3})
        self.assertIsInstance(k, Matern)
        self.assertEqual(k.p, 1)

    def test_composite(self):
        k = make_kernel(
            {
                "kind": "composite",
                "operation": "product",
                "kernels": [
                    {"kind": "se", "lengthscale": 0.5},
                    {"kind": "linear", "variance": 0.1},
                    Exponential(),
                ],
            }
        )
        self.assertIsInstance(k, ProductKernel)
        self.assertIsInstance(k.kernels[0], ProductKernel)
        self.assertEqual(k.num_parameters, 6)

    def test_errors(self):
        with self.assertRaises(ValueError):
            make_kernel("periodic")
        with self.assertRaises(ValueError):
            make_kernel("se", lengthscale=0.0)
        with self.assertRaises(ValueError):
            make_kernel("se", shape=1.0)
        with self.assertRaises(ValueError):
            make_kernel({"kind": "composite", "operation": "minus", "kernels": []})
        with self.assertRaises(ValueError):
            make_kernel({"kind": "composite", "kernels": [{"kind": "se"}]})


if __name__ == "__main__":
    unittest.main()
