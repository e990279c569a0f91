import unittest
import gpinc.num as gnp
from gpinc.core.buffers import ExtendableArray, ExtendableTriangular


class TestExtendableArray(unittest.TestCase):
    def test_append_and_growth(self):
        a = ExtendableArray.empty((2,))
        self.assertEqual(a.shape, (0, 2))
        for i in range(10):
            a.append([[i, -i]])
            self.assertEqual(len(a), i + 1)
            self.assertGreaterEqual(a.capacity, len(a))
        self.assertTrue(gnp.allclose(a.view[:, 0], gnp.arange(10)))
        a.append(gnp.ones((3, 2)))
        self.assertEqual(a.shape, (13, 2))

    def test_truncate(self):
        a = ExtendableArray([1.0, 2.0, 3.0])
        capacity = a.capacity
        a.truncate(1)
        self.assertEqual(a.shape, (1,))
        self.assertEqual(a.capacity, capacity)
        a.append([5.0])
        self.assertTrue(gnp.allclose(a.view, [1.0, 5.0]))
        with self.assertRaises(ValueError):
            a.truncate(3)

    def test_copy_is_independent(self):
        a = ExtendableArray([1.0, 2.0])
        c = a.copy()
        c[0] = 10.0
        self.assertEqual(a.view[0], 1.0)


class TestExtendableTriangular(unittest.TestCase):
    def test_append_row(self):
        T = ExtendableTriangular(gnp.zeros((0, 0)))
        T.append_row(gnp.zeros(0), 2.0)
        T.append_row(gnp.asarray([1.0]), 3.0)
        T.append_row(gnp.asarray([4.0, 5.0]), 6.0)
        expected = gnp.asarray([[2.0, 0.0, 0.0], [1.0, 3.0, 0.0], [4.0, 5.0, 6.0]])
        self.assertTrue(gnp.allclose(T.view, expected))
        self.assertGreaterEqual(T.capacity, 3)

    def test_truncate_then_append(self):
        T = ExtendableTriangular(gnp.asarray([[1.0, 0.0], [2.0, 3.0]]))
        T.truncate(1)
        T.append_row(gnp.asarray([7.0]), 8.0)
        self.assertTrue(gnp.allclose(T.view, [[1.0, 0.0], [7.0, 8.0]]))

    def test_upper_part_ignored(self):
        T = ExtendableTriangular(gnp.ones((2, 2)))
        self.assertEqual(T.view[0, 1], 0.0)


if __name__ == "__main__":
    unittest.main()
