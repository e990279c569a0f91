import threading
import time
import unittest
import gpinc as gp
import gpinc.num as gnp
from gpinc.core.locking import ReadWriteLock
from gpinc.kernel import SquaredExponential


class TestReadWriteLock(unittest.TestCase):
    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=5)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5)
        self.assertFalse(inside.broken)

    def test_writer_is_exclusive(self):
        lock = ReadWriteLock()
        events = []
        writer_in = threading.Event()

        def writer():
            with lock.write():
                writer_in.set()
                time.sleep(0.05)
                events.append("writer done")

        def reader():
            writer_in.wait(5)
            with lock.read():
                events.append("reader")

        tw = threading.Thread(target=writer)
        tr = threading.Thread(target=reader)
        tw.start()
        tr.start()
        tw.join(5)
        tr.join(5)
        self.assertEqual(events, ["writer done", "reader"])


class TestConcurrentModel(unittest.TestCase):
    def test_predict_while_adding_points(self):
        kernel = SquaredExponential(0.5)
        xs = gnp.linspace(0.0, 5.0, 41)
        zs = gnp.sin(xs)
        model = gp.fit(xs[:1], zs[:1], kernel, noise=1e-6)
        xt = gnp.linspace(0.0, 5.0, 50)
        errors = []
        done = threading.Event()

        def reader():
            while not done.is_set():
                try:
                    zpm, zpv = model.predict(xt)
                    if zpm.shape != (50,) or gnp.any(zpv < 0.0):
                        errors.append("bad prediction")
                except Exception as exc:  # collected and reported by the test
                    errors.append(exc)

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        for x, z in zip(xs[1:], zs[1:]):
            model.add_point(x, z)
        done.set()
        for t in readers:
            t.join(5)

        self.assertEqual(errors, [])
        self.assertEqual(model.n, 41)
        reference = gp.fit(xs, zs, kernel, noise=1e-6)
        self.assertTrue(gnp.allclose(model.predict_mean(xt), reference.predict_mean(xt), atol=1e-6))


if __name__ == "__main__":
    unittest.main()
