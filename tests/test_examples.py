import importlib.util
import os
import unittest
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")


def load_example(name):
    path = os.path.join(EXAMPLES_DIR, name + ".py")
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestExamples(unittest.TestCase):
    def tearDown(self):
        plt.close("all")

    def test_01(self):
        load_example("gpinc_example01_1d_interpolation").main()

    def test_02(self):
        load_example("gpinc_example02_incremental_updates").main(n_steps=10)

    def test_03(self):
        load_example("gpinc_example03_posterior_sampling").main()

    def test_04(self):
        load_example("gpinc_example04_composite_kernel").main()


if __name__ == "__main__":
    unittest.main()
